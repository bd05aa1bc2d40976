import os
from decimal import Decimal

import stripe

from chalicelib.constants.constants import PAYMENT_CURRENCY, PAYMENT_METHOD_TYPES
from chalicelib.utils.exceptions import PaymentError
from chalicelib.utils.logger import logger


def to_minor_units(price: Decimal) -> int:
    """
    Dollars to cents, truncated: 12.345 -> 1234
    """
    return int(price * 100)


def create_payment_intent(amount: int, currency: str = PAYMENT_CURRENCY) -> stripe.PaymentIntent:
    """
    Create a Stripe PaymentIntent restricted to card payments

    :param amount: amount in minor units (cents)
    :return: stripe.PaymentIntent with client_secret for the frontend
    :raises PaymentError: if Stripe API call fails
    """
    stripe.api_key = os.environ.get('PAYMENT_SECRET_KEY')
    logger.info(f'create_payment_intent ::: {amount=} {currency=}')
    try:
        return stripe.PaymentIntent.create(
            amount=amount,
            currency=currency,
            payment_method_types=PAYMENT_METHOD_TYPES
        )
    except stripe.StripeError as error:
        raise PaymentError(
            message=str(error.user_message or error),
            code=getattr(error, 'code', None)
        ) from error
