from decimal import Decimal
from typing import Dict, List

from chalice import Response

from chalicelib.base_class_entity import EntityBase
from chalicelib.carts import CartItem
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app, data as utils_data, exceptions, \
    payment_gateway
from chalicelib.utils.logger import logger


class Payment(EntityBase):
    pk = keys_structure.payments_pk
    sk = keys_structure.payments_sk
    record_type = 'payment'

    required_fields_validation = {
        'price': lambda x: isinstance(x, (int, Decimal)) and not isinstance(x, bool),
        'cartItems': lambda x: isinstance(x, list) and all(isinstance(i, str) for i in x)
    }

    optional_fields_validation = {
        'email': lambda x: isinstance(x, str),
        'menuItems': lambda x: isinstance(x, list) and all(isinstance(i, str) for i in x)
    }

    def __init__(self, id_=None, fields=None):
        EntityBase.__init__(self, id_, fields)
        self.cart_items: List[str] = self.fields.get('cartItems', [])

    @classmethod
    def _sortkey(cls, id_) -> str:
        return cls.sk.format(payment_id=id_)

    def record(self) -> Dict:
        """
        Stores the payment, then removes the purchased cart items.
        Two separate writes: a failure in between leaves the payment stored and the
        cart untouched, it is reported as PaymentNotCleared
        """
        insert_result = self.create()
        try:
            delete_result = CartItem.delete_many(self.cart_items)
        except Exception as error:
            logger.error(f'record ::: payment {self.id_} stored, cart items {self.cart_items} not cleared')
            raise exceptions.PaymentNotCleared(self.id_, error) from error
        return {'insertResult': insert_result, 'deleteResult': delete_result}


@utils_app.request_exception_handler
@utils_auth.guard(utils_auth.verify_jwt)
@utils_app.log_start_finish
def endpoint_create_payment_intent(request) -> Response:
    price = utils_data.to_decimal(utils_data.parse_raw_body(request).get('price'))
    payment_intent = payment_gateway.create_payment_intent(payment_gateway.to_minor_units(price))
    return Response(status_code=http200, body={'clientSecret': payment_intent.client_secret})


@utils_app.request_exception_handler
@utils_auth.guard(utils_auth.verify_jwt)
@utils_app.log_start_finish
def endpoint_record_payment(request) -> Response:
    payment = Payment.from_request_body(utils_data.parse_raw_body(request))
    return Response(status_code=http200, body=payment.record())
