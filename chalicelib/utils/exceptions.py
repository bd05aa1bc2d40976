__all__ = ["NotAuthorizedException", "AccessDenied", "RecordNotFound", "ValidationException",
           "PaymentError", "PaymentNotCleared"]


# Authentication / authorization exceptions
class NotAuthorizedException(Exception):
    LEVEL = 'warning'


class AccessDenied(Exception):
    LEVEL = 'warning'


# DynamoDB exceptions
class RecordNotFound(Exception):
    pass


# Validations exceptions
class ValidationException(Exception):
    LEVEL = 'warning'


# Payment exceptions
class PaymentError(Exception):

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code


class PaymentNotCleared(Exception):
    """
    Payment record is stored but its cart items were not removed
    """

    def __init__(self, payment_id, error):
        super().__init__(f'payment {payment_id} was recorded but cart items were not cleared: {error}')
        self.payment_id = payment_id
        self.error = error
