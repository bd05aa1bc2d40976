from decimal import Decimal

from boto3.dynamodb.conditions import Attr
from chalice import Response

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.constants.constants import FORBIDDEN_ACCESS
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app, data as utils_data, exceptions
from chalicelib.utils.logger import logger


class CartItem(EntityBase):
    pk = keys_structure.carts_pk
    sk = keys_structure.carts_sk
    record_type = 'cart_item'

    optional_fields_validation = {
        'email': lambda x: isinstance(x, str),
        'menuItemId': lambda x: isinstance(x, str),
        'price': lambda x: isinstance(x, (int, Decimal)) and not isinstance(x, bool)
    }

    @classmethod
    def _sortkey(cls, id_) -> str:
        return cls.sk.format(cart_item_id=id_)

    @classmethod
    def list_by_email(cls, email):
        return cls.list_ui(filter_expression=Attr('email').eq(email))


@utils_app.request_exception_handler
@utils_auth.guard(utils_auth.verify_jwt)
@utils_app.log_start_finish
def endpoint_get_carts(request) -> Response:
    email = (request.query_params or {}).get('email')
    if not email:
        return Response(status_code=http200, body=[])

    if email != request.auth_result['email']:
        logger.warning(f"endpoint_get_carts ::: {request.auth_result['email']} asked for the cart of {email}")
        raise exceptions.AccessDenied(FORBIDDEN_ACCESS)

    return Response(status_code=http200, body=CartItem.list_by_email(email))


@utils_app.request_exception_handler
@utils_auth.guard()
@utils_app.log_start_finish
def endpoint_create_cart_item(request) -> Response:
    cart_item = CartItem.from_request_body(utils_data.parse_raw_body(request))
    return Response(status_code=http200, body=cart_item.create())


@utils_app.request_exception_handler
@utils_auth.guard()
@utils_app.log_start_finish
def endpoint_delete_cart_item(request, cart_item_id) -> Response:
    return Response(status_code=http200, body=CartItem.delete_by_id(cart_item_id))
