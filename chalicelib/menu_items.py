from decimal import Decimal

from chalice import Response

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app, data as utils_data


class MenuItem(EntityBase):
    pk = keys_structure.menu_items_pk
    sk = keys_structure.menu_items_sk
    record_type = 'menu_item'

    optional_fields_validation = {
        'name': lambda x: isinstance(x, str),
        'recipe': lambda x: isinstance(x, str),
        'image': lambda x: isinstance(x, str),
        'category': lambda x: isinstance(x, str),
        'price': lambda x: isinstance(x, (int, Decimal)) and not isinstance(x, bool)
    }

    @classmethod
    def _sortkey(cls, id_) -> str:
        return cls.sk.format(menu_item_id=id_)


@utils_app.request_exception_handler
@utils_auth.guard()
@utils_app.log_start_finish
def endpoint_get_menu(request) -> Response:
    return Response(status_code=http200, body=MenuItem.list_ui())


@utils_app.request_exception_handler
@utils_auth.guard()
@utils_app.log_start_finish
def endpoint_create_menu_item(request) -> Response:
    menu_item = MenuItem.from_request_body(utils_data.parse_raw_body(request))
    return Response(status_code=http200, body=menu_item.create())


@utils_app.request_exception_handler
@utils_auth.guard(utils_auth.verify_jwt, utils_auth.verify_admin)
@utils_app.log_start_finish
def endpoint_delete_menu_item(request, menu_item_id) -> Response:
    return Response(status_code=http200, body=MenuItem.delete_by_id(menu_item_id))
