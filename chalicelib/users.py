from typing import Dict

from chalice import Response

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.constants.constants import USER_ALREADY_EXISTS
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app, data as utils_data, db as utils_db
from chalicelib.utils.auth import Role
from chalicelib.utils.logger import logger


class User(EntityBase):
    pk = keys_structure.users_pk
    sk = keys_structure.users_sk
    record_type = 'user'

    required_fields_validation = {
        'email': lambda x: isinstance(x, str) and len(x) > 0
    }

    optional_fields_validation = {
        'name': lambda x: isinstance(x, str),
        'role': lambda x: x == Role.admin.value
    }

    def __init__(self, id_=None, fields=None):
        EntityBase.__init__(self, id_, fields)
        # only admin is stored, any other role is the default one
        if Role.from_record(self.fields) is Role.default:
            self.fields.pop('role', None)
        self.email = self.fields.get('email')
        self.role: Role = Role.from_record(self.fields)

    @classmethod
    def _sortkey(cls, id_) -> str:
        return cls.sk.format(user_id=id_)

    def create_if_not_exists(self) -> Dict:
        """
        Idempotent by email: read then write, two concurrent calls may both insert
        """
        if utils_auth.get_user_record_by_email(self.email, table=self.table):
            logger.info(f'create_if_not_exists ::: {self.email=} already exists')
            return {'message': USER_ALREADY_EXISTS}
        return self.create()

    @classmethod
    def promote(cls, id_) -> Dict:
        record = cls.get_by_id(id_)
        if record is None:
            logger.warning(f'promote ::: user {id_=} not found')
            return utils_db.update_result(0, 0)
        if Role.from_record(record) is Role.admin:
            return utils_db.update_result(1, 0)
        utils_db.update_db_record(
            key=cls._key(id_),
            update_body={'role': Role.admin.value},
            allowed_attrs_to_update=['role'],
            allowed_attrs_to_delete=[],
            table=cls.table
        )
        logger.info(f'promote ::: user {id_=} is admin now')
        return utils_db.update_result(1, 1)


@utils_app.request_exception_handler
@utils_auth.guard(utils_auth.verify_jwt, utils_auth.verify_admin)
@utils_app.log_start_finish
def endpoint_get_users(request) -> Response:
    return Response(status_code=http200, body=User.list_ui())


@utils_app.request_exception_handler
@utils_auth.guard(utils_auth.verify_jwt, utils_auth.verify_admin)
@utils_app.log_start_finish
def endpoint_create_user(request) -> Response:
    user = User.from_request_body(utils_data.parse_raw_body(request))
    return Response(status_code=http200, body=user.create_if_not_exists())


@utils_app.request_exception_handler
@utils_auth.guard(utils_auth.verify_jwt)
@utils_app.log_start_finish
def endpoint_check_admin(request, email) -> Response:
    if request.auth_result['email'] != email:
        return Response(status_code=http200, body={'admin': False})
    role = utils_auth.get_user_role(email)
    return Response(status_code=http200, body={'admin': role is Role.admin})


@utils_app.request_exception_handler
@utils_auth.guard()
@utils_app.log_start_finish
def endpoint_promote_user(request, user_id) -> Response:
    request.auth_result = utils_auth.run_guards(request, utils_auth.promotion_guards())
    return Response(status_code=http200, body=User.promote(user_id))
