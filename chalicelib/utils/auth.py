import functools
import os
from enum import Enum
from typing import Callable, Dict, Optional

import jwt
from boto3.dynamodb.conditions import Attr, Key
from chalice.app import Request

from chalicelib.constants import keys_structure
from chalicelib.constants.constants import ADMIN_ROLE, TOKEN_ALGORITHM, TOKEN_DECODE_OPTIONS, UNAUTHORIZED_ACCESS, \
    UNAUTHORIZED_TOKEN, FORBIDDEN_MESSAGE
from chalicelib.utils import exceptions as utils_exceptions, db as utils_db
from chalicelib.utils.logger import log_request, logger, set_request_id


class Role(str, Enum):
    default = 'default'
    admin = ADMIN_ROLE

    @classmethod
    def from_record(cls, record: Optional[Dict]) -> 'Role':
        """
        Only 'admin' is ever stored, a missing or unknown role is the default one
        """
        if record and record.get('role') == cls.admin.value:
            return cls.admin
        return cls.default


def access_token_secret() -> str:
    return os.environ['ACCESS_TOKEN_SECRET']


def get_user_record_by_email(email: str, table=utils_db.get_gen_table) -> Optional[Dict]:
    if not email:
        return None
    records = utils_db.query_items_paged(
        Key('partkey').eq(keys_structure.users_pk),
        filter_expression=Attr('email').eq(email),
        table=table
    )
    return records[0] if records else None


def get_user_role(email: str) -> Role:
    return Role.from_record(get_user_record_by_email(email))


def verify_jwt(request: Request, context: Dict) -> Dict:
    """
    Bearer token check
    :return:
    context with decoded token claims and verified email
    """
    authorization = request.headers.get('authorization')
    if not authorization:
        raise utils_exceptions.NotAuthorizedException(UNAUTHORIZED_ACCESS)

    parts = authorization.split(' ')
    token = parts[1] if len(parts) > 1 else None
    if not token:
        raise utils_exceptions.NotAuthorizedException(UNAUTHORIZED_TOKEN)

    try:
        decoded = jwt.decode(token, access_token_secret(), algorithms=[TOKEN_ALGORITHM],
                             options=TOKEN_DECODE_OPTIONS)
    except jwt.InvalidTokenError as error:
        logger.warning(f'verify_jwt ::: token rejected, {error.__class__.__name__}: {error}')
        raise utils_exceptions.NotAuthorizedException(UNAUTHORIZED_TOKEN)

    email = decoded.get('email')
    if not email:
        logger.warning('verify_jwt ::: token has no email claim')
        raise utils_exceptions.NotAuthorizedException(UNAUTHORIZED_TOKEN)

    return {**context, 'decoded': decoded, 'email': email}


def verify_admin(request: Request, context: Dict) -> Dict:
    """
    Admin role check, verify_jwt has to be earlier in the pipeline
    """
    if 'decoded' not in context:
        raise RuntimeError('verify_admin requires verify_jwt to run first')

    role = get_user_role(context['email'])
    if role is not Role.admin:
        logger.warning(f"verify_admin ::: {context['email']} has role {role.value}, access denied")
        raise utils_exceptions.AccessDenied(FORBIDDEN_MESSAGE)

    return {**context, 'role': role}


def run_guards(request: Request, guards) -> Dict:
    context = {}
    for step in guards:
        context = step(request, context)
    return context


def guard(*guards: Callable[[Request, Dict], Dict]):
    """
    Wrapper for endpoint functions which take a request as the first argument.
    Runs the guard steps in order, the resulting context is set as request.auth_result.
    Has to be placed under utils_app.request_exception_handler so that guard errors
    become 401 / 403 responses
    """

    def decorator(func):
        @functools.wraps(func)
        def result_auth(request, *args, **kwargs):
            set_request_id(request)
            log_request(request)
            context = run_guards(request, guards)
            setattr(request, 'auth_result', context)
            if guards:
                logger.info(f'guard ::: SUCCESS, {func.__name__} passed {[g.__name__ for g in guards]}')
            return func(request, *args, **kwargs)

        return result_auth

    return decorator


def promotion_guards():
    """
    PATCH /users/admin/{id} is open unless GUARD_ADMIN_PROMOTION is switched on
    """
    if os.environ.get('GUARD_ADMIN_PROMOTION', 'false').lower() == 'true':
        return verify_jwt, verify_admin
    return ()
