import os
from datetime import datetime, timedelta, timezone
from typing import Dict

import jwt
from chalice import Response

from chalicelib.constants.constants import TOKEN_ALGORITHM, DEFAULT_TOKEN_EXPIRES_HOURS
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app, data as utils_data
from chalicelib.utils.logger import logger, CustomJSONEncoder


def token_expires_in() -> timedelta:
    return timedelta(hours=int(os.environ.get('TOKEN_EXPIRES_HOURS', DEFAULT_TOKEN_EXPIRES_HOURS)))


def issue_token(payload: Dict) -> str:
    """
    Signs whatever the caller sent. The caller is not authenticated here,
    the payload is trusted as produced by the client side sign-in flow
    """
    now = datetime.now(tz=timezone.utc)
    claims = {**payload, 'iat': now, 'exp': now + token_expires_in()}
    token = jwt.encode(claims, utils_auth.access_token_secret(), algorithm=TOKEN_ALGORITHM,
                       json_encoder=CustomJSONEncoder)
    logger.info(f"issue_token ::: token issued for email={payload.get('email')}, expires at {claims['exp']}")
    return token


@utils_app.request_exception_handler
@utils_auth.guard()
@utils_app.log_start_finish
def endpoint_issue_token(request) -> Response:
    return Response(status_code=http200, body={'token': issue_token(utils_data.parse_raw_body(request))})
