ADMIN_ROLE = 'admin'

TOKEN_ALGORITHM = 'HS256'
# aud, iss, sub and jti are left unchecked, issue_token signs them as sent
TOKEN_DECODE_OPTIONS = {
    'require': ['exp'],
    'verify_aud': False,
    'verify_iss': False,
    'verify_sub': False,
    'verify_jti': False
}
DEFAULT_TOKEN_EXPIRES_HOURS = 72

PAYMENT_CURRENCY = 'usd'
PAYMENT_METHOD_TYPES = ['card']

UNAUTHORIZED_ACCESS = 'unauthorized access'
UNAUTHORIZED_TOKEN = 'unauthorized token'
FORBIDDEN_MESSAGE = 'forbidden message'
FORBIDDEN_ACCESS = 'forbidden access'
USER_ALREADY_EXISTS = 'user already exists'
