import json
from decimal import Decimal, InvalidOperation

from chalicelib.utils.exceptions import ValidationException


def replace_dict_key(item, orig_key, new_key):
    if orig_key in item:
        if new_key not in item:
            item[new_key] = item[orig_key]
        del item[orig_key]


def substitute_keys(dict_to_process: dict, base_keys: dict):
    for key, val in base_keys.items():
        if val:
            replace_dict_key(dict_to_process, key, val)
        elif key in dict_to_process.keys():
            dict_to_process.pop(key, None)


def parse_raw_body(chalice_request):
    """
    Request body as a dict with floats parsed to Decimal, stored as sent
    """
    request_raw_body = chalice_request.raw_body
    if not request_raw_body:
        return {}
    try:
        item = json.loads(request_raw_body, parse_float=Decimal)
    except ValueError as error:
        raise ValidationException(f'request body is not valid JSON: {error}')
    if not isinstance(item, dict):
        raise ValidationException('request body must be a JSON object')
    return item


def to_decimal(value) -> Decimal:
    """
    Numeric value (int, Decimal or numeric string) as Decimal
    """
    if isinstance(value, bool) or value is None:
        raise ValidationException(f'{value!r} is not a number')
    try:
        result = Decimal(str(value)) if isinstance(value, (int, str)) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationException(f'{value!r} is not a number')
    if not result.is_finite():
        raise ValidationException(f'{value!r} is not a number')
    return result
