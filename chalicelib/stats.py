from collections import OrderedDict
from decimal import Decimal
from typing import Dict, List

from chalice import Response

from chalicelib.constants.status_codes import http200
from chalicelib.menu_items import MenuItem
from chalicelib.payments import Payment
from chalicelib.users import User
from chalicelib.utils import auth as utils_auth, app as utils_app
from chalicelib.utils.logger import logger

TWO_PLACES = Decimal('0.01')


def revenue(payments: List[Dict]) -> Decimal:
    return sum((Decimal(payment.get('price', 0)) for payment in payments), Decimal(0))


def admin_stats() -> Dict:
    payments = Payment.list_records()
    return {
        'users': User.count(),
        'products': MenuItem.count(),
        'orders': Payment.count(),
        'revenue': revenue(payments)
    }


def joined_menu_items(payments: List[Dict], menu: Dict[str, Dict]) -> List[Dict]:
    """
    Menu records of every payment, flattened.
    Ids without a menu record are skipped, an id listed twice in one payment joins once
    """
    rows = []
    for payment in payments:
        for menu_item_id in OrderedDict.fromkeys(payment.get('menuItems') or []):
            menu_item = menu.get(menu_item_id)
            if menu_item is not None:
                rows.append(menu_item)
    return rows


def group_by_category(rows: List[Dict]) -> List[Dict]:
    groups: Dict = OrderedDict()
    for row in rows:
        group = groups.setdefault(row.get('category'), {'count': 0, 'total': Decimal(0)})
        group['count'] += 1
        group['total'] += Decimal(row.get('price', 0))
    return [
        {'category': category, 'count': group['count'], 'total': group['total'].quantize(TWO_PLACES)}
        for category, group in groups.items()
    ]


def order_stats() -> List[Dict]:
    # sortkey is the menu item id, id_ is missing on records loaded straight into the table
    menu = {record['sortkey']: record for record in MenuItem.list_records()}
    rows = joined_menu_items(Payment.list_records(), menu)
    result = group_by_category(rows)
    logger.info(f'order_stats ::: {len(rows)} ordered items in {len(result)} categories')
    return result


@utils_app.request_exception_handler
@utils_auth.guard(utils_auth.verify_jwt, utils_auth.verify_admin)
@utils_app.log_start_finish
def endpoint_admin_stats(request) -> Response:
    return Response(status_code=http200, body=admin_stats())


@utils_app.request_exception_handler
@utils_auth.guard(utils_auth.verify_jwt, utils_auth.verify_admin)
@utils_app.log_start_finish
def endpoint_order_stats(request) -> Response:
    return Response(status_code=http200, body=order_stats())
