from decimal import Decimal

from chalicelib import stats
from chalicelib.constants.status_codes import http200, http401, http403
from tests.utils.fixtures import put_menu_item, put_payment, put_user
from tests.utils.request_utils import make_request


def test_admin_stats(chalice_client, gen_table, admin_token):
    put_user(gen_table, 'guest@restaurant.test')
    put_menu_item(gen_table, 'pizza', 10)
    put_payment(gen_table, 10)
    put_payment(gen_table, '15.5')

    response = make_request(chalice_client, endpoint='/admin-stats', token=admin_token)

    assert response.status_code == http200
    assert response.json_body == {'users': 2, 'products': 1, 'orders': 2, 'revenue': 25.5}


def test_admin_stats_empty(chalice_client, admin_token):
    response = make_request(chalice_client, endpoint='/admin-stats', token=admin_token)

    assert response.json_body == {'users': 1, 'products': 0, 'orders': 0, 'revenue': 0}


def test_order_stats(chalice_client, gen_table, admin_token):
    put_menu_item(gen_table, 'pizza', 10, menu_item_id='A')
    put_menu_item(gen_table, 'drink', 2, menu_item_id='B')
    put_payment(gen_table, 12, menu_items=['A', 'B'])

    response = make_request(chalice_client, endpoint='/order-stats', token=admin_token)

    assert response.status_code == http200
    assert sorted(response.json_body, key=lambda row: row['category']) == [
        {'category': 'drink', 'count': 1, 'total': 2},
        {'category': 'pizza', 'count': 1, 'total': 10}
    ]


def test_order_stats_groups_across_payments(chalice_client, gen_table, admin_token):
    put_menu_item(gen_table, 'pizza', '10.115', menu_item_id='A')
    put_menu_item(gen_table, 'pizza', '9.99', menu_item_id='C')
    put_menu_item(gen_table, 'salad', 7, menu_item_id='S')
    put_payment(gen_table, 20, menu_items=['A', 'C', 'missing'])
    put_payment(gen_table, 10, menu_items=['A'])

    response = make_request(chalice_client, endpoint='/order-stats', token=admin_token)

    assert response.json_body == [{'category': 'pizza', 'count': 3, 'total': 30.22}]


def test_stats_require_admin(chalice_client, user_token):
    for endpoint in ['/admin-stats', '/order-stats']:
        assert make_request(chalice_client, endpoint=endpoint).status_code == http401
        assert make_request(chalice_client, endpoint=endpoint, token=user_token).status_code == http403


def test_joined_menu_items_joins_each_id_once_per_payment():
    menu = {'A': {'id_': 'A', 'category': 'pizza', 'price': Decimal('10')}}
    payments = [{'menuItems': ['A', 'A']}, {'menuItems': ['A']}, {}]

    rows = stats.joined_menu_items(payments, menu)

    assert rows == [menu['A'], menu['A']]


def test_group_by_category_rounds_half_even():
    rows = [
        {'category': 'drink', 'price': Decimal('1.125')},
        {'category': 'drink', 'price': Decimal('1')},
        {'category': 'pizza', 'price': Decimal('3.335')}
    ]

    assert stats.group_by_category(rows) == [
        {'category': 'drink', 'count': 2, 'total': Decimal('2.12')},
        {'category': 'pizza', 'count': 1, 'total': Decimal('3.34')}
    ]


def test_revenue_is_exact_sum():
    payments = [{'price': Decimal('0.1')}, {'price': Decimal('0.2')}, {}]

    assert stats.revenue(payments) == Decimal('0.3')


def test_order_stats_with_seeded_menu(chalice_client, gen_table, admin_token):
    gen_table.put_item(Item={'partkey': 'menu', 'sortkey': 'A', 'category': 'pizza', 'price': 10})
    put_payment(gen_table, 10, menu_items=['A'])

    response = make_request(chalice_client, endpoint='/order-stats', token=admin_token)

    assert response.status_code == http200
    assert response.json_body == [{'category': 'pizza', 'count': 1, 'total': 10}]
