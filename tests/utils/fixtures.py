from decimal import Decimal
from uuid import uuid4

from chalicelib.constants import keys_structure


def put_user(table, email, role=None, user_id=None):
    user_id = user_id or str(uuid4())
    record = {
        'partkey': keys_structure.users_pk,
        'sortkey': keys_structure.users_sk.format(user_id=user_id),
        'record_type': 'user',
        'id_': user_id,
        'email': email,
        'name': email.split('@')[0]
    }
    if role is not None:
        record['role'] = role
    table.put_item(Item=record)
    return user_id


def put_menu_item(table, category, price, menu_item_id=None, name='test dish'):
    menu_item_id = menu_item_id or str(uuid4())
    table.put_item(Item={
        'partkey': keys_structure.menu_items_pk,
        'sortkey': keys_structure.menu_items_sk.format(menu_item_id=menu_item_id),
        'record_type': 'menu_item',
        'id_': menu_item_id,
        'name': name,
        'category': category,
        'price': Decimal(str(price))
    })
    return menu_item_id


def put_cart_item(table, email, menu_item_id='menu-item', price=10, cart_item_id=None):
    cart_item_id = cart_item_id or str(uuid4())
    table.put_item(Item={
        'partkey': keys_structure.carts_pk,
        'sortkey': keys_structure.carts_sk.format(cart_item_id=cart_item_id),
        'record_type': 'cart_item',
        'id_': cart_item_id,
        'email': email,
        'menuItemId': menu_item_id,
        'price': Decimal(str(price))
    })
    return cart_item_id


def put_payment(table, price, menu_items=None, cart_items=None, payment_id=None, email='buyer@test.com'):
    payment_id = payment_id or str(uuid4())
    table.put_item(Item={
        'partkey': keys_structure.payments_pk,
        'sortkey': keys_structure.payments_sk.format(payment_id=payment_id),
        'record_type': 'payment',
        'id_': payment_id,
        'email': email,
        'price': Decimal(str(price)),
        'menuItems': menu_items or [],
        'cartItems': cart_items or []
    })
    return payment_id


def put_review(table, author, rating, content='tasty', review_id=None):
    review_id = review_id or str(uuid4())
    table.put_item(Item={
        'partkey': keys_structure.reviews_pk,
        'sortkey': keys_structure.reviews_sk.format(review_id=review_id),
        'record_type': 'review',
        'id_': review_id,
        'name': author,
        'details': content,
        'rating': Decimal(str(rating))
    })
    return review_id


def get_record(table, partkey, sortkey):
    return table.get_item(Key={'partkey': partkey, 'sortkey': sortkey}).get('Item')
