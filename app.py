import atexit
import os

from chalice import Chalice, Response

from chalicelib import auth, carts, menu_items, payments, reviews, stats, users
from chalicelib.constants.status_codes import http200
from chalicelib.utils import db as utils_db

app = Chalice(app_name='restaurant-ordering-api')

app.debug = os.environ.get('DEBUG', 'false').lower() == 'true'

# the table handle is opened on first use, see utils_db.get_gen_table
atexit.register(utils_db.close_db)


@app.route('/', methods=['GET'], cors=True)
def index():
    return Response(status_code=http200, body='server is running', headers={'Content-Type': 'text/plain'})


# JWT
@app.route('/jwt', methods=['POST'], cors=True)
def issue_token():
    return auth.endpoint_issue_token(app.current_request)


# USERS
@app.route('/users', methods=['GET'], cors=True)
def get_users():
    """
    admin operation
    """
    return users.endpoint_get_users(app.current_request)


@app.route('/users', methods=['POST'], cors=True)
def create_user():
    """
    admin operation
    """
    return users.endpoint_create_user(app.current_request)


@app.route('/users/admin/{user_ref}', methods=['GET'], cors=True)
def check_admin(user_ref):
    """
    user_ref is an email, only the owner of the token gets a real answer
    """
    return users.endpoint_check_admin(app.current_request, user_ref)


@app.route('/users/admin/{user_ref}', methods=['PATCH'], cors=True)
def promote_user(user_ref):
    """
    user_ref is a user id.
    Open to anyone unless GUARD_ADMIN_PROMOTION is on
    """
    return users.endpoint_promote_user(app.current_request, user_ref)


# MENU
@app.route('/menu', methods=['GET'], cors=True)
def get_menu():
    return menu_items.endpoint_get_menu(app.current_request)


@app.route('/menu', methods=['POST'], cors=True)
def create_menu_item():
    return menu_items.endpoint_create_menu_item(app.current_request)


@app.route('/menu/{menu_item_id}', methods=['DELETE'], cors=True)
def delete_menu_item(menu_item_id):
    """
    admin operation
    """
    return menu_items.endpoint_delete_menu_item(app.current_request, menu_item_id)


# REVIEWS
@app.route('/reviews', methods=['GET'], cors=True)
def get_reviews():
    return reviews.endpoint_get_reviews(app.current_request)


# CART
@app.route('/carts', methods=['GET'], cors=True)
def get_carts():
    """
    user can get only his own cart items
    """
    return carts.endpoint_get_carts(app.current_request)


@app.route('/carts', methods=['POST'], cors=True)
def add_item_to_cart():
    return carts.endpoint_create_cart_item(app.current_request)


@app.route('/carts/{cart_item_id}', methods=['DELETE'], cors=True)
def remove_item_from_cart(cart_item_id):
    return carts.endpoint_delete_cart_item(app.current_request, cart_item_id)


# PAYMENTS
@app.route('/create-payment-intent', methods=['POST'], cors=True)
def create_payment_intent():
    return payments.endpoint_create_payment_intent(app.current_request)


@app.route('/payments', methods=['POST'], cors=True)
def record_payment():
    """
    stores the payment and clears the purchased cart items
    """
    return payments.endpoint_record_payment(app.current_request)


# STATISTICS
@app.route('/admin-stats', methods=['GET'], cors=True)
def get_admin_stats():
    """
    admin operation
    """
    return stats.endpoint_admin_stats(app.current_request)


@app.route('/order-stats', methods=['GET'], cors=True)
def get_order_stats():
    """
    admin operation
    """
    return stats.endpoint_order_stats(app.current_request)
