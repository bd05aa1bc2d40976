users_pk = 'users'
users_sk = '{user_id}'

menu_items_pk = 'menu'
menu_items_sk = '{menu_item_id}'

reviews_pk = 'reviews'
reviews_sk = '{review_id}'

carts_pk = 'carts'
carts_sk = '{cart_item_id}'

payments_pk = 'payments'
payments_sk = '{payment_id}'
