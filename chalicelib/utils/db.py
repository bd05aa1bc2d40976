import functools
import os

from chalicelib.constants import substitute_keys
from chalicelib.utils import data
from chalicelib.utils import exceptions
from chalicelib.utils.boto_clients import dynamodb_resource
from chalicelib.utils.logger import logger, log_exception

logged_table_methods = ('put_item', 'get_item', 'update_item', 'delete_item', 'query')

_DB = None


def log_db_call(func):
    """
        wraps table methods, logs the call and re-raises any error as is
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger.debug(f'{func.__name__}:: args={args}, kwargs={kwargs}')
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            log_exception(e, msg=f'Got exception while trying to {func.__name__}: ')
            raise
        logger.info(f'{func.__name__}:: SUCCESS')
        return result

    return wrapper


def init_db():
    """
    Creates the process-wide table handle on first use, safe to call more than once
    """
    global _DB
    if _DB is None:
        table_name = os.environ['GEN_TABLE_NAME']
        table = dynamodb_resource().Table(table_name)
        # DescribeTable, fails fast when the table or the endpoint is not reachable
        table.load()
        for method_name in logged_table_methods:
            setattr(table, method_name, log_db_call(getattr(table, method_name)))
        _DB = table
        logger.info(f'init_db ::: table {table_name} is ready, status={table.table_status}')
    return _DB


def close_db():
    global _DB
    if _DB is not None:
        _DB.meta.client.close()
        logger.info('close_db ::: table connection closed')
    _DB = None


def get_gen_table():
    return init_db()


def put_db_record(item: dict, table=get_gen_table):
    table().put_item(Item=item)


def delete_db_record(key: dict, table=get_gen_table) -> int:
    """
    :return:
    number of deleted records, 0 if the record did not exist
    """
    response = table().delete_item(Key=key, ReturnValues='ALL_OLD')
    return 1 if response.get('Attributes') else 0


def update_db_record(key: dict, update_body: dict, allowed_attrs_to_update: list,
                     allowed_attrs_to_delete: list, table=get_gen_table):
    data.substitute_keys(dict_to_process=update_body, base_keys=substitute_keys.to_db)
    set_expr, expr_attr_values, remove_expr = generate_update_expression(
        update_body=update_body,
        allowed_attrs_to_update=allowed_attrs_to_update,
        allowed_attrs_to_delete=allowed_attrs_to_delete
    )
    update_item_dict = {"Key": key, "ReturnValues": "UPDATED_NEW", }

    set_response = None
    if set_expr:
        set_item_dict = {
            **update_item_dict,
            "UpdateExpression": set_expr,
            "ExpressionAttributeNames": expression_attribute_names(set_expr),
            "ExpressionAttributeValues": expr_attr_values
        }
        set_response = table().update_item(**set_item_dict)

    remove_response = None
    if remove_expr:
        remove_item_dict = {
            **update_item_dict,
            "UpdateExpression": remove_expr,
            "ExpressionAttributeNames": expression_attribute_names(remove_expr)
        }
        remove_response = table().update_item(**remove_item_dict)

    return set_response, remove_response


def generate_update_expression(update_body: dict, allowed_attrs_to_update: list, allowed_attrs_to_delete: list):
    """
    Generate expressions to update and delete attributes.
    if a key of update_body is empty - the attribute is deleted, else - attribute is updated
    Attribute names go through #placeholders ('role' is a DynamoDB reserved word)
    """
    expr_attr_values = {}
    set_expr = 'SET '
    remove_expr = 'REMOVE '
    return_value = [None, None, None]
    for field in allowed_attrs_to_update:
        field_value = update_body.get(field, None)
        if field_value is not None:
            # if field is in update_body but is equal to empty string, list etc. - delete field
            if field_value in ['', [], {}] and field in allowed_attrs_to_delete:
                remove_expr += f'#{field}, '
            else:
                # if field is in update_body and has a real value - update field
                expr_attr_values[f':{field}'] = update_body.get(field)
                set_expr += f'#{field}=:{field}, '
        else:
            continue

    if set_expr != 'SET ':
        return_value[0] = set_expr[:-2]
        return_value[1] = expr_attr_values

    if remove_expr != 'REMOVE ':
        return_value[2] = remove_expr[:-2]

    return return_value


def expression_attribute_names(expression: str) -> dict:
    names = [part.strip().split('=')[0] for part in expression.split(' ', 1)[1].split(',')]
    return {name: name[1:] for name in names}


def get_db_item(partkey, sortkey, table=get_gen_table):
    result = table().get_item(
        Key={
            'partkey': partkey,
            'sortkey': sortkey
        }
    )

    if 'Item' in result:
        return result['Item']
    else:
        logger.warning(f"get_db_item ::: record partkey={partkey} sortkey={sortkey} not found")
        raise exceptions.RecordNotFound(f'record partkey={partkey} sortkey={sortkey} not found')


def query_items_paginated(
        key_condition_expression,
        filter_expression=None,
        table=get_gen_table,
        select=None,
        limit=None,
        start_key=None
):
    kwargs = {'KeyConditionExpression': key_condition_expression}
    if filter_expression is not None:
        kwargs.update({'FilterExpression': filter_expression})

    if select:
        kwargs.update({'Select': select})

    if limit:
        kwargs.update({'Limit': int(limit)})

    if start_key:
        kwargs.update({'ExclusiveStartKey': start_key})

    return table().query(**kwargs)


def query_items_paged(key_condition_expression, filter_expression=None, table=get_gen_table):
    """ This method shall be used whenever you think the query will
        return more than 1mb of data at once"""
    all_items = []
    last_evaluated_key = None

    while True:
        resp = query_items_paginated(
            key_condition_expression,
            filter_expression=filter_expression,
            table=table,
            start_key=last_evaluated_key
        )
        all_items.extend(resp['Items'])
        last_evaluated_key = resp.get('LastEvaluatedKey')
        if last_evaluated_key is None:
            return all_items


def count_items(key_condition_expression, table=get_gen_table) -> int:
    count = 0
    last_evaluated_key = None

    while True:
        resp = query_items_paginated(
            key_condition_expression,
            table=table,
            select='COUNT',
            start_key=last_evaluated_key
        )
        count += resp['Count']
        last_evaluated_key = resp.get('LastEvaluatedKey')
        if last_evaluated_key is None:
            return count


def insert_result(inserted_id: str) -> dict:
    return {'acknowledged': True, 'insertedId': inserted_id}


def delete_result(deleted_count: int) -> dict:
    return {'acknowledged': True, 'deletedCount': deleted_count}


def update_result(matched_count: int, modified_count: int) -> dict:
    return {'acknowledged': True, 'matchedCount': matched_count, 'modifiedCount': modified_count}
