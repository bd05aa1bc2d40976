import os

TEST_ENVIRON = {
    'GEN_TABLE_NAME': 'restaurant-ordering-test',
    'AWS_REGION': 'eu-central-1',
    'AWS_DEFAULT_REGION': 'eu-central-1',
    'AWS_ACCESS_KEY_ID': 'testing',
    'AWS_SECRET_ACCESS_KEY': 'testing',
    'AWS_SESSION_TOKEN': 'testing',
    'ACCESS_TOKEN_SECRET': 'test-access-token-secret',
    'TOKEN_EXPIRES_HOURS': '72',
    'PAYMENT_SECRET_KEY': 'sk_test_123',
    'GUARD_ADMIN_PROMOTION': 'false',
}

# credentials and table name for anything that runs before the gen_table fixture
for _key, _value in TEST_ENVIRON.items():
    os.environ.setdefault(_key, _value)

import boto3  # noqa: E402
import pytest  # noqa: E402
from chalice.test import Client  # noqa: E402
from moto import mock_aws  # noqa: E402

from app import app  # noqa: E402
from chalicelib.utils import db as utils_db  # noqa: E402
from tests.utils.fixtures import put_user  # noqa: E402
from tests.utils.request_utils import get_token  # noqa: E402

PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

ADMIN_EMAIL = 'admin@restaurant.test'
USER_EMAIL = 'user@restaurant.test'


def create_gen_table():
    boto3.client('dynamodb', region_name=TEST_ENVIRON['AWS_REGION']).create_table(
        TableName=TEST_ENVIRON['GEN_TABLE_NAME'],
        KeySchema=[
            {'AttributeName': 'partkey', 'KeyType': 'HASH'},
            {'AttributeName': 'sortkey', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'partkey', 'AttributeType': 'S'},
            {'AttributeName': 'sortkey', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )


@pytest.fixture
def gen_table(monkeypatch):
    for key, value in TEST_ENVIRON.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv('ENDPOINT_URL', raising=False)
    with mock_aws():
        create_gen_table()
        utils_db.close_db()
        yield utils_db.init_db()
        utils_db.close_db()


@pytest.fixture
def chalice_client(gen_table):
    with Client(app, stage_name='test', project_dir=PROJECT_DIR) as client:
        yield client


@pytest.fixture
def admin_token(chalice_client, gen_table):
    put_user(gen_table, ADMIN_EMAIL, role='admin')
    return get_token(chalice_client, ADMIN_EMAIL)


@pytest.fixture
def user_token(chalice_client, gen_table):
    put_user(gen_table, USER_EMAIL)
    return get_token(chalice_client, USER_EMAIL)
