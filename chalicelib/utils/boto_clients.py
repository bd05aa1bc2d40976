import os
import boto3

from botocore.config import Config

DEFAULT_REGION = 'eu-central-1'


def aws_config_ddb() -> Config:
    # downstream failures are surfaced to the caller, no SDK level retries
    return Config(retries={'total_max_attempts': 1}, region_name=os.environ.get('AWS_REGION', DEFAULT_REGION))


def dynamodb_resource():
    """
    DynamoDB Resource.
    ENDPOINT_URL points the resource to DynamoDB Local
    """
    if os.environ.get('ENDPOINT_URL'):
        return boto3.resource('dynamodb', endpoint_url=os.environ.get('ENDPOINT_URL'), config=aws_config_ddb())
    return boto3.resource('dynamodb', config=aws_config_ddb())
