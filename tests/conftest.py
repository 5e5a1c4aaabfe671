import os

os.environ.setdefault("LOG_LEVEL", "info")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.pop("CFN_ENDPOINT_URL", None)

import boto3
import pytest
from botocore.stub import Stubber
from moto import mock_cloudformation

from cfnstackset.utils.logger import Logger

STACK_SET_ID = "baseline:8a4dd5d0-4c4f-4d2f-9f7f-2b4b9b3d6c11"
STACK_SET_ARN = (
    "arn:aws:cloudformation:us-east-1:123456789012:stackset/" + STACK_SET_ID
)
TEMPLATE_BODY = '{ "Resources": { "Topic": { "Type": "AWS::SNS::Topic" } } }'
NORMALIZED_TEMPLATE_BODY = '{"Resources":{"Topic":{"Type":"AWS::SNS::Topic"}}}'


@pytest.fixture(scope='module')
def aws_credentials():
    """Mocked AWS Credentials for moto"""
    os.environ['AWS_ACCESS_KEY_ID'] = 'testing'
    os.environ['AWS_SECRET_ACCESS_KEY'] = 'testing'
    os.environ['AWS_SECURITY_TOKEN'] = 'testing'
    os.environ['AWS_SESSION_TOKEN'] = 'testing'


@pytest.fixture
def logger():
    return Logger(loglevel='info')


@pytest.fixture
def cfn_stub(aws_credentials):
    """CloudFormation client with a botocore Stubber attached"""
    client = boto3.client("cloudformation", region_name="us-east-1")
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


@pytest.fixture(scope='module')
def cfn_client(aws_credentials):
    """CloudFormation Mock Client"""
    with mock_cloudformation():
        connection = boto3.client("cloudformation", region_name="us-east-1")
        yield connection


def describe_response(status="ACTIVE", **overrides):
    stack_set = {
        "StackSetName": "baseline",
        "StackSetId": STACK_SET_ID,
        "StackSetARN": STACK_SET_ARN,
        "Status": status,
        "TemplateBody": TEMPLATE_BODY,
        "Parameters": [
            {"ParameterKey": "Env", "ParameterValue": "prod"},
            {"ParameterKey": "Retention", "ParameterValue": "7"},
        ],
        "Capabilities": ["CAPABILITY_NAMED_IAM", "CAPABILITY_IAM"],
        "Tags": [{"Key": "team", "Value": "infra"}],
    }
    stack_set.update(overrides)
    return {"StackSet": stack_set}
