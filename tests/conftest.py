"""Shared fixtures: a CloudFormation client with its calls stubbed by botocore."""
import boto3
import pytest
from botocore.stub import Stubber

from action_settings import Settings


@pytest.fixture
def cf_client():
    return boto3.client(
        'cloudformation',
        region_name='us-east-1',
        aws_access_key_id='testing',
        aws_secret_access_key='testing',
    )


@pytest.fixture
def stubber(cf_client):
    with Stubber(cf_client) as stubber:
        yield stubber
        stubber.assert_no_pending_responses()


@pytest.fixture
def settings():
    return Settings(poll_interval=0)


@pytest.fixture
def github_settings():
    return Settings(under_github=True, poll_interval=0)
