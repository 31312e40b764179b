"""Builders for the CloudFormation responses the tests stub."""
from datetime import datetime, timedelta

from pytz import utc

STACK_NAME = 'app'
STACK_ID = 'arn:aws:cloudformation:us-east-1:123456789012:stack/app/0f1e2d3c'
STACK_TYPE = 'AWS::CloudFormation::Stack'
TOKEN = 'ucs-' + 'ab' * 20


def stack(parameters, capabilities=None, notification_arns=None):
    description = {
        'StackId': STACK_ID,
        'StackName': STACK_NAME,
        'CreationTime': datetime(2024, 1, 1, tzinfo=utc),
        'StackStatus': 'UPDATE_COMPLETE',
        'Parameters': [{'ParameterKey': k, 'ParameterValue': v} for k, v in parameters],
    }
    if capabilities is not None:
        description['Capabilities'] = capabilities
    if notification_arns is not None:
        description['NotificationARNs'] = notification_arns
    return description


def stack_event(status, logical_id=STACK_NAME, resource_type=STACK_TYPE, token=TOKEN, reason=None, age=None):
    event = {
        'StackId': STACK_ID,
        'EventId': '{}-{}'.format(logical_id, status),
        'StackName': STACK_NAME,
        'LogicalResourceId': logical_id,
        'ResourceType': resource_type,
        'ResourceStatus': status,
        'Timestamp': datetime.now(utc) - (age or timedelta(0)),
    }
    if token is not None:
        event['ClientRequestToken'] = token
    if reason is not None:
        event['ResourceStatusReason'] = reason
    return event


def stale_event(status='UPDATE_COMPLETE', **kwargs):
    return stack_event(status, age=timedelta(hours=2), **kwargs)
