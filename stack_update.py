"""
Submits the UpdateStack call. CloudFormation answers an update that changes nothing with a
ValidationError, which is picked out here and raised as NothingToUpdateError.
"""
from binascii import hexlify
from os import urandom

from botocore import exceptions

from stack_errors import NothingToUpdateError, StackLookupError

TOKEN_PREFIX = 'ucs-'

# Error CloudFormation returns when the submitted update resolves to no change.
NO_UPDATES_CODE = 'ValidationError'
NO_UPDATES_MESSAGE = 'No updates are to be performed.'


def new_token():
    """
    Creates a ClientRequestToken used to pick the events of this update out of the stack's events.

    :return: 'ucs-' followed by 20 random bytes, hex-encoded.
    """
    return TOKEN_PREFIX + hexlify(urandom(20)).decode('ascii')


def describe_stack(client, stack_name):
    stacks = client.describe_stacks(StackName=stack_name)['Stacks']

    # Describing by name must match a single stack.
    if len(stacks) != 1:
        raise StackLookupError(stack_name, len(stacks))

    return stacks[0]


def is_nothing_to_update(error):
    """
    Checks whether a ClientError from UpdateStack means the update would not change anything.

    :param error: botocore.exceptions.ClientError raised by UpdateStack.
    :return: True if CloudFormation declined the update as a no-op.
    """
    details = error.response.get('Error', {})
    return details.get('Code') == NO_UPDATES_CODE and details.get('Message') == NO_UPDATES_MESSAGE


def submit_update(client, stack_name, request, token=None):
    """
    Updates the stack reusing its current template.

    :param client: Boto3 CloudFormation client.
    :param stack_name: Name of the stack to update.
    :param request: UpdateStack arguments built by stack_params.reconcile_stack.
    :param token: ClientRequestToken to use, a new one is generated if not given.
    :return: The ClientRequestToken the update was submitted with.
    """
    token = token or new_token()
    try:
        client.update_stack(
            StackName=stack_name,
            ClientRequestToken=token,
            UsePreviousTemplate=True,
            **request
        )
    except exceptions.ClientError as error:
        if is_nothing_to_update(error):
            raise NothingToUpdateError(stack_name) from error
        raise

    return token
