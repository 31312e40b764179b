"""
Waits for a CloudFormation stack update to finish by reading the stack events. Only events carrying
the ClientRequestToken of our UpdateStack call are considered, the stack's event history also holds
events of earlier and concurrent operations.
"""
from datetime import datetime
from threading import Event

from botocore import exceptions
from pytz import utc

from stack_errors import CancellationError, ResourceUpdateFailedError, StackRolledBackError

STACK_RESOURCE_TYPE = 'AWS::CloudFormation::Stack'

# Reason given to resources whose update was cancelled because another resource failed.
UPDATE_CANCELLED_REASON = 'Resource update cancelled'

UPDATE_COMPLETE = 'UPDATE_COMPLETE'
UPDATE_FAILED = 'UPDATE_FAILED'
ROLLED_BACK_STATUSES = ('UPDATE_ROLLBACK_COMPLETE', 'ROLLBACK_FAILED')


class StackMonitor:
    """
    Polls the events of a stack until the update submitted with a given token completes, fails or
    the wait is cancelled.

    :param client: Boto3 CloudFormation client.
    :param stack_name: Name of the updated stack.
    :param token: ClientRequestToken the update was submitted with.
    :param settings: action_settings.Settings with the poll interval and debug output.
    :param cancel: threading.Event, setting it stops the wait before the next poll.
    """
    SUBMITTED = 'submitted'
    POLLING = 'polling'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'
    CANCELLED = 'cancelled'

    def __init__(self, client, stack_name, token, settings, cancel=None):
        self.client = client
        self.stack_name = stack_name
        self.token = token
        self.settings = settings
        self.cancel = cancel if cancel is not None else Event()
        self.state = self.SUBMITTED

    def wait(self):
        """
        Blocks until the stack update finishes. There is no timeout, set the cancel event to stop.

        :return: None once the stack reports UPDATE_COMPLETE.
        """
        cutoff = datetime.now(utc) - self.settings.stale_window
        self.state = self.POLLING
        while True:
            if self.cancel.wait(self.settings.poll_interval):
                self.state = self.CANCELLED
                raise CancellationError(self.stack_name)

            try:
                done = self.poll(cutoff)
            except CancellationError:
                self.state = self.CANCELLED
                raise
            except (ResourceUpdateFailedError, StackRolledBackError,
                    exceptions.ClientError, exceptions.BotoCoreError):
                self.state = self.FAILED
                raise

            if done:
                self.state = self.SUCCEEDED
                return

    def poll(self, cutoff):
        """
        Scans the stack events page by page, stopping at the first event older than the cutoff.

        :param cutoff: Timezone-aware datetime, older events belong to earlier operations.
        :return: True if the update completed, False to keep polling.
        """
        paginator = self.client.get_paginator('describe_stack_events')
        for page in paginator.paginate(StackName=self.stack_name):
            for event in page['StackEvents']:
                timestamp = event.get('Timestamp')
                if timestamp is not None and timestamp < cutoff:
                    return False

                if self.check_event(event):
                    return True

            # Finish the page in hand but don't fetch another one once cancelled.
            if self.cancel.is_set():
                raise CancellationError(self.stack_name)

        return False

    def check_event(self, event):
        if event.get('ClientRequestToken') != self.token:
            return False

        status = event.get('ResourceStatus')
        reason = event.get('ResourceStatusReason', '')
        logical_id = event.get('LogicalResourceId')
        resource_type = event.get('ResourceType')

        if status == UPDATE_FAILED and reason != UPDATE_CANCELLED_REASON:
            raise ResourceUpdateFailedError(status, reason, logical_id, resource_type)

        self.settings.debug('{}\t{}\t{}'.format(resource_type, logical_id, status))

        if logical_id != self.stack_name or resource_type != STACK_RESOURCE_TYPE:
            return False

        if status in ROLLED_BACK_STATUSES:
            raise StackRolledBackError(status)

        return status == UPDATE_COMPLETE
