"""Exceptions raised while updating the parameters of a CloudFormation stack."""


class StackUpdateError(Exception):
    """Base class for every error raised by update-cloudformation-stack."""


class NoChangeError(StackUpdateError):
    """
    The requested update would leave the stack as it is. Reported as a warning, the run still
    counts as a success.
    """


class FormatError(StackUpdateError, ValueError):
    """
    A parameter line is not a key=value pair with a non-empty key and value.

    :param message: Human-readable error description.
    :param line: The offending input line (stripped).
    """
    def __init__(self, message, line):
        self.line = line
        super().__init__(message)


class DuplicateKeyError(StackUpdateError, ValueError):
    def __init__(self, key):
        self.key = key
        super().__init__('duplicate key in parameters list: {!r}'.format(key))


class UnknownParameterError(StackUpdateError):
    """
    One or more overrides name parameters the stack does not define.

    :param keys: The unmatched parameter keys, stored sorted.
    """
    def __init__(self, keys):
        self.keys = sorted(keys)
        super().__init__('stack has no parameters with these names: {}'.format(', '.join(self.keys)))


class AlreadySetError(NoChangeError):
    def __init__(self, key, value):
        self.key = key
        self.value = value
        super().__init__('parameter {} is already set to {!r}'.format(key, value))


class NothingToUpdateError(NoChangeError):
    def __init__(self, stack_name):
        self.stack_name = stack_name
        super().__init__('nothing to update')


class StackLookupError(StackUpdateError):
    def __init__(self, stack_name, count):
        self.stack_name = stack_name
        self.count = count
        super().__init__('DescribeStacks returned {} stacks, expected 1'.format(count))


class ResourceUpdateFailedError(StackUpdateError):
    """
    A resource tracked by this update reported UPDATE_FAILED.

    :param status: The resource status, e.g. UPDATE_FAILED.
    :param reason: ResourceStatusReason reported with the event.
    :param logical_id: Logical id of the failing resource.
    :param resource_type: CloudFormation type of the failing resource.
    """
    def __init__(self, status, reason, logical_id=None, resource_type=None):
        self.status = status
        self.reason = reason
        self.logical_id = logical_id
        self.resource_type = resource_type
        super().__init__('{}: {}'.format(status, reason))


class StackRolledBackError(StackUpdateError):
    def __init__(self, status):
        self.status = status
        super().__init__('{}, see AWS CloudFormation Console for more details'.format(status))


class CancellationError(StackUpdateError):
    def __init__(self, stack_name):
        self.stack_name = stack_name
        super().__init__('stopped waiting for stack {} to finish updating: cancelled'.format(stack_name))
