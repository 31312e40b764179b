"""
Turns key=value overrides into the complete parameter list UpdateStack expects. CloudFormation wants
every parameter of the stack on each update, so parameters that are not overridden are passed with
UsePreviousValue instead of their current value.
"""
from stack_errors import AlreadySetError, DuplicateKeyError, FormatError, UnknownParameterError


def parse_kvs(lines):
    """
    Parses key=value lines into a dict of overrides. Blank lines are skipped, the line is split on
    the first '=' and both sides are stripped.

    :param lines: Iterable of raw input lines.
    :return: dict(key: value), empty if every line was blank.
    """
    overrides = {}
    for line in lines:
        line = line.strip()
        if not line:
            continue

        key, sep, value = line.partition('=')
        if not sep:
            raise FormatError('wrong parameter format, want key=value pair: {!r}'.format(line), line)

        key, value = key.strip(), value.strip()
        if not key or not value:
            raise FormatError('wrong parameter format, both key and value must be non-empty: {!r}'.format(line), line)

        if key in overrides:
            raise DuplicateKeyError(key)

        overrides[key] = value

    return overrides


def single_override(key, value):
    key, value = (key or '').strip(), (value or '').strip()
    if not key or not value:
        raise FormatError('both parameter key and value must be non-empty: {!r}={!r}'.format(key, value),
                          '{}={}'.format(key, value))

    return {key: value}


def reconcile_parameters(current_parameters, overrides, check_already_set=False):
    """
    Merges overrides into the stack's current parameters, keeping the stack's parameter order.

    :param current_parameters: The 'Parameters' list from DescribeStacks.
    :param overrides: dict(key: value) of requested values.
    :param check_already_set: Raise AlreadySetError when an override equals the current value.
    :return: list of UpdateStack parameter dicts, one per current parameter.
    """
    remaining = dict(overrides)
    parameters = []

    for current in current_parameters:
        key = current['ParameterKey']
        if key not in remaining:
            parameters.append({'ParameterKey': key, 'UsePreviousValue': True})
            continue

        value = remaining.pop(key)
        if check_already_set and value == current.get('ParameterValue'):
            raise AlreadySetError(key, value)

        parameters.append({'ParameterKey': key, 'ParameterValue': value})

    if remaining:
        raise UnknownParameterError(remaining.keys())

    return parameters


def reconcile_stack(stack, overrides, check_already_set=False):
    """
    Builds the UpdateStack arguments that change only the overridden parameters. Capabilities and
    notification ARNs are carried over from the stack as they are.

    :param stack: A single stack dict from DescribeStacks.
    :param overrides: dict(key: value) of requested values.
    :param check_already_set: Passed through to reconcile_parameters.
    :return: dict of UpdateStack keyword arguments (without StackName and token).
    """
    request = {
        'Parameters': reconcile_parameters(stack.get('Parameters', []), overrides, check_already_set),
    }

    # Only round-trip what the stack reports, an empty NotificationARNs list would clear them.
    if stack.get('Capabilities'):
        request['Capabilities'] = list(stack['Capabilities'])
    if stack.get('NotificationARNs'):
        request['NotificationARNs'] = list(stack['NotificationARNs'])

    return request


def describe_parameters(parameters):
    lines = []
    for parameter in parameters:
        if parameter.get('UsePreviousValue'):
            lines.append('{} (use the previous value)'.format(parameter['ParameterKey']))
        else:
            lines.append('{}: {}'.format(parameter['ParameterKey'], parameter['ParameterValue']))

    return lines
