"""
Updates a CloudFormation stack by changing some of its parameters while preserving all other
settings (template, other parameters, capabilities, notification ARNs), then waits for the update
to finish.

Usage: update-cloudformation-stack --stack=NAME Param1=Value1 [Param2=Value2 ...]
       update-cloudformation-stack --stack=NAME --key=Param1 --value=Value1
"""
import argparse
import os
import signal
import sys
from threading import Event, Timer

import boto3
from botocore import exceptions

from action_settings import POLL_INTERVAL, Settings
from stack_errors import CancellationError, NoChangeError, StackUpdateError
from stack_monitor import StackMonitor
from stack_params import describe_parameters, parse_kvs, reconcile_stack, single_override
from stack_update import describe_stack, submit_update


def build_parser():
    parser = argparse.ArgumentParser(
        prog='update-cloudformation-stack',
        description='Updates CloudFormation stack by updating some of its parameters while preserving '
                    'all other settings.'
    )
    parser.add_argument('-stack', '--stack', default='', help='Name of the CloudFormation stack to update.')
    parser.add_argument('parameters', nargs='*', metavar='Key=Value', help='Parameters to set on the stack.')
    parser.add_argument('--key', help='Single parameter to set, fails as already set if it holds --value.')
    parser.add_argument('--value', help='Value for --key.')
    parser.add_argument('--poll-interval', type=float, default=POLL_INTERVAL,
                        help='Seconds between checks of the stack events (default: %(default)s).')
    parser.add_argument('--max-wait', type=float, default=None,
                        help='Stop waiting for the update after this many seconds (default: wait until done).')
    return parser


def load_overrides(args, settings, environ):
    """
    Picks the parameter overrides from the command line, falling back to the action inputs when
    running under GitHub Actions.

    :return: (dict(key: value), True in single-parameter mode)
    """
    if args.key is not None or args.value is not None:
        return single_override(args.key, args.value), True

    lines = args.parameters
    if settings.under_github and not lines:
        if environ.get('INPUT_KEY') or environ.get('INPUT_VALUE'):
            return single_override(environ.get('INPUT_KEY'), environ.get('INPUT_VALUE')), True
        lines = environ.get('INPUT_PARAMETERS', '').split('\n')

    return parse_kvs(lines), False


def check_cancelled(cancel, stack_name):
    if cancel.is_set():
        raise CancellationError(stack_name)


def run(args, settings, client, cancel, environ):
    if not args.stack:
        raise StackUpdateError('stack name must be set')

    overrides, single = load_overrides(args, settings, environ)
    if not overrides:
        raise StackUpdateError('empty parameters list')
    settings.debug('loaded parameters: {}'.format(overrides))

    stack = describe_stack(client, args.stack)
    check_cancelled(cancel, args.stack)
    request = reconcile_stack(stack, overrides, check_already_set=single)

    settings.debug('parameters to call UpdateStack with:')
    for line in describe_parameters(request['Parameters']):
        settings.debug(line)

    # Once submitted the update runs on, so don't start it after a cancel.
    check_cancelled(cancel, args.stack)
    token = submit_update(client, args.stack, request)
    settings.info('polling for stack updates until it\'s ready, this may take a while')
    StackMonitor(client, args.stack, token, settings, cancel).wait()
    settings.info('stack {} updated'.format(args.stack))


def handle_signals(cancel):
    def stop(signum, frame):
        cancel.set()

    signal.signal(signal.SIGINT, stop)
    signal.signal(signal.SIGTERM, stop)


def main(argv=None, environ=None, client=None, cancel=None):
    """
    Runs one update and maps the outcome to an exit code.

    :return: 0 on success or when there was nothing to change, 1 on any other error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.key is None) != (args.value is None):
        parser.error('--key and --value must be used together')
    if args.key is not None and args.parameters:
        parser.error('--key/--value cannot be combined with Key=Value parameters')
    if args.poll_interval < 0:
        parser.error('--poll-interval must not be negative')
    if args.max_wait is not None and args.max_wait < 0:
        parser.error('--max-wait must not be negative')

    if environ is None:
        environ = os.environ
    settings = Settings.from_environ(environ, poll_interval=args.poll_interval)

    if cancel is None:
        cancel = Event()
        handle_signals(cancel)

    deadline = None
    if args.max_wait is not None:
        deadline = Timer(args.max_wait, cancel.set)
        deadline.daemon = True
        deadline.start()

    try:
        if client is None:
            client = boto3.client('cloudformation')
        run(args, settings, client, cancel, environ)

    except NoChangeError as error:
        settings.debug('error: {!r}'.format(error))
        settings.warning(str(error))
        return 0

    except (StackUpdateError, exceptions.BotoCoreError, exceptions.ClientError) as error:
        settings.error(str(error))
        return 1

    finally:
        if deadline is not None:
            deadline.cancel()

    return 0


if __name__ == '__main__':
    sys.exit(main())
