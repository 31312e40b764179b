"""
Run-wide settings resolved once at startup. Detects GitHub Actions and formats the messages the tool
prints so the runner shows them as debug, warning or error annotations.
"""
import os
import sys
from datetime import timedelta

POLL_INTERVAL = 20
STALE_EVENTS_WINDOW = timedelta(hours=1)


class Settings:
    """
    :param under_github: True when running as a GitHub Actions step.
    :param poll_interval: Seconds between two reads of the stack events.
    :param stale_window: Events older than monitor start minus this window are not scanned.
    """
    def __init__(self, under_github=False, poll_interval=POLL_INTERVAL, stale_window=STALE_EVENTS_WINDOW):
        self.under_github = under_github
        self.poll_interval = poll_interval
        self.stale_window = stale_window
        self.warning_prefix = '::warning::' if under_github else ''
        self.error_prefix = '::error::' if under_github else ''

    @classmethod
    def from_environ(cls, environ=None, **kwargs):
        if environ is None:
            environ = os.environ
        return cls(under_github=environ.get('GITHUB_ACTIONS') == 'true', **kwargs)

    def debug(self, message):
        # Diagnostic trace is only shown in CI.
        if self.under_github:
            sys.stdout.write('::debug::' + message + '\n')

    def info(self, message):
        sys.stdout.write(message + '\n')

    def warning(self, message):
        sys.stdout.write(self.warning_prefix + message + '\n')

    def error(self, message):
        sys.stdout.write(self.error_prefix + message + '\n')
