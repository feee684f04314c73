import datetime
import sys

from dateutil.relativedelta import relativedelta


def say(msg):
    """Log a message to stderr with timestamp."""
    d = datetime.datetime.now().replace(microsecond=0)
    sys.stderr.write(f'{d}: {str(msg)}\n')
    sys.stderr.flush()


def add_days(d, days):
    """Shift a date or datetime by a whole number of days."""
    return d + relativedelta(days=days)
