import math
from datetime import date, datetime, time

from dateutil.relativedelta import relativedelta

from ..errors import ValidationError

SECONDS_PER_DAY = 24 * 60 * 60


def parse_date(value, field="date"):
    """Parse an ISO date (or datetime) string into a date; blank values give None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)")


def iso(value):
    return value.isoformat() if value else None


def first_day_of_next_month(today=None):
    today = today or date.today()
    return today.replace(day=1) + relativedelta(months=1)


def one_month_after(value):
    # relativedelta clamps to the last day of shorter months
    return value + relativedelta(months=1)


def days_until_expiry(lease_end_date, now=None):
    """Whole days (rounded up) from now until the lease end date at 00:00 UTC."""
    if not lease_end_date:
        return None
    now = now or datetime.utcnow()
    delta = datetime.combine(lease_end_date, time()) - now
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def is_lease_expiring_soon(lease_end_date, window_days=30, now=None):
    days = days_until_expiry(lease_end_date, now=now)
    if days is None:
        return False
    return 0 < days <= window_days
