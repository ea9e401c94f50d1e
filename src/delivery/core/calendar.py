"""Business-day arithmetic."""

from datetime import datetime, timedelta

SATURDAY = 5
SUNDAY = 6


def is_workday(moment: datetime) -> bool:
    return moment.weekday() not in (SATURDAY, SUNDAY)


def add_workdays(start: datetime, workdays: int) -> datetime:
    """Advance ``start`` by ``workdays`` business days, skipping weekends.

    The time of day is preserved. Counting starts on the day after ``start``,
    so a Friday plus one workday lands on Monday. Zero returns ``start``.
    """
    if workdays < 0:
        raise ValueError("workdays must be non-negative")

    result = start
    added = 0
    while added < workdays:
        result += timedelta(days=1)
        if is_workday(result):
            added += 1
    return result
