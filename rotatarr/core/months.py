"""Calendar month helpers shared by the window calculator and the planner.

Months are identified by "YYYY-MM" keys so they sort chronologically as
plain strings and serialize cleanly to JSON.
"""

from datetime import date

from dateutil.relativedelta import relativedelta


def month_key(d: date) -> str:
    """Return the "YYYY-MM" key for the month containing ``d``."""
    return f"{d.year:04d}-{d.month:02d}"


def parse_month_key(key: str) -> date:
    """Return the first day of the month for a "YYYY-MM" key."""
    year, month = key.split("-", 1)
    return date(int(year), int(month), 1)


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def add_months(d: date, months: int) -> date:
    return d + relativedelta(months=months)


def format_month(key: str) -> str:
    """Short display label, e.g. "2026-10" -> "Oct 2026"."""
    return parse_month_key(key).strftime("%b %Y")


def next_month_keys(today: date | None = None, count: int = 12) -> list[str]:
    """Keys for ``count`` consecutive months starting at the current month."""
    base = start_of_month(today or date.today())
    return [month_key(add_months(base, i)) for i in range(count)]
