"""
Display helpers shared by the briefing templates.
"""
from datetime import date, datetime, timezone


def format_number(n: int) -> str:
    """
    1234 -> "1.2K", 2000000 -> "2M"
    """
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}".removesuffix(".0") + "M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}".removesuffix(".0") + "K"
    return str(n)


def format_date(value: str) -> str:
    """
    "2026-10-19" -> "Monday, October 19, 2026"
    """
    try:
        d = date.fromisoformat(value[:10])
    except ValueError:
        return value
    return f"{d:%A, %B} {d.day}, {d.year}"


def format_time(value: str) -> str:
    """
    "2026-10-19T13:05:00.000Z" -> "1:05 PM UTC"
    """
    try:
        ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc)
    hour = ts.hour % 12 or 12
    return f"{hour}:{ts.minute:02d} {'AM' if ts.hour < 12 else 'PM'} UTC"
