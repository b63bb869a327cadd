from datetime import date, datetime


def compute_pace(duration_minutes: float, distance_km: float) -> float:
    """
    Compute pace in minutes per kilometer.
    Example: duration=50 min, distance=10 km -> 5.0
    """
    if not distance_km or distance_km <= 0:
        return 0.0
    return duration_minutes / distance_km


def as_date(value) -> date:
    """Return the calendar day for a date, datetime or ISO string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def shift_months(d: date, months: int) -> date:
    """Move `d` by a number of calendar months, clamping the day.

    Example: shift_months(date(2024, 3, 31), -1) -> date(2024, 2, 29)
    """
    month_index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    # last valid day of the target month
    if month == 12:
        next_first = date(year + 1, 1, 1)
    else:
        next_first = date(year, month + 1, 1)
    last_day = (next_first - date(year, month, 1)).days
    return date(year, month, min(d.day, last_day))


def month_key(d: date) -> str:
    """Format a date's month as 'YYYY-MM'."""
    return f"{d.year:04d}-{d.month:02d}"
