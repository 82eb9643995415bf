"""Challenge calendar day locking.

A day unlocks once the previous day has been completed. Day 1 is always open
and administrators bypass the check entirely.
"""

from collections.abc import Iterable

from journey.access.enums import DayStatus
from journey.access.schemas import CalendarDay


def is_day_locked(day_number: int, calendar_days: Iterable[CalendarDay], is_admin: bool = False) -> bool:
    """Check whether a challenge day is locked.

    Duplicate entries for the previous day are tolerated: one completed entry
    is enough to unlock. A missing previous day keeps the day locked.

    Args:
        day_number: Day to evaluate (1-based)
        calendar_days: Calendar snapshot for the challenge, in any order
        is_admin: Whether the caller has administrative override

    Returns:
        True if the day is locked, False otherwise
    """
    if is_admin:
        return False

    if day_number == 1:
        return False

    previous_day_number = day_number - 1
    return not any(day.day_number == previous_day_number and day.status == DayStatus.COMPLETED for day in calendar_days)
