"""Progression and access facade for challenge views.

Views hand in the calendar snapshot and content flags they already fetched;
the controller answers with lock states, access decisions and admin display
state.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from loguru import logger

from journey.access.admin_mode import AdminModeStore, get_mode_label
from journey.access.day_lock import is_day_locked
from journey.access.schemas import AdminViewState, CalendarDay, DayLockState, TrainingAccess
from journey.access.subscription import SubscriptionAccessGate


class ProgressionAccessController:
    """Binds admin mode, day locking and premium entitlement for one session."""

    def __init__(self, admin_modes: AdminModeStore, gate: SubscriptionAccessGate) -> None:
        self.admin_modes = admin_modes
        self.gate = gate

    def has_admin_override(self) -> bool:
        """Whether the current admin mode bypasses progression locks."""
        return self.admin_modes.get_admin_mode().has_override

    def is_day_locked(self, day_number: int, calendar_days: Iterable[CalendarDay]) -> bool:
        """Lock state of one day under the current admin mode."""
        # Override is resolved before the snapshot is touched.
        if self.has_admin_override():
            return False
        return is_day_locked(day_number, calendar_days, is_admin=False)

    def day_lock_states(self, calendar_days: Sequence[CalendarDay]) -> list[DayLockState]:
        """Lock state for every distinct day in a calendar, ordered by day number."""
        override = self.has_admin_override()
        day_numbers = sorted({day.day_number for day in calendar_days})
        return [
            DayLockState(day_number=day_number, locked=is_day_locked(day_number, calendar_days, is_admin=override))
            for day_number in day_numbers
        ]

    def can_open_day(self, day: CalendarDay, calendar_days: Iterable[CalendarDay]) -> bool:
        """A day can be entered when it is accessible and not locked."""
        if not day.is_accessible:
            return False
        return not self.is_day_locked(day.day_number, calendar_days)

    def can_access_training(self, is_premium_content: bool) -> TrainingAccess:
        """Premium entitlement check, independent of admin mode."""
        return self.gate.can_access_training(is_premium_content)

    def can_start_session(self, day_number: int, calendar_days: Iterable[CalendarDay], is_premium_content: bool) -> bool:
        """Whether a training session of a challenge day may be started."""
        if self.is_day_locked(day_number, calendar_days):
            logger.debug(f"Session blocked by progression lock: day_number={day_number}")
            return False
        return self.can_access_training(is_premium_content).can_access

    def view_state(self) -> AdminViewState:
        """Current admin mode with its label and override flag."""
        mode = self.admin_modes.get_admin_mode()
        return AdminViewState(mode=mode, label=get_mode_label(mode), has_override=mode.has_override)
