"""Tests for the progression and access facade."""

import pytest

from journey.access.admin_mode import AdminModeStore, get_mode_label
from journey.access.controller import ProgressionAccessController
from journey.access.enums import AdminMode
from journey.access.schemas import CalendarDay, SubscriptionStatus
from journey.access.subscription import StaticAuthContext, SubscriptionAccessGate


class FakeProvider:
    def __init__(self, has_premium_access: bool = False):
        self.has_premium_access = has_premium_access

    def get_status(self, principal):
        return SubscriptionStatus(has_premium_access=self.has_premium_access)


class ExplodingCalendar:
    """Calendar snapshot that must never be read."""

    def __iter__(self):
        raise AssertionError("calendar snapshot was read")


def _controller(memory_storage, principal, mode=AdminMode.USER, has_premium_access=False):
    admin_modes = AdminModeStore(memory_storage)
    admin_modes.set_admin_mode(mode)
    gate = SubscriptionAccessGate(StaticAuthContext(principal), FakeProvider(has_premium_access))
    return ProgressionAccessController(admin_modes, gate)


def test_user_mode_applies_locks(memory_storage, principal, calendar_days):
    controller = _controller(memory_storage, principal)

    assert controller.is_day_locked(1, calendar_days) is False
    assert controller.is_day_locked(2, calendar_days) is False
    assert controller.is_day_locked(3, calendar_days) is True


@pytest.mark.parametrize("mode", [AdminMode.PREVIEW, AdminMode.EDIT])
def test_admin_modes_override_locks(memory_storage, principal, calendar_days, mode):
    controller = _controller(memory_storage, principal, mode=mode)

    assert controller.has_admin_override() is True
    assert controller.is_day_locked(3, calendar_days) is False
    assert controller.is_day_locked(10, []) is False


def test_override_short_circuits_before_snapshot_lookup(memory_storage, principal):
    controller = _controller(memory_storage, principal, mode=AdminMode.EDIT)

    assert controller.is_day_locked(5, ExplodingCalendar()) is False


def test_mode_change_takes_effect_immediately(memory_storage, principal, calendar_days):
    controller = _controller(memory_storage, principal)
    assert controller.is_day_locked(3, calendar_days) is True

    controller.admin_modes.set_admin_mode(AdminMode.PREVIEW)

    assert controller.is_day_locked(3, calendar_days) is False


def test_invalid_persisted_mode_does_not_override(memory_storage, principal, calendar_days):
    controller = _controller(memory_storage, principal)
    memory_storage.set(controller.admin_modes.key, "superadmin")

    assert controller.has_admin_override() is False
    assert controller.is_day_locked(3, calendar_days) is True


def test_day_lock_states(memory_storage, principal):
    controller = _controller(memory_storage, principal)
    calendar_days = [
        CalendarDay(day_number=3, status="not_started"),
        CalendarDay(day_number=1, status="completed"),
        CalendarDay(day_number=2, status="in_progress"),
        CalendarDay(day_number=1, status="in_progress"),
    ]

    states = controller.day_lock_states(calendar_days)

    assert [(state.day_number, state.locked) for state in states] == [(1, False), (2, False), (3, True)]


def test_day_lock_states_in_admin_mode(memory_storage, principal, calendar_days):
    controller = _controller(memory_storage, principal, mode=AdminMode.EDIT)

    assert all(not state.locked for state in controller.day_lock_states(calendar_days))


def test_can_open_day(memory_storage, principal, calendar_days):
    controller = _controller(memory_storage, principal)

    assert controller.can_open_day(calendar_days[1], calendar_days) is True
    assert controller.can_open_day(calendar_days[2], calendar_days) is False


def test_inaccessible_day_cannot_be_opened_even_by_admin(memory_storage, principal):
    controller = _controller(memory_storage, principal, mode=AdminMode.EDIT)
    day = CalendarDay(day_number=1, status="not_started", is_accessible=False)

    assert controller.can_open_day(day, [day]) is False


@pytest.mark.parametrize("mode", list(AdminMode))
def test_premium_gate_ignores_admin_mode(memory_storage, principal, mode):
    controller = _controller(memory_storage, principal, mode=mode, has_premium_access=False)

    access = controller.can_access_training(True)

    assert access.can_access is False
    assert access.is_premium_user is False


def test_can_start_session(memory_storage, principal, calendar_days):
    controller = _controller(memory_storage, principal, has_premium_access=False)

    assert controller.can_start_session(2, calendar_days, is_premium_content=False) is True
    assert controller.can_start_session(2, calendar_days, is_premium_content=True) is False
    assert controller.can_start_session(3, calendar_days, is_premium_content=False) is False


def test_can_start_premium_session_with_entitlement(memory_storage, principal, calendar_days):
    controller = _controller(memory_storage, principal, has_premium_access=True)

    assert controller.can_start_session(2, calendar_days, is_premium_content=True) is True


@pytest.mark.parametrize(("mode", "has_override"), [(AdminMode.USER, False), (AdminMode.PREVIEW, True), (AdminMode.EDIT, True)])
def test_view_state(memory_storage, principal, mode, has_override):
    state = _controller(memory_storage, principal, mode=mode).view_state()

    assert state.mode is mode
    assert state.label == get_mode_label(mode)
    assert state.has_override is has_override
