"""Canonical enums for progression and access control.

All enums are string-based so persisted and wire values compare directly
against members.
"""

from enum import StrEnum


class AdminMode(StrEnum):
    """UI privilege stance of the current client session."""

    USER = "user"
    PREVIEW = "preview"
    EDIT = "edit"

    @classmethod
    def parse(cls, raw: str | None) -> "AdminMode":
        """Resolve a raw persisted value to a member, defaulting to USER."""
        if raw is None:
            return cls.USER
        try:
            return cls(raw)
        except ValueError:
            return cls.USER

    @property
    def has_override(self) -> bool:
        """Preview and edit both bypass progression locks."""
        return self is not AdminMode.USER


class DayStatus(StrEnum):
    """Completion status of a challenge calendar day."""

    NOT_STARTED = "not_started"
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    REST = "rest"


class UserRole(StrEnum):
    """Role stored for a user account."""

    FREE = "free"
    PREMIUM = "premium"
    TRAINER = "trainer"
    ADMIN = "admin"
