"""Pydantic schemas for progression and access decisions.

Inputs (calendar snapshots, principals, subscription status) arrive already
resolved from the data layer. Outputs are ephemeral decision values handed
to the presentation layer and never persisted.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from journey.access.enums import AdminMode, DayStatus

# ============================================================================
# Inputs
# ============================================================================


class CalendarDay(BaseModel):
    """One day-slot of a challenge calendar snapshot."""

    model_config = ConfigDict(frozen=True)

    day_number: int = Field(..., ge=1, description="1-based position in the challenge")
    status: DayStatus = Field(default=DayStatus.NOT_STARTED)
    is_accessible: bool = Field(
        default=True,
        description="Date-based availability resolved by the data layer",
    )


class Principal(BaseModel):
    """Authenticated user as resolved by the authentication context."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    role: str | None = None


class SubscriptionStatus(BaseModel):
    """Subscription state of a principal.

    has_premium_access is the only field access decisions trust. The remaining
    fields are informational.
    """

    model_config = ConfigDict(frozen=True)

    subscribed: bool = False
    subscription_tier: str | None = None
    subscription_end: datetime | None = None
    has_premium_access: bool = False


# ============================================================================
# Outputs
# ============================================================================


class TrainingAccess(BaseModel):
    """Result of a premium content check."""

    model_config = ConfigDict(frozen=True)

    can_access: bool
    is_premium_user: bool


class DayLockState(BaseModel):
    """Lock state of a single calendar day."""

    model_config = ConfigDict(frozen=True)

    day_number: int
    locked: bool


class AdminViewState(BaseModel):
    """Admin display state for the current session."""

    model_config = ConfigDict(frozen=True)

    mode: AdminMode
    label: str
    has_override: bool
