"""Database models for client storage, subscriptions, roles and purchases."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""


class ClientStorageEntry(Base):
    """Scoped key/value storage for client-side state.

    One scope per client session (browser profile, device). Stores:
    - scope: Storage scope identifier
    - key: Storage key within the scope
    - value: Raw string value, never interpreted here
    - updated_at: Timestamp of the last write
    """

    __tablename__ = "client_storage"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    scope: Mapped[str] = mapped_column(String, nullable=False, index=True)
    key: Mapped[str] = mapped_column(String, nullable=False)
    value: Mapped[str] = mapped_column(String, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (UniqueConstraint("scope", "key", name="uq_client_storage_scope_key"),)


class Subscriber(Base):
    """Subscription record for a user."""

    __tablename__ = "subscribers"

    user_id: Mapped[str] = mapped_column(String, primary_key=True, index=True)
    subscribed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    subscription_tier: Mapped[str | None] = mapped_column(String, nullable=True)
    subscription_end: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)


class UserRoleAssignment(Base):
    """Role assigned to a user (free, premium, trainer, admin)."""

    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(String, primary_key=True, index=True)
    role: Mapped[str] = mapped_column(String, nullable=False)


class ChallengePurchase(Base):
    """One-off purchase of a single challenge."""

    __tablename__ = "user_challenge_purchases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    challenge_id: Mapped[str] = mapped_column(String, nullable=False)
    purchased_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "challenge_id", name="uq_challenge_purchase_user_challenge"),
        Index("idx_challenge_purchases_user_id", "user_id"),
    )
