"""Premium entitlement resolution.

SubscriptionAccessGate combines the authentication context (who is asking)
with a subscription-status provider (what they are entitled to). Only an
explicit has_premium_access=True from the provider grants premium access.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from journey.access.roles import resolve_user_role
from journey.access.schemas import Principal, SubscriptionStatus, TrainingAccess
from journey.config.settings import settings
from journey.db.models import Subscriber
from journey.db.session import get_session

UNSUBSCRIBED = SubscriptionStatus()


class AuthContext(Protocol):
    """Source of the current principal."""

    def current_principal(self) -> Principal | None: ...


class SubscriptionStatusProvider(Protocol):
    """Source of subscription status for a principal."""

    def get_status(self, principal: Principal) -> SubscriptionStatus: ...


class StaticAuthContext:
    """Auth context holding an already-resolved principal."""

    def __init__(self, principal: Principal | None = None) -> None:
        self.principal = principal

    def current_principal(self) -> Principal | None:
        return self.principal


def is_subscription_active(subscribed: bool, subscription_end: datetime | None, now: datetime | None = None) -> bool:
    """Check whether a subscription is currently active.

    Naive end timestamps are treated as UTC.
    """
    if not subscribed:
        return False
    if subscription_end is None:
        return True

    now = now or datetime.now(timezone.utc)
    end = subscription_end if subscription_end.tzinfo else subscription_end.replace(tzinfo=timezone.utc)
    return end > now


class DatabaseSubscriptionProvider:
    """Subscription status backed by the subscribers and user_roles tables.

    Premium access comes from an active subscription or from a premium role.
    Any database failure resolves to the unsubscribed status.
    """

    def __init__(self, premium_roles: frozenset[str] | None = None) -> None:
        self.premium_roles = premium_roles if premium_roles is not None else settings.premium_role_set()

    def get_status(self, principal: Principal) -> SubscriptionStatus:
        role = resolve_user_role(principal)
        has_premium_role = role is not None and role.value in self.premium_roles

        try:
            with get_session() as session:
                subscriber = session.execute(select(Subscriber).where(Subscriber.user_id == principal.user_id)).scalar_one_or_none()

                subscribed = subscriber is not None and is_subscription_active(subscriber.subscribed, subscriber.subscription_end)
                return SubscriptionStatus(
                    subscribed=subscribed,
                    subscription_tier=subscriber.subscription_tier if subscriber else None,
                    subscription_end=subscriber.subscription_end if subscriber else None,
                    has_premium_access=subscribed or has_premium_role,
                )
        except SQLAlchemyError as e:
            logger.error(f"Error checking subscription for user_id={principal.user_id}: {e}")
            return UNSUBSCRIBED


class SubscriptionAccessGate:
    """Decides whether the current principal may open premium content.

    Nothing is cached; every call asks the provider again.
    """

    def __init__(self, auth_context: AuthContext, provider: SubscriptionStatusProvider) -> None:
        self.auth_context = auth_context
        self.provider = provider

    def subscription_status(self) -> SubscriptionStatus:
        """Resolve the current principal's subscription status."""
        principal = self.auth_context.current_principal()
        if principal is None:
            logger.debug("No authenticated principal, treating as unsubscribed")
            return UNSUBSCRIBED
        try:
            return self.provider.get_status(principal)
        except Exception as e:
            logger.error(f"Subscription provider failed for user_id={principal.user_id}, treating as unsubscribed: {e}")
            return UNSUBSCRIBED

    def has_premium_access(self) -> bool:
        return self.subscription_status().has_premium_access is True

    def can_access_training(self, is_premium_content: bool) -> TrainingAccess:
        """Check access to a training flagged premium or not.

        Args:
            is_premium_content: Whether the training is premium

        Returns:
            TrainingAccess with can_access and is_premium_user
        """
        has_premium_access = self.has_premium_access()
        access = TrainingAccess(
            can_access=not is_premium_content or has_premium_access,
            is_premium_user=has_premium_access,
        )
        logger.debug(f"Training access resolved: premium_content={is_premium_content}, can_access={access.can_access}, is_premium_user={access.is_premium_user}")
        return access
