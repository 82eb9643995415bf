"""Per-challenge access for users without a premium subscription.

Premium users can open every challenge. Everyone else needs a purchase of
the specific challenge.
"""

from __future__ import annotations

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from journey.access.subscription import AuthContext, SubscriptionAccessGate
from journey.db.models import ChallengePurchase
from journey.db.session import get_session


class ChallengePurchaseRepository:
    """Repository for challenge purchase lookups."""

    @staticmethod
    def purchased_challenge_ids(user_id: str) -> set[str]:
        """Get ids of all challenges purchased by a user.

        Args:
            user_id: User ID (string UUID format)

        Returns:
            Set of challenge ids; empty if the lookup fails
        """
        try:
            with get_session() as session:
                rows = session.execute(select(ChallengePurchase.challenge_id).where(ChallengePurchase.user_id == user_id)).scalars().all()
                return set(rows)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching user purchases for user_id={user_id}: {e}")
            return set()


class ChallengeAccessChecker:
    """Resolves whether the current principal may open a challenge."""

    def __init__(
        self,
        auth_context: AuthContext,
        gate: SubscriptionAccessGate,
        purchases: ChallengePurchaseRepository | None = None,
    ) -> None:
        self.auth_context = auth_context
        self.gate = gate
        self.purchases = purchases or ChallengePurchaseRepository()

    def check_challenge_access(self, challenge_id: str | None) -> bool:
        principal = self.auth_context.current_principal()
        if principal is None or not challenge_id:
            return False

        if self.gate.has_premium_access():
            return True

        purchased = challenge_id in self.purchases.purchased_challenge_ids(principal.user_id)
        logger.debug(f"Challenge access by purchase: user_id={principal.user_id}, challenge_id={challenge_id}, purchased={purchased}")
        return purchased
