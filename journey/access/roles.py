"""User roles and the capability flags derived from them."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from journey.access.enums import UserRole
from journey.access.schemas import Principal
from journey.db.models import UserRoleAssignment
from journey.db.session import get_session


def parse_role(raw: str | None) -> UserRole | None:
    """Resolve a raw role string to a UserRole, or None if unknown."""
    if not raw:
        return None
    try:
        return UserRole(raw.lower())
    except ValueError:
        logger.debug(f"Ignoring unknown role: {raw!r}")
        return None


class UserRoleRepository:
    """Repository for stored user roles."""

    @staticmethod
    def get_role(user_id: str) -> UserRole | None:
        """Get the stored role of a user; None if absent, unknown or unreadable."""
        try:
            with get_session() as session:
                assignment = session.execute(select(UserRoleAssignment).where(UserRoleAssignment.user_id == user_id)).scalar_one_or_none()
                return parse_role(assignment.role) if assignment else None
        except SQLAlchemyError as e:
            logger.error(f"Error fetching user role for user_id={user_id}: {e}")
            return None


def resolve_user_role(principal: Principal | None) -> UserRole | None:
    """Role carried by the principal, falling back to the stored role."""
    if principal is None:
        return None
    if principal.role:
        return parse_role(principal.role)
    return UserRoleRepository.get_role(principal.user_id)


@dataclass(frozen=True)
class RoleCapabilities:
    """What a role is allowed to do in the catalog.

    Unknown or missing roles get no capabilities.
    """

    role: UserRole | None
    is_free: bool = False
    is_premium: bool = False
    is_trainer: bool = False
    is_admin: bool = False

    @classmethod
    def for_role(cls, role: UserRole | str | None) -> RoleCapabilities:
        resolved = parse_role(role)
        return cls(
            role=resolved,
            is_free=resolved is UserRole.FREE,
            is_premium=resolved is UserRole.PREMIUM,
            is_trainer=resolved is UserRole.TRAINER,
            is_admin=resolved is UserRole.ADMIN,
        )

    @property
    def can_create_challenges(self) -> bool:
        return self.is_trainer or self.is_admin

    @property
    def can_access_library(self) -> bool:
        return self.is_premium or self.is_trainer or self.is_admin
