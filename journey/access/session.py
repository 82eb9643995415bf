"""Per-session wiring of the access services.

One ClientSession is built when a client session starts and handed to the
views that need access decisions.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from journey.access.admin_mode import AdminModeStore
from journey.access.challenge_access import ChallengeAccessChecker
from journey.access.controller import ProgressionAccessController
from journey.access.roles import RoleCapabilities, resolve_user_role
from journey.access.schemas import Principal
from journey.access.storage import KeyValueStorage, SqlKeyValueStorage
from journey.access.subscription import (
    AuthContext,
    DatabaseSubscriptionProvider,
    StaticAuthContext,
    SubscriptionAccessGate,
    SubscriptionStatusProvider,
)


@dataclass
class ClientSession:
    """Access services for a single client session."""

    scope: str
    auth_context: AuthContext
    admin_modes: AdminModeStore
    gate: SubscriptionAccessGate
    controller: ProgressionAccessController
    challenge_access: ChallengeAccessChecker
    capabilities: RoleCapabilities


def build_client_session(
    scope: str,
    principal: Principal | None = None,
    storage: KeyValueStorage | None = None,
    provider: SubscriptionStatusProvider | None = None,
    auth_context: AuthContext | None = None,
) -> ClientSession:
    """Build the access services for a client session.

    Args:
        scope: Client storage scope (one per browser profile or device)
        principal: Resolved principal, ignored when auth_context is given
        storage: Storage backend; defaults to the database-backed one
        provider: Subscription provider; defaults to the database-backed one
        auth_context: Auth context; defaults to a static one over principal

    Returns:
        ClientSession with all services wired and role capabilities resolved
    """
    auth_context = auth_context or StaticAuthContext(principal)
    admin_modes = AdminModeStore(storage if storage is not None else SqlKeyValueStorage(scope))
    gate = SubscriptionAccessGate(auth_context, provider or DatabaseSubscriptionProvider())
    controller = ProgressionAccessController(admin_modes, gate)
    challenge_access = ChallengeAccessChecker(auth_context, gate)
    capabilities = RoleCapabilities.for_role(resolve_user_role(auth_context.current_principal()))

    logger.info(f"Client session built: scope={scope}")
    return ClientSession(
        scope=scope,
        auth_context=auth_context,
        admin_modes=admin_modes,
        gate=gate,
        controller=controller,
        challenge_access=challenge_access,
        capabilities=capabilities,
    )
