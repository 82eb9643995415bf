"""Administrative mode persistence.

The admin mode is session-scoped UI state, not an authorization boundary.
One AdminModeStore is constructed per client session and passed to whatever
needs the mode. Reads lazily default to USER and writes go straight through
to client storage.
"""

from __future__ import annotations

from loguru import logger

from journey.access.enums import AdminMode
from journey.access.errors import StorageUnavailableError
from journey.access.storage import KeyValueStorage
from journey.config.settings import settings

MODE_LABELS: dict[str, dict[AdminMode, str]] = {
    "en": {
        AdminMode.USER: "User mode",
        AdminMode.PREVIEW: "Admin preview",
        AdminMode.EDIT: "Sport editing",
    },
    "pl": {
        AdminMode.USER: "Tryb użytkownika",
        AdminMode.PREVIEW: "Podgląd admina",
        AdminMode.EDIT: "Edycja sportu",
    },
}


def get_mode_label(mode: AdminMode | str, locale: str | None = None) -> str:
    """Map an admin mode to its display label.

    Values outside AdminMode get the user-mode label.

    Args:
        mode: Admin mode (member or raw string)
        locale: Label locale; defaults to the configured LABEL_LOCALE

    Returns:
        Human-readable label
    """
    labels = MODE_LABELS.get(locale or settings.label_locale, MODE_LABELS["en"])
    return labels[AdminMode.parse(mode)]


class AdminModeStore:
    """Persisted admin mode for a single client session.

    A store constructed without storage behaves as a non-interactive context:
    reads return USER and writes are dropped.
    """

    def __init__(self, storage: KeyValueStorage | None, key: str | None = None) -> None:
        self._storage = storage
        self.key = key or settings.admin_mode_storage_key

    def get_admin_mode(self) -> AdminMode:
        """Read the current mode, falling back to USER."""
        if self._storage is None:
            return AdminMode.USER

        try:
            raw = self._storage.get(self.key)
        except StorageUnavailableError:
            logger.debug(f"Admin mode storage unavailable, defaulting to user: key={self.key}")
            return AdminMode.USER

        mode = AdminMode.parse(raw)
        if raw is not None and mode.value != raw:
            logger.warning(f"Ignoring unrecognized persisted admin mode: key={self.key}, value={raw!r}")
        return mode

    def set_admin_mode(self, mode: AdminMode) -> None:
        """Persist a mode. Silently skipped when storage is unavailable."""
        if self._storage is None:
            return

        try:
            self._storage.set(self.key, AdminMode(mode).value)
        except StorageUnavailableError:
            logger.debug(f"Admin mode storage unavailable, write skipped: key={self.key}, mode={mode}")
            return
        logger.info(f"Admin mode set: key={self.key}, mode={mode}")

    def get_mode_label(self, mode: AdminMode | str | None = None) -> str:
        """Label for the given mode, or for the current mode when omitted."""
        return get_mode_label(self.get_admin_mode() if mode is None else mode)
