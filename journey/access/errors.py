"""Error types for the access module.

Raised only at storage boundaries. Decision functions never let these escape;
they resolve them to the least-privileged default.
"""


class StorageUnavailableError(RuntimeError):
    """Raised when a client storage backend has no usable backing store.

    This is an expected condition (non-interactive execution, database down),
    not a programming error. Callers degrade to defaults.
    """
