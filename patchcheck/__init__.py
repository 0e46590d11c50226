"""patchcheck - verify a patch archive against its release archive."""

from .checker import (
    DiffStatus,
    PatchCheckError,
    PatchDiffChecker,
    UnpatchableChangeError,
    UserCancelledError,
)

__all__ = [
    "DiffStatus",
    "PatchCheckError",
    "PatchDiffChecker",
    "UnpatchableChangeError",
    "UserCancelledError",
]
