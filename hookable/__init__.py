# hookable: named hooks with tagged, arity-aware dispatch

from hookable.config import HookSettings, settings
from hookable.hooks import (
    UNTAGGED,
    Arity,
    CallbackEntry,
    Hookable,
    HookRegistry,
    Tag,
    UnknownHookError,
)

__all__ = [
    "Hookable",
    "HookRegistry",
    "UnknownHookError",
    "Arity",
    "CallbackEntry",
    "Tag",
    "UNTAGGED",
    "HookSettings",
    "settings",
]
