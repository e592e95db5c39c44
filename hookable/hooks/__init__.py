"""Hook system: declared hooks, tagged callbacks and ordered dispatch."""

from .host import Hookable
from .registry import HookRegistry, UnknownHookError
from .types import UNTAGGED, Arity, CallbackEntry, Tag

__all__ = [
    "Hookable",
    "HookRegistry",
    "UnknownHookError",
    "Arity",
    "CallbackEntry",
    "Tag",
    "UNTAGGED",
]
