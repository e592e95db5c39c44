"""Hook registry: declaration, registration, dispatch and reset."""

from collections.abc import MutableSet
from typing import Any, Callable, Iterable, Optional, Union

from loguru import logger

from hookable import config

from .types import UNTAGGED, Arity, CallbackEntry, Tag, normalize_tag


class UnknownHookError(LookupError):
    """Raised when a hook name was never declared."""

    def __init__(self, hook: str, declared: Iterable[str] = ()):
        self.hook = hook
        self.declared = sorted(declared)
        known = ", ".join(self.declared) if self.declared else "none"
        super().__init__(f"Unknown hook '{hook}' (declared hooks: {known})")


class HookRegistry:
    """Named hooks and the callbacks registered against them.

    Callbacks for each hook are kept in registration order. Dispatch calls
    them one at a time, forwarding as many positional arguments as each
    callback accepts, and returns their results in order. Exceptions raised
    by a callback propagate and stop the dispatch.

    Registering a callback while the same hook is being dispatched does not
    affect that dispatch; callers should not rely on this.
    """

    def __init__(self, declared: Optional[MutableSet[str]] = None) -> None:
        """Initialize registry.

        Parameters
        ----------
        declared : MutableSet[str], optional
            Live set of hook names declared on a host type. A private
            set is used when omitted.
        """
        self._declared: MutableSet[str] = declared if declared is not None else set()
        self._entries: dict[str, list[CallbackEntry]] = {}

    def declare(self, *names: str) -> "HookRegistry":
        """Declare hook names. Declaring a name twice is a no-op."""
        for name in names:
            if name not in self._declared:
                self._declared.add(name)
                logger.debug(f"Declared hook '{name}'")
        return self

    def is_declared(self, name: str) -> bool:
        return name in self._declared

    def declared_hooks(self) -> list[str]:
        return sorted(self._declared)

    def _check_declared(self, name: str) -> None:
        if name not in self._declared:
            raise UnknownHookError(name, self._declared)

    def register(
        self,
        name: str,
        body: Callable[..., Any],
        tag: Optional[Tag] = UNTAGGED,
        arity: Optional[Union[Arity, int]] = None,
    ) -> CallbackEntry:
        """Append a callback to a hook.

        Parameters
        ----------
        name : str
            Declared hook name.
        body : Callable
            Callback to register.
        tag : Tag, optional
            Restricts the callback to tagged dispatch with the same tag.
            ``None`` and ``UNTAGGED`` both register an untagged callback.
        arity : Arity or int, optional
            Number of positional arguments to forward. Inferred from the
            signature of ``body`` when omitted.

        Returns
        -------
        CallbackEntry
            The appended entry.

        Raises
        ------
        UnknownHookError
            If ``name`` was never declared.
        """
        self._check_declared(name)
        if not callable(body):
            raise TypeError(f"Hook callback must be callable, got {type(body).__name__}")

        entry = CallbackEntry(
            hook=name,
            body=body,
            tag=normalize_tag(tag),
            arity=Arity.of(body) if arity is None else Arity.coerce(arity),
        )
        self._entries.setdefault(name, []).append(entry)
        logger.debug(
            f"Registered '{entry.name}' on hook '{name}' (tag={entry.tag!r}, arity={entry.arity})"
        )
        return entry

    def invoke(self, name: str, *args: Any) -> list[Any]:
        """Call every untagged callback of a hook and return their results."""
        return self._dispatch(name, UNTAGGED, args)

    def invoke_tagged(self, name: str, tag: Optional[Tag], *args: Any) -> list[Any]:
        """Call every callback registered with exactly ``tag``.

        Untagged callbacks are not called. Passing ``UNTAGGED`` (or None)
        behaves like ``invoke``.
        """
        return self._dispatch(name, normalize_tag(tag), args)

    def _dispatch(self, name: str, tag: Tag, args: tuple) -> list[Any]:
        self._check_declared(name)
        matching = [e for e in self._entries.get(name, ()) if e.matches(tag)]

        results = []
        for entry in matching:
            if config.settings.LOG_DISPATCH:
                logger.trace(
                    f"Hook '{name}' -> {entry.name} (tag={entry.tag!r}, arity={entry.arity})"
                )
            try:
                results.append(entry(*args))
            except Exception as e:
                if config.settings.LOG_CALLBACK_ERRORS:
                    logger.error(f"Hook '{name}' callback {entry.name} failed: {e}")
                raise
        return results

    def clear(self, name: Optional[str] = None) -> None:
        """Remove callbacks for one hook, or for every hook if ``name`` is None."""
        if name is None:
            self._entries.clear()
            return
        self._entries.pop(name, None)

    def entries(self, name: str) -> tuple[CallbackEntry, ...]:
        """Registered entries for a hook, in registration order."""
        self._check_declared(name)
        return tuple(self._entries.get(name, ()))

    def list_hooks(self) -> dict[str, list[str]]:
        """Callback names per hook, for hooks with at least one callback."""
        return {
            name: [entry.name for entry in entries]
            for name, entries in self._entries.items()
            if entries
        }

    def __contains__(self, name: object) -> bool:
        return name in self._declared

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def __repr__(self) -> str:
        return f"HookRegistry(declared={self.declared_hooks()!r}, callbacks={len(self)})"
