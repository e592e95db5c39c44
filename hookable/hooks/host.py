"""Mixin that gives a host class declared hooks and per-instance callbacks."""

import keyword
from collections.abc import Iterator, MutableSet
from typing import Any, Callable, ClassVar, Optional, Union

from loguru import logger

from .registry import HookRegistry
from .types import UNTAGGED, Arity, Tag, normalize_tag


def _registration_method(name: str) -> Callable[..., Any]:
    """Build the ``host.<name>(...)`` method that registers a callback on ``name``."""

    def register_callback(
        self: "Hookable",
        *args: Any,
        tag: Optional[Tag] = UNTAGGED,
        arity: Optional[Union[Arity, int]] = None,
    ) -> Any:
        tag = normalize_tag(tag)
        if len(args) > 2:
            raise TypeError(f"{name}() takes at most a tag and a callback, got {len(args)} arguments")

        body = None
        if len(args) == 2:
            if tag is not UNTAGGED:
                raise TypeError(f"{name}() got the tag both positionally and by keyword")
            tag, body = normalize_tag(args[0]), args[1]
        elif len(args) == 1 and callable(args[0]):
            body = args[0]
        elif len(args) == 1:
            if tag is not UNTAGGED:
                raise TypeError(f"{name}() got the tag both positionally and by keyword")
            tag = normalize_tag(args[0])

        if body is None:

            def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
                self.hooks.register(name, fn, tag=tag, arity=arity)
                return fn

            return decorator

        self.hooks.register(name, body, tag=tag, arity=arity)
        return body

    register_callback.__name__ = name
    register_callback.__qualname__ = name
    register_callback.__doc__ = (
        f"Register a callback for the '{name}' hook.\n\n"
        f"Accepts ``(callback)``, ``(tag, callback)`` or ``(callback, tag=...)``.\n"
        f"Called with only a tag, or with nothing, it returns a decorator.\n"
        f"Pass callable tags by keyword."
    )
    register_callback.__hook_name__ = name
    return register_callback


class _DeclaredHooks(MutableSet):
    """Live view of the hooks declared on a host class and its bases."""

    def __init__(self, owner: type) -> None:
        self._owner = owner

    def _own(self) -> set[str]:
        return self._owner.__dict__["_hook_names"]

    def __contains__(self, name: object) -> bool:
        return any(name in klass.__dict__.get("_hook_names", ()) for klass in self._owner.__mro__)

    def __iter__(self) -> Iterator[str]:
        names: set[str] = set()
        for klass in self._owner.__mro__:
            names |= klass.__dict__.get("_hook_names", set())
        return iter(names)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def add(self, name: str) -> None:
        self._own().add(name)

    def discard(self, name: str) -> None:
        self._own().discard(name)


_MISSING = object()


def _lookup(cls: type, name: str) -> Any:
    for klass in cls.__mro__:
        if name in klass.__dict__:
            return klass.__dict__[name]
    return _MISSING


class Hookable:
    """Mixin for classes that expose named hooks.

    Hooks are declared once per class with ``define_hook``; every instance
    gets its own callbacks::

        class Cassette(Hookable):
            pass

        Cassette.define_hook("before_record", "before_playback")

        cassette = Cassette()

        @cassette.before_record
        def scrub(interaction):
            ...

        cassette.invoke_hook("before_record", interaction)

    Hooks declared on a class are available on all of its subclasses,
    including ones created earlier. Hooks a subclass declares are not
    visible on its bases.
    """

    _hook_names: ClassVar[set[str]] = set()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._hook_names = set()

    @classmethod
    def define_hook(cls, *names: str) -> None:
        """Declare hooks and generate a registration method for each.

        Every name is checked before any is declared.

        Raises
        ------
        ValueError
            If a name is not a valid identifier, or would shadow an
            existing attribute that is not a hook registration method.
        """
        if cls is Hookable:
            raise TypeError("define_hook must be called on a Hookable subclass")

        for name in names:
            if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
                raise ValueError(f"Hook name must be a valid identifier, got {name!r}")
            existing = _lookup(cls, name)
            if existing is not _MISSING and getattr(existing, "__hook_name__", None) != name:
                raise ValueError(f"Hook '{name}' would shadow {cls.__name__}.{name}")

        declared = _DeclaredHooks(cls)
        for name in names:
            if name not in declared:
                declared.add(name)
                logger.debug(f"Declared hook '{name}' on {cls.__name__}")
            if _lookup(cls, name) is _MISSING:
                setattr(cls, name, _registration_method(name))

    @classmethod
    def declared_hooks(cls) -> list[str]:
        return sorted(_DeclaredHooks(cls))

    @property
    def hooks(self) -> HookRegistry:
        """This instance's hook registry, created on first access."""
        registry = self.__dict__.get("_hook_registry")
        if registry is None:
            registry = HookRegistry(declared=_DeclaredHooks(type(self)))
            self.__dict__["_hook_registry"] = registry
        return registry

    def invoke_hook(self, name: str, *args: Any) -> list[Any]:
        return self.hooks.invoke(name, *args)

    def invoke_tagged_hook(self, name: str, tag: Optional[Tag], *args: Any) -> list[Any]:
        return self.hooks.invoke_tagged(name, tag, *args)

    def clear_hooks(self, name: Optional[str] = None) -> None:
        self.hooks.clear(name)
