"""Hook data types: tags, arity descriptors and registered callback entries."""

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Hashable, Optional, Union


class _Untagged(Enum):
    """Sentinel type for callbacks registered without a tag."""

    UNTAGGED = "untagged"

    def __repr__(self) -> str:
        return "UNTAGGED"


UNTAGGED = _Untagged.UNTAGGED

Tag = Union[Hashable, _Untagged]


def normalize_tag(tag: Optional[Tag]) -> Tag:
    """Map ``None`` to ``UNTAGGED``; every other value is a real tag."""
    if tag is None:
        return UNTAGGED
    return tag


_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class Arity:
    """Number of positional arguments a callback accepts.

    ``count`` is None for callbacks that accept ``*args``.
    """

    count: Optional[int] = None

    VARIADIC: ClassVar["Arity"]

    def __post_init__(self) -> None:
        if self.count is not None and self.count < 0:
            raise ValueError(f"Arity must be non-negative, got {self.count}")

    @classmethod
    def fixed(cls, count: int) -> "Arity":
        return cls(count)

    @classmethod
    def of(cls, fn: Callable[..., Any]) -> "Arity":
        """Inspect the signature of ``fn``.

        Parameters
        ----------
        fn : Callable
            Callback to inspect.

        Returns
        -------
        Arity
            Variadic if ``fn`` takes ``*args`` or has no inspectable
            signature, otherwise the count of its positional parameters.
        """
        try:
            signature = inspect.signature(fn)
        except (TypeError, ValueError):
            return cls.VARIADIC

        count = 0
        for param in signature.parameters.values():
            if param.kind == inspect.Parameter.VAR_POSITIONAL:
                return cls.VARIADIC
            if param.kind in _POSITIONAL_KINDS:
                count += 1
        return cls(count)

    @classmethod
    def coerce(cls, value: Union["Arity", int]) -> "Arity":
        if isinstance(value, Arity):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Arity must be an int or Arity, got {type(value).__name__}")
        return cls(value)

    @property
    def is_variadic(self) -> bool:
        return self.count is None

    def take(self, args: tuple) -> tuple:
        """Return the prefix of ``args`` this arity accepts."""
        if self.count is None:
            return args
        return args[: self.count]

    def __str__(self) -> str:
        return "*" if self.count is None else str(self.count)


Arity.VARIADIC = Arity(None)


def callback_name(fn: Callable[..., Any]) -> str:
    """Best-effort display name for a callback."""
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    return name if name else repr(fn)


@dataclass
class CallbackEntry:
    """A callback registered against a hook.

    Parameters
    ----------
    hook : str
        Name of the hook the callback belongs to.
    body : Callable
        The callback itself.
    tag : Tag
        Tag the callback was registered with, or ``UNTAGGED``.
    arity : Arity
        Positional arguments forwarded to ``body`` on dispatch.
    """

    hook: str
    body: Callable[..., Any]
    tag: Tag = UNTAGGED
    arity: Arity = field(default=Arity.VARIADIC)

    @property
    def name(self) -> str:
        return callback_name(self.body)

    @property
    def is_tagged(self) -> bool:
        return self.tag is not UNTAGGED

    def matches(self, tag: Tag) -> bool:
        """Exact tag match; ``UNTAGGED`` only matches untagged entries.

        Tags must be of the same type, so ``1``, ``1.0`` and ``True`` are
        different tags.
        """
        if tag is UNTAGGED or self.tag is UNTAGGED:
            return tag is self.tag
        return type(self.tag) is type(tag) and self.tag == tag

    def __call__(self, *args: Any) -> Any:
        return self.body(*self.arity.take(args))
