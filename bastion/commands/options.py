"""Platform-neutral representation of the options supplied with an invocation."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class UserRef:
    """A user option, pre-resolved by the platform."""

    id: int
    is_member: bool = True

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"


@dataclass(frozen=True, slots=True)
class ChannelRef:
    id: int

    @property
    def mention(self) -> str:
        return f"<#{self.id}>"


OptionValue = Union[str, int, float, bool, UserRef, ChannelRef]

_MISSING: Any = object()


class InvocationOptions:
    """Ordered, read-only collection of ``(name, value)`` pairs."""

    __slots__ = ("_items",)

    def __init__(self, items: Sequence[tuple[str, OptionValue]] = ()) -> None:
        self._items: tuple[tuple[str, OptionValue], ...] = tuple(items)

    @classmethod
    def of(cls, **values: OptionValue) -> InvocationOptions:
        return cls(list(values.items()))

    def __iter__(self) -> Iterator[tuple[str, OptionValue]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return any(option_name == name for option_name, _ in self._items)

    def __repr__(self) -> str:
        return f"InvocationOptions({list(self._items)!r})"

    def names(self) -> list[str]:
        return [name for name, _ in self._items]

    def get(self, name: str, default: Any = None) -> Any:
        for option_name, value in self._items:
            if option_name == name:
                return value
        return default

    def require(self, name: str) -> OptionValue:
        value = self.get(name, _MISSING)
        if value is _MISSING:
            raise KeyError(f"Required option '{name}' was not supplied")
        return value

    def string(self, name: str, default: str | None = None) -> str | None:
        value = self.get(name, default)
        if value is not None and not isinstance(value, str):
            raise TypeError(f"Option '{name}' is not a string: {value!r}")
        return value

    def boolean(self, name: str, default: bool = False) -> bool:
        value = self.get(name, default)
        if not isinstance(value, bool):
            raise TypeError(f"Option '{name}' is not a boolean: {value!r}")
        return value

    def user(self, name: str) -> UserRef:
        value = self.require(name)
        if not isinstance(value, UserRef):
            raise TypeError(f"Option '{name}' is not a user: {value!r}")
        return value


@dataclass(frozen=True, slots=True)
class Invocation:
    """One inbound command: the name it was invoked by plus its options."""

    command_name: str
    options: InvocationOptions
    actor_id: int
    guild_id: int | None = None
    channel_id: int | None = None
    interaction_id: int | None = None

    @property
    def actor_mention(self) -> str:
        return f"<@{self.actor_id}>"
