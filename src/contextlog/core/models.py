"""Core domain models for structured log data."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Union, overload

Scalar = Union[str, int, float, bool]
AttributeValue = Any


class Level(IntEnum):
    """Log severity, ordered so that ``level < threshold`` means suppressed."""

    DEBUG = -4
    INFO = 0
    WARN = 4
    ERROR = 8

    @classmethod
    def parse(cls, text: str) -> Level:
        """Parse a level name case-insensitively.

        Args:
            text: Level name such as "debug", "INFO" or "warning".

        Returns:
            The matching Level.

        Raises:
            ValueError: If the name is not a known level.
        """
        name = text.strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"unknown log level: {text!r}") from None


class AttributeKind(Enum):
    """Closed set of value kinds an attribute can carry."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRUCTURED = "structured"

    @classmethod
    def of(cls, value: AttributeValue) -> AttributeKind:
        # bool is a subclass of int, so it has to be checked first
        if isinstance(value, bool):
            return cls.BOOL
        if isinstance(value, int):
            return cls.INT
        if isinstance(value, float):
            return cls.FLOAT
        if isinstance(value, str):
            return cls.STRING
        return cls.STRUCTURED

    @property
    def is_scalar(self) -> bool:
        return self is not AttributeKind.STRUCTURED


@dataclass(frozen=True)
class Attribute:
    """A single structured log field.

    Attributes:
        key: Case-sensitive, non-empty field name.
        value: Scalar (str, int, float, bool) or any structured value.
    """

    key: str
    value: AttributeValue

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key:
            raise ValueError("attribute key must be a non-empty string")

    @property
    def kind(self) -> AttributeKind:
        return AttributeKind.of(self.value)


AttributeSource = Union[
    "AttributeList",
    Mapping[str, AttributeValue],
    Iterable[Union[Attribute, tuple[str, AttributeValue]]],
    None,
]


class AttributeList:
    """Ordered, key-unique, immutable sequence of attributes.

    Building a list from input that repeats a key keeps the first position of
    the key and the last value given for it.
    """

    __slots__ = ("_items", "_index")

    def __init__(self, source: AttributeSource = None, **kwargs: AttributeValue):
        items: list[Attribute] = []
        index: dict[str, int] = {}
        for attr in _iter_source(source, kwargs):
            position = index.get(attr.key)
            if position is None:
                index[attr.key] = len(items)
                items.append(attr)
            else:
                items[position] = attr
        self._items: tuple[Attribute, ...] = tuple(items)
        self._index: dict[str, int] = index

    @classmethod
    def _from_unique(cls, items: Iterable[Attribute]) -> AttributeList:
        result = cls.__new__(cls)
        result._items = tuple(items)
        result._index = {attr.key: i for i, attr in enumerate(result._items)}
        return result

    def merge(self, new: AttributeList) -> AttributeList:
        """Merge ``new`` over this list.

        Keys already present keep their position and take the new value;
        keys only in ``new`` are appended in ``new``'s order. Neither input
        is modified.
        """
        if not self._items:
            return new
        if not new._items:
            return self
        merged = [
            new._items[new._index[attr.key]] if attr.key in new._index else attr
            for attr in self._items
        ]
        merged.extend(attr for attr in new._items if attr.key not in self._index)
        return AttributeList._from_unique(merged)

    def get(self, key: str, default: AttributeValue = None) -> AttributeValue:
        position = self._index.get(key)
        if position is None:
            return default
        return self._items[position].value

    def keys(self) -> list[str]:
        return [attr.key for attr in self._items]

    def as_dict(self) -> dict[str, AttributeValue]:
        return {attr.key: attr.value for attr in self._items}

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    @overload
    def __getitem__(self, index: int) -> Attribute: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Attribute, ...]: ...

    def __getitem__(self, index: int | slice) -> Attribute | tuple[Attribute, ...]:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeList):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{a.key}={a.value!r}" for a in self._items)
        return f"AttributeList({pairs})"


def _iter_source(
    source: AttributeSource, kwargs: Mapping[str, AttributeValue]
) -> Iterator[Attribute]:
    if source is None:
        pass
    elif isinstance(source, AttributeList):
        yield from source
    elif isinstance(source, Mapping):
        for key, value in source.items():
            yield Attribute(key, value)
    else:
        for item in source:
            if isinstance(item, Attribute):
                yield item
            else:
                key, value = item
                yield Attribute(key, value)
    for key, value in kwargs.items():
        yield Attribute(key, value)


EMPTY_ATTRIBUTES = AttributeList()


@dataclass(frozen=True)
class LogEntry:
    """A structured log entry accepted by a logger.

    Attributes:
        level: Severity of the entry.
        timestamp: Timezone-aware UTC time the entry was accepted.
        message: The log message.
        attributes: Collected fields. Keys may repeat when two collectors
            contribute the same key.
    """

    level: Level
    timestamp: datetime
    message: str
    attributes: tuple[Attribute, ...] = field(default_factory=tuple)
