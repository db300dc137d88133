"""Dynamically typed message values exchanged over a socket connection."""

from __future__ import annotations

import enum
from typing import Any, ClassVar, Iterable, Iterator, Optional, Union

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class Flag(enum.Enum):
    """The kind of value a message holds."""

    INTEGER = 0
    DOUBLE = 1
    STRING = 2
    BINARY = 3
    ARRAY = 4
    OBJECT = 5
    BOOLEAN = 6
    NULL = 7


class Message:
    """Base of all message values; accessors for other kinds raise TypeError."""

    flag: ClassVar[Flag]

    def __init__(self, value: Any = None) -> None:
        self._value = value

    def _wrong_kind(self, wanted: str) -> TypeError:
        return TypeError(f"{type(self).__name__} does not hold {wanted}")

    def get_bool(self) -> bool:
        raise self._wrong_kind("a boolean")

    def get_int(self) -> int:
        raise self._wrong_kind("an integer")

    def get_double(self) -> float:
        raise self._wrong_kind("a number")

    def get_string(self) -> str:
        raise self._wrong_kind("a string")

    def get_binary(self) -> bytes:
        raise self._wrong_kind("binary data")

    def get_vector(self) -> list[Message]:
        raise self._wrong_kind("an array")

    def get_map(self) -> dict[str, Message]:
        raise self._wrong_kind("an object")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return type(self) is type(other) and self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class NullMessage(Message):
    flag = Flag.NULL

    def __init__(self) -> None:
        super().__init__(None)

    def __repr__(self) -> str:
        return "NullMessage()"


class BoolMessage(Message):
    flag = Flag.BOOLEAN

    def __init__(self, value: bool) -> None:
        super().__init__(bool(value))

    def get_bool(self) -> bool:
        return self._value


class IntMessage(Message):
    flag = Flag.INTEGER

    def __init__(self, value: int) -> None:
        value = int(value)
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise OverflowError(f"{value} does not fit in a signed 64-bit integer")
        super().__init__(value)

    def get_int(self) -> int:
        return self._value

    def get_double(self) -> float:
        return float(self._value)


class DoubleMessage(Message):
    flag = Flag.DOUBLE

    def __init__(self, value: float) -> None:
        super().__init__(float(value))

    def get_double(self) -> float:
        return self._value


class StringMessage(Message):
    flag = Flag.STRING

    def __init__(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("StringMessage needs a str")
        super().__init__(value)

    def get_string(self) -> str:
        return self._value


class BinaryMessage(Message):
    flag = Flag.BINARY

    def __init__(self, value: Union[bytes, bytearray, memoryview]) -> None:
        super().__init__(bytes(value))

    def get_binary(self) -> bytes:
        return self._value


Item = Union[Message, str, bytes, bytearray, None]


def _coerce(item: Item) -> Optional[Message]:
    """Wrap a string or bytes in a message; pass messages and None through."""
    if item is None or isinstance(item, Message):
        return item
    if isinstance(item, str):
        return StringMessage(item)
    if isinstance(item, (bytes, bytearray, memoryview)):
        return BinaryMessage(item)
    raise TypeError(f"cannot store {type(item).__name__} in a message container")


class ArrayMessage(Message):
    flag = Flag.ARRAY

    def __init__(self, items: Iterable[Item] = ()) -> None:
        super().__init__([])
        for item in items:
            self.push(item)

    def push(self, item: Item) -> None:
        """Append an item; None is ignored."""
        message = _coerce(item)
        if message is not None:
            self._value.append(message)

    def insert(self, pos: int, item: Item) -> None:
        """Insert an item before position ``pos``; None is ignored."""
        message = _coerce(item)
        if message is not None:
            self._value.insert(pos, message)

    def __len__(self) -> int:
        return len(self._value)

    def __getitem__(self, index: int) -> Message:
        return self._value[index]

    def __iter__(self) -> Iterator[Message]:
        return iter(self._value)

    def get_vector(self) -> list[Message]:
        return self._value


class ObjectMessage(Message):
    flag = Flag.OBJECT

    def __init__(self, items: Optional[dict[str, Item]] = None) -> None:
        super().__init__({})
        for key, item in (items or {}).items():
            self.insert(key, item)

    def insert(self, key: str, item: Item) -> None:
        """Set ``key`` to the item, replacing any earlier value; None is ignored."""
        message = _coerce(item)
        if message is not None:
            self._value[key] = message

    def has(self, key: str) -> bool:
        return key in self._value

    def at(self, key: str) -> Optional[Message]:
        """Return the value stored under ``key``, or None if there is none."""
        return self._value.get(key)

    def __getitem__(self, key: str) -> Optional[Message]:
        return self.at(key)

    def __contains__(self, key: object) -> bool:
        return key in self._value

    def __len__(self) -> int:
        return len(self._value)

    def get_map(self) -> dict[str, Message]:
        return self._value


class MessageList:
    """An ordered list of messages, used as event arguments and acknowledgements."""

    def __init__(self, content: Union[Item, Iterable[Item]] = None) -> None:
        self._items: list[Message] = []
        if content is None:
            return
        if isinstance(content, (Message, str, bytes, bytearray, memoryview)):
            self.push(content)
        else:
            for item in content:
                self.push(item)

    def push(self, item: Item) -> None:
        """Append an item; None is ignored."""
        message = _coerce(item)
        if message is not None:
            self._items.append(message)

    def insert(self, pos: int, item: Item) -> None:
        """Insert an item before position ``pos``; None is ignored."""
        message = _coerce(item)
        if message is not None:
            self._items.insert(pos, message)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Message:
        return self._items[index]

    def __iter__(self) -> Iterator[Message]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageList):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MessageList({self._items!r})"

    def to_array_message(self, event_name: Optional[str] = None) -> ArrayMessage:
        """Return an array of the items, led by the event name when one is given."""
        array = ArrayMessage()
        if event_name is not None:
            array.get_vector().append(StringMessage(event_name))
        array.get_vector().extend(self._items)
        return array


def to_message(value: Any) -> Message:
    """Build a message tree from plain Python values."""
    if isinstance(value, Message):
        return value
    if value is None:
        return NullMessage()
    if isinstance(value, bool):
        return BoolMessage(value)
    if isinstance(value, int):
        return IntMessage(value)
    if isinstance(value, float):
        return DoubleMessage(value)
    if isinstance(value, str):
        return StringMessage(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BinaryMessage(value)
    if isinstance(value, (list, tuple)):
        return ArrayMessage(to_message(item) for item in value)
    if isinstance(value, dict):
        obj = ObjectMessage()
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError("object message keys must be strings")
            obj.insert(key, to_message(item))
        return obj
    raise TypeError(f"cannot convert {type(value).__name__} to a message")