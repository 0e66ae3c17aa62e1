# Copyright 2026 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from typing_extensions import Self, override

from serde_typename.serde.de import MISSING, Deserializer, SeqAccess, Visitor
from serde_typename.serde.exceptions import InvalidLengthError
from serde_typename.serde.ser import Serializer
from serde_typename.serde.types.serde_type import SerdeType
from serde_typename.utils.typing import get_args, get_origin

T = TypeVar('T')


class _SeqVisitor(Visitor[Any]):
    def __init__(self, item: SerdeType[Any], build: Callable[[list[Any]], Any]) -> None:
        self._item = item
        self._build = build

    @override
    def expecting(self) -> str:
        return 'a sequence'

    @override
    def visit_seq(self, seq: SeqAccess, /) -> Any:
        items: list[Any] = []
        while (item := seq.next_element(self._item.deserialize)) is not MISSING:
            items.append(item)
        return self._build(items)


class _CollectionSerdeType(SerdeType[Any]):
    """ Homogeneous collections of any length, serialized with `serialize_seq`.
    """

    __slots__ = ('_item',)
    _item: SerdeType[Any]
    _class: type

    def __init__(self, item: SerdeType[Any]) -> None:
        self._item = item

    @override
    @classmethod
    def _from_type(cls, type_: Any, /) -> Self:
        if get_origin(type_) is not cls._class:
            raise TypeError(f'expected {cls._class.__name__}[T], got {type_!r}')
        item_type, = get_args(type_)
        return cls(SerdeType.from_type(item_type))

    @override
    def _check_value(self, value: Any, /) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__name__} instance, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer[Any], value: Iterable[Any], /) -> Any:
        items = list(value)
        return serializer.collect_seq(items, self._item.serialize, length=len(items))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Any:
        return deserializer.deserialize_seq(_SeqVisitor(self._item, self._class))


class ListSerdeType(_CollectionSerdeType):
    __slots__ = ()
    _class = list


class SetSerdeType(_CollectionSerdeType):
    __slots__ = ()
    _class = set


class FrozenSetSerdeType(_CollectionSerdeType):
    __slots__ = ()
    _class = frozenset


class _TupleVisitor(Visitor[tuple[Any, ...]]):
    def __init__(self, items: tuple[SerdeType[Any], ...]) -> None:
        self._items = items

    @override
    def expecting(self) -> str:
        return f'a tuple of size {len(self._items)}'

    @override
    def visit_seq(self, seq: SeqAccess, /) -> tuple[Any, ...]:
        values: list[Any] = []
        for index, item in enumerate(self._items):
            value = seq.next_element(item.deserialize)
            if value is MISSING:
                raise InvalidLengthError(index, self.expecting())
            values.append(value)
        return tuple(values)


class TupleSerdeType(SerdeType[tuple[Any, ...]]):
    """ Tuples.

    A fixed `tuple[A, B, C]` is serialized with `serialize_tuple`, while `tuple[T, ...]` has variable length and is
    serialized as a sequence.
    """

    __slots__ = ('_items', '_variadic')
    _items: tuple[SerdeType[Any], ...]
    _variadic: bool

    def __init__(self, items: tuple[SerdeType[Any], ...], *, variadic: bool = False) -> None:
        assert not variadic or len(items) == 1
        self._items = items
        self._variadic = variadic

    @override
    @classmethod
    def _from_type(cls, type_: Any, /) -> Self:
        if get_origin(type_) is not tuple:
            raise TypeError(f'expected tuple[...], got {type_!r}')
        args = get_args(type_)
        if len(args) == 2 and args[1] is Ellipsis:
            return cls((SerdeType.from_type(args[0]),), variadic=True)
        return cls(tuple(SerdeType.from_type(arg) for arg in args))

    @override
    def _check_value(self, value: Any, /) -> None:
        if not isinstance(value, tuple):
            raise TypeError(f'expected tuple instance, got {type(value).__name__}')
        if not self._variadic and len(value) != len(self._items):
            raise TypeError(f'expected tuple of size {len(self._items)}, got {len(value)}')

    @override
    def _serialize(self, serializer: Serializer[Any], value: tuple[Any, ...], /) -> Any:
        if self._variadic:
            item, = self._items
            return serializer.collect_seq(value, item.serialize, length=len(value))
        state = serializer.serialize_tuple(len(self._items))
        for item, item_value in zip(self._items, value):
            state.serialize_element(item_value, item.serialize)
        return state.end()

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> tuple[Any, ...]:
        if self._variadic:
            item, = self._items
            return deserializer.deserialize_seq(_SeqVisitor(item, tuple))
        return deserializer.deserialize_tuple(len(self._items), _TupleVisitor(self._items))
