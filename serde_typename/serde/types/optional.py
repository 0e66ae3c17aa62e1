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

from types import NoneType, UnionType
from typing import Any, Optional, TypeVar

from typing_extensions import Self, override

from serde_typename.serde.de import Deserializer, Visitor
from serde_typename.serde.ser import Serializer
from serde_typename.serde.types.serde_type import SerdeType
from serde_typename.utils.typing import get_args, get_origin

T = TypeVar('T')


class _OptionVisitor(Visitor[Optional[T]]):
    __slots__ = ('_value',)

    def __init__(self, value: SerdeType[T]) -> None:
        self._value = value

    @override
    def expecting(self) -> str:
        return 'an option'

    @override
    def visit_none(self) -> Optional[T]:
        return None

    @override
    def visit_unit(self) -> Optional[T]:
        return None

    @override
    def visit_some(self, deserializer: Deserializer, /) -> Optional[T]:
        return self._value.deserialize(deserializer)


class OptionalSerdeType(SerdeType[Optional[T]]):
    """ `Optional[T]` or `T | None`, which is serialized with `serialize_none` or `serialize_some`.

    Unions of more than one type besides None are not supported, use a `SerdeEnum` instead.
    """

    __slots__ = ('_value',)
    _value: SerdeType[T]

    def __init__(self, value: SerdeType[T]) -> None:
        self._value = value

    @override
    @classmethod
    def _from_type(cls, type_: Any, /) -> Self:
        if get_origin(type_) is not UnionType:
            raise TypeError('expected Optional type')
        args = get_args(type_)
        if len(args) != 2 or NoneType not in args:
            raise TypeError(f'only Optional[T] unions are supported, got {type_!r}')
        value_type, = (arg for arg in args if arg is not NoneType)
        return cls(SerdeType.from_type(value_type))

    @override
    def _check_value(self, value: Any, /) -> None:
        if value is not None:
            self._value.check_value(value)

    @override
    def _serialize(self, serializer: Serializer[Any], value: Optional[T], /) -> Any:
        if value is None:
            return serializer.serialize_none()
        return serializer.serialize_some(value, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Optional[T]:
        return deserializer.deserialize_option(_OptionVisitor(self._value))
