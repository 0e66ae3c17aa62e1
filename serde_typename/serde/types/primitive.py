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

from types import NoneType
from typing import Any

from typing_extensions import Self, override

from serde_typename.serde.de import Deserializer, Visitor
from serde_typename.serde.ser import Serializer
from serde_typename.serde.types.serde_type import SerdeType
from serde_typename.utils.typing import is_subclass


class _BoolVisitor(Visitor[bool]):
    @override
    def expecting(self) -> str:
        return 'a boolean'

    @override
    def visit_bool(self, value: bool, /) -> bool:
        return value


class _IntVisitor(Visitor[int]):
    @override
    def expecting(self) -> str:
        return 'an integer'

    @override
    def visit_int(self, value: int, /) -> int:
        return value


class _FloatVisitor(Visitor[float]):
    @override
    def expecting(self) -> str:
        return 'a float'

    @override
    def visit_float(self, value: float, /) -> float:
        return value

    @override
    def visit_int(self, value: int, /) -> float:
        return float(value)


class _StrVisitor(Visitor[str]):
    @override
    def expecting(self) -> str:
        return 'a string'

    @override
    def visit_str(self, value: str, /) -> str:
        return value


class _BytesVisitor(Visitor[bytes]):
    @override
    def expecting(self) -> str:
        return 'a byte array'

    @override
    def visit_bytes(self, value: bytes, /) -> bytes:
        return bytes(value)


class _UnitVisitor(Visitor[None]):
    @override
    def expecting(self) -> str:
        return 'unit'

    @override
    def visit_unit(self) -> None:
        return None


class _SimpleSerdeType(SerdeType[Any]):
    """ Base for types that are a single class with no type arguments.
    """

    __slots__ = ()
    _class: type

    @override
    @classmethod
    def _from_type(cls, type_: Any, /) -> Self:
        if type_ is not cls._class:
            raise TypeError(f'expected {cls._class.__name__}, got {type_!r}')
        return cls()

    @override
    def _check_value(self, value: Any, /) -> None:
        # bool is a subclass of int but must not pass for one
        if not isinstance(value, self._class) or (isinstance(value, bool) and self._class is not bool):
            raise TypeError(f'expected {self._class.__name__} instance, got {type(value).__name__}')


class BoolSerdeType(_SimpleSerdeType):
    __slots__ = ()
    _class = bool

    @override
    def _serialize(self, serializer: Serializer[Any], value: bool, /) -> Any:
        return serializer.serialize_bool(value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> bool:
        return deserializer.deserialize_bool(_BoolVisitor())


class IntSerdeType(_SimpleSerdeType):
    __slots__ = ()
    _class = int

    @override
    def _serialize(self, serializer: Serializer[Any], value: int, /) -> Any:
        return serializer.serialize_int(value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> int:
        return deserializer.deserialize_int(_IntVisitor())


class FloatSerdeType(_SimpleSerdeType):
    __slots__ = ()
    _class = float

    @override
    def _check_value(self, value: Any, /) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f'expected float instance, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer[Any], value: float, /) -> Any:
        return serializer.serialize_float(float(value))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> float:
        return deserializer.deserialize_float(_FloatVisitor())


class StrSerdeType(_SimpleSerdeType):
    __slots__ = ()
    _class = str

    @override
    def _serialize(self, serializer: Serializer[Any], value: str, /) -> Any:
        return serializer.serialize_str(value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> str:
        return deserializer.deserialize_str(_StrVisitor())


class BytesSerdeType(_SimpleSerdeType):
    __slots__ = ()
    _class = bytes

    @override
    def _serialize(self, serializer: Serializer[Any], value: bytes, /) -> Any:
        return serializer.serialize_bytes(value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> bytes:
        return deserializer.deserialize_bytes(_BytesVisitor())


class UnitSerdeType(SerdeType[None]):
    """ The annotation `None`, which only admits the value `None`.

    Not to be confused with `Optional[T]`, where `None` is the absence of a `T`.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: Any, /) -> Self:
        if type_ is not None and not is_subclass(type_, NoneType):
            raise TypeError('expected None')
        return cls()

    @override
    def _check_value(self, value: Any, /) -> None:
        if value is not None:
            raise TypeError(f'expected None, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer[Any], value: None, /) -> Any:
        return serializer.serialize_unit()

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> None:
        return deserializer.deserialize_unit(_UnitVisitor())
