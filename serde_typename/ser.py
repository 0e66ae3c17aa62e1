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

from typing import Any, NoReturn, Optional

from typing_extensions import override

from serde_typename.exceptions import Direction, UnsupportedKindError
from serde_typename.serde.ser import Encoder, SerializeElements, SerializeFields, SerializeMap, Serializer


def _unsupported(kind: str) -> NoReturn:
    raise UnsupportedKindError(Direction.SERIALIZATION, kind)


class _NameCompound(SerializeElements[str], SerializeFields[str]):
    """ Returned for the compound shapes that carry a name, it ignores the members and returns the name at the end.
    """

    __slots__ = ('_name',)

    def __init__(self, name: str) -> None:
        self._name = name

    @override
    def serialize_element(self, value: Any, encoder: Encoder[Any], /) -> None:
        pass

    @override
    def serialize_field(self, key: str, value: Any, encoder: Encoder[Any], /) -> None:
        pass

    @override
    def skip_field(self, key: str, /) -> None:
        pass

    @override
    def end(self) -> str:
        return self._name


class NameSerializer(Serializer[str]):
    """ Serializer that produces the name of the type or variant instead of its data.

    Structs produce their own name and enums the name of the variant, the values they hold are never encoded. Shapes
    that don't have a name, like integers or sequences, raise `UnsupportedKindError`.
    """

    __slots__ = ()

    @override
    def serialize_bool(self, value: bool, /) -> str:
        _unsupported('bool')

    @override
    def serialize_int(self, value: int, /) -> str:
        _unsupported('int')

    @override
    def serialize_float(self, value: float, /) -> str:
        _unsupported('float')

    @override
    def serialize_char(self, value: str, /) -> str:
        _unsupported('char')

    @override
    def serialize_str(self, value: str, /) -> str:
        _unsupported('str')

    @override
    def serialize_bytes(self, value: bytes, /) -> str:
        _unsupported('bytes')

    @override
    def serialize_none(self) -> str:
        _unsupported('none')

    @override
    def serialize_some(self, value: Any, encoder: Encoder[Any], /) -> str:
        _unsupported('some')

    @override
    def serialize_unit(self) -> str:
        _unsupported('unit')

    @override
    def serialize_unit_struct(self, name: str, /) -> str:
        return name

    @override
    def serialize_unit_variant(self, name: str, variant_index: int, variant: str, /) -> str:
        return variant

    @override
    def serialize_newtype_struct(self, name: str, value: Any, encoder: Encoder[Any], /) -> str:
        return name

    @override
    def serialize_newtype_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        value: Any,
        encoder: Encoder[Any],
        /,
    ) -> str:
        return variant

    @override
    def serialize_seq(self, length: Optional[int], /) -> SerializeElements[str]:
        _unsupported('seq')

    @override
    def serialize_tuple(self, length: int, /) -> SerializeElements[str]:
        _unsupported('tuple')

    @override
    def serialize_tuple_struct(self, name: str, length: int, /) -> SerializeElements[str]:
        return _NameCompound(name)

    @override
    def serialize_tuple_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
        /,
    ) -> SerializeElements[str]:
        return _NameCompound(variant)

    @override
    def serialize_map(self, length: Optional[int], /) -> SerializeMap[str]:
        _unsupported('map')

    @override
    def serialize_struct(self, name: str, length: int, /) -> SerializeFields[str]:
        return _NameCompound(name)

    @override
    def serialize_struct_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
        /,
    ) -> SerializeFields[str]:
        return _NameCompound(variant)
