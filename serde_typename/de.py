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

from collections.abc import Sequence
from typing import NoReturn, Optional, TypeVar

from typing_extensions import override

from serde_typename.exceptions import (
    CustomError,
    Direction,
    InvalidTypeError,
    TrailingCharactersError,
    UnsupportedKindError,
)
from serde_typename.serde.de import Decoder, Deserializer, EnumAccess, Unexpected, VariantAccess, Visitor

T = TypeVar('T')


def _unsupported(kind: str) -> NoReturn:
    raise UnsupportedKindError(Direction.DESERIALIZATION, kind)


class NameDeserializer(Deserializer, EnumAccess, VariantAccess):
    """Deserializer backed by a single name, it can only rebuild unit variants and unit structs.

    The name can be read only once. It is read either as the variant identifier of an enum or as the name of a unit
    struct, every other request fails with `UnsupportedKindError` because a name has no data to offer.

    The deserializer is its own `EnumAccess` and `VariantAccess`, of which only `unit_variant` is supported.
    """

    def __init__(self, name: str) -> None:
        self._name: Optional[str] = name
        self._in_enum = False

    def is_empty(self) -> bool:
        return self._name is None

    def finalize(self) -> None:
        """Raise `TrailingCharactersError` if the name was not read."""
        if not self.is_empty():
            raise TrailingCharactersError()

    def _take(self) -> str:
        if self._name is None:
            raise CustomError(Direction.DESERIALIZATION, 'input already consumed')
        name, self._name = self._name, None
        return name

    # the only supported requests

    @override
    def deserialize_enum(self, name: str, variants: Sequence[str], visitor: Visitor[T], /) -> T:
        self._in_enum = True
        try:
            return visitor.visit_enum(self)
        finally:
            self._in_enum = False

    @override
    def variant(self, decoder: Decoder[T], /) -> tuple[T, VariantAccess]:
        return decoder(self), self

    @override
    def deserialize_identifier(self, visitor: Visitor[T], /) -> T:
        if not self._in_enum:
            _unsupported('identifier')
        return visitor.visit_str(self._take())

    @override
    def unit_variant(self) -> None:
        pass

    @override
    def deserialize_unit_struct(self, name: str, visitor: Visitor[T], /) -> T:
        received = self._take()
        if received != name:
            raise InvalidTypeError(Unexpected.string(received), f'unit struct {name}')
        return visitor.visit_unit()

    @override
    def deserialize_unit(self, visitor: Visitor[T], /) -> T:
        self._take()
        return visitor.visit_unit()

    # variants with data

    @override
    def newtype_variant(self, decoder: Decoder[T], /) -> T:
        _unsupported('newtype variant')

    @override
    def tuple_variant(self, length: int, visitor: Visitor[T], /) -> T:
        _unsupported('tuple variant')

    @override
    def struct_variant(self, fields: Sequence[str], visitor: Visitor[T], /) -> T:
        _unsupported('struct variant')

    # everything else

    @override
    def deserialize_any(self, visitor: Visitor[T], /) -> T:
        _unsupported('any')

    @override
    def deserialize_bool(self, visitor: Visitor[T], /) -> T:
        _unsupported('bool')

    @override
    def deserialize_int(self, visitor: Visitor[T], /) -> T:
        _unsupported('int')

    @override
    def deserialize_float(self, visitor: Visitor[T], /) -> T:
        _unsupported('float')

    @override
    def deserialize_char(self, visitor: Visitor[T], /) -> T:
        _unsupported('char')

    @override
    def deserialize_str(self, visitor: Visitor[T], /) -> T:
        _unsupported('str')

    @override
    def deserialize_bytes(self, visitor: Visitor[T], /) -> T:
        _unsupported('bytes')

    @override
    def deserialize_option(self, visitor: Visitor[T], /) -> T:
        _unsupported('option')

    @override
    def deserialize_newtype_struct(self, name: str, visitor: Visitor[T], /) -> T:
        _unsupported('newtype struct')

    @override
    def deserialize_seq(self, visitor: Visitor[T], /) -> T:
        _unsupported('seq')

    @override
    def deserialize_tuple(self, length: int, visitor: Visitor[T], /) -> T:
        _unsupported('tuple')

    @override
    def deserialize_tuple_struct(self, name: str, length: int, visitor: Visitor[T], /) -> T:
        _unsupported('tuple struct')

    @override
    def deserialize_map(self, visitor: Visitor[T], /) -> T:
        _unsupported('map')

    @override
    def deserialize_struct(self, name: str, fields: Sequence[str], visitor: Visitor[T], /) -> T:
        _unsupported('struct')

    @override
    def deserialize_ignored_any(self, visitor: Visitor[T], /) -> T:
        _unsupported('ignored any')
