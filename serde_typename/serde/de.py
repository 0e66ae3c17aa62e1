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

"""
The deserialization half of the structural contract.

A type's descriptor asks a `Deserializer` for the shape it expects by calling one of the `deserialize_*` methods with a
`Visitor`. The deserializer answers by calling back one of the visitor's `visit_*` methods with whatever it actually
holds, which may be a different shape than the one that was requested: the visitor decides if it can make a value out
of it. Compound shapes are handed to the visitor as access objects (`SeqAccess`, `MapAccess`, `EnumAccess`) from which
the inner values are pulled with `Decoder`s.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, Optional, Protocol, TypeVar, Union, final

from serde_typename.serde.exceptions import InvalidTypeError

T = TypeVar('T')
T_co = TypeVar('T_co', covariant=True)


@final
class _Missing:
    """Type of the `MISSING` sentinel."""

    __slots__ = ()

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()
"""Returned by `SeqAccess.next_element` and `MapAccess.next_key` when there are no more items."""


class Decoder(Protocol[T_co]):
    def __call__(self, deserializer: 'Deserializer', /) -> T_co:
        ...


class Unexpected:
    """Descriptions of what a deserializer actually held, used in error messages."""

    UNIT = 'unit value'
    OPTION = 'Option value'
    BYTES = 'byte array'
    NEWTYPE_STRUCT = 'newtype struct'
    SEQ = 'sequence'
    MAP = 'map'
    ENUM = 'enum'
    UNIT_VARIANT = 'unit variant'
    NEWTYPE_VARIANT = 'newtype variant'
    TUPLE_VARIANT = 'tuple variant'
    STRUCT_VARIANT = 'struct variant'

    @staticmethod
    def boolean(value: bool) -> str:
        return f'boolean `{str(value).lower()}`'

    @staticmethod
    def integer(value: int) -> str:
        return f'integer `{value}`'

    @staticmethod
    def floating(value: float) -> str:
        return f'floating point `{value}`'

    @staticmethod
    def char(value: str) -> str:
        return f'character `{value}`'

    @staticmethod
    def string(value: str) -> str:
        return f'string "{value}"'


class Visitor(Generic[T]):
    """Builds a value of type T out of whatever shape a deserializer reports.

    Every `visit_*` method fails with an `InvalidTypeError` unless overridden, so a visitor only implements the shapes
    it can accept.
    """

    def expecting(self) -> str:
        """What this visitor expects, completes the sentence "expected ...". """
        return 'a value'

    def visit_bool(self, value: bool, /) -> T:
        raise InvalidTypeError(Unexpected.boolean(value), self.expecting())

    def visit_int(self, value: int, /) -> T:
        raise InvalidTypeError(Unexpected.integer(value), self.expecting())

    def visit_float(self, value: float, /) -> T:
        raise InvalidTypeError(Unexpected.floating(value), self.expecting())

    def visit_char(self, value: str, /) -> T:
        return self.visit_str(value)

    def visit_str(self, value: str, /) -> T:
        raise InvalidTypeError(Unexpected.string(value), self.expecting())

    def visit_bytes(self, value: bytes, /) -> T:
        raise InvalidTypeError(Unexpected.BYTES, self.expecting())

    def visit_none(self) -> T:
        raise InvalidTypeError(Unexpected.OPTION, self.expecting())

    def visit_some(self, deserializer: 'Deserializer', /) -> T:
        raise InvalidTypeError(Unexpected.OPTION, self.expecting())

    def visit_unit(self) -> T:
        raise InvalidTypeError(Unexpected.UNIT, self.expecting())

    def visit_newtype_struct(self, deserializer: 'Deserializer', /) -> T:
        raise InvalidTypeError(Unexpected.NEWTYPE_STRUCT, self.expecting())

    def visit_seq(self, seq: 'SeqAccess', /) -> T:
        raise InvalidTypeError(Unexpected.SEQ, self.expecting())

    def visit_map(self, map_: 'MapAccess', /) -> T:
        raise InvalidTypeError(Unexpected.MAP, self.expecting())

    def visit_enum(self, data: 'EnumAccess', /) -> T:
        raise InvalidTypeError(Unexpected.ENUM, self.expecting())


class SeqAccess(ABC):
    @abstractmethod
    def next_element(self, decoder: Decoder[T], /) -> Union[T, _Missing]:
        """Decode the next element, or return `MISSING` when the sequence is exhausted."""
        raise NotImplementedError

    def size_hint(self) -> Optional[int]:
        return None


class MapAccess(ABC):
    @abstractmethod
    def next_key(self, decoder: Decoder[T], /) -> Union[T, _Missing]:
        """Decode the next key, or return `MISSING` when the map is exhausted."""
        raise NotImplementedError

    @abstractmethod
    def next_value(self, decoder: Decoder[T], /) -> T:
        """Decode the value for the key that was just returned by `next_key`."""
        raise NotImplementedError

    def size_hint(self) -> Optional[int]:
        return None


class VariantAccess(ABC):
    """Gives access to the payload of the variant picked through `EnumAccess.variant`."""

    @abstractmethod
    def unit_variant(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def newtype_variant(self, decoder: Decoder[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def tuple_variant(self, length: int, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def struct_variant(self, fields: Sequence[str], visitor: Visitor[T], /) -> T:
        raise NotImplementedError


class EnumAccess(ABC):
    @abstractmethod
    def variant(self, decoder: Decoder[T], /) -> tuple[T, VariantAccess]:
        """Decode the variant identifier with `decoder` and return it along with access to the variant's payload."""
        raise NotImplementedError


class Deserializer(ABC):
    """A data format seen from the point of view of a type being deserialized.

    Every method receives the visitor that will build the value; the deserializer picks which `visit_*` method to call.
    Implementations must provide all of them, even if most of them only raise.
    """

    @abstractmethod
    def deserialize_any(self, visitor: Visitor[T], /) -> T:
        """Let the deserializer report whatever shape it holds, only self-describing formats can support this."""
        raise NotImplementedError

    # primitives

    @abstractmethod
    def deserialize_bool(self, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_int(self, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_float(self, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_char(self, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_str(self, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_bytes(self, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    # options and units

    @abstractmethod
    def deserialize_option(self, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_unit(self, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_unit_struct(self, name: str, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_newtype_struct(self, name: str, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    # compounds

    @abstractmethod
    def deserialize_seq(self, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_tuple(self, length: int, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_tuple_struct(self, name: str, length: int, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_map(self, visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_struct(self, name: str, fields: Sequence[str], visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_enum(self, name: str, variants: Sequence[str], visitor: Visitor[T], /) -> T:
        raise NotImplementedError

    # identifiers

    @abstractmethod
    def deserialize_identifier(self, visitor: Visitor[T], /) -> T:
        """Deserialize the name (or index) of a struct field or enum variant."""
        raise NotImplementedError

    @abstractmethod
    def deserialize_ignored_any(self, visitor: Visitor[T], /) -> T:
        """Skip over a value the type does not care about, e.g. an unknown field."""
        raise NotImplementedError