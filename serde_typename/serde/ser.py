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
The serialization half of the structural contract.

A value never writes itself anywhere, instead its descriptor declares the value's shape to a `Serializer` by calling
exactly one of the `serialize_*` methods. Shapes that have inner values either receive them together with an `Encoder`
(newtypes, options) or return a compound state object that receives each element in turn and is closed by `end()`.

Whatever the format wants to produce (bytes, a tree, a name) is the return value of the shape call, or of `end()` for
compound shapes.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Generic, Optional, Protocol, TypeVar, final

T_contra = TypeVar('T_contra', contravariant=True)
Ok = TypeVar('Ok')


class Encoder(Protocol[T_contra]):
    def __call__(self, serializer: 'Serializer', value: T_contra, /) -> Any:
        ...


class SerializeElements(ABC, Generic[Ok]):
    """State returned by `serialize_seq`, `serialize_tuple`, `serialize_tuple_struct` and `serialize_tuple_variant`."""

    @abstractmethod
    def serialize_element(self, value: Any, encoder: Encoder[Any], /) -> None:
        raise NotImplementedError

    @abstractmethod
    def end(self) -> Ok:
        raise NotImplementedError


class SerializeMap(ABC, Generic[Ok]):
    """State returned by `serialize_map`."""

    @abstractmethod
    def serialize_key(self, key: Any, encoder: Encoder[Any], /) -> None:
        raise NotImplementedError

    @abstractmethod
    def serialize_value(self, value: Any, encoder: Encoder[Any], /) -> None:
        raise NotImplementedError

    def serialize_entry(
        self,
        key: Any,
        key_encoder: Encoder[Any],
        value: Any,
        value_encoder: Encoder[Any],
        /,
    ) -> None:
        self.serialize_key(key, key_encoder)
        self.serialize_value(value, value_encoder)

    @abstractmethod
    def end(self) -> Ok:
        raise NotImplementedError


class SerializeFields(ABC, Generic[Ok]):
    """State returned by `serialize_struct` and `serialize_struct_variant`."""

    @abstractmethod
    def serialize_field(self, key: str, value: Any, encoder: Encoder[Any], /) -> None:
        raise NotImplementedError

    def skip_field(self, key: str, /) -> None:
        """Indicate that a field was skipped, formats that don't care about it can leave this as is."""
        pass

    @abstractmethod
    def end(self) -> Ok:
        raise NotImplementedError


class Serializer(ABC, Generic[Ok]):
    """A data format seen from the point of view of a value being serialized.

    There's one method per shape a value can declare itself as. Implementations must provide all of them, even if
    most of them only raise, because a format can't choose which shapes it is handed.
    """

    # primitives

    @abstractmethod
    def serialize_bool(self, value: bool, /) -> Ok:
        raise NotImplementedError

    @abstractmethod
    def serialize_int(self, value: int, /) -> Ok:
        raise NotImplementedError

    @abstractmethod
    def serialize_float(self, value: float, /) -> Ok:
        raise NotImplementedError

    @abstractmethod
    def serialize_char(self, value: str, /) -> Ok:
        """Serialize a single character, `value` is expected to have length 1."""
        raise NotImplementedError

    @abstractmethod
    def serialize_str(self, value: str, /) -> Ok:
        raise NotImplementedError

    @abstractmethod
    def serialize_bytes(self, value: bytes, /) -> Ok:
        raise NotImplementedError

    # options and units

    @abstractmethod
    def serialize_none(self) -> Ok:
        raise NotImplementedError

    @abstractmethod
    def serialize_some(self, value: Any, encoder: Encoder[Any], /) -> Ok:
        raise NotImplementedError

    @abstractmethod
    def serialize_unit(self) -> Ok:
        """Serialize the anonymous unit value, what `None` means when the annotation is `None`."""
        raise NotImplementedError

    @abstractmethod
    def serialize_unit_struct(self, name: str, /) -> Ok:
        raise NotImplementedError

    @abstractmethod
    def serialize_unit_variant(self, name: str, variant_index: int, variant: str, /) -> Ok:
        raise NotImplementedError

    # newtypes

    @abstractmethod
    def serialize_newtype_struct(self, name: str, value: Any, encoder: Encoder[Any], /) -> Ok:
        raise NotImplementedError

    @abstractmethod
    def serialize_newtype_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        value: Any,
        encoder: Encoder[Any],
        /,
    ) -> Ok:
        raise NotImplementedError

    # compounds

    @abstractmethod
    def serialize_seq(self, length: Optional[int], /) -> SerializeElements[Ok]:
        raise NotImplementedError

    @abstractmethod
    def serialize_tuple(self, length: int, /) -> SerializeElements[Ok]:
        raise NotImplementedError

    @abstractmethod
    def serialize_tuple_struct(self, name: str, length: int, /) -> SerializeElements[Ok]:
        raise NotImplementedError

    @abstractmethod
    def serialize_tuple_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
        /,
    ) -> SerializeElements[Ok]:
        raise NotImplementedError

    @abstractmethod
    def serialize_map(self, length: Optional[int], /) -> SerializeMap[Ok]:
        raise NotImplementedError

    @abstractmethod
    def serialize_struct(self, name: str, length: int, /) -> SerializeFields[Ok]:
        raise NotImplementedError

    @abstractmethod
    def serialize_struct_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
        /,
    ) -> SerializeFields[Ok]:
        raise NotImplementedError

    @final
    def collect_seq(self, values: Iterable[Any], encoder: Encoder[Any], /, *, length: Optional[int] = None) -> Ok:
        """Shortcut for serializing every item of an iterable as a sequence."""
        state = self.serialize_seq(length)
        for value in values:
            state.serialize_element(value, encoder)
        return state.end()
