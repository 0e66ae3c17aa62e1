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

from typing import Any

from typing_extensions import Self, override

from serde_typename.serde.de import MISSING, Deserializer, EnumAccess, MapAccess, SeqAccess, Unexpected, Visitor
from serde_typename.serde.exceptions import InvalidTypeError
from serde_typename.serde.ser import Serializer
from serde_typename.serde.types.serde_type import SerdeType


class _AnyVisitor(Visitor[Any]):
    """ Accepts every shape except enums, producing plain Python values.
    """

    @override
    def expecting(self) -> str:
        return 'any value'

    @override
    def visit_bool(self, value: bool, /) -> Any:
        return value

    @override
    def visit_int(self, value: int, /) -> Any:
        return value

    @override
    def visit_float(self, value: float, /) -> Any:
        return value

    @override
    def visit_str(self, value: str, /) -> Any:
        return value

    @override
    def visit_bytes(self, value: bytes, /) -> Any:
        return bytes(value)

    @override
    def visit_none(self) -> Any:
        return None

    @override
    def visit_some(self, deserializer: Deserializer, /) -> Any:
        return deserializer.deserialize_any(self)

    @override
    def visit_unit(self) -> Any:
        return None

    @override
    def visit_newtype_struct(self, deserializer: Deserializer, /) -> Any:
        return deserializer.deserialize_any(self)

    @override
    def visit_seq(self, seq: SeqAccess, /) -> Any:
        items: list[Any] = []
        while (item := seq.next_element(_deserialize_any)) is not MISSING:
            items.append(item)
        return items

    @override
    def visit_map(self, map_: MapAccess, /) -> Any:
        result: dict[Any, Any] = {}
        while (key := map_.next_key(_deserialize_any)) is not MISSING:
            result[key] = map_.next_value(_deserialize_any)
        return result

    @override
    def visit_enum(self, data: EnumAccess, /) -> Any:
        # an enum value can't be rebuilt without knowing its type
        raise InvalidTypeError(Unexpected.ENUM, self.expecting())


def _deserialize_any(deserializer: Deserializer, /) -> Any:
    return deserializer.deserialize_any(_AnyVisitor())


class AnySerdeType(SerdeType[Any]):
    """ `typing.Any`, and the item type of unparametrized collections.

    Serialization picks the type from the runtime value, deserialization needs a self-describing format because it goes
    through `deserialize_any`.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: Any, /) -> Self:
        if type_ is not Any:
            raise TypeError('expected Any')
        return cls()

    @override
    def _check_value(self, value: Any, /) -> None:
        pass

    @override
    def _serialize(self, serializer: Serializer[Any], value: Any, /) -> Any:
        from serde_typename.serde.types import infer_type
        return SerdeType.from_type(infer_type(value)).serialize(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Any:
        return _deserialize_any(deserializer)
