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

from serde_typename.serde.de import MISSING, Deserializer, MapAccess, Visitor
from serde_typename.serde.ser import Serializer
from serde_typename.serde.types.serde_type import SerdeType
from serde_typename.utils.typing import get_args, get_origin


class _DictVisitor(Visitor[dict[Any, Any]]):
    def __init__(self, key: SerdeType[Any], value: SerdeType[Any]) -> None:
        self._key = key
        self._value = value

    @override
    def expecting(self) -> str:
        return 'a map'

    @override
    def visit_map(self, map_: MapAccess, /) -> dict[Any, Any]:
        result: dict[Any, Any] = {}
        while (key := map_.next_key(self._key.deserialize)) is not MISSING:
            result[key] = map_.next_value(self._value.deserialize)
        return result


class DictSerdeType(SerdeType[dict[Any, Any]]):
    """ `dict[K, V]`, serialized with `serialize_map` in iteration order.
    """

    __slots__ = ('_key', '_value')
    _key: SerdeType[Any]
    _value: SerdeType[Any]

    def __init__(self, key: SerdeType[Any], value: SerdeType[Any]) -> None:
        self._key = key
        self._value = value

    @override
    @classmethod
    def _from_type(cls, type_: Any, /) -> Self:
        if get_origin(type_) is not dict:
            raise TypeError(f'expected dict[K, V], got {type_!r}')
        key_type, value_type = get_args(type_)
        return cls(SerdeType.from_type(key_type), SerdeType.from_type(value_type))

    @override
    def _check_value(self, value: Any, /) -> None:
        if not isinstance(value, dict):
            raise TypeError(f'expected dict instance, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer[Any], value: dict[Any, Any], /) -> Any:
        state = serializer.serialize_map(len(value))
        for key, item in value.items():
            state.serialize_entry(key, self._key.serialize, item, self._value.serialize)
        return state.end()

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> dict[Any, Any]:
        return deserializer.deserialize_map(_DictVisitor(self._key, self._value))
