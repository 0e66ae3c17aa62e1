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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar, final

from typing_extensions import Self

from serde_typename.serde.de import Deserializer
from serde_typename.serde.ser import Serializer

T = TypeVar('T')


class SerdeType(ABC, Generic[T]):
    """ This class models a Python type and how its values declare themselves to serializers and deserializers.

    Instances are built from type annotations through `SerdeType.from_type`. They are passed around as `Encoder`s and
    `Decoder`s (bound `serialize`/`deserialize` methods) so compound types can delegate to the types of their members.
    """

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    @final
    @staticmethod
    def from_type(type_: Any, /) -> SerdeType[Any]:
        """ Instantiate a SerdeType from a type annotation, raises `TypeError` if the annotation is not supported.
        """
        from serde_typename.serde.types import make_serde_type
        return make_serde_type(type_)

    @classmethod
    def _from_type(cls, type_: Any, /) -> Self:
        """ Instantiate a SerdeType from a type annotation.

        The implementation is expected to inspect the given type's origin and args to check for compatibility and to
        use `SerdeType.from_type` for the member types of compound types.
        """
        raise TypeError(f'{cls.__name__} can not be built from a type annotation')

    @final
    def check_value(self, value: Any, /) -> None:
        """ Raise a `TypeError` if the value is not an instance of the modeled type.

        Only the outermost level is checked, member values are checked when their own type serializes them.
        """
        self._check_value(value)

    @final
    def serialize(self, serializer: Serializer[Any], value: T, /) -> Any:
        """ Declare the value's shape to the serializer and return whatever the serializer produced.
        """
        # XXX: subclasses must implement SerdeType._serialize, not SerdeType.serialize
        self._check_value(value)
        return self._serialize(serializer, value)

    @final
    def deserialize(self, deserializer: Deserializer, /) -> T:
        """ Ask the deserializer for a value of the modeled type.
        """
        # XXX: subclasses must implement SerdeType._deserialize, not SerdeType.deserialize
        value = self._deserialize(deserializer)
        self._check_value(value)
        return value

    @abstractmethod
    def _check_value(self, value: Any, /) -> None:
        raise NotImplementedError

    @abstractmethod
    def _serialize(self, serializer: Serializer[Any], value: T, /) -> Any:
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        raise NotImplementedError
