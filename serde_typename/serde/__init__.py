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
A small structural serialization framework.

Types declare their shape to a `Serializer` and ask a `Deserializer` for the shape they expect, formats implement those
two interfaces and never need to know about the types they (de)serialize.
"""

from typing import Any, Optional, TypeVar

from serde_typename.serde.de import (
    MISSING,
    Decoder,
    Deserializer,
    EnumAccess,
    MapAccess,
    SeqAccess,
    Unexpected,
    VariantAccess,
    Visitor,
)
from serde_typename.serde.derive import SerdeEnum, field, serde
from serde_typename.serde.exceptions import (
    DeError,
    DuplicateFieldError,
    InvalidLengthError,
    InvalidTypeError,
    InvalidValueError,
    MissingFieldError,
    SerdeError,
    SerError,
    UnknownFieldError,
    UnknownVariantError,
)
from serde_typename.serde.options import RenameRule, Shape
from serde_typename.serde.ser import Encoder, SerializeElements, SerializeFields, SerializeMap, Serializer
from serde_typename.serde.types import SerdeType, infer_type

__all__ = [
    'MISSING',
    'DeError',
    'Decoder',
    'Deserializer',
    'DuplicateFieldError',
    'Encoder',
    'EnumAccess',
    'InvalidLengthError',
    'InvalidTypeError',
    'InvalidValueError',
    'MapAccess',
    'MissingFieldError',
    'RenameRule',
    'SerError',
    'SerdeEnum',
    'SerdeError',
    'SerdeType',
    'SeqAccess',
    'SerializeElements',
    'SerializeFields',
    'SerializeMap',
    'Serializer',
    'Shape',
    'Unexpected',
    'UnknownFieldError',
    'UnknownVariantError',
    'VariantAccess',
    'Visitor',
    'deserialize',
    'field',
    'serde',
    'serialize',
]

T = TypeVar('T')


def serialize(serializer: Serializer[T], value: Any, type_: Optional[Any] = None) -> T:
    """ Declare the value's shape to the serializer and return what the serializer produced.

    When `type_` is not given it is inferred from the value, which is enough except for values whose annotation
    can't be recovered from them, like `Optional[T]`.
    """
    if type_ is None:
        type_ = infer_type(value)
    return SerdeType.from_type(type_).serialize(serializer, value)


def deserialize(deserializer: Deserializer, type_: type[T]) -> T:
    """ Build a value of the given type out of what the deserializer holds.
    """
    return SerdeType.from_type(type_).deserialize(deserializer)
