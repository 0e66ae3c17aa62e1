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

from enum import Enum
from types import NoneType, UnionType
from typing import Any, TypeAlias

from structlog import get_logger

from serde_typename.serde.derive import SERDE_TYPE_ATTR, SerdeEnum, get_options
from serde_typename.serde.types.any_type import AnySerdeType
from serde_typename.serde.types.collection import FrozenSetSerdeType, ListSerdeType, SetSerdeType, TupleSerdeType
from serde_typename.serde.types.dataclass_type import DataclassSerdeType, StructLayout, VariantInfo
from serde_typename.serde.types.enum_type import EnumSerdeType, SerdeEnumSerdeType
from serde_typename.serde.types.map import DictSerdeType
from serde_typename.serde.types.optional import OptionalSerdeType
from serde_typename.serde.types.primitive import (
    BoolSerdeType,
    BytesSerdeType,
    FloatSerdeType,
    IntSerdeType,
    StrSerdeType,
    UnitSerdeType,
)
from serde_typename.serde.types.serde_type import SerdeType
from serde_typename.utils.typing import get_origin, is_subclass

__all__ = [
    'TYPE_TO_SERDE_TYPE_MAP',
    'AnySerdeType',
    'BoolSerdeType',
    'BytesSerdeType',
    'DataclassSerdeType',
    'DictSerdeType',
    'EnumSerdeType',
    'FloatSerdeType',
    'FrozenSetSerdeType',
    'IntSerdeType',
    'ListSerdeType',
    'OptionalSerdeType',
    'SerdeEnumSerdeType',
    'SerdeType',
    'SetSerdeType',
    'StrSerdeType',
    'StructLayout',
    'TupleSerdeType',
    'TypeToSerdeTypeMap',
    'UnitSerdeType',
    'VariantInfo',
    'infer_type',
    'make_serde_type',
]

logger = get_logger()

TypeToSerdeTypeMap: TypeAlias = dict[Any, type[SerdeType]]

# Mapping between annotation origins and SerdeType classes, types decorated with @serde are handled separately.
TYPE_TO_SERDE_TYPE_MAP: TypeToSerdeTypeMap = {
    # builtin types:
    bool: BoolSerdeType,
    bytes: BytesSerdeType,
    dict: DictSerdeType,
    float: FloatSerdeType,
    frozenset: FrozenSetSerdeType,
    int: IntSerdeType,
    list: ListSerdeType,
    set: SetSerdeType,
    str: StrSerdeType,
    tuple: TupleSerdeType,
    # other Python types:
    Any: AnySerdeType,
    NoneType: UnitSerdeType,
    UnionType: OptionalSerdeType,
}

# unparametrized collections hold anything
_BARE_TYPES: dict[Any, Any] = {
    list: list[Any],
    set: set[Any],
    frozenset: frozenset[Any],
    tuple: tuple[Any, ...],
    dict: dict[Any, Any],
}


def make_serde_type(type_: Any, /) -> SerdeType[Any]:
    """ Build the SerdeType for a type annotation, use `SerdeType.from_type` instead of calling this directly.

    >>> type(make_serde_type(int)).__name__
    'IntSerdeType'
    >>> type(make_serde_type(list)).__name__
    'ListSerdeType'
    """
    if type_ is None:
        type_ = NoneType
    if isinstance(type_, type) and get_options(type_) is not None:
        return _make_derived_serde_type(type_)
    if isinstance(type_, type):
        type_ = _BARE_TYPES.get(type_, type_)
    origin = get_origin(type_) or type_
    try:
        serde_type_class = TYPE_TO_SERDE_TYPE_MAP[origin]
    except (KeyError, TypeError):
        raise TypeError(f'type not supported: {type_!r}') from None
    return serde_type_class._from_type(type_)


def _make_derived_serde_type(class_: type) -> SerdeType[Any]:
    # the descriptor is cached on the class itself, vars() is used so subclasses don't see it
    cached = vars(class_).get(SERDE_TYPE_ATTR)
    if cached is not None:
        assert isinstance(cached, SerdeType)
        return cached
    serde_type: SerdeType[Any]
    if is_subclass(class_, Enum):
        serde_type = EnumSerdeType._from_type(class_)
    elif is_subclass(class_, SerdeEnum):
        serde_type = SerdeEnumSerdeType._from_type(class_)
    else:
        serde_type = DataclassSerdeType._from_type(class_)
    setattr(class_, SERDE_TYPE_ATTR, serde_type)
    logger.debug('serde type built', type=class_.__qualname__, serde_type=type(serde_type).__name__)
    return serde_type


def infer_type(value: Any, /) -> Any:
    """ The annotation to use for a value that was given without one.

    >>> infer_type(1)
    <class 'int'>
    >>> infer_type((1, 'a'))
    tuple[int, str]
    >>> infer_type([1, 2])
    list[typing.Any]
    >>> infer_type(None)
    <class 'NoneType'>
    """
    class_ = type(value)
    if class_ is tuple:
        return tuple[tuple(infer_type(item) for item in value)]
    return _BARE_TYPES.get(class_, class_)
