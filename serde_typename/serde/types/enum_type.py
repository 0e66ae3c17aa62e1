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

from enum import Enum
from typing import Any, Optional

from typing_extensions import Self, override

from serde_typename.serde.de import Deserializer, EnumAccess, Visitor
from serde_typename.serde.derive import SerdeEnum, get_options
from serde_typename.serde.exceptions import InvalidValueError
from serde_typename.serde.options import SerdeOptions
from serde_typename.serde.ser import Serializer
from serde_typename.serde.types.dataclass_type import StructLayout, VariantInfo
from serde_typename.serde.types.identifier import decode_identifier
from serde_typename.serde.types.serde_type import SerdeType
from serde_typename.utils.typing import is_subclass


def _variant_name(class_name: str, declared: SerdeOptions, variant: Optional[SerdeOptions]) -> str:
    if variant is not None and variant.rename is not None:
        return variant.rename
    if declared.rename_all is not None:
        return declared.rename_all.apply_to_variant(class_name)
    return class_name


class _EnumVisitor(Visitor[Enum]):
    def __init__(self, serde_type: EnumSerdeType) -> None:
        self._serde_type = serde_type

    @override
    def expecting(self) -> str:
        return f'enum {self._serde_type._name}'

    @override
    def visit_enum(self, data: EnumAccess, /) -> Enum:
        index, access = data.variant(decode_identifier(self._serde_type._variant_names, kind='variant'))
        access.unit_variant()
        return self._serde_type._members[index]


class EnumSerdeType(SerdeType[Enum]):
    """ Subclasses of `enum.Enum` decorated with `@serde`, every member is a unit variant.

    Member values are irrelevant, a member is identified by its name and its index is its position in the enum.
    """

    __slots__ = ('_class', '_name', '_members', '_variant_names')
    _class: type[Enum]
    _name: str
    _members: tuple[Enum, ...]
    _variant_names: tuple[str, ...]

    def __init__(self, class_: type[Enum], name: str, members: tuple[Enum, ...], variant_names: tuple[str, ...]):
        self._class = class_
        self._name = name
        self._members = members
        self._variant_names = variant_names

    @override
    @classmethod
    def _from_type(cls, type_: Any, /) -> Self:
        if not is_subclass(type_, Enum):
            raise TypeError(f'expected an Enum subclass, got {type_!r}')
        options = get_options(type_)
        if options is None:
            raise TypeError(f'{type_.__qualname__} is not decorated with @serde')
        members = tuple(type_)
        variant_names = tuple(_variant_name(member.name, options, None) for member in members)
        if len(set(variant_names)) != len(variant_names):
            raise TypeError(f'{type_.__qualname__}: variant names must be unique, got {list(variant_names)}')
        return cls(type_, options.rename or type_.__name__, members, variant_names)

    @override
    def _check_value(self, value: Any, /) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__qualname__} member, got {type(value).__qualname__}')
        # combined Flag values are instances but not members
        if value not in self._members:
            raise TypeError(f'expected {self._class.__qualname__} member, got {value!r}')

    @override
    def _serialize(self, serializer: Serializer[Any], value: Enum, /) -> Any:
        index = self._members.index(value)
        return serializer.serialize_unit_variant(self._name, index, self._variant_names[index])

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Enum:
        return deserializer.deserialize_enum(self._name, self._variant_names, _EnumVisitor(self))


class _SerdeEnumVisitor(Visitor[SerdeEnum]):
    def __init__(self, serde_type: SerdeEnumSerdeType, variant_names: tuple[str, ...]) -> None:
        self._serde_type = serde_type
        self._variant_names = variant_names

    @override
    def expecting(self) -> str:
        return f'enum {self._serde_type._name}'

    @override
    def visit_enum(self, data: EnumAccess, /) -> SerdeEnum:
        index, access = data.variant(decode_identifier(self._variant_names, kind='variant'))
        variant_class = self._serde_type._enum.__serde_variants__[index]
        target = self._serde_type._class
        if target is not self._serde_type._enum and variant_class is not target:
            raise InvalidValueError(f'variant `{self._variant_names[index]}`', f'variant {target.__name__}')
        return self._serde_type._layout(variant_class).deserialize_variant(access)


class SerdeEnumSerdeType(SerdeType[SerdeEnum]):
    """ Tagged unions declared with `SerdeEnum`.

    Built either from the enum, which accepts any of its variants, or from one of the variant classes, which only
    accepts that variant. Either way the enum's name and the full list of variants are reported to the format.
    Variants registered after the descriptor was built are taken into account.
    """

    __slots__ = ('_enum', '_class', '_name', '_layouts')
    _enum: type[SerdeEnum]
    _class: type[SerdeEnum]
    _name: str
    _layouts: dict[type, StructLayout]

    def __init__(self, enum: type[SerdeEnum], class_: type[SerdeEnum], name: str) -> None:
        self._enum = enum
        self._class = class_
        self._name = name
        self._layouts = {}

    @override
    @classmethod
    def _from_type(cls, type_: Any, /) -> Self:
        if not is_subclass(type_, SerdeEnum) or type_ is SerdeEnum:
            raise TypeError(f'expected a SerdeEnum subclass, got {type_!r}')
        enum = type_ if SerdeEnum in type_.__bases__ else type_.__bases__[0]
        if type_ is not enum and type_ not in enum.__serde_variants__:
            raise TypeError(f'{type_.__qualname__} is not a registered variant of {enum.__qualname__}')
        options = get_options(enum)
        if options is None:
            raise TypeError(f'{enum.__qualname__} is not decorated with @serde')
        return cls(enum, type_, options.rename or enum.__name__)

    def _variant_names(self) -> tuple[str, ...]:
        declared = get_options(self._enum)
        assert declared is not None
        names = tuple(
            _variant_name(variant.__name__, declared, get_options(variant))
            for variant in self._enum.__serde_variants__
        )
        if len(set(names)) != len(names):
            raise TypeError(f'{self._enum.__qualname__}: variant names must be unique, got {list(names)}')
        return names

    def _layout(self, variant: type) -> StructLayout:
        layout = self._layouts.get(variant)
        if layout is None:
            options = get_options(variant)
            assert options is not None
            layout = self._layouts[variant] = StructLayout.build(variant, options)
        return layout

    @override
    def _check_value(self, value: Any, /) -> None:
        if not isinstance(value, self._class) or type(value) not in self._enum.__serde_variants__:
            raise TypeError(f'expected a variant of {self._class.__qualname__}, got {type(value).__qualname__}')

    @override
    def _serialize(self, serializer: Serializer[Any], value: SerdeEnum, /) -> Any:
        variant = type(value)
        index = self._enum.__serde_variants__.index(variant)
        variant_name = self._variant_names()[index]
        return self._layout(variant).serialize(serializer, value, self._name, VariantInfo(index, variant_name))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> SerdeEnum:
        variant_names = self._variant_names()
        return deserializer.deserialize_enum(self._name, variant_names, _SerdeEnumVisitor(self, variant_names))
