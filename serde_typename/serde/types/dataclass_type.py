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

import dataclasses
import typing
from typing import Any, NamedTuple, Optional

from structlog import get_logger
from typing_extensions import Self, override

from serde_typename.serde.de import MISSING, Deserializer, MapAccess, SeqAccess, VariantAccess, Visitor
from serde_typename.serde.derive import get_field_options, get_options
from serde_typename.serde.exceptions import DuplicateFieldError, InvalidLengthError, MissingFieldError
from serde_typename.serde.options import SerdeOptions, Shape
from serde_typename.serde.ser import Serializer
from serde_typename.serde.types.identifier import decode_identifier
from serde_typename.serde.types.serde_type import SerdeType

logger = get_logger()


class VariantInfo(NamedTuple):
    """Identifies the variant a layout is serialized as, when it belongs to an enum."""
    index: int
    name: str


class StructField:
    """ A dataclass field as seen by serializers.

    The field's descriptor is built from its annotation the first time a value goes through it, so declaring or naming
    a struct never depends on its field types being supported.
    """

    __slots__ = ('attr', 'name', 'annotation', 'required', '_serde_type')

    def __init__(self, attr: str, name: str, annotation: Any, required: bool) -> None:
        self.attr = attr
        self.name = name
        self.annotation = annotation
        self.required = required
        self._serde_type: Optional[SerdeType[Any]] = None

    @property
    def serde_type(self) -> SerdeType[Any]:
        if self._serde_type is None:
            self._serde_type = SerdeType.from_type(self.annotation)
        return self._serde_type

    def serialize(self, serializer: Serializer[Any], value: Any, /) -> Any:
        return self.serde_type.serialize(serializer, value)

    def deserialize(self, deserializer: Deserializer, /) -> Any:
        return self.serde_type.deserialize(deserializer)


class StructLayout:
    """ The fields of a dataclass and the shape it is declared as.

    Shared by plain dataclasses and `SerdeEnum` variants, which only differ on which serializer methods are called.
    """

    __slots__ = ('class_', 'shape', 'fields')

    def __init__(self, class_: type, shape: Shape, fields: tuple[StructField, ...]) -> None:
        self.class_ = class_
        self.shape = shape
        self.fields = fields

    @classmethod
    def build(cls, class_: type, options: SerdeOptions) -> Self:
        # only fields that go through __init__ can be rebuilt when deserializing
        dataclass_fields = [f for f in dataclasses.fields(class_) if f.init]
        hints = typing.get_type_hints(class_)
        fields: list[StructField] = []
        for field in dataclass_fields:
            field_options = get_field_options(field)
            if field_options.rename is not None:
                name = field_options.rename
            elif options.rename_all is not None:
                name = options.rename_all.apply_to_field(field.name)
            else:
                name = field.name
            required = field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING
            fields.append(StructField(field.name, name, hints[field.name], required))
        try:
            shape = options.resolve_shape(len(fields))
        except TypeError as e:
            raise TypeError(f'{class_.__qualname__}: {e}') from e
        names = [field.name for field in fields]
        if len(set(names)) != len(names):
            raise TypeError(f'{class_.__qualname__}: field names must be unique, got {names}')
        logger.debug('struct layout resolved', type=class_.__qualname__, shape=str(shape), fields=names)
        return cls(class_, shape, tuple(fields))

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def serialize(
        self,
        serializer: Serializer[Any],
        value: Any,
        name: str,
        variant: Optional[VariantInfo] = None,
    ) -> Any:
        match self.shape:
            case Shape.UNIT:
                if variant is None:
                    return serializer.serialize_unit_struct(name)
                return serializer.serialize_unit_variant(name, variant.index, variant.name)
            case Shape.NEWTYPE:
                field, = self.fields
                inner = getattr(value, field.attr)
                if variant is None:
                    return serializer.serialize_newtype_struct(name, inner, field.serialize)
                return serializer.serialize_newtype_variant(name, variant.index, variant.name, inner,
                                                            field.serialize)
            case Shape.TUPLE:
                if variant is None:
                    elements = serializer.serialize_tuple_struct(name, len(self.fields))
                else:
                    elements = serializer.serialize_tuple_variant(name, variant.index, variant.name,
                                                                  len(self.fields))
                for field in self.fields:
                    elements.serialize_element(getattr(value, field.attr), field.serialize)
                return elements.end()
            case Shape.STRUCT:
                if variant is None:
                    state = serializer.serialize_struct(name, len(self.fields))
                else:
                    state = serializer.serialize_struct_variant(name, variant.index, variant.name, len(self.fields))
                for field in self.fields:
                    state.serialize_field(field.name, getattr(value, field.attr), field.serialize)
                return state.end()
        raise NotImplementedError(self.shape)

    def deserialize(self, deserializer: Deserializer, name: str) -> Any:
        match self.shape:
            case Shape.UNIT:
                return deserializer.deserialize_unit_struct(name, _UnitStructVisitor(self))
            case Shape.NEWTYPE:
                return deserializer.deserialize_newtype_struct(name, _NewtypeStructVisitor(self))
            case Shape.TUPLE:
                return deserializer.deserialize_tuple_struct(name, len(self.fields), _TupleStructVisitor(self))
            case Shape.STRUCT:
                return deserializer.deserialize_struct(name, self.field_names, _StructVisitor(self))
        raise NotImplementedError(self.shape)

    def deserialize_variant(self, access: VariantAccess) -> Any:
        match self.shape:
            case Shape.UNIT:
                access.unit_variant()
                return self.class_()
            case Shape.NEWTYPE:
                field, = self.fields
                return self.class_(**{field.attr: access.newtype_variant(field.deserialize)})
            case Shape.TUPLE:
                return access.tuple_variant(len(self.fields), _TupleStructVisitor(self))
            case Shape.STRUCT:
                return access.struct_variant(self.field_names, _StructVisitor(self))
        raise NotImplementedError(self.shape)


class _UnitStructVisitor(Visitor[Any]):
    def __init__(self, layout: StructLayout) -> None:
        self._layout = layout

    @override
    def expecting(self) -> str:
        return f'unit struct {self._layout.class_.__name__}'

    @override
    def visit_unit(self) -> Any:
        return self._layout.class_()


class _NewtypeStructVisitor(Visitor[Any]):
    def __init__(self, layout: StructLayout) -> None:
        self._layout = layout

    @override
    def expecting(self) -> str:
        return f'newtype struct {self._layout.class_.__name__}'

    @override
    def visit_newtype_struct(self, deserializer: Deserializer, /) -> Any:
        field, = self._layout.fields
        return self._layout.class_(**{field.attr: field.deserialize(deserializer)})


class _TupleStructVisitor(Visitor[Any]):
    def __init__(self, layout: StructLayout) -> None:
        self._layout = layout

    @override
    def expecting(self) -> str:
        return f'tuple struct {self._layout.class_.__name__}'

    @override
    def visit_seq(self, seq: SeqAccess, /) -> Any:
        kwargs: dict[str, Any] = {}
        for index, field in enumerate(self._layout.fields):
            value = seq.next_element(field.deserialize)
            if value is MISSING:
                raise InvalidLengthError(index, f'{self.expecting()} with {len(self._layout.fields)} elements')
            kwargs[field.attr] = value
        return self._layout.class_(**kwargs)


class _StructVisitor(Visitor[Any]):
    def __init__(self, layout: StructLayout) -> None:
        self._layout = layout

    @override
    def expecting(self) -> str:
        return f'struct {self._layout.class_.__name__}'

    @override
    def visit_seq(self, seq: SeqAccess, /) -> Any:
        # formats that don't write field names give them in declaration order
        kwargs: dict[str, Any] = {}
        for index, field in enumerate(self._layout.fields):
            value = seq.next_element(field.deserialize)
            if value is MISSING:
                if field.required:
                    raise InvalidLengthError(index, f'{self.expecting()} with {len(self._layout.fields)} elements')
                break
            kwargs[field.attr] = value
        return self._layout.class_(**kwargs)

    @override
    def visit_map(self, map_: MapAccess, /) -> Any:
        fields = self._layout.fields
        decode_field = decode_identifier(self._layout.field_names, kind='field')
        kwargs: dict[str, Any] = {}
        while (index := map_.next_key(decode_field)) is not MISSING:
            field = fields[index]
            if field.attr in kwargs:
                raise DuplicateFieldError(field.name)
            kwargs[field.attr] = map_.next_value(field.deserialize)
        for field in fields:
            if field.required and field.attr not in kwargs:
                raise MissingFieldError(field.name)
        return self._layout.class_(**kwargs)


class DataclassSerdeType(SerdeType[Any]):
    """ Dataclasses decorated with `@serde`.

    The fields are resolved on first use, so a dataclass can refer to types that are declared after it, including
    itself.
    """

    __slots__ = ('_class', '_name', '_layout')
    _class: type
    _name: str
    _layout: Optional[StructLayout]

    def __init__(self, class_: type, name: str) -> None:
        self._class = class_
        self._name = name
        self._layout = None

    @override
    @classmethod
    def _from_type(cls, type_: Any, /) -> Self:
        if not isinstance(type_, type) or not dataclasses.is_dataclass(type_):
            raise TypeError(f'expected a dataclass, got {type_!r}')
        options = get_options(type_)
        if options is None:
            raise TypeError(f'{type_.__qualname__} is not decorated with @serde')
        return cls(type_, options.rename or type_.__name__)

    @property
    def layout(self) -> StructLayout:
        if self._layout is None:
            options = get_options(self._class)
            assert options is not None
            self._layout = StructLayout.build(self._class, options)
        return self._layout

    @override
    def _check_value(self, value: Any, /) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__qualname__} instance, got {type(value).__qualname__}')

    @override
    def _serialize(self, serializer: Serializer[Any], value: Any, /) -> Any:
        return self.layout.serialize(serializer, value, self._name)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Any:
        return self.layout.deserialize(deserializer, self._name)
