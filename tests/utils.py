"""
Formats used to exercise the derived logic without a real data format.

`RecordingSerializer` writes values as plain Python trees, the way a self-describing format like JSON would lay them
out, and keeps a log of every callback it received. `ScriptedDeserializer` reads those trees back.

Enum variants are "externally tagged": a unit variant is its name, any other variant is a single-entry dict from its
name to its payload.
"""

from collections.abc import Sequence
from typing import Any, Optional, TypeVar, Union

from typing_extensions import override

from serde_typename.serde import (
    MISSING,
    Decoder,
    Deserializer,
    Encoder,
    EnumAccess,
    MapAccess,
    SeqAccess,
    SerializeElements,
    SerializeFields,
    SerializeMap,
    Serializer,
    VariantAccess,
    Visitor,
)
from serde_typename.serde.de import _Missing
from serde_typename.serde.exceptions import DeError

T = TypeVar('T')


class _RecordingElements(SerializeElements[Any]):
    def __init__(self, serializer: 'RecordingSerializer', variant: Optional[str] = None) -> None:
        self._serializer = serializer
        self._variant = variant
        self._items: list[Any] = []

    @override
    def serialize_element(self, value: Any, encoder: Encoder[Any], /) -> None:
        self._serializer.calls.append(('element',))
        self._items.append(encoder(self._serializer, value))

    @override
    def end(self) -> Any:
        self._serializer.calls.append(('end',))
        if self._variant is None:
            return self._items
        return {self._variant: self._items}


class _RecordingMap(SerializeMap[Any], SerializeFields[Any]):
    def __init__(self, serializer: 'RecordingSerializer', variant: Optional[str] = None) -> None:
        self._serializer = serializer
        self._variant = variant
        self._entries: dict[Any, Any] = {}
        self._key: Any = MISSING

    @override
    def serialize_key(self, key: Any, encoder: Encoder[Any], /) -> None:
        self._serializer.calls.append(('key',))
        self._key = encoder(self._serializer, key)

    @override
    def serialize_value(self, value: Any, encoder: Encoder[Any], /) -> None:
        assert self._key is not MISSING
        self._serializer.calls.append(('value',))
        self._entries[self._key] = encoder(self._serializer, value)
        self._key = MISSING

    @override
    def serialize_field(self, key: str, value: Any, encoder: Encoder[Any], /) -> None:
        self._serializer.calls.append(('field', key))
        self._entries[key] = encoder(self._serializer, value)

    @override
    def end(self) -> Any:
        self._serializer.calls.append(('end',))
        if self._variant is None:
            return self._entries
        return {self._variant: self._entries}


class RecordingSerializer(Serializer[Any]):
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    @override
    def serialize_bool(self, value: bool, /) -> Any:
        self.calls.append(('bool', value))
        return value

    @override
    def serialize_int(self, value: int, /) -> Any:
        self.calls.append(('int', value))
        return value

    @override
    def serialize_float(self, value: float, /) -> Any:
        self.calls.append(('float', value))
        return value

    @override
    def serialize_char(self, value: str, /) -> Any:
        self.calls.append(('char', value))
        return value

    @override
    def serialize_str(self, value: str, /) -> Any:
        self.calls.append(('str', value))
        return value

    @override
    def serialize_bytes(self, value: bytes, /) -> Any:
        self.calls.append(('bytes', value))
        return value

    @override
    def serialize_none(self) -> Any:
        self.calls.append(('none',))
        return None

    @override
    def serialize_some(self, value: Any, encoder: Encoder[Any], /) -> Any:
        self.calls.append(('some',))
        return encoder(self, value)

    @override
    def serialize_unit(self) -> Any:
        self.calls.append(('unit',))
        return None

    @override
    def serialize_unit_struct(self, name: str, /) -> Any:
        self.calls.append(('unit_struct', name))
        return None

    @override
    def serialize_unit_variant(self, name: str, variant_index: int, variant: str, /) -> Any:
        self.calls.append(('unit_variant', name, variant_index, variant))
        return variant

    @override
    def serialize_newtype_struct(self, name: str, value: Any, encoder: Encoder[Any], /) -> Any:
        self.calls.append(('newtype_struct', name))
        return encoder(self, value)

    @override
    def serialize_newtype_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        value: Any,
        encoder: Encoder[Any],
        /,
    ) -> Any:
        self.calls.append(('newtype_variant', name, variant_index, variant))
        return {variant: encoder(self, value)}

    @override
    def serialize_seq(self, length: Optional[int], /) -> SerializeElements[Any]:
        self.calls.append(('seq', length))
        return _RecordingElements(self)

    @override
    def serialize_tuple(self, length: int, /) -> SerializeElements[Any]:
        self.calls.append(('tuple', length))
        return _RecordingElements(self)

    @override
    def serialize_tuple_struct(self, name: str, length: int, /) -> SerializeElements[Any]:
        self.calls.append(('tuple_struct', name, length))
        return _RecordingElements(self)

    @override
    def serialize_tuple_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
        /,
    ) -> SerializeElements[Any]:
        self.calls.append(('tuple_variant', name, variant_index, variant, length))
        return _RecordingElements(self, variant)

    @override
    def serialize_map(self, length: Optional[int], /) -> SerializeMap[Any]:
        self.calls.append(('map', length))
        return _RecordingMap(self)

    @override
    def serialize_struct(self, name: str, length: int, /) -> SerializeFields[Any]:
        self.calls.append(('struct', name, length))
        return _RecordingMap(self)

    @override
    def serialize_struct_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
        /,
    ) -> SerializeFields[Any]:
        self.calls.append(('struct_variant', name, variant_index, variant, length))
        return _RecordingMap(self, variant)


class _ListAccess(SeqAccess):
    def __init__(self, items: list[Any]) -> None:
        self._items = iter(items)
        self._remaining = len(items)

    @override
    def next_element(self, decoder: Decoder[T], /) -> Union[T, _Missing]:
        item = next(self._items, MISSING)
        if item is MISSING:
            return MISSING
        self._remaining -= 1
        return decoder(ScriptedDeserializer(item))

    @override
    def size_hint(self) -> Optional[int]:
        return self._remaining


class _DictAccess(MapAccess):
    def __init__(self, entries: dict[Any, Any]) -> None:
        self._entries = iter(entries.items())
        self._value: Any = MISSING

    @override
    def next_key(self, decoder: Decoder[T], /) -> Union[T, _Missing]:
        entry = next(self._entries, None)
        if entry is None:
            return MISSING
        key, self._value = entry
        return decoder(ScriptedDeserializer(key))

    @override
    def next_value(self, decoder: Decoder[T], /) -> T:
        assert self._value is not MISSING
        value, self._value = self._value, MISSING
        return decoder(ScriptedDeserializer(value))


class _VariantAccess(EnumAccess, VariantAccess):
    def __init__(self, variant: str, payload: Any) -> None:
        self._variant = variant
        self._payload = payload

    @override
    def variant(self, decoder: Decoder[T], /) -> tuple[T, VariantAccess]:
        return decoder(ScriptedDeserializer(self._variant)), self

    @override
    def unit_variant(self) -> None:
        if self._payload is not MISSING:
            raise DeError('expected a unit variant')

    @override
    def newtype_variant(self, decoder: Decoder[T], /) -> T:
        return decoder(ScriptedDeserializer(self._payload))

    @override
    def tuple_variant(self, length: int, visitor: Visitor[T], /) -> T:
        return ScriptedDeserializer(self._payload).deserialize_seq(visitor)

    @override
    def struct_variant(self, fields: Sequence[str], visitor: Visitor[T], /) -> T:
        return ScriptedDeserializer(self._payload).deserialize_map(visitor)


class ScriptedDeserializer(Deserializer):
    """Reads the trees written by `RecordingSerializer`, every request is answered with what the tree holds."""

    def __init__(self, value: Any) -> None:
        self.value = value

    @override
    def deserialize_any(self, visitor: Visitor[T], /) -> T:
        value = self.value
        if value is None:
            return visitor.visit_unit()
        if isinstance(value, bool):
            return visitor.visit_bool(value)
        if isinstance(value, int):
            return visitor.visit_int(value)
        if isinstance(value, float):
            return visitor.visit_float(value)
        if isinstance(value, str):
            return visitor.visit_str(value)
        if isinstance(value, bytes):
            return visitor.visit_bytes(value)
        if isinstance(value, list):
            return visitor.visit_seq(_ListAccess(value))
        if isinstance(value, dict):
            return visitor.visit_map(_DictAccess(value))
        raise DeError(f'unexpected {type(value).__name__} in script')

    @override
    def deserialize_bool(self, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_int(self, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_float(self, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_char(self, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_str(self, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_bytes(self, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_option(self, visitor: Visitor[T], /) -> T:
        if self.value is None:
            return visitor.visit_none()
        return visitor.visit_some(self)

    @override
    def deserialize_unit(self, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_unit_struct(self, name: str, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_newtype_struct(self, name: str, visitor: Visitor[T], /) -> T:
        return visitor.visit_newtype_struct(self)

    @override
    def deserialize_seq(self, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_tuple(self, length: int, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_tuple_struct(self, name: str, length: int, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_map(self, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_struct(self, name: str, fields: Sequence[str], visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_enum(self, name: str, variants: Sequence[str], visitor: Visitor[T], /) -> T:
        value = self.value
        if isinstance(value, str):
            return visitor.visit_enum(_VariantAccess(value, MISSING))
        if isinstance(value, dict) and len(value) == 1:
            (variant, payload), = value.items()
            return visitor.visit_enum(_VariantAccess(variant, payload))
        return self.deserialize_any(visitor)

    @override
    def deserialize_identifier(self, visitor: Visitor[T], /) -> T:
        return self.deserialize_any(visitor)

    @override
    def deserialize_ignored_any(self, visitor: Visitor[T], /) -> T:
        return visitor.visit_unit()
