from typing import Optional
from unittest.mock import patch

import pytest
from structlog.testing import capture_logs

from serde_typename import (
    CustomError,
    InvalidTypeError,
    InvalidVariantNameError,
    NameDeserializer,
    TrailingCharactersError,
    UnsupportedKindError,
    from_str,
    to_str,
)
from serde_typename.serde import InvalidValueError, UnknownVariantError, Visitor
from serde_typename.serde.types import UnitSerdeType
from tests import unittest
from tests.models import (
    Color,
    Event,
    FieldStruct,
    Foo,
    HoldsData,
    HoldsDataAsStruct,
    HoldsDataAsTuple,
    Interval,
    Message,
    NewtypeStruct,
    Renamed,
    Stamped,
    Status,
    TupleStruct,
    UnitStruct,
    UnitVariant,
)

MESSAGE_VARIANTS = ['UnitVariant', 'RENAMED', 'HoldsData', 'HoldsDataAsTuple', 'HoldsDataAsStruct']


class FromStrTestCase(unittest.TestCase):
    def test_unit_variant(self) -> None:
        value = from_str('UnitVariant', Message)
        self.assertIsInstance(value, UnitVariant)
        self.assertEqual(value, Message.UnitVariant())

    def test_renamed_variant(self) -> None:
        self.assertEqual(from_str('RENAMED', Message), Renamed())
        exc = self.assertRaises(InvalidVariantNameError, from_str, 'Renamed', Message)
        self.assertEqual(exc.received, 'Renamed')
        self.assertEqual(exc.allowed, MESSAGE_VARIANTS)

    def test_unknown_variant_message(self) -> None:
        self.assertRaisesMessage(
            InvalidVariantNameError,
            'deserialization: invalid variant: Nope is not a valid variant name '
            '(["UnitVariant", "RENAMED", "HoldsData", "HoldsDataAsTuple", "HoldsDataAsStruct"])',
            from_str, 'Nope', Message,
        )

    def test_variant_case_sensitive(self) -> None:
        for name in ['unitvariant', 'UNITVARIANT', 'unitVariant', 'renamed', 'Renamed']:
            self.assertRaises(InvalidVariantNameError, from_str, name, Message)

    def test_variant_space_sensitive(self) -> None:
        for name in [' UnitVariant', 'UnitVariant ', 'Unit Variant', '\tUnitVariant', 'UnitVariant\n']:
            self.assertRaises(InvalidVariantNameError, from_str, name, Message)

    def test_variants_with_data(self) -> None:
        cases = [
            ('HoldsData', 'newtype variant'),
            ('HoldsDataAsTuple', 'tuple variant'),
            ('HoldsDataAsStruct', 'struct variant'),
        ]
        for name, kind in cases:
            self.assertRaisesMessage(UnsupportedKindError, f'deserialization: unsupported operation: {kind}',
                                     from_str, name, Message)

    def test_zero_field_struct_variant(self) -> None:
        self.assertRaisesMessage(UnsupportedKindError, 'deserialization: unsupported operation: struct variant',
                                 from_str, 'Empty', Event)

    def test_single_variant_target(self) -> None:
        self.assertEqual(from_str('UnitVariant', UnitVariant), UnitVariant())
        exc = self.assertRaisesMessage(
            CustomError,
            'deserialization: invalid value: variant `RENAMED`, expected variant UnitVariant',
            from_str, 'RENAMED', UnitVariant,
        )
        self.assertIsInstance(exc.__cause__, InvalidValueError)
        self.assertRaises(UnsupportedKindError, from_str, 'HoldsData', HoldsData)

    def test_unit_struct(self) -> None:
        self.assertEqual(from_str('UnitStruct', UnitStruct), UnitStruct())

    def test_unit_struct_case_and_space_sensitive(self) -> None:
        self.assertRaisesMessage(
            InvalidTypeError,
            'deserialization: invalid type: string "unitstruct", expected unit struct UnitStruct',
            from_str, 'unitstruct', UnitStruct,
        )
        for name in ['UNITSTRUCT', ' UnitStruct', 'UnitStruct ', 'Unit Struct']:
            self.assertRaises(InvalidTypeError, from_str, name, UnitStruct)

    def test_renamed_unit_struct(self) -> None:
        self.assertEqual(from_str('BAR', Foo), Foo())
        for name in ['Foo', 'bAR', 'bar', 'BAR ']:
            self.assertRaises(InvalidTypeError, from_str, name, Foo)

    def test_structs_with_data(self) -> None:
        cases = [
            (NewtypeStruct, 'newtype struct'),
            (TupleStruct, 'tuple struct'),
            (FieldStruct, 'struct'),
            (Stamped, 'struct'),
            (Interval, 'tuple struct'),
        ]
        for type_, kind in cases:
            self.assertRaisesMessage(UnsupportedKindError, f'deserialization: unsupported operation: {kind}',
                                     from_str, type_.__name__, type_)

    def test_nameless_types(self) -> None:
        cases = [
            (bool, 'bool'),
            (int, 'int'),
            (float, 'float'),
            (str, 'str'),
            (bytes, 'bytes'),
            (Optional[Message], 'option'),
            (list[Message], 'seq'),
            (tuple[int, int], 'tuple'),
            (dict[str, int], 'map'),
        ]
        for type_, kind in cases:
            self.assertRaisesMessage(UnsupportedKindError, f'deserialization: unsupported operation: {kind}',
                                     from_str, 'UnitVariant', type_)

    def test_round_trip_law(self) -> None:
        for value in [UnitVariant(), Renamed(), UnitStruct(), Foo(), Color.DarkBlue, Status.ACTIVE]:
            self.assertEqual(from_str(to_str(value), type(value)), value)
        with_data = [HoldsData(0), HoldsDataAsTuple(0, 0), HoldsDataAsStruct(0), TupleStruct(0, 0), FieldStruct(0, '')]
        for value in with_data:
            self.assertRaises(UnsupportedKindError, from_str, to_str(value), type(value))

    def test_unit(self) -> None:
        self.assertIsNone(from_str('anything', None))

    def test_python_enum(self) -> None:
        self.assertIs(from_str('red', Color), Color.Red)
        self.assertIs(from_str('dark_blue', Color), Color.DarkBlue)
        self.assertIs(from_str('ACTIVE', Status), Status.ACTIVE)
        exc = self.assertRaises(InvalidVariantNameError, from_str, 'DarkBlue', Color)
        self.assertEqual(exc.allowed, ['red', 'dark_blue'])
        self.assertRaises(InvalidVariantNameError, from_str, 'active', Status)

    def test_error_keeps_cause(self) -> None:
        exc = self.assertRaises(InvalidVariantNameError, from_str, 'Nope', Message)
        self.assertIsInstance(exc.__cause__, UnknownVariantError)

    def test_name_left_unread(self) -> None:
        with patch.object(UnitSerdeType, '_deserialize', return_value=None):
            self.assertRaisesMessage(
                TrailingCharactersError,
                'deserialization: trailing characters: input ends with trailing characters',
                from_str, 'UnitVariant', None,
            )

    def test_failure_is_logged(self) -> None:
        with capture_logs() as logs:
            self.assertRaises(InvalidVariantNameError, from_str, 'Nope', Message)
        events = [log for log in logs if log['event'] == 'name reconstruction failed']
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0]['log_level'], 'debug')
        self.assertEqual(events[0]['name'], 'Nope')


class _UnitVisitor(Visitor[str]):
    def visit_unit(self) -> str:
        return 'unit'


def test_name_is_read_once() -> None:
    deserializer = NameDeserializer('UnitVariant')
    assert not deserializer.is_empty()
    assert deserializer.deserialize_unit(_UnitVisitor()) == 'unit'
    assert deserializer.is_empty()
    with pytest.raises(CustomError, match='input already consumed'):
        deserializer.deserialize_unit(_UnitVisitor())


def test_finalize() -> None:
    deserializer = NameDeserializer('UnitVariant')
    with pytest.raises(TrailingCharactersError):
        deserializer.finalize()
    deserializer.deserialize_unit(_UnitVisitor())
    deserializer.finalize()


def test_identifier_outside_enum() -> None:
    deserializer = NameDeserializer('UnitVariant')
    with pytest.raises(UnsupportedKindError, match='unsupported operation: identifier'):
        deserializer.deserialize_identifier(Visitor())
    # the name was not consumed
    assert not deserializer.is_empty()


def test_unit_variant_access() -> None:
    deserializer = NameDeserializer('UnitVariant')
    assert deserializer.unit_variant() is None
    with pytest.raises(UnsupportedKindError, match='newtype variant'):
        deserializer.newtype_variant(lambda de: None)
    with pytest.raises(UnsupportedKindError, match='tuple variant'):
        deserializer.tuple_variant(2, Visitor())
    with pytest.raises(UnsupportedKindError, match='struct variant'):
        deserializer.struct_variant(['a'], Visitor())


@pytest.mark.parametrize('method', ['deserialize_any', 'deserialize_ignored_any', 'deserialize_seq', 'deserialize_map'])
def test_unsupported_requests(method: str) -> None:
    deserializer = NameDeserializer('UnitVariant')
    with pytest.raises(UnsupportedKindError):
        getattr(deserializer, method)(Visitor())
