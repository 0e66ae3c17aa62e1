import datetime
from typing import Optional

from serde_typename import NameSerializer, UnsupportedKindError, to_str
from tests import unittest
from tests.models import (
    Color,
    Empty,
    Event,
    FieldStruct,
    Foo,
    HoldsData,
    HoldsDataAsStruct,
    HoldsDataAsTuple,
    Interval,
    Message,
    Moved,
    NewtypeStruct,
    Permission,
    Renamed,
    Stamped,
    Status,
    TupleStruct,
    Unchecked,
    UnitStruct,
    UnitVariant,
)


class ToStrTestCase(unittest.TestCase):
    def test_unit_variant(self) -> None:
        self.assertEqual(to_str(UnitVariant()), 'UnitVariant')
        self.assertEqual(to_str(Message.UnitVariant()), 'UnitVariant')

    def test_renamed_variant(self) -> None:
        self.assertEqual(to_str(Renamed()), 'RENAMED')

    def test_newtype_variant(self) -> None:
        self.assertEqual(to_str(HoldsData(8)), 'HoldsData')

    def test_tuple_variant(self) -> None:
        self.assertEqual(to_str(HoldsDataAsTuple(1, 2)), 'HoldsDataAsTuple')

    def test_struct_variant(self) -> None:
        self.assertEqual(to_str(HoldsDataAsStruct(field=3)), 'HoldsDataAsStruct')
        self.assertEqual(to_str(Moved(from_x=1, to_x=2)), 'Moved')

    def test_zero_field_struct_variant(self) -> None:
        self.assertEqual(to_str(Empty()), 'Empty')

    def test_explicit_enum_type(self) -> None:
        self.assertEqual(to_str(HoldsData(8), Message), 'HoldsData')
        self.assertEqual(to_str(Empty(), Event), 'Empty')

    def test_unit_struct(self) -> None:
        self.assertEqual(to_str(UnitStruct()), 'UnitStruct')

    def test_renamed_unit_struct(self) -> None:
        self.assertEqual(to_str(Foo()), 'BAR')

    def test_newtype_struct(self) -> None:
        self.assertEqual(to_str(NewtypeStruct(5)), 'NewtypeStruct')

    def test_tuple_struct(self) -> None:
        self.assertEqual(to_str(TupleStruct(1, 2)), 'TupleStruct')

    def test_field_struct(self) -> None:
        self.assertEqual(to_str(FieldStruct(value=1, name='a')), 'FieldStruct')

    def test_fields_are_never_encoded(self) -> None:
        # encoding the field would fail the int check
        value = Unchecked(value='not an int')  # type: ignore[arg-type]
        self.assertEqual(to_str(value), 'Unchecked')

    def test_field_types_are_never_resolved(self) -> None:
        now = datetime.datetime(2026, 1, 2, 3, 4, 5)
        self.assertEqual(to_str(Stamped(now)), 'Stamped')
        self.assertEqual(to_str(Interval(now, now)), 'Interval')

    def test_python_enum(self) -> None:
        self.assertEqual(to_str(Color.Red), 'red')
        self.assertEqual(to_str(Color.DarkBlue), 'dark_blue')
        self.assertEqual(to_str(Status.INACTIVE), 'INACTIVE')

    def test_flag_members(self) -> None:
        self.assertEqual(to_str(Permission.READ), 'READ')
        self.assertEqual(to_str(Permission.WRITE), 'WRITE')
        # a combination of flags is not a member and has no name of its own
        self.assertRaises(TypeError, to_str, Permission.READ | Permission.WRITE)
        self.assertRaises(TypeError, to_str, Permission(0))

    def test_nameless_shapes(self) -> None:
        cases = [
            (True, 'bool'),
            (1, 'int'),
            (1.5, 'float'),
            ('UnitVariant', 'str'),
            (b'UnitVariant', 'bytes'),
            (None, 'unit'),
            ([UnitVariant()], 'seq'),
            ({1, 2}, 'seq'),
            (frozenset(), 'seq'),
            ((1, 'a'), 'tuple'),
            ({'a': 1}, 'map'),
        ]
        for value, kind in cases:
            exc = self.assertRaisesMessage(UnsupportedKindError, f'serialization: unsupported operation: {kind}',
                                           to_str, value)
            self.assertEqual(exc.kind, kind)

    def test_optional(self) -> None:
        self.assertRaisesMessage(UnsupportedKindError, 'serialization: unsupported operation: some',
                                 to_str, UnitVariant(), Optional[Message])
        self.assertRaisesMessage(UnsupportedKindError, 'serialization: unsupported operation: none',
                                 to_str, None, Optional[Message])

    def test_unsupported_types(self) -> None:
        self.assertRaises(TypeError, to_str, object())
        self.assertRaises(TypeError, to_str, 1, int | str)

    def test_value_not_matching_type(self) -> None:
        self.assertRaises(TypeError, to_str, UnitStruct(), Message)
        self.assertRaises(TypeError, to_str, Renamed(), UnitVariant)

    def test_serializer_used_directly(self) -> None:
        serializer = NameSerializer()
        self.assertEqual(serializer.serialize_unit_variant('Message', 0, 'UnitVariant'), 'UnitVariant')
        self.assertEqual(serializer.serialize_newtype_struct('Wrapper', object(), None), 'Wrapper')
        state = serializer.serialize_struct('Point', 2)
        state.serialize_field('x', 1, None)
        state.skip_field('y')
        self.assertEqual(state.end(), 'Point')
        state = serializer.serialize_tuple_variant('Message', 3, 'HoldsDataAsTuple', 2)
        state.serialize_element(1, None)
        self.assertEqual(state.end(), 'HoldsDataAsTuple')
