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
Errors raised by derived (de)serialization logic.

Formats are free to raise their own exceptions from their `Serializer`/`Deserializer` implementations, the classes in
this module are the ones raised by the framework itself, for example when a visitor is handed a value it can't accept.
Format entry-points are expected to translate them into their own error types.
"""

from collections.abc import Sequence


class SerdeError(Exception):
    """Base class for all framework errors."""
    pass


class SerError(SerdeError):
    """Raised by derived serialization logic."""
    pass


class DeError(SerdeError):
    """Raised by derived deserialization logic."""
    pass


class InvalidTypeError(DeError):
    """The deserializer produced a shape the visitor does not accept."""

    def __init__(self, unexpected: str, expected: str) -> None:
        self.unexpected = unexpected
        self.expected = expected
        super().__init__(f'invalid type: {unexpected}, expected {expected}')


class InvalidValueError(DeError):
    """The shape is right but the value itself is not acceptable."""

    def __init__(self, unexpected: str, expected: str) -> None:
        self.unexpected = unexpected
        self.expected = expected
        super().__init__(f'invalid value: {unexpected}, expected {expected}')


class InvalidLengthError(DeError):
    def __init__(self, length: int, expected: str) -> None:
        self.length = length
        self.expected = expected
        super().__init__(f'invalid length {length}, expected {expected}')


class UnknownVariantError(DeError):
    def __init__(self, variant: str, expected: Sequence[str]) -> None:
        self.variant = variant
        self.expected = tuple(expected)
        super().__init__(f'unknown variant `{variant}`, expected {_one_of(self.expected)}')


class UnknownFieldError(DeError):
    def __init__(self, field: str, expected: Sequence[str]) -> None:
        self.field = field
        self.expected = tuple(expected)
        expected_str = _one_of(self.expected, empty='there are no fields')
        super().__init__(f'unknown field `{field}`, expected {expected_str}')


class MissingFieldError(DeError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f'missing field `{field}`')


class DuplicateFieldError(DeError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f'duplicate field `{field}`')


def _one_of(names: tuple[str, ...], empty: str = 'there are no variants') -> str:
    if not names:
        return empty
    if len(names) == 1:
        return f'`{names[0]}`'
    return 'one of ' + ', '.join(f'`{name}`' for name in names)
