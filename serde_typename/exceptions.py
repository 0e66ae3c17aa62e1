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
Errors raised by `to_str` and `from_str`.

Every error knows which direction it happened in and renders as `"<direction>: <message>"`:

>>> str(UnsupportedKindError(Direction.SERIALIZATION, 'bool'))
'serialization: unsupported operation: bool'
>>> str(InvalidVariantNameError('Foo', ['A', 'B']))
'deserialization: invalid variant: Foo is not a valid variant name (["A", "B"])'
"""

import json
from collections.abc import Sequence
from enum import StrEnum


class Direction(StrEnum):
    SERIALIZATION = 'serialization'
    DESERIALIZATION = 'deserialization'


class TypenameError(Exception):
    """Base class of every error raised by this package."""

    def __init__(self, direction: Direction, message: str) -> None:
        self.direction = direction
        self.message = message
        super().__init__(f'{direction}: {message}')


class UnsupportedKindError(TypenameError):
    """The value or the requested type has a shape that carries no name, or needs more than a name."""

    def __init__(self, direction: Direction, kind: str) -> None:
        self.kind = kind
        super().__init__(direction, f'unsupported operation: {kind}')


class InvalidTypeError(TypenameError):
    """The target type expected something other than a bare name, e.g. a unit struct under a different name."""

    def __init__(self, unexpected: str, expected: str) -> None:
        self.unexpected = unexpected
        self.expected = expected
        super().__init__(Direction.DESERIALIZATION, f'invalid type: {unexpected}, expected {expected}')


class InvalidVariantNameError(TypenameError):
    """The name is not one of the target enum's variant names."""

    def __init__(self, received: str, allowed: Sequence[str]) -> None:
        self.received = received
        self.allowed = list(allowed)
        super().__init__(
            Direction.DESERIALIZATION,
            f'invalid variant: {received} is not a valid variant name ({json.dumps(self.allowed)})',
        )


class TrailingCharactersError(TypenameError):
    """The target type finished deserializing without reading the name."""

    def __init__(self) -> None:
        super().__init__(Direction.DESERIALIZATION, 'trailing characters: input ends with trailing characters')


class CustomError(TypenameError):
    """Any other error reported by a type's (de)serialization logic."""
