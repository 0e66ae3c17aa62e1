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
Options accepted by `@serde`, `SerdeEnum.variant` and `field`.

They are validated when the decorator runs, so a typo in an option fails at import time of the decorated class, not
at the first (de)serialization.
"""

import re
from enum import StrEnum
from typing import Optional

from pydantic import field_validator

from serde_typename.utils.pydantic import BaseModel

_WORD_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


class RenameRule(StrEnum):
    """Case conventions for `rename_all`.

    Variant names are assumed to be written in PascalCase and field names in snake_case, which is what the conversions
    start from:

    >>> RenameRule.SNAKE_CASE.apply_to_variant('HoldsData')
    'holds_data'
    >>> RenameRule.SCREAMING_KEBAB_CASE.apply_to_variant('HoldsData')
    'HOLDS-DATA'
    >>> RenameRule.CAMEL_CASE.apply_to_variant('HoldsData')
    'holdsData'
    >>> RenameRule.CAMEL_CASE.apply_to_field('some_field')
    'someField'
    >>> RenameRule.PASCAL_CASE.apply_to_field('some_field')
    'SomeField'
    >>> RenameRule.KEBAB_CASE.apply_to_field('some_field')
    'some-field'
    """

    LOWERCASE = 'lowercase'
    UPPERCASE = 'UPPERCASE'
    PASCAL_CASE = 'PascalCase'
    CAMEL_CASE = 'camelCase'
    SNAKE_CASE = 'snake_case'
    SCREAMING_SNAKE_CASE = 'SCREAMING_SNAKE_CASE'
    KEBAB_CASE = 'kebab-case'
    SCREAMING_KEBAB_CASE = 'SCREAMING-KEBAB-CASE'

    def apply_to_variant(self, variant: str) -> str:
        match self:
            case RenameRule.PASCAL_CASE:
                return variant
            case RenameRule.LOWERCASE:
                return variant.lower()
            case RenameRule.UPPERCASE:
                return variant.upper()
            case RenameRule.CAMEL_CASE:
                return variant[:1].lower() + variant[1:]
            case RenameRule.SNAKE_CASE:
                return _WORD_BOUNDARY.sub('_', variant).lower()
            case RenameRule.SCREAMING_SNAKE_CASE:
                return _WORD_BOUNDARY.sub('_', variant).upper()
            case RenameRule.KEBAB_CASE:
                return _WORD_BOUNDARY.sub('-', variant).lower()
            case RenameRule.SCREAMING_KEBAB_CASE:
                return _WORD_BOUNDARY.sub('-', variant).upper()
        raise NotImplementedError(self)

    def apply_to_field(self, field: str) -> str:
        match self:
            case RenameRule.LOWERCASE | RenameRule.SNAKE_CASE:
                return field
            case RenameRule.UPPERCASE | RenameRule.SCREAMING_SNAKE_CASE:
                return field.upper()
            case RenameRule.PASCAL_CASE:
                return ''.join(word.capitalize() for word in field.split('_'))
            case RenameRule.CAMEL_CASE:
                pascal = RenameRule.PASCAL_CASE.apply_to_field(field)
                return pascal[:1].lower() + pascal[1:]
            case RenameRule.KEBAB_CASE:
                return field.replace('_', '-')
            case RenameRule.SCREAMING_KEBAB_CASE:
                return field.replace('_', '-').upper()
        raise NotImplementedError(self)


class Shape(StrEnum):
    """How a dataclass (or a `SerdeEnum` variant) declares itself to a serializer."""

    UNIT = 'unit'
    NEWTYPE = 'newtype'
    TUPLE = 'tuple'
    STRUCT = 'struct'


class FieldOptions(BaseModel):
    rename: Optional[str] = None

    @field_validator('rename')
    @classmethod
    def check_rename(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value:
            raise ValueError('rename must not be empty')
        return value


class SerdeOptions(FieldOptions):
    """Options of a container: a struct, an enum or a single `SerdeEnum` variant."""

    rename_all: Optional[RenameRule] = None
    shape: Optional[Shape] = None

    def resolve_shape(self, field_count: int) -> Shape:
        """ Pick the shape for a dataclass with the given number of fields.

        >>> SerdeOptions().resolve_shape(0)
        <Shape.UNIT: 'unit'>
        >>> SerdeOptions().resolve_shape(2)
        <Shape.STRUCT: 'struct'>
        >>> SerdeOptions(shape='tuple').resolve_shape(1)
        <Shape.NEWTYPE: 'newtype'>
        >>> SerdeOptions(shape='unit').resolve_shape(1)
        Traceback (most recent call last):
        ...
        TypeError: shape 'unit' needs no fields, got 1
        """
        if self.shape is None:
            return Shape.UNIT if field_count == 0 else Shape.STRUCT
        if self.shape is Shape.TUPLE and field_count == 1:
            return Shape.NEWTYPE
        if self.shape is Shape.UNIT and field_count != 0:
            raise TypeError(f"shape 'unit' needs no fields, got {field_count}")
        if self.shape is Shape.NEWTYPE and field_count != 1:
            raise TypeError(f"shape 'newtype' needs exactly one field, got {field_count}")
        return self.shape
