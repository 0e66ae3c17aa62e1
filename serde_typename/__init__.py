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
Get the name a value is serialized under, or rebuild a value from such a name.

>>> from enum import Enum
>>> from serde_typename.serde import serde
>>> @serde
... class Color(Enum):
...     RED = 1
...     DARK_BLUE = 2
>>> to_str(Color.DARK_BLUE)
'DARK_BLUE'
>>> from_str('RED', Color)
<Color.RED: 1>
>>> try:
...     from_str('GREEN', Color)
... except InvalidVariantNameError as e:
...     print(e.allowed)
['RED', 'DARK_BLUE']
"""

from typing import Any, Optional, TypeVar

from structlog import get_logger

from serde_typename import serde as _serde
from serde_typename.de import NameDeserializer
from serde_typename.exceptions import (
    CustomError,
    Direction,
    InvalidTypeError,
    InvalidVariantNameError,
    TrailingCharactersError,
    TypenameError,
    UnsupportedKindError,
)
from serde_typename.ser import NameSerializer

__version__ = '0.1.0'

__all__ = [
    'CustomError',
    'Direction',
    'InvalidTypeError',
    'InvalidVariantNameError',
    'NameDeserializer',
    'NameSerializer',
    'TrailingCharactersError',
    'TypenameError',
    'UnsupportedKindError',
    'from_str',
    'to_str',
]

logger = get_logger()

T = TypeVar('T')


def to_str(value: Any, type_: Optional[Any] = None) -> str:
    """ Return the name `value` is serialized under: the variant name for enums, the type name for structs.

    The type is inferred from the value unless `type_` is given. Values that have no name, like numbers or lists,
    raise `UnsupportedKindError`.
    """
    try:
        return _serde.serialize(NameSerializer(), value, type_)
    except _serde.SerdeError as e:
        logger.debug('name extraction failed', type=type(value).__qualname__, error=str(e))
        raise _translate(e, Direction.SERIALIZATION) from e


def from_str(name: str, type_: type[T]) -> T:
    """ Rebuild a value of `type_` from the name it is serialized under.

    Only unit variants and unit structs can be rebuilt, because the name holds no data. The name must match exactly,
    including case and whitespace.
    """
    deserializer = NameDeserializer(name)
    try:
        value = _serde.deserialize(deserializer, type_)
    except _serde.SerdeError as e:
        logger.debug('name reconstruction failed', name=name, type=repr(type_), error=str(e))
        raise _translate(e, Direction.DESERIALIZATION) from e
    deserializer.finalize()
    return value


def _translate(error: _serde.SerdeError, direction: Direction) -> TypenameError:
    match error:
        case _serde.UnknownVariantError():
            return InvalidVariantNameError(error.variant, error.expected)
        case _serde.InvalidTypeError():
            return InvalidTypeError(error.unexpected, error.expected)
        case _:
            return CustomError(direction, str(error))
