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

from collections.abc import Sequence
from typing import Any

from typing_extensions import override

from serde_typename.serde.de import Deserializer, Unexpected, Visitor
from serde_typename.serde.exceptions import InvalidValueError, UnknownFieldError, UnknownVariantError


class IdentifierVisitor(Visitor[int]):
    """ Resolves a field or variant identifier, given either by name or by index, to its index.
    """

    def __init__(self, names: Sequence[str], *, kind: str) -> None:
        assert kind in ('field', 'variant')
        self._names = tuple(names)
        self._kind = kind

    @override
    def expecting(self) -> str:
        return f'{self._kind} identifier'

    @override
    def visit_int(self, value: int, /) -> int:
        if 0 <= value < len(self._names):
            return value
        raise InvalidValueError(Unexpected.integer(value), f'{self._kind} index 0 <= i < {len(self._names)}')

    @override
    def visit_str(self, value: str, /) -> int:
        try:
            return self._names.index(value)
        except ValueError:
            if self._kind == 'variant':
                raise UnknownVariantError(value, self._names) from None
            raise UnknownFieldError(value, self._names) from None

    @override
    def visit_bytes(self, value: bytes, /) -> int:
        try:
            text = bytes(value).decode('utf-8')
        except UnicodeDecodeError:
            raise InvalidValueError(Unexpected.BYTES, self.expecting()) from None
        return self.visit_str(text)

    def decode(self, deserializer: Deserializer, /) -> int:
        """ Use as a `Decoder`.
        """
        return deserializer.deserialize_identifier(self)


def decode_identifier(names: Sequence[str], *, kind: str) -> Any:
    """ Build a `Decoder` that returns the index of the identifier read from a deserializer.
    """
    return IdentifierVisitor(names, kind=kind).decode
