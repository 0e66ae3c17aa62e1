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

import typing
from types import GenericAlias, UnionType
from typing import Any, Union


def get_origin(type_: Any) -> Any:
    """ Same as `typing.get_origin` but `Optional[T]`/`Union[A, B]` are reported as `types.UnionType`.

    >>> get_origin(list[int])
    <class 'list'>
    >>> get_origin(int) is None
    True
    >>> get_origin(Union[int, str]) is UnionType
    True
    >>> get_origin(int | None) is UnionType
    True
    """
    origin = typing.get_origin(type_)
    if origin is Union:
        return UnionType
    return origin


def get_args(type_: Any) -> tuple[Any, ...]:
    """ Same as `typing.get_args`, exists so both helpers are imported from the same place.

    >>> get_args(dict[str, int])
    (<class 'str'>, <class 'int'>)
    >>> get_args(int)
    ()
    """
    return typing.get_args(type_)


def is_subclass(type_: Any, class_: type) -> bool:
    """ Same as `issubclass` but returns `False` instead of raising when `type_` is not a class.

    >>> is_subclass(bool, int)
    True
    >>> is_subclass(list[int], list)
    False
    >>> is_subclass(None, object)
    False
    """
    return isinstance(type_, type) and not isinstance(type_, GenericAlias) and issubclass(type_, class_)
