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
Declaring how user types map onto serialization shapes.

Plain dataclasses and `enum.Enum` subclasses opt in with the `@serde` class decorator. Tagged unions, whose variants
carry data, are declared as a `SerdeEnum` subclass with one dataclass per variant:

>>> from dataclasses import dataclass
>>> @serde(rename_all='snake_case')
... class Figure(SerdeEnum):
...     pass
>>> @Figure.variant
... @dataclass
... class Circle(Figure):
...     radius: float
>>> @Figure.variant(rename='sq')
... @dataclass
... class Square(Figure):
...     side: float
>>> Figure.Circle is Circle
True
>>> [cls.__name__ for cls in Figure.__serde_variants__]
['Circle', 'Square']
"""

import dataclasses
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, TypeVar, Union, overload

from structlog import get_logger

from serde_typename.serde.options import FieldOptions, RenameRule, SerdeOptions, Shape
from serde_typename.utils.typing import is_subclass

logger = get_logger()

C = TypeVar('C', bound=type)

SERDE_OPTIONS_ATTR = '__serde__'
SERDE_TYPE_ATTR = '__serde_type__'
FIELD_OPTIONS_KEY = 'serde'


class SerdeEnum:
    """ Base class of tagged unions.

    Direct subclasses are enums, their variants are dataclasses that subclass the enum and are registered with
    `Enum.variant`. The registration order gives each variant its index.
    """

    __serde_variants__: ClassVar[list[type['SerdeEnum']]]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if SerdeEnum in cls.__bases__:
            cls.__serde_variants__ = []

    @overload
    @classmethod
    def variant(cls, class_: C, /) -> C:
        ...

    @overload
    @classmethod
    def variant(
        cls,
        *,
        rename: Optional[str] = None,
        rename_all: Union[RenameRule, str, None] = None,
        shape: Union[Shape, str, None] = None,
    ) -> Callable[[C], C]:
        ...

    @classmethod
    def variant(
        cls,
        class_: Optional[C] = None,
        /,
        *,
        rename: Optional[str] = None,
        rename_all: Union[RenameRule, str, None] = None,
        shape: Union[Shape, str, None] = None,
    ) -> Union[C, Callable[[C], C]]:
        """ Register a dataclass as the next variant of this enum.

        `rename` replaces the variant's name, `rename_all` applies to the variant's fields and `shape` forces how
        the variant is declared to serializers.
        """
        options = SerdeOptions(rename=rename, rename_all=rename_all, shape=shape)

        def wrap(class_: C) -> C:
            if SerdeEnum not in cls.__bases__:
                raise TypeError(f'{cls.__qualname__} is not an enum, variants must be registered on the enum class')
            if not is_subclass(class_, cls) or class_ is cls:
                raise TypeError(f'variant {class_.__qualname__} must subclass {cls.__qualname__}')
            if not dataclasses.is_dataclass(class_):
                raise TypeError(f'variant {class_.__qualname__} must be a dataclass')
            if class_ in cls.__serde_variants__:
                raise TypeError(f'variant {class_.__qualname__} is already registered')
            if class_.__name__ in vars(cls):
                raise TypeError(f'{cls.__qualname__} already has an attribute named {class_.__name__}')
            # the variant's shape is checked against its fields when its descriptor is built
            setattr(class_, SERDE_OPTIONS_ATTR, options)
            cls.__serde_variants__.append(class_)
            setattr(cls, class_.__name__, class_)
            logger.debug('variant registered', enum=cls.__qualname__, variant=class_.__qualname__,
                         index=len(cls.__serde_variants__) - 1)
            return class_

        if class_ is None:
            return wrap
        return wrap(class_)


@overload
def serde(class_: C, /) -> C:
    ...


@overload
def serde(
    *,
    rename: Optional[str] = None,
    rename_all: Union[RenameRule, str, None] = None,
    shape: Union[Shape, str, None] = None,
) -> Callable[[C], C]:
    ...


def serde(
    class_: Optional[C] = None,
    /,
    *,
    rename: Optional[str] = None,
    rename_all: Union[RenameRule, str, None] = None,
    shape: Union[Shape, str, None] = None,
) -> Union[C, Callable[[C], C]]:
    """ Make a dataclass, an `enum.Enum` or a `SerdeEnum` serializable.

    - `rename`: the name reported to serializers instead of the class name
    - `rename_all`: rule applied to field names (dataclasses) or variant names (enums)
    - `shape`: force the shape of a dataclass, by default it is a unit struct without fields and a struct otherwise

    Invalid options raise `pydantic.ValidationError` right away.
    """
    options = SerdeOptions(rename=rename, rename_all=rename_all, shape=shape)

    def wrap(class_: C) -> C:
        if is_subclass(class_, Enum) or is_subclass(class_, SerdeEnum):
            if options.shape is not None:
                raise TypeError('shape only applies to dataclasses and enum variants')
            if is_subclass(class_, SerdeEnum) and SerdeEnum not in class_.__bases__:
                raise TypeError(f'{class_.__qualname__} is a variant, use {class_.__bases__[0].__qualname__}.variant')
        elif not dataclasses.is_dataclass(class_):
            raise TypeError(f'{class_!r} is not a dataclass, an enum.Enum or a SerdeEnum')
        setattr(class_, SERDE_OPTIONS_ATTR, options)
        return class_

    if class_ is None:
        return wrap
    return wrap(class_)


def field(*, rename: Optional[str] = None, **kwargs: Any) -> Any:
    """ Same as `dataclasses.field`, with the serialization options of the field.
    """
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[FIELD_OPTIONS_KEY] = FieldOptions(rename=rename)
    return dataclasses.field(metadata=metadata, **kwargs)


def get_options(class_: type) -> Optional[SerdeOptions]:
    """ The options a class was declared with, `None` if it was not declared serializable.

    Options are not inherited, a subclass of a serializable class must be declared on its own.
    """
    options = vars(class_).get(SERDE_OPTIONS_ATTR)
    assert options is None or isinstance(options, SerdeOptions)
    return options


def get_field_options(field_: dataclasses.Field) -> FieldOptions:
    options = field_.metadata.get(FIELD_OPTIONS_KEY)
    if options is None:
        return FieldOptions()
    assert isinstance(options, FieldOptions)
    return options
