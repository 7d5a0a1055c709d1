# -*- coding: utf-8 -*-
"""
Transformer Options - Keyword options declared with typing.Annotated.

A ``Tunable`` class declares each option as a class-body annotation with a
default. ``Range`` bounds a numeric option and ``Desc`` documents it.
Enum-typed options accept either a member or its value, so
``interpolation='linear'`` resolves to ``TiePointInterpolation.LINEAR``::

    class RasterTransformer(Tunable):
        interpolation: Annotated[
            TiePointInterpolation, Desc('Mapping between tie points'),
        ] = TiePointInterpolation.NEAREST
        singular_tolerance: Annotated[float, Range(min=0.0, max=1.0)] = 1e-12

        def __init__(self, transform, **kwargs):
            self._init_params(kwargs)

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
from enum import Enum
from typing import (
    Annotated,
    Any,
    Dict,
    Optional,
    Tuple,
    get_origin,
    get_type_hints,
)

# GeoRef internal
from georef.exceptions import ValidationError


class Range:
    """Inclusive numeric bounds for a float option."""

    __slots__ = ('min', 'max')

    def __init__(
        self,
        min: Optional[float] = None,
        max: Optional[float] = None,
    ) -> None:
        self.min = min
        self.max = max


class Desc:
    """Human-readable option description."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text


class TransformOption:
    """
    One resolved keyword option of a ``Tunable`` class.

    Attributes
    ----------
    name : str
        Keyword-argument name.
    option_type : type
        ``float`` or an ``Enum`` subclass.
    default : Any
        Value used when the keyword is not given.
    description : str
        Text from ``Desc``, or empty.
    bounds : Range or None
        Inclusive bounds for float options.
    """

    __slots__ = ('name', 'option_type', 'default', 'description', 'bounds')

    def __init__(
        self,
        name: str,
        option_type: type,
        default: Any,
        description: str = '',
        bounds: Optional[Range] = None,
    ) -> None:
        self.name = name
        self.option_type = option_type
        self.default = default
        self.description = description
        self.bounds = bounds

    def coerce(self, value: Any) -> Any:
        """Check *value* and convert it to the option's type.

        Raises
        ------
        ValidationError
            If *value* is not a member or value of the option's enum, or is
            not a number within bounds for a float option.
        """
        if issubclass(self.option_type, Enum):
            try:
                return self.option_type(value)
            except ValueError:
                allowed = ', '.join(repr(m.value) for m in self.option_type)
                raise ValidationError(
                    f"Option '{self.name}' must be one of {allowed}, "
                    f"got {value!r}"
                ) from None

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(
                f"Option '{self.name}' must be a number, "
                f"got {type(value).__name__}"
            )
        value = float(value)
        if self.bounds is not None:
            low, high = self.bounds.min, self.bounds.max
            if (low is not None and value < low) or (
                high is not None and value > high
            ):
                raise ValidationError(
                    f"Option '{self.name}' value {value!r} is outside "
                    f"[{low}, {high}]"
                )
        return value


def collect_options(cls: type) -> Tuple[TransformOption, ...]:
    """Read the ``Annotated`` options declared on *cls*, parents first.

    Annotations without a ``Range`` or ``Desc`` marker are not options.

    Raises
    ------
    TypeError
        If an option has no default.
    """
    hints = get_type_hints(cls, include_extras=True)

    names = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name in hints and name not in names:
                names.append(name)

    options = []
    for name in names:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        markers = [m for m in hint.__metadata__ if isinstance(m, (Range, Desc))]
        if not markers:
            continue
        if not hasattr(cls, name):
            raise TypeError(
                f"Option '{name}' on {cls.__qualname__} needs a default"
            )
        bounds = next((m for m in markers if isinstance(m, Range)), None)
        desc = next((m for m in markers if isinstance(m, Desc)), None)
        options.append(TransformOption(
            name=name,
            option_type=hint.__args__[0],
            default=getattr(cls, name),
            description=desc.text if desc else '',
            bounds=bounds,
        ))
    return tuple(options)


class Tunable:
    """Mixin giving a class validated ``Annotated`` keyword options.

    ``__init_subclass__`` stores the declared options in ``__options__``.
    Subclasses call ``_init_params(kwargs)`` from their own ``__init__``.
    """

    __options__: Tuple[TransformOption, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__options__ = collect_options(cls)

    def _init_params(self, kwargs: Dict[str, Any]) -> None:
        """Coerce *kwargs* (or the defaults) and set them as attributes.

        Raises
        ------
        TypeError
            If an unknown keyword is given.
        ValidationError
            If a value is invalid for its option.
        """
        expected = {o.name for o in self.__options__}
        unexpected = set(kwargs) - expected
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected "
                f"keyword arguments: {', '.join(sorted(unexpected))}"
            )
        for option in self.__options__:
            value = kwargs.get(option.name, option.default)
            setattr(self, option.name, option.coerce(value))

    def get_params(self) -> Dict[str, Any]:
        """Return the current value of every declared option."""
        return {o.name: getattr(self, o.name) for o in self.__options__}
