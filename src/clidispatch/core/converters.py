"""String-to-value conversion for command arguments.

A :class:`ConverterRegistry` maps a value type to a plain function
``str -> value``.  Enumerations never live in the registry: any
:class:`enum.Enum` subclass is resolved structurally by a
case-insensitive match on its member names.

Every converter in this module is a **pure** function.  Failure messages
are shown to the end user verbatim, so they name the accepted input
format instead of leaking the underlying parse error.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from clidispatch.core.models import Byte, Int, Long, Short
from clidispatch.core.protocols import StringConverter
from clidispatch.exceptions import ConversionError, MissingConverterError

logger = logging.getLogger(__name__)

NUMBER_FORMATS: str = "Decimal: [0-9]..., Hexadecimal: 0x[0-9a-fA-F]..."
"""Failure message of every integer converter."""

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_HEXADECIMAL = re.compile(r"([+-]?)(?:0[xX]|#)([0-9a-fA-F]+)")
_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_WIDEST_BITS = 64


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def is_enum_type(tp: Any) -> bool:
    """Return ``True`` when *tp* is an :class:`enum.Enum` subclass."""
    return isinstance(tp, type) and issubclass(tp, enum.Enum)


def type_name(tp: Any) -> str:
    """Bare, human-readable name of a type for usage and diagnostics."""
    return getattr(tp, "__name__", None) or repr(tp)


def enum_names(enum_type: type[enum.Enum]) -> list[str]:
    """Member names of *enum_type*, sorted."""
    return sorted(member.name for member in enum_type)


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

def decode_integer(text: str) -> int:
    """Decode a decimal or ``0x``/``#`` hexadecimal literal.

    An optional leading sign is accepted in both forms.  Whitespace,
    underscores and octal prefixes are not.
    """
    if _DECIMAL.fullmatch(text):
        return int(text, 10)

    match = _HEXADECIMAL.fullmatch(text)
    if match is None:
        raise ConversionError(NUMBER_FORMATS)

    sign, digits = match.groups()
    value = int(digits, 16)
    return -value if sign == "-" else value


def _fits(value: int, bits: int) -> bool:
    limit = 1 << (bits - 1)
    return -limit <= value < limit


def narrow(value: int, bits: int) -> int:
    """Truncate *value* to a signed two's-complement integer of *bits*."""
    mask = (1 << bits) - 1
    value &= mask
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def integer_converter(bits: int | None) -> StringConverter:
    """Build a converter for a signed integer of the given width.

    * ``None``: unbounded Python ``int``.
    * 32: decoded within the signed 64-bit range first and then
      narrowed, so an unsigned pattern like ``0xffffffe8`` yields ``-24``
      instead of an overflow.
    * any other width: must fit the signed range of that width.
    """

    def convert(text: str) -> int:
        value = decode_integer(text)
        if bits is None:
            return value
        if bits == Int.bits:
            if not _fits(value, _WIDEST_BITS):
                raise ConversionError(NUMBER_FORMATS)
            return narrow(value, bits)
        if not _fits(value, bits):
            raise ConversionError(NUMBER_FORMATS)
        return value

    convert.__name__ = f"to_int{bits or ''}"
    return convert


# ---------------------------------------------------------------------------
# Other scalar types
# ---------------------------------------------------------------------------

def to_str(text: str) -> str:
    return text


def to_float(text: str) -> float:
    """Locale-independent decimal floating point conversion.

    Only plain decimal notation with an optional exponent is accepted;
    whitespace, underscores, ``inf`` and ``nan`` are not.
    """
    if not _FLOAT.fullmatch(text):
        raise ConversionError(f"Not a float: {text}")
    return float(text)


def to_bool(text: str) -> bool:
    """Accept ``true`` or ``false`` in any letter case, nothing else."""
    lowered = text.casefold()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ConversionError(
        f"Expected boolean: true or false. Received '{text}'."
    )


def to_enum(enum_type: type[enum.Enum], text: str) -> enum.Enum:
    """Resolve *text* against the member names of *enum_type*.

    Matching ignores letter case; the first member in declaration order
    wins.
    """
    wanted = text.casefold()
    for member in enum_type:
        if member.name.casefold() == wanted:
            return member

    allowed = ", ".join(enum_names(enum_type))
    raise ConversionError(
        f"Unknown enum value: '{text}'.  Allowed values are {allowed}."
    )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class ConverterRegistry:
    """Mapping from a value type to its :class:`StringConverter`.

    Usage::

        registry = ConverterRegistry()
        register_builtin_converters(registry)
        registry.register(Decimal, Decimal)
        registry.convert(Int, "0x7f")   # 127
    """

    def __init__(self, entries: Mapping[Any, StringConverter] | None = None) -> None:
        self._converters: dict[Any, StringConverter] = dict(entries or {})

    def register(self, tp: Any, converter: Callable[[str], Any]) -> None:
        """Add or replace the converter for *tp*."""
        if is_enum_type(tp):
            logger.warning(
                "Converter for enum %s is ignored; enums resolve by member name",
                type_name(tp),
            )
        if tp in self._converters:
            logger.debug("Replacing converter for %s", type_name(tp))
        else:
            logger.debug("Registered converter for %s", type_name(tp))
        self._converters[tp] = converter

    def lookup(self, tp: Any) -> StringConverter | None:
        """Return the converter registered for *tp*, or ``None``."""
        return self._converters.get(tp)

    def supports(self, tp: Any) -> bool:
        """Whether an argument of type *tp* can be converted at all."""
        return is_enum_type(tp) or tp in self._converters

    def convert(self, tp: Any, text: str) -> Any:
        """Convert *text* to *tp*: enums first, the registry second."""
        if is_enum_type(tp):
            return to_enum(tp, text)

        converter = self.lookup(tp)
        if converter is None:
            raise MissingConverterError(f"No converter for {type_name(tp)}")
        return converter(text)

    def types(self) -> tuple[Any, ...]:
        return tuple(self._converters)

    def copy(self) -> ConverterRegistry:
        return ConverterRegistry(self._converters)

    def __contains__(self, tp: object) -> bool:
        return tp in self._converters

    def __iter__(self) -> Iterator[Any]:
        return iter(self._converters)

    def __len__(self) -> int:
        return len(self._converters)


def register_builtin_converters(registry: ConverterRegistry) -> ConverterRegistry:
    """Seed *registry* with the pure scalar converters."""
    registry.register(str, to_str)
    registry.register(int, integer_converter(None))
    registry.register(Byte, integer_converter(Byte.bits))
    registry.register(Short, integer_converter(Short.bits))
    registry.register(Int, integer_converter(Int.bits))
    registry.register(Long, integer_converter(Long.bits))
    registry.register(float, to_float)
    registry.register(bool, to_bool)
    return registry
