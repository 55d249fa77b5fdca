"""Tests for the pure argument converters (core/converters.py).

Coverage:
* Integer decoding: decimal, signed, hexadecimal, rejected forms.
* Fixed-width narrowing: ``0xffffffe8`` as a 32-bit value is ``-24``.
* Float and boolean conversion with user-facing failure messages.
* Case-insensitive enum resolution and its sorted error listing.
* Registry semantics: register, replace, lookup, enum precedence.
"""

from __future__ import annotations

import enum
import math

import pytest

from clidispatch.core.converters import (
    NUMBER_FORMATS,
    ConverterRegistry,
    decode_integer,
    enum_names,
    integer_converter,
    is_enum_type,
    narrow,
    register_builtin_converters,
    to_bool,
    to_enum,
    to_float,
    type_name,
)
from clidispatch.core.models import Byte, Int, Long, Short
from clidispatch.exceptions import ConversionError, MissingConverterError


class Weekday(enum.Enum):
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


class Empty(enum.Enum):
    pass


# ---------------------------------------------------------------------------
# decode_integer
# ---------------------------------------------------------------------------

class TestDecodeInteger:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("0", 0),
            ("127", 127),
            ("+5", 5),
            ("-42", -42),
            ("010", 10),
            ("0x7f", 127),
            ("0X7F", 127),
            ("#ff", 255),
            ("-0x10", -16),
            ("0xffffffe8", 0xFFFFFFE8),
        ],
    )
    def test_accepted(self, text: str, expected: int) -> None:
        assert decode_integer(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["", "bogus", "0x", "1_000", " 1", "1 ", "1.5", "0xg1", "--1", "٣"],
    )
    def test_rejected_with_format_message(self, text: str) -> None:
        with pytest.raises(ConversionError) as exc_info:
            decode_integer(text)
        assert str(exc_info.value) == NUMBER_FORMATS

    def test_format_message_names_both_forms(self) -> None:
        assert "Decimal: [0-9]..." in NUMBER_FORMATS
        assert "Hexadecimal: 0x[0-9a-fA-F]..." in NUMBER_FORMATS


# ---------------------------------------------------------------------------
# Fixed-width integers
# ---------------------------------------------------------------------------

class TestNarrow:
    def test_positive_in_range_unchanged(self) -> None:
        assert narrow(127, 8) == 127

    def test_sign_bit_wraps(self) -> None:
        assert narrow(0xFFFFFFE8, 32) == -24
        assert narrow(0xFF, 8) == -1

    def test_negative_in_range_unchanged(self) -> None:
        assert narrow(-128, 8) == -128


class TestIntegerConverter:
    @pytest.mark.parametrize("bits", [8, 16, 32, 64])
    def test_decimal_round_trip_of_limits(self, bits: int) -> None:
        convert = integer_converter(bits)
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        assert convert(str(low)) == low
        assert convert(str(high)) == high

    @pytest.mark.parametrize("bits", [8, 16, 32, 64])
    def test_hex_of_max_value(self, bits: int) -> None:
        high = (1 << (bits - 1)) - 1
        assert integer_converter(bits)(f"0x{high:x}") == high

    def test_unsigned_32_bit_pattern_matches_negative_decimal(self) -> None:
        convert = integer_converter(Int.bits)
        assert convert("0xffffffe8") == convert("-24") == -24

    @pytest.mark.parametrize(
        ("bits", "text"),
        [
            (Byte.bits, "128"),
            (Byte.bits, "200"),
            (Byte.bits, "-129"),
            (Byte.bits, "0xff"),
            (Short.bits, "40000"),
            (Short.bits, "0xffff"),
        ],
    )
    def test_byte_and_short_reject_out_of_range(self, bits: int, text: str) -> None:
        with pytest.raises(ConversionError, match="Hexadecimal"):
            integer_converter(bits)(text)

    def test_int_wraps_through_64_bits(self) -> None:
        assert integer_converter(Int.bits)("0xffffffff") == -1
        assert integer_converter(Int.bits)("4294967296") == 0

    def test_long_rejects_values_beyond_64_bits(self) -> None:
        with pytest.raises(ConversionError, match="Hexadecimal"):
            integer_converter(Long.bits)("0xffffffffffffffe8")

    def test_int_rejects_values_beyond_64_bits(self) -> None:
        with pytest.raises(ConversionError):
            integer_converter(Int.bits)(str(1 << 64))

    def test_unbounded(self) -> None:
        assert integer_converter(None)(str(1 << 100)) == 1 << 100

    def test_result_is_plain_int(self) -> None:
        assert type(integer_converter(Byte.bits)("1")) is int


# ---------------------------------------------------------------------------
# Float / bool
# ---------------------------------------------------------------------------

class TestToFloat:
    def test_decimal(self) -> None:
        assert to_float("2.718281828459045") == math.e

    def test_exponent(self) -> None:
        assert to_float("1e3") == 1000.0

    def test_negative(self) -> None:
        assert to_float("-0.5") == -0.5

    def test_comma_is_not_a_decimal_separator(self) -> None:
        with pytest.raises(ConversionError, match="Not a float: 1,5"):
            to_float("1,5")

    @pytest.mark.parametrize("text", [".5", "5.", "+2", "6.02E23"])
    def test_plain_decimal_forms(self, text: str) -> None:
        assert to_float(text) == float(text)

    @pytest.mark.parametrize("text", ["1_000", " 3.5 ", "inf", "-Infinity", "nan", "", "."])
    def test_rejects_non_decimal_forms(self, text: str) -> None:
        with pytest.raises(ConversionError, match="Not a float"):
            to_float(text)


class TestToBool:
    @pytest.mark.parametrize("text", ["true", "TRUE", "True", "tRuE"])
    def test_true(self, text: str) -> None:
        assert to_bool(text) is True

    @pytest.mark.parametrize("text", ["false", "FALSE", "False"])
    def test_false(self, text: str) -> None:
        assert to_bool(text) is False

    @pytest.mark.parametrize("text", ["yes", "1", "", "t"])
    def test_rejected(self, text: str) -> None:
        with pytest.raises(ConversionError) as exc_info:
            to_bool(text)
        assert str(exc_info.value) == (
            f"Expected boolean: true or false. Received '{text}'."
        )


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TestToEnum:
    @pytest.mark.parametrize("text", ["Friday", "friday", "FRIDAY"])
    def test_case_insensitive(self, text: str) -> None:
        assert to_enum(Weekday, text) is Weekday.FRIDAY

    def test_unknown_lists_sorted_values(self) -> None:
        with pytest.raises(ConversionError) as exc_info:
            to_enum(Weekday, "someday")
        assert str(exc_info.value) == (
            "Unknown enum value: 'someday'.  Allowed values are "
            "FRIDAY, MONDAY, SATURDAY, SUNDAY, THURSDAY, TUESDAY, WEDNESDAY."
        )

    def test_matches_member_name_not_value(self) -> None:
        with pytest.raises(ConversionError):
            to_enum(Weekday, "5")

    def test_enum_names_sorted(self) -> None:
        assert enum_names(Weekday)[0] == "FRIDAY"
        assert enum_names(Empty) == []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    def test_is_enum_type(self) -> None:
        assert is_enum_type(Weekday)
        assert not is_enum_type(Weekday.FRIDAY)
        assert not is_enum_type(int)

    def test_type_name(self) -> None:
        assert type_name(int) == "int"
        assert type_name(Int) == "Int"
        assert type_name(Weekday) == "Weekday"


# ---------------------------------------------------------------------------
# ConverterRegistry
# ---------------------------------------------------------------------------

class TestConverterRegistry:
    def _registry(self) -> ConverterRegistry:
        return register_builtin_converters(ConverterRegistry())

    def test_builtin_types(self) -> None:
        registry = self._registry()
        for tp in (str, int, Byte, Short, Int, Long, float, bool):
            assert tp in registry
        assert len(registry) == 8

    def test_lookup_absent_returns_none(self) -> None:
        assert ConverterRegistry().lookup(complex) is None

    def test_register_adds(self) -> None:
        registry = ConverterRegistry()
        registry.register(complex, complex)
        assert registry.convert(complex, "1+2j") == 1 + 2j

    def test_register_replaces(self) -> None:
        registry = self._registry()
        registry.register(str, str.upper)
        assert registry.convert(str, "abc") == "ABC"

    def test_enum_resolved_without_registration(self) -> None:
        registry = ConverterRegistry()
        assert registry.supports(Weekday)
        assert Weekday not in registry
        assert registry.convert(Weekday, "monday") is Weekday.MONDAY

    def test_enum_takes_precedence_over_registration(self) -> None:
        registry = ConverterRegistry()
        registry.register(Weekday, lambda text: Weekday.SUNDAY)
        assert registry.convert(Weekday, "monday") is Weekday.MONDAY

    def test_missing_converter(self) -> None:
        with pytest.raises(MissingConverterError, match="complex"):
            ConverterRegistry().convert(complex, "1")

    def test_copy_is_independent(self) -> None:
        registry = self._registry()
        clone = registry.copy()
        clone.register(complex, complex)
        assert complex in clone
        assert complex not in registry

    def test_types_preserve_registration_order(self) -> None:
        assert self._registry().types()[:2] == (str, int)

    def test_convert_dispatches_to_fixed_width(self) -> None:
        assert self._registry().convert(Int, "0xffffffe8") == -24
