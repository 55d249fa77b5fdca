"""Smoke tests — verify package wiring.

These tests prove that:
* The public API is importable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined and mapped from dispatch outcomes.
"""

from __future__ import annotations

import pytest

import clidispatch
from clidispatch import __version__
from clidispatch.cli import exit_codes
from clidispatch.core.models import ErrorKind
from clidispatch.exceptions import (
    CliDispatchError,
    CommandFailure,
    ConfigurationError,
    ConversionError,
    DuplicateCommandError,
    InvalidCommandError,
    MissingConverterError,
    MissingDependencyError,
)


# ---------------------------------------------------------------------------
# Version / public API
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


class TestPublicApi:
    @pytest.mark.parametrize("name", clidispatch.__all__)
    def test_exported(self, name: str) -> None:
        assert hasattr(clidispatch, name)

    def test_unnamed_marker(self) -> None:
        assert clidispatch.UNNAMED == "*"


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            ConversionError,
            CommandFailure,
            MissingDependencyError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[CliDispatchError]
    ) -> None:
        assert issubclass(exc_class, CliDispatchError)

    @pytest.mark.parametrize(
        "exc_class",
        [DuplicateCommandError, MissingConverterError, InvalidCommandError],
    )
    def test_configuration_errors(self, exc_class: type[CliDispatchError]) -> None:
        assert issubclass(exc_class, ConfigurationError)

    def test_hint_is_stored(self) -> None:
        err = CliDispatchError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert CliDispatchError("boom").hint is None

    def test_message_defaults_to_empty(self) -> None:
        assert str(CommandFailure()) == ""


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2

    def test_configuration_error_is_three(self) -> None:
        assert exit_codes.CONFIGURATION_ERROR == 3

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    @pytest.mark.parametrize(
        ("kind", "code"),
        [
            (ErrorKind.NONE, 0),
            (ErrorKind.USER_INPUT, 1),
            (ErrorKind.BUSINESS_FAILURE, 1),
            (ErrorKind.IMPLEMENTATION_FAULT, 2),
            (ErrorKind.CONFIGURATION, 3),
        ],
    )
    def test_for_kind(self, kind: ErrorKind, code: int) -> None:
        assert exit_codes.for_kind(kind) == code
