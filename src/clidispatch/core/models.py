"""Domain models for clidispatch.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  A :class:`CommandSpec` is created once
per command when an application's command table is built and never
changes afterwards.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

_T = TypeVar("_T")

UNNAMED: str = "*"
"""Reserved command name selecting a command by argument count alone."""


# ---------------------------------------------------------------------------
# Fixed-width integer tags
# ---------------------------------------------------------------------------

class Byte(int):
    """Annotation tag for a signed 8-bit integer parameter."""

    bits = 8


class Short(int):
    """Annotation tag for a signed 16-bit integer parameter."""

    bits = 16


class Int(int):
    """Annotation tag for a signed 32-bit integer parameter."""

    bits = 32


class Long(int):
    """Annotation tag for a signed 64-bit integer parameter."""

    bits = 64


# ---------------------------------------------------------------------------
# Naming metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Named:
    """Display name and description for an application or a parameter.

    As a class decorator it names the application shown in the usage
    headline::

        @Named("calc", description="A tiny calculator.")
        class Calc(CliApplication):
            ...

    As ``Annotated`` metadata it documents a single parameter::

        def add(self, count: Annotated[int, Named("count")]) -> None: ...
    """

    value: str = ""
    description: str = ""

    def __call__(self, cls: type[_T]) -> type[_T]:
        cls.__cli_named__ = self  # type: ignore[attr-defined]
        return cls


# ---------------------------------------------------------------------------
# Command descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """One positional parameter of a command."""

    name: str
    """Parameter name as declared on the Python function."""

    type: Any
    """Declared value type, used to select the converter."""

    display_name: str = ""
    """Explicit display name from :class:`Named` metadata, or empty."""

    description: str = ""
    """Free-text description from :class:`Named` metadata, or empty."""

    @property
    def is_enum(self) -> bool:
        return isinstance(self.type, type) and issubclass(self.type, enum.Enum)


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """A single command-marked method of an application."""

    name: str
    """Effective command name (explicit name or the method name)."""

    function: Callable[..., Any]
    """The plain function; bound to the application at invocation."""

    parameters: tuple[ParameterSpec, ...] = ()

    description: str = ""

    argument_names: tuple[str, ...] = ()
    """Legacy per-command argument documentation, overrides parameters."""

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def key(self) -> tuple[str, int]:
        """Case-insensitive identity: ``(casefolded name, arity)``."""
        return (self.name.casefold(), self.arity)

    @property
    def sort_key(self) -> tuple[str, int]:
        return (self.name, self.arity)


# ---------------------------------------------------------------------------
# Dispatch outcome
# ---------------------------------------------------------------------------

class ErrorKind(enum.Enum):
    """Classification of how a single dispatch ended."""

    NONE = "none"
    CONFIGURATION = "configuration"
    USER_INPUT = "user_input"
    BUSINESS_FAILURE = "business_failure"
    IMPLEMENTATION_FAULT = "implementation_fault"


@dataclass(frozen=True, slots=True)
class Outcome:
    """Result of one dispatch, carried by value instead of by exception."""

    kind: ErrorKind
    exit_code: int
    command: str | None = None
    """Name of the command that was selected, if any."""

    @property
    def ok(self) -> bool:
        return self.kind is ErrorKind.NONE
