"""Custom exception hierarchy for clidispatch.

Every error the engine raises inherits from :class:`CliDispatchError`.
The hierarchy mirrors the three ways a command line run can go wrong:
the application itself is mis-declared, the user typed something that
cannot be converted, or the command body reported a failure.

Hierarchy
---------
CliDispatchError
├── ConfigurationError
│   ├── DuplicateCommandError
│   ├── MissingConverterError
│   └── InvalidCommandError
├── ConversionError
├── CommandFailure
└── MissingDependencyError
"""

from __future__ import annotations


class CliDispatchError(Exception):
    """Base exception for all clidispatch errors.

    Carries an optional *hint* that the error boundary renders below
    the message.
    """

    def __init__(self, message: str = "", *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration (programming errors in the application) -----------------

class ConfigurationError(CliDispatchError):
    """Raised while building the command table of an application.

    These are never recovered from: the application cannot be
    constructed until the declaration is fixed.
    """


class DuplicateCommandError(ConfigurationError):
    """Raised when two commands share a case-insensitive name and arity."""


class MissingConverterError(ConfigurationError):
    """Raised when a parameter type has no registered converter."""


class InvalidCommandError(ConfigurationError):
    """Raised when a command signature cannot be called from a command line."""


# --- User input ------------------------------------------------------------

class ConversionError(CliDispatchError):
    """Raised by a converter when a raw argument string is malformed.

    The message is shown to the end user as is, so it should name the
    accepted input format rather than the internal parse failure.
    """


# --- Command execution -----------------------------------------------------

class CommandFailure(CliDispatchError):
    """Raised by a command body to report an expected failure.

    Rendered as ``"<command> failed: <message>"`` without a traceback.
    """


# --- Environment -----------------------------------------------------------

class MissingDependencyError(CliDispatchError):
    """Raised when an optional runtime dependency is not installed."""
