"""Failure classification and message rendering.

Detection happens in the dispatcher; this module decides which tier a
failure belongs to and how its message reads.

Tiers
-----
* configuration errors: the application is mis-declared.
* user input errors: an argument could not be converted.
* command failures: either an expected *business* failure, rendered as
  ``"<command> failed: <message>"``, or an *implementation fault*,
  rendered as ``"<command> failed."`` followed by a traceback.
"""

from __future__ import annotations

from clidispatch.core.models import ErrorKind
from clidispatch.exceptions import (
    CliDispatchError,
    ConfigurationError,
    ConversionError,
)

DEFAULT_BUSINESS_FAILURES: tuple[type[BaseException], ...] = (
    CliDispatchError,
    OSError,
)
"""Exceptions a command body may raise to report an expected failure."""


def failure_message(exc: BaseException) -> str:
    """The exception's message, or its type name when the message is empty."""
    message = str(exc)
    return message if message else type(exc).__name__


def classify(
    exc: BaseException,
    business_failures: tuple[type[BaseException], ...] = DEFAULT_BUSINESS_FAILURES,
) -> ErrorKind:
    """Return the :class:`ErrorKind` of an exception.

    Configuration errors and conversion errors keep their own tier
    wherever they are raised from; everything else is a business
    failure if it is an instance of *business_failures* and an
    implementation fault otherwise.
    """
    if isinstance(exc, ConfigurationError):
        return ErrorKind.CONFIGURATION
    if isinstance(exc, ConversionError):
        return ErrorKind.USER_INPUT
    if isinstance(exc, business_failures):
        return ErrorKind.BUSINESS_FAILURE
    return ErrorKind.IMPLEMENTATION_FAULT


def classify_command_exception(
    exc: BaseException,
    business_failures: tuple[type[BaseException], ...] = DEFAULT_BUSINESS_FAILURES,
) -> ErrorKind:
    """Classify an exception raised from inside a command body.

    Only two outcomes are possible here: a conversion error raised by
    the body itself is the command's business, a configuration error is
    a bug.
    """
    if isinstance(exc, ConfigurationError):
        return ErrorKind.IMPLEMENTATION_FAULT
    if isinstance(exc, business_failures):
        return ErrorKind.BUSINESS_FAILURE
    return ErrorKind.IMPLEMENTATION_FAULT


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_conversion_failure(command: str, raw: str, exc: BaseException) -> str:
    return f"{command}: Parameter {raw} : {failure_message(exc)}\n"


def render_business_failure(command: str, exc: BaseException) -> str:
    return f"{command} failed: {failure_message(exc)}\n"


def render_fault_headline(command: str) -> str:
    return f"{command} failed.\n"


def render_top_level_failure(exc: BaseException) -> str:
    """Operator-facing message for a failure escaping a whole launch."""
    text = f"Failed: {failure_message(exc)}\n"
    hint = getattr(exc, "hint", None)
    if hint:
        text += f"Hint: {hint}\n"
    return text
