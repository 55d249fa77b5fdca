"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

from clidispatch.core.models import ErrorKind

SUCCESS: int = 0
"""Clean exit — command completed without error."""

GENERAL_ERROR: int = 1
"""Bad user input or an expected command failure. A message was displayed."""

UNEXPECTED_ERROR: int = 2
"""An implementation fault escaped a command or the dispatcher."""

CONFIGURATION_ERROR: int = 3
"""The application's command declarations are invalid."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NONE: SUCCESS,
    ErrorKind.USER_INPUT: GENERAL_ERROR,
    ErrorKind.BUSINESS_FAILURE: GENERAL_ERROR,
    ErrorKind.IMPLEMENTATION_FAULT: UNEXPECTED_ERROR,
    ErrorKind.CONFIGURATION: CONFIGURATION_ERROR,
}


def for_kind(kind: ErrorKind) -> int:
    """Exit code reported for a dispatch that ended with *kind*."""
    return _BY_KIND[kind]
