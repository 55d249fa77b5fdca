"""Core layer — command model, conversion and usage rendering.

Rules
-----
* No ``print()`` calls.
* No filesystem I/O; file converters live in ``infra``.
* No imports from ``cli`` or ``infra``.
"""

from clidispatch.core.command_table import CommandTable, build_command_table, command
from clidispatch.core.converters import ConverterRegistry, register_builtin_converters
from clidispatch.core.models import (
    UNNAMED,
    CommandSpec,
    ErrorKind,
    Named,
    Outcome,
    ParameterSpec,
)

__all__: list[str] = [
    "UNNAMED",
    "CommandSpec",
    "CommandTable",
    "ConverterRegistry",
    "ErrorKind",
    "Named",
    "Outcome",
    "ParameterSpec",
    "build_command_table",
    "command",
    "register_builtin_converters",
]
