"""Usage text rendering.

Pure string builders — no I/O.  The layout is::

    <name> -- <description>

    The following commands are supported:

    <command>: <param>, <param>
        <command description>
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from clidispatch.core.converters import enum_names, type_name
from clidispatch.core.models import CommandSpec, ParameterSpec

logger = logging.getLogger(__name__)

HEADLINE_SEPARATOR: str = " -- "
COMMANDS_HEADER: str = "\n\nThe following commands are supported:\n\n"
DESCRIPTION_INDENT: str = "    "


def parameter_doc(parameter: ParameterSpec) -> str:
    """Documentation of a single parameter.

    Explicit display name first, then the sorted member list for enums,
    then the bare type name.
    """
    if parameter.display_name:
        return parameter.display_name
    if parameter.is_enum:
        names = enum_names(parameter.type)
        return f"[{', '.join(names)}]" if names else ""
    return type_name(parameter.type)


def parameter_docs(spec: CommandSpec) -> list[str]:
    """Documentation of every parameter of *spec*.

    A legacy ``argument_names`` list takes priority over everything
    else, even when its length disagrees with the parameter count.
    """
    if spec.argument_names:
        if len(spec.argument_names) != spec.arity:
            logger.warning(
                "argument_names of command %s lists %d names for %d parameters",
                spec.name,
                len(spec.argument_names),
                spec.arity,
            )
        return list(spec.argument_names)

    return [parameter_doc(parameter) for parameter in spec.parameters]


def command_usage(spec: CommandSpec) -> str:
    """Usage block of one command, newline terminated."""
    lines = [spec.name]

    parameters = ", ".join(parameter_docs(spec))
    if parameters:
        lines[0] += f": {parameters}"

    if spec.description:
        lines.append(f"{DESCRIPTION_INDENT}{spec.description}")

    return "\n".join(lines) + "\n"


def commands_usage(specs: Iterable[CommandSpec]) -> str:
    """Concatenated usage blocks, in the order given."""
    return "".join(command_usage(spec) for spec in specs)


def application_usage(
    name: str,
    description: str,
    specs: Iterable[CommandSpec],
) -> str:
    """Full usage text; commands sorted by name, then arity."""
    headline = f"{name}{HEADLINE_SEPARATOR}{description}" if description else name
    ordered = sorted(specs, key=lambda spec: spec.sort_key)
    return headline + COMMANDS_HEADER + commands_usage(ordered)
