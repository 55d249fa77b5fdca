"""Command marker and command table construction.

Applications mark methods with :func:`command`.  When an application is
constructed, :func:`build_command_table` introspects the methods declared
directly on its class, validates every parameter type against the
converter registry and files each command under its case-insensitive
name and its arity.

All problems found here are :class:`~clidispatch.exceptions.ConfigurationError`
subclasses and surface at construction time, never at call time.
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from clidispatch.core.converters import ConverterRegistry, type_name
from clidispatch.core.models import CommandSpec, Named, ParameterSpec
from clidispatch.exceptions import (
    DuplicateCommandError,
    InvalidCommandError,
    MissingConverterError,
)

logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Callable[..., Any])

_MARKER_ATTRIBUTE = "__cli_command__"

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


# ---------------------------------------------------------------------------
# Command marker
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandMarker:
    """Metadata attached to a method by :func:`command`."""

    name: str = ""
    argument_names: tuple[str, ...] = ()
    description: str = ""


def command(
    name: str | Callable[..., Any] = "",
    *,
    argument_names: Sequence[str] = (),
    description: str = "",
) -> Any:
    """Mark a method as callable from the command line.

    May be used bare or with arguments::

        @command
        def status(self) -> None: ...

        @command("ls", description="List entries.")
        def list_entries(self, path: Path) -> None: ...

    Parameters
    ----------
    name:
        Command name.  Defaults to the method name.  Use
        :data:`~clidispatch.core.models.UNNAMED` to select the command
        by argument count alone.
    argument_names:
        Legacy documentation of the arguments, shown in usage text
        instead of the per-parameter names.
    description:
        One-line description shown in usage text.
    """
    if callable(name):
        return command()(name)

    marker = CommandMarker(name, tuple(argument_names), description)

    def decorator(func: _F) -> _F:
        target = getattr(func, "__func__", func)
        setattr(target, _MARKER_ATTRIBUTE, marker)
        return func

    return decorator


def get_marker(member: Any) -> CommandMarker | None:
    """Return the :class:`CommandMarker` of a class member, if any."""
    target = getattr(member, "__func__", member)
    marker = getattr(target, _MARKER_ATTRIBUTE, None)
    return marker if isinstance(marker, CommandMarker) else None


# ---------------------------------------------------------------------------
# Command table
# ---------------------------------------------------------------------------

class CommandTable:
    """Two-level mapping: case-insensitive name → arity → :class:`CommandSpec`.

    Filled by :func:`build_command_table` and frozen afterwards.
    """

    def __init__(self) -> None:
        self._commands: dict[str, dict[int, CommandSpec]] = {}
        self._frozen = False

    def add(self, spec: CommandSpec) -> None:
        """File *spec* under its key, rejecting duplicates."""
        if self._frozen:
            raise TypeError("Command table is read-only.")

        name, arity = spec.key
        by_arity = self._commands.setdefault(name, {})
        if arity in by_arity:
            raise DuplicateCommandError(
                f"Implementation error. Operation {spec.name} with "
                f"{arity} parameters is not unique.",
                hint="Rename one of the commands or change its parameter count.",
            )
        by_arity[arity] = spec

    def freeze(self) -> CommandTable:
        self._frozen = True
        return self

    def get(self, name: str, arity: int) -> CommandSpec | None:
        return self._commands.get(name.casefold(), {}).get(arity)

    def get_all(self, name: str) -> dict[int, CommandSpec]:
        """All commands sharing *name*, keyed and ordered by arity."""
        by_arity = self._commands.get(name.casefold(), {})
        return {arity: by_arity[arity] for arity in sorted(by_arity)}

    def specs(self) -> list[CommandSpec]:
        """Every command, sorted by name and then arity."""
        return sorted(
            (spec for by_arity in self._commands.values() for spec in by_arity.values()),
            key=lambda spec: spec.sort_key,
        )

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        name, arity = key
        return isinstance(name, str) and self.get(name, arity) is not None

    def __iter__(self) -> Iterator[CommandSpec]:
        return iter(self.specs())

    def __len__(self) -> int:
        return sum(len(by_arity) for by_arity in self._commands.values())


# ---------------------------------------------------------------------------
# Introspection
# ---------------------------------------------------------------------------

def _split_annotation(hint: Any) -> tuple[Any, Named | None]:
    """Separate ``Annotated[T, Named(...)]`` into ``T`` and the metadata."""
    if typing.get_origin(hint) is typing.Annotated:
        base, *extras = typing.get_args(hint)
        named = next((extra for extra in extras if isinstance(extra, Named)), None)
        return base, named
    return hint, None


def build_parameters(
    func: Callable[..., Any],
    command_name: str,
    converters: ConverterRegistry,
    *,
    skip_first: bool = True,
    owner: type | None = None,
) -> tuple[ParameterSpec, ...]:
    """Describe the positional parameters of *func*.

    Unannotated parameters are taken as ``str``.  Every non-enum type
    must have a converter in *converters*.  Annotations are resolved
    against the namespace of *owner* before the module globals, so types
    nested in the application class can be used.
    """
    localns = dict(vars(owner)) if owner is not None else None
    try:
        hints = typing.get_type_hints(func, localns=localns, include_extras=True)
    except (NameError, TypeError) as exc:
        raise InvalidCommandError(
            f"Cannot resolve parameter types of command {command_name}: {exc}",
        ) from exc

    parameters = list(inspect.signature(func).parameters.values())
    if skip_first:
        parameters = parameters[1:]

    result: list[ParameterSpec] = []
    for parameter in parameters:
        if parameter.kind not in _POSITIONAL:
            raise InvalidCommandError(
                f"Command {command_name}: parameter '{parameter.name}' must be "
                "positional; *args, **kwargs and keyword-only parameters "
                "cannot be filled from a command line.",
            )

        tp, named = _split_annotation(hints.get(parameter.name, str))
        if not converters.supports(tp):
            raise MissingConverterError(
                f"No converter for {type_name(tp)} "
                f"(parameter '{parameter.name}' of command {command_name}).",
                hint="Register one with CliApplication.add_converter().",
            )

        result.append(
            ParameterSpec(
                name=parameter.name,
                type=tp,
                display_name=named.value if named else "",
                description=named.description if named else "",
            )
        )
    return tuple(result)


def build_command_table(cls: type, converters: ConverterRegistry) -> CommandTable:
    """Build the frozen :class:`CommandTable` of application class *cls*.

    Only members declared directly on *cls* are inspected; commands of
    base classes are not inherited.
    """
    table = CommandTable()

    for attribute, member in vars(cls).items():
        marker = get_marker(member)
        if marker is None:
            continue

        func = getattr(member, "__func__", member)
        name = marker.name or attribute
        spec = CommandSpec(
            name=name,
            function=member,
            parameters=build_parameters(
                func,
                name,
                converters,
                skip_first=not isinstance(member, staticmethod),
                owner=cls,
            ),
            description=marker.description,
            argument_names=marker.argument_names,
        )
        table.add(spec)
        logger.debug("Registered command %s/%d", spec.name, spec.arity)

    return table.freeze()
