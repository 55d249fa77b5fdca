"""Base class for command line applications.

Subclass :class:`CliApplication`, mark methods with
:func:`~clidispatch.core.command_table.command` and hand the class to
:func:`~clidispatch.cli.app.launch`::

    @Named("calc", description="A tiny calculator.")
    class Calc(CliApplication):

        @command(description="Add two numbers.")
        def add(self, a: float, b: float) -> None:
            self.out(f"{a + b}\\n")

    if __name__ == "__main__":
        run(Calc)

Each instance builds its command table once, in ``__init__``, and
performs one dispatch per :meth:`CliApplication.launch_instance` call.

Resolution order for an argument vector
---------------------------------------
1. empty → :meth:`CliApplication.default_command`.
2. a lone ``?`` → full usage.
3. exact ``(name, arity)`` match → that command.
4. name matches at another arity → "parameter count does not match",
   no further fallback.
5. :data:`~clidispatch.core.models.UNNAMED` command taking the whole
   vector → that command.
6. otherwise → :meth:`CliApplication.default_command`.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from contextlib import ExitStack
from typing import Any, ClassVar, TextIO

from clidispatch.cli import exit_codes
from clidispatch.cli.console import console, stdout
from clidispatch.core.classifier import (
    DEFAULT_BUSINESS_FAILURES,
    classify_command_exception,
    render_business_failure,
    render_conversion_failure,
    render_fault_headline,
)
from clidispatch.core.command_table import CommandTable, build_command_table
from clidispatch.core.converters import ConverterRegistry, type_name
from clidispatch.core.models import UNNAMED, CommandSpec, ErrorKind, Named, Outcome
from clidispatch.core.protocols import Closeable
from clidispatch.core.usage import application_usage, command_usage, commands_usage
from clidispatch.defaults import CONVERTERS

logger = logging.getLogger(__name__)

PARAMETER_COUNT_MISMATCH: str = "Parameter count does not match. Available alternatives:\n"


def _release(value: Closeable) -> None:
    """Close a converted argument, logging instead of raising on failure."""
    try:
        value.close()
    except Exception:  # noqa: BLE001
        logger.warning("Releasing argument %r failed", value, exc_info=True)


class CliApplication:
    """A console application dispatching one command per run."""

    converters: ClassVar[ConverterRegistry] = CONVERTERS
    """Converter registry shared by every application in the process."""

    business_failures: ClassVar[tuple[type[BaseException], ...]] = DEFAULT_BUSINESS_FAILURES
    """Exceptions a command may raise to report an expected failure."""

    def __init__(self) -> None:
        self._commands: CommandTable = build_command_table(type(self), self.converters)
        self._current_command: str = ""

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @classmethod
    def add_converter(cls, tp: Any, converter: Callable[[str], Any]) -> None:
        """Register a converter for *tp*; call before the first dispatch."""
        cls.converters.register(tp, converter)

    @property
    def commands(self) -> CommandTable:
        return self._commands

    @property
    def current_command(self) -> str:
        """Name of the command being dispatched, empty before the first."""
        return self._current_command

    def _named(self) -> Named | None:
        named = vars(type(self)).get("__cli_named__")
        return named if isinstance(named, Named) else None

    def application_name(self) -> str:
        """Name printed in the usage headline.

        Taken from a :class:`Named` class decorator, else the class name.
        """
        named = self._named()
        if named is not None and named.value:
            return named.value
        return type(self).__name__

    def application_description(self) -> str:
        named = self._named()
        if named is not None and named.description:
            return named.description
        return ""

    # ------------------------------------------------------------------
    # Usage
    # ------------------------------------------------------------------

    def usage(self, spec: CommandSpec | None = None) -> str:
        """Usage of the whole application, or of a single command."""
        if spec is not None:
            return command_usage(spec)
        return application_usage(
            self.application_name(),
            self.application_description(),
            self._commands.specs(),
        )

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    def out(self, text: str = "", *args: object) -> None:
        """Write to standard output; ``%``-formats *args*, adds no newline."""
        stdout.write(text % args if args else text)

    def err(self, text: str = "", *args: object) -> None:
        """Write to standard error; ``%``-formats *args*, adds no newline."""
        console.write(text % args if args else text)

    @property
    def stdin(self) -> TextIO:
        return sys.stdin

    # ------------------------------------------------------------------
    # Overridable handlers
    # ------------------------------------------------------------------

    def default_command(self, argv: Sequence[str]) -> int | None:
        """Called when no command was passed or nothing matched.

        Prints usage to standard error.
        """
        self.err(self.usage())
        return exit_codes.SUCCESS if not argv else exit_codes.GENERAL_ERROR

    def process_command_exception(self, command: str, exc: Exception) -> ErrorKind:
        """Report an exception raised by a command body.

        Business failures print their message; anything else is treated
        as a bug and dumps the full traceback.
        """
        kind = classify_command_exception(exc, self.business_failures)
        if kind is ErrorKind.BUSINESS_FAILURE:
            logger.debug("Command %s failed: %s", command, exc)
            self.err(render_business_failure(command, exc))
        else:
            logger.error("Command %s raised %s", command, type(exc).__name__)
            self.err(render_fault_headline(command))
            console.print_exception(exc)
        return kind

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def launch_instance(self, argv: Sequence[str]) -> int:
        """Dispatch *argv* and return the process exit code."""
        return self.dispatch(argv).exit_code

    def dispatch(self, argv: Sequence[str]) -> Outcome:
        """Resolve *argv* against the command table and run the match."""
        argv = list(argv)

        if not argv:
            return self._run_default(argv)

        if len(argv) == 1 and argv[0] == "?":
            self.err(self.usage())
            return Outcome(ErrorKind.NONE, exit_codes.SUCCESS)

        name, arguments = argv[0], argv[1:]

        selected = self._commands.get(name, len(arguments))
        if selected is not None:
            return self._execute(selected, arguments)

        alternatives = self._commands.get_all(name)
        if alternatives:
            self.err(PARAMETER_COUNT_MISMATCH)
            self.err(commands_usage(alternatives.values()))
            return Outcome(ErrorKind.USER_INPUT, exit_codes.GENERAL_ERROR)

        selected = self._commands.get(UNNAMED, len(argv))
        if selected is not None:
            return self._execute(selected, argv)

        return self._run_default(argv)

    def _run_default(self, argv: list[str]) -> Outcome:
        result = self.default_command(argv)
        code = exit_codes.SUCCESS if result is None else int(result)
        kind = ErrorKind.NONE if code == exit_codes.SUCCESS else ErrorKind.USER_INPUT
        return Outcome(kind, code)

    def _execute(self, spec: CommandSpec, raw: Sequence[str]) -> Outcome:
        """Convert *raw* arguments and invoke *spec*.

        Every closeable argument produced along the way is released on
        every exit path, including a failed conversion of a later one.
        """
        assert len(raw) == spec.arity, spec.key

        self._current_command = spec.name

        with ExitStack() as resources:
            arguments: list[Any] = []
            for parameter, text in zip(spec.parameters, raw):
                try:
                    value = self.converters.convert(parameter.type, text)
                except Exception as exc:  # noqa: BLE001
                    logger.debug(
                        "Converting %r to %s failed: %s",
                        text,
                        type_name(parameter.type),
                        exc,
                    )
                    self.err(render_conversion_failure(spec.name, text, exc))
                    return Outcome(ErrorKind.USER_INPUT, exit_codes.GENERAL_ERROR, spec.name)

                if isinstance(value, Closeable):
                    resources.callback(_release, value)
                arguments.append(value)

            return self._invoke(spec, arguments)

    def _invoke(self, spec: CommandSpec, arguments: list[Any]) -> Outcome:
        bound = spec.function.__get__(self, type(self))
        try:
            result = bound(*arguments)
        except Exception as exc:
            kind = self.process_command_exception(spec.name, exc)
            return Outcome(kind, exit_codes.for_kind(kind), spec.name)

        if isinstance(result, int) and not isinstance(result, bool) and result:
            return Outcome(ErrorKind.BUSINESS_FAILURE, result, spec.name)
        return Outcome(ErrorKind.NONE, exit_codes.SUCCESS, spec.name)
