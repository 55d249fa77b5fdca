"""Built-in demo application run by the ``clidispatch`` console script.

Small enough to read in one sitting, it exercises every part of the
engine: arity overloads, fixed-width hex parsing, enum resolution, a
file handle argument that is closed after use and an unnamed
catch-all command.  ``doctor`` renders environment diagnostics.
"""

from __future__ import annotations

import enum
import platform
import sys
from importlib import metadata
from typing import Annotated, TextIO

from clidispatch.cli import exit_codes
from clidispatch.cli.application import CliApplication
from clidispatch.cli.console import console, rich_available
from clidispatch.core.command_table import command
from clidispatch.core.models import UNNAMED, Int, Named
from clidispatch.version import __version__


class Weekday(enum.Enum):
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the clidispatch version row."""
    return "clidispatch", __version__, "OK"


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    return "Python", version, "OK" if ok else "FAIL (>=3.10 required)"


def _rich_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Rich availability row."""
    if rich_available():
        return "rich", metadata.version("rich"), "OK"
    return "rich", "NOT INSTALLED", "WARN"


def _converter_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the registered converter count."""
    count = len(CliApplication.converters)
    return "converters", f"{count} registered", "OK" if count else "FAIL"


_STATUS_STYLE = {"OK": "green", "WARN": "yellow", "FAIL": "red"}


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nclidispatch doctor", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<32} {status:<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    from rich.table import Table

    table = Table(
        title="clidispatch doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)

    for label, value, status in checks:
        style = _STATUS_STYLE.get(status.split()[0], "")
        table.add_row(label, value, f"[{style}]{status}[/{style}]" if style else status)

    console.print()
    console.print(table)
    console.print()


def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _version_check(),
        _python_version_check(),
        _rich_check(),
        _converter_check(),
    ]

    if rich_available():
        _print_rich_doctor_table(checks)
    else:
        _print_plain_doctor_table(checks)

    if any(status.startswith("FAIL") for _, _, status in checks):
        console.write("Some checks failed.\n")
        return exit_codes.GENERAL_ERROR

    console.write("All checks passed.\n")
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

@Named("clidispatch", description="Declarative command line dispatch demo.")
class DemoApplication(CliApplication):

    @command(description="Check the runtime environment.")
    def doctor(self) -> int:
        return run_doctor()

    @command("hex", description="Show a 32-bit integer in decimal and hexadecimal.")
    def to_hex(self, value: Annotated[Int, Named("value")]) -> None:
        self.out("%d 0x%08x\n", value, value & 0xFFFFFFFF)

    @command(description="Add two numbers.")
    def add(self, a: float, b: float) -> None:
        self.out(f"{a + b}\n")

    @command("add", description="Add three numbers.")
    def add3(self, a: float, b: float, c: float) -> None:
        self.out(f"{a + b + c}\n")

    @command(argument_names=("file",), description="Print a text file.")
    def cat(self, file: TextIO) -> None:
        for line in file:
            self.out(line)

    @command(description="Echo a day of the week.")
    def day(self, day: Weekday) -> None:
        self.out(f"{day.name}\n")

    @command(UNNAMED, description="Echo a single word that is not a command.")
    def echo(self, word: Annotated[str, Named("word")]) -> None:
        self.out(f"{word}\n")
