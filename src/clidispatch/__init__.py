"""clidispatch — declarative command line dispatch.

Mark methods of a :class:`CliApplication` subclass with
:func:`command`; the engine builds a command table keyed by name and
argument count, converts raw string arguments to the declared
parameter types, invokes the match and renders usage and errors.
"""

from clidispatch.cli.app import launch, run
from clidispatch.cli.application import CliApplication
from clidispatch.core.command_table import command
from clidispatch.core.models import UNNAMED, Byte, Int, Long, Named, Short
from clidispatch.version import __version__

__all__: list[str] = [
    "UNNAMED",
    "Byte",
    "CliApplication",
    "Int",
    "Long",
    "Named",
    "Short",
    "__version__",
    "command",
    "launch",
    "run",
]
