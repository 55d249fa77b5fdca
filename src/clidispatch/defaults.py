"""Process-wide default converter registry.

Seeded once at import with the scalar and filesystem converters.
Applications extend it through
:meth:`~clidispatch.cli.application.CliApplication.add_converter`
before their first dispatch; nothing writes to it during a dispatch.
"""

from __future__ import annotations

from clidispatch.core.converters import ConverterRegistry, register_builtin_converters
from clidispatch.infra.files import register_file_converters

CONVERTERS: ConverterRegistry = register_file_converters(
    register_builtin_converters(ConverterRegistry())
)
