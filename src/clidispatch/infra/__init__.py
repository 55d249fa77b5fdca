"""Infrastructure layer — converters touching the filesystem.

Rules
-----
* No imports from ``cli``.
* No user-facing output; failures are raised as
  :class:`~clidispatch.exceptions.ConversionError`.
"""

from clidispatch.infra.files import (
    existing_path,
    open_binary,
    open_text,
    register_file_converters,
)

__all__: list[str] = [
    "existing_path",
    "open_binary",
    "open_text",
    "register_file_converters",
]
