"""Protocols (interfaces) consumed by the core layer.

Core code depends ONLY on these protocols: any plain function or
object with the right call signature satisfies them structurally.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


class StringConverter(Protocol):
    """Contract for a converter turning one raw argument into a value.

    Implementations must be pure apart from the documented side
    effects of the file converters, and must raise
    :class:`~clidispatch.exceptions.ConversionError` (or any exception
    with a readable message) on malformed input.
    """

    def __call__(self, text: str) -> Any:
        ...  # pragma: no cover


@runtime_checkable
class Closeable(Protocol):
    """A converted argument value holding an external resource.

    The dispatcher releases every such value once the command has run,
    whatever the outcome.
    """

    def close(self) -> None:
        ...  # pragma: no cover
