"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so the engine keeps working when Rich is not installed.
Text written through :meth:`_ConsoleProxy.write` reaches the stream
verbatim: Rich is not involved, so markup, tabs and control characters
such as ``\\r`` pass through unchanged.
"""

from __future__ import annotations

import sys
import traceback
from typing import Any, TextIO

from clidispatch.exceptions import MissingDependencyError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``MissingDependencyError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise MissingDependencyError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(stderr: bool = True) -> Any:
	"""Create a Rich console targeting stderr (default) or stdout."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr, highlight=False, soft_wrap=True)


def rich_available() -> bool:
	"""Return ``True`` when Rich can be imported."""
	try:
		_load_rich_console_class()
	except MissingDependencyError:
		return False
	return True


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, stderr: bool) -> None:
		self._stderr = stderr

	@property
	def stream(self) -> TextIO:
		return sys.stderr if self._stderr else sys.stdout

	def write(self, text: str) -> None:
		"""Write *text* unchanged; no newline is added."""
		self.stream.write(text)
		self.stream.flush()

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(self._stderr)
		except MissingDependencyError:
			print(*objects, file=self.stream)
			return
		rich_console.print(*objects)

	def print_exception(self, exc: BaseException) -> None:
		"""Dump the full traceback of *exc*."""
		try:
			rich_console = get_rich_console(self._stderr)
			from rich.traceback import Traceback
		except (MissingDependencyError, ModuleNotFoundError):
			traceback.print_exception(type(exc), exc, exc.__traceback__, file=self.stream)
			return
		rich_console.print(
			Traceback.from_exception(type(exc), exc, exc.__traceback__),
		)


console = _ConsoleProxy(stderr=True)
"""Diagnostics, usage text and errors."""

stdout = _ConsoleProxy(stderr=False)
"""Normal command output."""
