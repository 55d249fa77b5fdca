"""Shared pytest fixtures and configuration for the clidispatch test suite.

Guidelines
----------
* The process-wide converter registry is swapped for a private copy in
  every test, so registrations never leak between tests.
* Types referenced by command annotations live at module level; they
  are resolved through the module globals.
"""

from __future__ import annotations

import pytest

from clidispatch.cli.application import CliApplication
from clidispatch.defaults import CONVERTERS


@pytest.fixture(autouse=True)
def isolated_converters(monkeypatch: pytest.MonkeyPatch):
    registry = CONVERTERS.copy()
    monkeypatch.setattr(CliApplication, "converters", registry)
    return registry
