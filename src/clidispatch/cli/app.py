"""Application launch and the process-level error boundary.

This module is the **outermost** error boundary.  Whatever escapes a
dispatch ends up here and is sorted into one of two audiences:

* "tell the operator" — expected failures are logged at DEBUG and
  printed as ``Failed: <message>`` without a traceback.
* "tell the developer" — configuration errors and implementation faults
  are logged at CRITICAL with the traceback, which is also dumped to
  standard error.

It is also the only place that translates between the dispatch world
and the OS process exit code.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Sequence

from clidispatch.cli import exit_codes
from clidispatch.cli.application import CliApplication
from clidispatch.cli.console import console
from clidispatch.core.classifier import classify, failure_message, render_top_level_failure
from clidispatch.core.models import ErrorKind

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV: str = "CLIDISPATCH_LOG_LEVEL"
"""Environment variable selecting the log level of the console script."""

LOG_FORMAT: str = "%(levelname)s: %(message)s"

DEFAULT_LOG_LEVEL: int = logging.WARNING

ApplicationFactory = Callable[[], CliApplication]


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

def log_level_from_env(environ: dict[str, str] | None = None) -> int:
    """Read :data:`LOG_LEVEL_ENV`, falling back to WARNING."""
    env = os.environ if environ is None else environ
    raw = env.get(LOG_LEVEL_ENV, "").strip()
    if not raw:
        return DEFAULT_LOG_LEVEL

    level = logging.getLevelName(raw.upper())
    if isinstance(level, int):
        return level

    logging.warning("Invalid value for %s: %s", LOG_LEVEL_ENV, raw)
    return DEFAULT_LOG_LEVEL


def configure_logging(environ: dict[str, str] | None = None) -> None:
    logging.basicConfig(level=log_level_from_env(environ), format=LOG_FORMAT)


# ---------------------------------------------------------------------------
# Launch
# ---------------------------------------------------------------------------

def launch(factory: ApplicationFactory, argv: Sequence[str] | None = None) -> int:
    """Construct an application and dispatch one argument vector.

    Parameters
    ----------
    factory:
        A :class:`CliApplication` subclass or any zero-argument callable
        returning an instance.
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    if argv is None:
        argv = sys.argv[1:]

    try:
        application = factory()
        return application.launch_instance(argv)
    except KeyboardInterrupt:
        console.write("\nAborted by user.\n")
        return exit_codes.KEYBOARD_INTERRUPT
    except Exception as exc:  # noqa: BLE001
        kind = classify(exc, _business_failures(factory))
        if kind in (ErrorKind.BUSINESS_FAILURE, ErrorKind.USER_INPUT):
            logger.debug("%s", failure_message(exc), exc_info=exc)
            console.write(render_top_level_failure(exc))
            return exit_codes.GENERAL_ERROR

        logger.critical("%s", failure_message(exc), exc_info=exc)
        console.print_exception(exc)
        return exit_codes.for_kind(kind)


def _business_failures(factory: ApplicationFactory) -> tuple[type[BaseException], ...]:
    if isinstance(factory, type) and issubclass(factory, CliApplication):
        return factory.business_failures
    return CliApplication.business_failures


def run(factory: ApplicationFactory, argv: Sequence[str] | None = None) -> None:
    """Launch *factory* and exit the process with its exit code."""
    sys.exit(launch(factory, argv))


# ---------------------------------------------------------------------------
# Console script
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the built-in demo application.

    Accepting *argv* enables deterministic testing without
    monkeypatching.
    """
    from clidispatch.cli.demo import DemoApplication

    return launch(DemoApplication, argv)


def cli() -> None:
    """Entry point of the ``clidispatch`` console script."""
    configure_logging()
    sys.exit(main())
