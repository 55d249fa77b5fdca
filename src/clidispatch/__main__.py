"""Support ``python -m clidispatch``; same behaviour as the console script."""

from __future__ import annotations

from clidispatch.cli.app import cli

if __name__ == "__main__":
    cli()
