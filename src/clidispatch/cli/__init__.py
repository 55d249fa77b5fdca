"""CLI layer — dispatch, console output and the error boundary.

This package is the outermost layer of the library.  It may import
from ``core`` and ``infra``, but no other layer may import from
``cli``.
"""
