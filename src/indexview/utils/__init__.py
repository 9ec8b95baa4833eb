"""Generic utilities and helpers.

Helpers that are used by the other parts of the codebase
but are not part of the views themselves, like formatting
tables for display.
"""

from . import tabulate

__all__ = ("tabulate",)
