"""Command-line shell for the datasheet mismatch checker."""

from .commands import EXIT_FATAL, EXIT_MISMATCHES, EXIT_NO_MISMATCHES, main

__all__ = [
    "main",
    "EXIT_NO_MISMATCHES",
    "EXIT_FATAL",
    "EXIT_MISMATCHES",
]
