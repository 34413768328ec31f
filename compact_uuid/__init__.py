"""Compact, alphabet-encoded UUIDs.

A 128-bit value is converted to a string in an arbitrary base using 32-bit
limb arithmetic, and back. The command surface is implemented with Typer and
Rich, while command payload outputs remain machine-friendly.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
