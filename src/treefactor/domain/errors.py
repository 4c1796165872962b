from __future__ import annotations

"""
Domain Error Types.

Only tree parsing fails loudly; rejected edits are reported through return
values instead of exceptions.
"""


class TreeParseError(ValueError):
    """Raised when a tree listing document is malformed or structurally invalid."""
