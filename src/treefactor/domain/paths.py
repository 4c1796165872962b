from __future__ import annotations

"""
Tree Path Utilities.

Pure string helpers for building and comparing node paths. Directory paths
are always terminated with a '/' so that prefix comparisons never match a
sibling whose name merely starts with the same characters.
"""

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def dir_path(path: str) -> str:
    """
    Normalize a path so that it ends with a directory separator.

    Args:
        path: Raw path string.

    Returns:
        str: The same path, terminated with '/'.
    """
    return path if path.endswith("/") else f"{path}/"


def join_path(root: str, node: str) -> str:
    """Append a node name to a (directory-normalized) root path."""
    return f"{dir_path(root)}{node}"


def is_descendant(parent_path: str, node_path: str) -> bool:
    """
    Check whether a node path lies strictly beneath a parent path.

    A path is never its own descendant.

    Args:
        parent_path: Full path of the candidate ancestor.
        node_path: Full path of the candidate descendant.

    Returns:
        bool: True if node_path is inside parent_path.
    """
    return node_path.startswith(parent_path) and node_path != parent_path
