from __future__ import annotations

"""
Tree Renderer.

Converts Tree models into visual ASCII representations. Handles connector
indentation and the optional per-directory summary of contained file types.
"""

from typing import List

from treefactor.domain.tree import Tree
from treefactor.domain.tree_models import TreeDirectory, TreeFile

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(
        tree: Tree,
        show_files: bool = True,
        show_directory_summary: bool = False,
) -> List[str]:
    """
    Render a complete tree, headed by its root name.

    Args:
        tree: Tree to render.
        show_files: Draw file entries; when False only directories are drawn.
        show_directory_summary: Append contained file types to directory lines.

    Returns:
        List[str]: Visual lines of the tree.
    """
    lines: List[str] = [_directory_label(tree, tree.name, show_directory_summary)]
    render_tree_structure(
        tree,
        lines,
        prefix="",
        show_files=show_files,
        show_directory_summary=show_directory_summary,
    )
    return lines


def render_tree_structure(
        directory: TreeDirectory,
        lines: List[str],
        prefix: str = "",
        show_files: bool = True,
        show_directory_summary: bool = False,
) -> None:
    """
    Recursively transform a directory's children into a list of strings.

    Uses standard ASCII connectors (├──, └──) and manages indentation
    levels for nested directories.

    Args:
        directory: Current directory node to process.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
        show_files: Draw file entries.
        show_directory_summary: Append contained file types to directory lines.
    """
    entries = [
        child for child in directory.children
        if show_files or not isinstance(child, TreeFile)
    ]
    total = len(entries)

    for i, node in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        # Scenario A: Node is a Directory
        if isinstance(node, TreeDirectory):
            lines.append(f"{prefix}{connector}{_directory_label(node, node.name, show_directory_summary)}")
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(
                node,
                lines,
                prefix=new_prefix,
                show_files=show_files,
                show_directory_summary=show_directory_summary,
            )
            continue

        # Scenario B: Node is a File
        lines.append(f"{prefix}{connector}{node.name}")

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _directory_label(directory: TreeDirectory, label: str, show_summary: bool) -> str:
    """Decorate a directory label with its sorted, non-empty file types."""
    if not show_summary:
        return label
    extensions = sorted(ext for ext in directory.content_description if ext)
    if not extensions:
        return label
    return f"{label} [{', '.join(extensions)}]"
