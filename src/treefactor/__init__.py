"""
Treefactor: an editable in-memory model of a directory tree.

Loads the JSON listing produced by `tree -J`, lets callers move files and
directories around without touching real data, and writes the result back
in the same format.
"""

from treefactor.core.serialization.codec import build_tree, dump_tree, parse_tree, tree_to_data
from treefactor.domain.errors import TreeParseError
from treefactor.domain.tree import MovePlan, Tree, TreeReport
from treefactor.domain.tree_models import NodeType, TreeDirectory, TreeFile, TreeNode

__version__ = "1.0.0"

__all__ = [
    "MovePlan",
    "NodeType",
    "Tree",
    "TreeDirectory",
    "TreeFile",
    "TreeNode",
    "TreeParseError",
    "TreeReport",
    "build_tree",
    "dump_tree",
    "parse_tree",
    "tree_to_data",
]
