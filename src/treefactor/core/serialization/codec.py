from __future__ import annotations

"""
Tree Listing Codec.

Converts between the JSON document printed by `tree -J` and the in-memory
Tree model, in both directions and without loss of structure.

The document is an array whose first element is the root directory object and
whose second element is a summary report:

    [
      {"type": "directory", "name": "<root>", "contents": [...]},
      {"type": "report", "directories": <int>, "files": <int>}
    ]

The report is informational only: it is regenerated on output and never
validated on input.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from treefactor.domain.errors import TreeParseError
from treefactor.domain.paths import join_path
from treefactor.domain.tree import Tree
from treefactor.domain.tree_models import NodeType, TreeDirectory, TreeFile, TreeNode

logger = logging.getLogger(__name__)

REPORT_TYPE = "report"

# -----------------------------------------------------------------------------
# PUBLIC API (PARSING)
# -----------------------------------------------------------------------------

def parse_tree(text: str) -> Tree:
    """
    Build a Tree from `tree -J` JSON text.

    Args:
        text: Raw JSON document.

    Returns:
        Tree: The parsed tree.

    Raises:
        TreeParseError: If the text is not valid JSON or does not describe a tree.
            Documents nested deeper than the interpreter recursion limit are
            rejected the same way.
    """
    try:
        data = json.loads(text)
    except RecursionError as e:
        raise TreeParseError("Invalid JSON: nesting is too deep.") from e
    except (TypeError, ValueError) as e:
        raise TreeParseError(f"Invalid JSON: {e}") from e

    try:
        return build_tree(data)
    except RecursionError as e:
        raise TreeParseError("Tree is nested too deeply to be loaded.") from e


def build_tree(data: Any) -> Tree:
    """
    Build a Tree from an already-decoded `tree -J` document.

    Args:
        data: Decoded JSON value (expected to be a list).

    Returns:
        Tree: The parsed tree.

    Raises:
        TreeParseError: If the document structure is invalid.
    """
    if not isinstance(data, list):
        raise TreeParseError(
            f"Expected a JSON array, received {_json_type_name(data)}."
        )
    if not data:
        raise TreeParseError("Tree document is empty: missing root directory.")

    root = data[0]
    if not isinstance(root, dict) or not root:
        raise TreeParseError("Missing or empty root directory object.")
    if root.get("type") != NodeType.DIRECTORY.value:
        raise TreeParseError(
            f"Root node must be a directory, received type {root.get('type')!r}."
        )

    root_name = _node_name(root, "root")
    children = [
        _parse_branch(root_name, branch, f"{root_name}[{i}]")
        for i, branch in enumerate(_node_contents(root, root_name))
    ]
    _ensure_unique_siblings(children, root_name)

    tree = Tree(root_name, children)
    logger.debug(f"Parsed tree '{root_name}' with {tree.size()} nodes")
    return tree

# -----------------------------------------------------------------------------
# PUBLIC API (SERIALIZATION)
# -----------------------------------------------------------------------------

def tree_to_data(tree: Tree) -> List[Dict[str, Any]]:
    """
    Convert a Tree into the decoded `tree -J` document structure.

    Directories and files are tallied during the walk; the root itself is not
    counted as a directory.

    Args:
        tree: Tree to convert.

    Returns:
        List[Dict[str, Any]]: Root object followed by the report object.
    """
    counters = {"directories": 0, "files": 0}

    root = {
        "type": NodeType.DIRECTORY.value,
        "name": tree.name,
        "contents": [_dump_branch(child, counters) for child in tree.children],
    }
    report = {
        "type": REPORT_TYPE,
        "directories": counters["directories"],
        "files": counters["files"],
    }
    return [root, report]


def dump_tree(tree: Tree, indent: Optional[int] = None) -> str:
    """
    Serialize a Tree to `tree -J` JSON text.

    Args:
        tree: Tree to serialize.
        indent: Optional JSON indentation; compact output when None.

    Returns:
        str: JSON document suitable for `parse_tree`.
    """
    return json.dumps(tree_to_data(tree), ensure_ascii=False, indent=indent)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (PARSING)
# -----------------------------------------------------------------------------

def _parse_branch(parent_path: str, branch: Any, location: str) -> TreeNode:
    """Recursively convert one JSON node located beneath parent_path."""
    if not isinstance(branch, dict):
        raise TreeParseError(
            f"Node at {location} must be an object, received {_json_type_name(branch)}."
        )

    node_type = branch.get("type")
    name = _node_name(branch, location)
    if "/" in name:
        raise TreeParseError(f"Node name {name!r} at {location} must not contain '/'.")

    if node_type == NodeType.FILE.value:
        return TreeFile(parent_path, name)

    if node_type == NodeType.DIRECTORY.value:
        branch_path = join_path(parent_path, name)
        children = [
            _parse_branch(branch_path, child, f"{location}/{i}")
            for i, child in enumerate(_node_contents(branch, location))
        ]
        _ensure_unique_siblings(children, location)
        return TreeDirectory(parent_path, name, children)

    raise TreeParseError(f"Unknown node type {node_type!r} at {location}.")


def _node_name(branch: Dict[str, Any], location: str) -> str:
    name = branch.get("name")
    if not isinstance(name, str) or not name:
        raise TreeParseError(f"Node at {location} has a missing or empty 'name'.")
    return name


def _node_contents(branch: Dict[str, Any], location: str) -> List[Any]:
    contents = branch.get("contents")
    if contents is None:
        return []
    if not isinstance(contents, list):
        raise TreeParseError(
            f"'contents' of {location} must be an array, received {_json_type_name(contents)}."
        )
    return contents


def _ensure_unique_siblings(children: List[TreeNode], location: str) -> None:
    """Reject listings where two siblings would share a full path."""
    seen: Set[Tuple[str, str]] = set()
    for child in children:
        key = (child.type.value, child.name)
        if key in seen:
            raise TreeParseError(f"Duplicate {key[0]} '{child.name}' in {location}.")
        seen.add(key)


def _json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (SERIALIZATION)
# -----------------------------------------------------------------------------

def _dump_branch(node: TreeNode, counters: Dict[str, int]) -> Dict[str, Any]:
    """Recursively convert one node, updating the directory/file tallies."""
    if isinstance(node, TreeFile):
        counters["files"] += 1
        return {"type": NodeType.FILE.value, "name": node.name}

    counters["directories"] += 1
    return {
        "type": NodeType.DIRECTORY.value,
        "name": node.name,
        "contents": [_dump_branch(child, counters) for child in node.children],
    }
