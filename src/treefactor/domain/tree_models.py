from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the two node variants (directories and files) that make up an
editable tree listing. Every node knows its own location through plain path
strings; directories own their children exclusively and never keep a
reference back to their parent.
"""

from enum import Enum
from typing import FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple, Union

from treefactor.domain.paths import dir_path, is_descendant, join_path

ContentDescription = FrozenSet[str]


class NodeType(str, Enum):
    """Type tag carried by every node, matching the `tree -J` vocabulary."""
    DIRECTORY = "directory"
    FILE = "file"


# -----------------------------------------------------------------------------
# LEAF NODES
# -----------------------------------------------------------------------------

class TreeFile:
    """
    Represents a leaf entry (file) in the directory tree.

    Attributes:
        name: File name, including its extension.
        path: Full path of the parent directory ('/'-terminated).
        full_path: Unique identifier of the file (path + name).
        extension: Text after the last '.' in the name, or '' if there is none.
    """

    type: NodeType = NodeType.FILE

    def __init__(self, path: str, name: str) -> None:
        self.name = name
        self.extension = _extension_of(name)
        self.path = ""
        self.full_path = ""
        self.set_path(path)

    @property
    def content_description(self) -> ContentDescription:
        """File type contained within this node."""
        return frozenset((self.extension,))

    def set_path(self, path: str, propagate: bool = True) -> None:
        """Relocate the file beneath the given parent path."""
        self.path = dir_path(path)
        self.full_path = join_path(path, self.name)

    def size(self) -> int:
        return 1

    def clone(self) -> TreeFile:
        return TreeFile(self.path, self.name)

    def contains(self, substring: str) -> bool:
        return substring in self.name

    def find_node(self, target_path: str) -> Optional[TreeNode]:
        return self if self.full_path == target_path else None

    def walk(self) -> Iterator[TreeNode]:
        yield self

    def equivalent_to(self, other: object) -> bool:
        return isinstance(other, TreeFile) and self.full_path == other.full_path

    def __str__(self) -> str:
        return self.full_path

    def __repr__(self) -> str:
        return f"TreeFile({self.full_path!r})"


# -----------------------------------------------------------------------------
# BRANCH NODES
# -----------------------------------------------------------------------------

class TreeDirectory:
    """
    Represents a directory entry and the subtree it owns.

    Children are kept sorted (directories first, then files, each group by
    name) and the aggregated content description is recomputed by every
    mutator, so both are always consistent with the current structure.

    Attributes:
        name: Directory name.
        path: Full path of the parent directory ('/'-terminated).
        full_path: Unique identifier of the directory (path + name + '/').
    """

    type: NodeType = NodeType.DIRECTORY

    def __init__(self, path: str, name: str, children: Iterable[TreeNode] = ()) -> None:
        self.name = name
        self.path = ""
        self.full_path = ""
        self._children: List[TreeNode] = []
        self._content_description: ContentDescription = frozenset()

        self.set_path(path, propagate=False)
        adopted = list(children)
        for child in adopted:
            child.set_path(self.full_path)
        self._set_children(adopted)

    # --- Read-only views ---

    @property
    def children(self) -> Tuple[TreeNode, ...]:
        """Sorted snapshot of the direct children."""
        return tuple(self._children)

    @property
    def content_description(self) -> ContentDescription:
        """File types contained within this directory or any descendant."""
        return self._content_description

    # --- Structural mutation ---

    def set_path(self, path: str, propagate: bool = True) -> None:
        """
        Relocate the directory beneath the given parent path.

        Args:
            path: Full path of the new parent directory.
            propagate: If True, re-derive the paths of every descendant.
        """
        self.path = dir_path(path)
        self.full_path = dir_path(join_path(path, self.name))
        if propagate:
            for child in self._children:
                child.set_path(self.full_path, propagate)

    def add_child(self, node: TreeNode) -> None:
        """
        Attach a node as a direct child of this directory.

        The node is re-pathed beneath this directory. Name collisions are not
        checked here; callers that need that guarantee must check first.
        """
        node.set_path(self.full_path)
        self._children.append(node)
        self._on_children_updated()

    def remove_child(self, child: TreeNode) -> None:
        """Detach every direct child sharing the given node's full path."""
        self._set_children([it for it in self._children if it.full_path != child.full_path])

    def is_descendant_of(self, other: TreeDirectory) -> bool:
        return is_descendant(other.full_path, self.full_path)

    # --- Queries ---

    def size(self) -> int:
        """Number of nodes in this subtree, including this directory."""
        return 1 + sum(child.size() for child in self._children)

    def clone(self) -> TreeDirectory:
        return TreeDirectory(self.path, self.name, [child.clone() for child in self._children])

    def contains(self, substring: str) -> bool:
        return substring in self.name or any(child.contains(substring) for child in self._children)

    def find_node(self, target_path: str) -> Optional[TreeNode]:
        """
        Locate the node in this subtree whose full path matches exactly.

        Args:
            target_path: Full path to look for.

        Returns:
            Optional[TreeNode]: The matching node, or None if absent.
        """
        if self.full_path == target_path:
            return self

        for child in self._children:
            result = child.find_node(target_path)
            if result is not None:
                return result
        return None

    def walk(self) -> Iterator[TreeNode]:
        """Yield this directory and all descendants, depth-first pre-order."""
        yield self
        for child in self._children:
            yield from child.walk()

    def equivalent_to(self, other: object) -> bool:
        """
        Deep structural comparison.

        Two directories are equivalent when they share a full path and their
        sorted children are pairwise equivalent.
        """
        if not isinstance(other, TreeDirectory):
            return False
        if self.full_path != other.full_path:
            return False
        if len(self._children) != len(other._children):
            return False
        return all(
            mine.equivalent_to(theirs)
            for mine, theirs in zip(self._children, other._children)
        )

    def to_pretty_string(self, joiner: str = "\n") -> str:
        """
        Build an indented outline of the subtree.

        Each directory is shown with its child count; nested levels are
        indented by two spaces.
        """
        indent = "  "
        child_strings = [
            child.to_pretty_string(joiner + indent) if isinstance(child, TreeDirectory) else child.name
            for child in self._children
        ]
        return (joiner + indent).join([f"{self.name} ({len(self._children)})", *child_strings])

    def __str__(self) -> str:
        return self.full_path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_path!r}, children={len(self._children)})"

    # --- Internal ---

    def _set_children(self, children: List[TreeNode]) -> None:
        self._children = list(children)
        self._on_children_updated()

    def _on_children_updated(self) -> None:
        # Keeps sibling order and the aggregated summary in step with the list
        self._children.sort(key=_sort_key)
        description: Set[str] = set()
        for child in self._children:
            description.update(child.content_description)
        self._content_description = frozenset(description)


TreeNode = Union[TreeDirectory, TreeFile]


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _extension_of(name: str) -> str:
    """Return the text after the last '.', or '' when the name has none."""
    _, dot, ext = name.rpartition(".")
    return ext if dot else ""


def _sort_key(node: TreeNode) -> Tuple[int, str, str]:
    """Directories sort before files, then names case-insensitively."""
    return (0 if isinstance(node, TreeDirectory) else 1, node.name.casefold(), node.name)
