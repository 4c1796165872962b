from __future__ import annotations

"""
Editable Tree Root.

Defines the Tree, a self-rooted directory that adds whole-tree operations on
top of the node model: validated structural moves, summary reports and the
serialization entry points.

Moves are two-phase. `plan_move` inspects the tree without touching it and
prepares a re-pathed copy of the source subtree; `move` only splices that
copy in once every check has passed, so a rejected move leaves the tree
exactly as it was.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from treefactor.domain.paths import dir_path, is_descendant
from treefactor.domain.tree_models import TreeDirectory, TreeFile, TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# RESULT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TreeReport:
    """
    Node counts of a tree, as found in the trailing `tree -J` report.

    Attributes:
        directories: Number of directories, excluding the root itself.
        files: Number of files.
    """
    directories: int = 0
    files: int = 0


@dataclass(frozen=True)
class MovePlan:
    """
    Outcome of validating a move request without applying it.

    Attributes:
        ok: True if the move can be committed.
        reason: Human-readable rejection cause (empty when ok).
        from_path: Requested source full path.
        to_path: Requested destination directory full path.
        destination: Full path the node would have after the move.
    """
    ok: bool
    reason: str
    from_path: str
    to_path: str
    destination: str = ""

    source: Optional[TreeNode] = field(default=None, repr=False, compare=False)
    old_parent: Optional[TreeDirectory] = field(default=None, repr=False, compare=False)
    new_parent: Optional[TreeDirectory] = field(default=None, repr=False, compare=False)
    moved: Optional[TreeNode] = field(default=None, repr=False, compare=False)


def _rejected(from_path: str, to_path: str, reason: str) -> MovePlan:
    return MovePlan(ok=False, reason=reason, from_path=from_path, to_path=to_path)


# -----------------------------------------------------------------------------
# TREE
# -----------------------------------------------------------------------------

class Tree(TreeDirectory):
    """
    A directory that is its own root.

    The root's name, path and full path all derive from the root identifier
    alone (e.g. 'root' gives 'root/'); no parent segment is ever prepended.
    """

    def __init__(self, root: str, children: Iterable[TreeNode] = ()) -> None:
        super().__init__(root, root, children)

    def set_path(self, path: str, propagate: bool = True) -> None:
        # The root location is fixed by its own name
        self.path = dir_path(self.name)
        self.full_path = self.path
        if propagate:
            for child in self._children:
                child.set_path(self.full_path, propagate)

    def clone(self) -> Tree:
        return Tree(self.name, [child.clone() for child in self._children])

    # --- Structural editing ---

    def plan_move(self, from_path: str, to_path: str) -> MovePlan:
        """
        Validate a move request without mutating the tree.

        Args:
            from_path: Full path of the node to relocate.
            to_path: Full path of the destination directory.

        Returns:
            MovePlan: A committable plan, or a rejection carrying its reason.
        """
        if from_path == to_path:
            return _rejected(from_path, to_path, "Source and destination are the same.")

        obj = self.find_node(from_path)
        if obj is None:
            return _rejected(from_path, to_path, f"Source '{from_path}' does not exist.")
        if obj is self:
            return _rejected(from_path, to_path, "The tree root cannot be moved.")

        old_parent = self.find_node(obj.path)
        new_parent = self.find_node(to_path)
        if new_parent is None:
            return _rejected(from_path, to_path, f"Destination '{to_path}' does not exist.")
        if not isinstance(new_parent, TreeDirectory):
            return _rejected(from_path, to_path, f"Destination '{to_path}' is not a directory.")
        if not isinstance(old_parent, TreeDirectory):
            return _rejected(from_path, to_path, f"Parent of '{from_path}' could not be resolved.")

        if isinstance(obj, TreeDirectory) and new_parent.is_descendant_of(obj):
            return _rejected(
                from_path, to_path, "A directory cannot be moved inside its own subtree."
            )

        moved = obj.clone()
        moved.set_path(new_parent.full_path)
        if new_parent.find_node(moved.full_path) is not None:
            return _rejected(
                from_path, to_path, f"'{moved.full_path}' already exists at the destination."
            )

        return MovePlan(
            ok=True,
            reason="",
            from_path=from_path,
            to_path=to_path,
            destination=moved.full_path,
            source=obj,
            old_parent=old_parent,
            new_parent=new_parent,
            moved=moved,
        )

    def move(self, from_path: str, to_path: str) -> Optional[str]:
        """
        Relocate a node beneath another directory.

        A rejected move (same path, missing source or destination, cycle,
        name collision) is an expected outcome and is signalled by None; the
        tree is then guaranteed to be unchanged.

        Args:
            from_path: Full path of the node to relocate.
            to_path: Full path of the destination directory.

        Returns:
            Optional[str]: The node's new full path, or None if rejected.
        """
        plan = self.plan_move(from_path, to_path)
        if not plan.ok:
            logger.debug(f"Move rejected ({from_path} -> {to_path}): {plan.reason}")
            return None

        return self._commit_move(plan)

    def _commit_move(self, plan: MovePlan) -> str:
        """Splice a validated plan into the tree."""
        assert plan.old_parent is not None and plan.new_parent is not None
        assert plan.source is not None and plan.moved is not None

        before_size = self.size()

        plan.old_parent.remove_child(plan.source)
        plan.new_parent.add_child(plan.moved)
        self._refresh_enclosing(plan.old_parent)
        self._refresh_enclosing(plan.new_parent)

        after_size = self.size()
        assert before_size == after_size, (
            f"Tree unexpectedly changed size after move(): {before_size} -> {after_size}"
        )

        logger.info(f"Moved '{plan.from_path}' -> '{plan.moved.full_path}'")
        return plan.moved.full_path

    def _refresh_enclosing(self, directory: TreeDirectory) -> None:
        """Recompute the summaries of every directory that encloses the given one."""
        lineage = [
            node for node in self.walk()
            if isinstance(node, TreeDirectory) and is_descendant(node.full_path, directory.full_path)
        ]
        # Deepest first
        for node in reversed(lineage):
            node._on_children_updated()

    # --- Summaries ---

    def report(self) -> TreeReport:
        """Count the directories (excluding the root) and files in the tree."""
        directories = 0
        files = 0
        for node in self.walk():
            if node is self:
                continue
            if isinstance(node, TreeFile):
                files += 1
            else:
                directories += 1
        return TreeReport(directories=directories, files=files)

    # --- Serialization entry points ---

    @classmethod
    def parse(cls, text: str) -> Tree:
        """Build a tree from `tree -J` JSON text."""
        from treefactor.core.serialization.codec import parse_tree
        return parse_tree(text)

    def stringify(self, indent: Optional[int] = None) -> str:
        """Serialize the tree back to `tree -J` JSON text."""
        from treefactor.core.serialization.codec import dump_tree
        return dump_tree(self, indent=indent)
