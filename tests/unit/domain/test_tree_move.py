from __future__ import annotations

"""
Unit tests for structural editing of a Tree.

Every successful move must keep the node count, remove the source path and
create the reported destination path. Every rejected move must leave the
tree equivalent to its previous state.
"""

import logging

import pytest

from treefactor.domain.tree import MovePlan, Tree, TreeReport
from treefactor.domain.tree_models import TreeDirectory, TreeFile

# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _expect_move_success(tree: Tree, from_path: str, to_path: str) -> str:
    original_state = tree.clone()
    original_size = tree.size()
    assert tree.find_node(from_path) is not None

    result_path = tree.move(from_path, to_path)

    assert result_path is not None
    assert tree.size() == original_size
    assert tree.find_node(from_path) is None
    assert tree.find_node(result_path) is not None
    assert not tree.equivalent_to(original_state)
    return result_path


def _expect_move_fail(tree: Tree, from_path: str, to_path: str) -> None:
    original_state = tree.clone()

    assert tree.move(from_path, to_path) is None
    assert tree.equivalent_to(original_state)

# -----------------------------------------------------------------------------
# Successful moves
# -----------------------------------------------------------------------------

def test_move_file_to_parent_directory(sample_tree: Tree) -> None:
    """TC-01: A file can be lifted into its grandparent."""
    new_path = _expect_move_success(sample_tree, "root/a/1/image.jpg", "root/a/")
    assert new_path == "root/a/image.jpg"


def test_move_directory_to_root(sample_tree: Tree) -> None:
    """TC-02: A directory can be moved directly beneath the root."""
    new_path = _expect_move_success(sample_tree, "root/a/2/", "root/")
    assert new_path == "root/2/"


def test_move_to_sibling_directory(sample_tree: Tree) -> None:
    new_path = _expect_move_success(sample_tree, "root/a/2/", "root/b/")
    assert new_path == "root/b/2/"


def test_moving_directory_repaths_descendants(sample_tree: Tree) -> None:
    """TC-03: Every descendant of a moved directory follows it."""
    sample_tree.move("root/a/1/", "root/a/2/")

    assert sample_tree.find_node("root/a/1/") is None
    assert sample_tree.find_node("root/a/1/image.jpg") is None
    assert sample_tree.find_node("root/a/1/image.png") is None

    assert sample_tree.find_node("root/a/2/1/") is not None
    assert sample_tree.find_node("root/a/2/1/image.jpg") is not None
    assert sample_tree.find_node("root/a/2/1/image.png") is not None


def test_move_updates_content_descriptions(sample_tree: Tree) -> None:
    sample_tree.move("root/a/icon.svg", "root/b/")

    assert "svg" not in sample_tree.find_node("root/a/").content_description
    assert "svg" in sample_tree.find_node("root/b/").content_description
    assert "svg" in sample_tree.content_description


def test_moved_node_keeps_sibling_order(sample_tree: Tree) -> None:
    sample_tree.move("root/file.dat", "root/b/")
    names = [c.name for c in sample_tree.find_node("root/b/").children]

    assert names == ["1", "duplicate-dir", "duplicate.txt", "file.dat", "file.md"]


def test_sequence_of_moves_can_be_reverted(sample_tree: Tree) -> None:
    original_state = sample_tree.clone()

    sample_tree.move("root/a/1/", "root/b/duplicate-dir/")
    sample_tree.move("root/b/duplicate-dir/1/", "root/a/")

    assert sample_tree.equivalent_to(original_state)

# -----------------------------------------------------------------------------
# Rejected moves
# -----------------------------------------------------------------------------

def test_move_directory_into_descendant_fails(sample_tree: Tree) -> None:
    """TC-04: A directory cannot be moved inside its own subtree."""
    _expect_move_fail(sample_tree, "root/a/", "root/a/2/")


def test_move_directory_into_itself_fails(sample_tree: Tree) -> None:
    _expect_move_fail(sample_tree, "root/a/", "root/a/")


def test_move_duplicate_file_fails(sample_tree: Tree) -> None:
    """TC-05: A move onto an existing sibling with the same name is rejected."""
    _expect_move_fail(sample_tree, "root/a/duplicate.txt", "root/b/")


def test_move_duplicate_directory_fails(sample_tree: Tree) -> None:
    _expect_move_fail(sample_tree, "root/a/duplicate-dir/", "root/b/")


def test_move_missing_source_fails(sample_tree: Tree) -> None:
    _expect_move_fail(sample_tree, "root/a/2/duplicate-dir/", "root/b/")


def test_move_to_missing_destination_fails(sample_tree: Tree) -> None:
    _expect_move_fail(sample_tree, "root/a/icon.svg", "root/c/")


def test_move_to_current_parent_fails(assets_tree: Tree) -> None:
    """TC-06: Moving a node to the directory it already lives in is a collision."""
    _expect_move_fail(
        assets_tree,
        "beatonma-gulp/src/raw assets/app-type/",
        "beatonma-gulp/src/raw assets/",
    )


def test_move_to_file_destination_fails(sample_tree: Tree) -> None:
    _expect_move_fail(sample_tree, "root/a/icon.svg", "root/file.dat")


def test_move_root_fails(sample_tree: Tree) -> None:
    _expect_move_fail(sample_tree, "root/", "root/a/")

# -----------------------------------------------------------------------------
# Planning
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("from_path, to_path, fragment", [
    ("root/a/", "root/a/", "same"),
    ("root/x/", "root/b/", "does not exist"),
    ("root/", "root/b/", "root cannot be moved"),
    ("root/a/icon.svg", "root/x/", "does not exist"),
    ("root/a/icon.svg", "root/file.dat", "not a directory"),
    ("root/a/", "root/a/1/", "own subtree"),
    ("root/a/duplicate.txt", "root/b/", "already exists"),
])
def test_plan_move_reports_reason(
        sample_tree: Tree, from_path: str, to_path: str, fragment: str
) -> None:
    """TC-07: Each rejection carries a readable cause."""
    plan = sample_tree.plan_move(from_path, to_path)

    assert not plan.ok
    assert fragment in plan.reason
    assert plan.destination == ""


def test_plan_move_does_not_mutate(sample_tree: Tree) -> None:
    original_state = sample_tree.clone()
    plan = sample_tree.plan_move("root/a/1/", "root/b/")

    assert isinstance(plan, MovePlan)
    assert plan.ok
    assert plan.reason == ""
    assert plan.destination == "root/b/1/"
    assert sample_tree.equivalent_to(original_state)


def test_plan_move_rejects_file_collision_at_root() -> None:
    tree = Tree("root", [
        TreeDirectory("", "a", [TreeFile("", "x.txt")]),
        TreeFile("", "x.txt"),
    ])

    plan = tree.plan_move("root/a/x.txt", "root/")
    assert not plan.ok
    assert "root/x.txt" in plan.reason


def test_file_and_directory_with_same_name_can_coexist() -> None:
    """TC-08: A file 'x' and a directory 'x' have distinct full paths."""
    tree = Tree("root", [
        TreeDirectory("", "a", [TreeFile("", "x")]),
        TreeDirectory("", "x"),
    ])

    assert tree.move("root/a/x", "root/") == "root/x"
    assert tree.find_node("root/x/") is not None


def test_rejected_move_is_logged_at_debug(
        sample_tree: Tree, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.DEBUG, logger="treefactor.domain.tree"):
        sample_tree.move("root/a/", "root/a/2/")

    assert "Move rejected" in caplog.text

# -----------------------------------------------------------------------------
# Root and report
# -----------------------------------------------------------------------------

def test_root_is_self_rooted() -> None:
    tree = Tree("beatonma-gulp/src/raw assets")

    assert tree.name == "beatonma-gulp/src/raw assets"
    assert tree.path == "beatonma-gulp/src/raw assets/"
    assert tree.full_path == "beatonma-gulp/src/raw assets/"


def test_report_excludes_root(sample_tree: Tree, assets_tree: Tree) -> None:
    assert sample_tree.report() == TreeReport(directories=7, files=11)
    assert assets_tree.report() == TreeReport(directories=3, files=12)
    assert Tree("empty").report() == TreeReport(directories=0, files=0)


def test_report_is_stable_across_moves(sample_tree: Tree) -> None:
    before = sample_tree.report()
    sample_tree.move("root/a/1/", "root/b/duplicate-dir/")
    assert sample_tree.report() == before


def test_move_refreshes_enclosing_summaries(sample_tree: Tree) -> None:
    """TC-09: Summaries of every enclosing directory follow a deep move."""
    sample_tree.move("root/a/1/image.jpg", "root/b/1/")

    assert "jpg" not in sample_tree.find_node("root/a/").content_description
    assert "jpg" in sample_tree.find_node("root/b/").content_description
    assert "jpg" in sample_tree.find_node("root/b/1/").content_description
    assert "jpg" in sample_tree.content_description
