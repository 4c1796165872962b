from __future__ import annotations

"""
Unit tests for the `tree -J` codec.

Covers parsing of the sample listings, the generated report, lossless
re-serialization and every structural error the parser must reject.
"""

import json

import pytest

from treefactor.core.serialization.codec import (
    REPORT_TYPE,
    build_tree,
    dump_tree,
    parse_tree,
    tree_to_data,
)
from treefactor.domain.errors import TreeParseError
from treefactor.domain.tree import Tree
from treefactor.domain.tree_models import TreeDirectory, TreeFile

# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------

def test_parse_sample_listing(sample_tree: Tree) -> None:
    """TC-01: The root listing yields the expected structure and paths."""
    assert sample_tree.name == "root"
    assert len(sample_tree.children) == 3

    a = next(c for c in sample_tree.children if c.name == "a")
    assert isinstance(a, TreeDirectory)
    assert a.full_path == "root/a/"
    assert len(a.children) == 5

    icon = next(c for c in a.children if c.name == "icon.svg")
    assert isinstance(icon, TreeFile)
    assert icon.full_path == "root/a/icon.svg"
    assert icon.extension == "svg"


def test_parse_root_name_with_separators(assets_tree: Tree) -> None:
    """TC-02: A root name containing '/' and spaces is kept verbatim."""
    assert assets_tree.name == "beatonma-gulp/src/raw assets"
    assert len(assets_tree.children) == 3

    app_type = next(c for c in assets_tree.children if c.name == "app-type")
    assert app_type.full_path == "beatonma-gulp/src/raw assets/app-type/"
    assert len(app_type.children) == 8

    first = app_type.children[0]
    assert first.full_path == "beatonma-gulp/src/raw assets/app-type/android.svg"
    assert first.extension == "svg"


def test_parse_ignores_stale_report(assets_tree: Tree) -> None:
    assert assets_tree.report().directories == 3


def test_parse_without_report() -> None:
    tree = parse_tree('[{"type":"directory","name":"r","contents":[{"type":"file","name":"x"}]}]')
    assert tree.size() == 2


def test_parse_directory_without_contents() -> None:
    tree = parse_tree('[{"type":"directory","name":"r","contents":[{"type":"directory","name":"d"}]}]')
    d = tree.find_node("r/d/")
    assert isinstance(d, TreeDirectory)
    assert d.children == ()


def test_build_tree_from_decoded_data() -> None:
    tree = build_tree([{"type": "directory", "name": "r"}])
    assert isinstance(tree, Tree)
    assert tree.size() == 1

# -----------------------------------------------------------------------------
# Serialization
# -----------------------------------------------------------------------------

def test_round_trip_is_lossless(sample_tree: Tree, sample_tree_json: str) -> None:
    """TC-03: Parsing a serialized tree yields an equivalent but distinct tree."""
    restored = parse_tree(dump_tree(sample_tree))

    assert restored is not sample_tree
    assert restored.equivalent_to(sample_tree)
    assert restored.equivalent_to(parse_tree(sample_tree_json))


def test_round_trip_after_move(sample_tree: Tree) -> None:
    sample_tree.move("root/a/1/", "root/b/duplicate-dir/")
    restored = Tree.parse(sample_tree.stringify())

    assert restored.equivalent_to(sample_tree)
    assert restored.find_node("root/b/duplicate-dir/1/image.jpg") is not None


def test_tree_to_data_shape(sample_tree: Tree) -> None:
    """TC-04: Output is the root object followed by a regenerated report."""
    data = tree_to_data(sample_tree)

    assert len(data) == 2
    root, report = data
    assert root["type"] == "directory"
    assert root["name"] == "root"
    assert [c["name"] for c in root["contents"]] == ["a", "b", "file.dat"]
    assert report == {"type": REPORT_TYPE, "directories": 7, "files": 11}


def test_files_carry_no_contents_key(sample_tree: Tree) -> None:
    root = tree_to_data(sample_tree)[0]
    file_entry = root["contents"][-1]
    empty_dir = root["contents"][0]["contents"][1]

    assert file_entry == {"type": "file", "name": "file.dat"}
    assert empty_dir == {"type": "directory", "name": "2", "contents": []}


def test_report_regenerated_from_structure(assets_tree: Tree) -> None:
    report = tree_to_data(assets_tree)[1]
    assert report["directories"] == 3
    assert report["files"] == 12


def test_dump_tree_indent() -> None:
    tree = Tree("r", [TreeFile("", "x")])

    compact = dump_tree(tree)
    pretty = dump_tree(tree, indent=2)

    assert "\n" not in compact
    assert "\n" in pretty
    assert json.loads(compact) == json.loads(pretty)


def test_dump_tree_keeps_unicode() -> None:
    tree = Tree("raíz", [TreeFile("", "canción.mp3")])
    assert "canción.mp3" in dump_tree(tree)

# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("text, fragment", [
    ("not json", "Invalid JSON"),
    ('{"type":"directory","name":"r"}', "JSON array"),
    ("[]", "empty"),
    ("[{}]", "root"),
    ('[{"type":"file","name":"r"}]', "must be a directory"),
    ('[{"type":"directory"}]', "name"),
    ('[{"type":"directory","name":""}]', "name"),
    ('[{"type":"directory","name":"r","contents":{}}]', "must be an array"),
    ('[{"type":"directory","name":"r","contents":[1]}]', "must be an object"),
    ('[{"type":"directory","name":"r","contents":[{"type":"link","name":"l"}]}]', "Unknown node type"),
    ('[{"type":"directory","name":"r","contents":[{"type":"file"}]}]', "name"),
])
def test_malformed_listings_raise(text: str, fragment: str) -> None:
    """TC-05: Structural problems raise TreeParseError instead of a partial tree."""
    with pytest.raises(TreeParseError) as excinfo:
        parse_tree(text)
    assert fragment in str(excinfo.value)


def test_duplicate_siblings_rejected() -> None:
    text = json.dumps([{"type": "directory", "name": "r", "contents": [
        {"type": "file", "name": "x.txt"},
        {"type": "file", "name": "x.txt"},
    ]}])
    with pytest.raises(TreeParseError, match="Duplicate file 'x.txt'"):
        parse_tree(text)


def test_nested_error_reports_location() -> None:
    text = json.dumps([{"type": "directory", "name": "r", "contents": [
        {"type": "directory", "name": "d", "contents": [{"type": "bogus", "name": "n"}]},
    ]}])
    with pytest.raises(TreeParseError, match=r"r\[0\]/0"):
        parse_tree(text)


def test_parse_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_tree("[]")


def test_child_name_with_separator_rejected() -> None:
    """TC-06: A child name holding '/' would alias another node's full path."""
    text = json.dumps([{"type": "directory", "name": "r", "contents": [
        {"type": "directory", "name": "a", "contents": [{"type": "file", "name": "b"}]},
        {"type": "file", "name": "a/b"},
    ]}])
    with pytest.raises(TreeParseError, match="must not contain '/'"):
        parse_tree(text)


def test_deeply_nested_listing_raises() -> None:
    """TC-07: Nesting past the recursion limit is a parse error, not a crash."""
    depth = 20000
    text = (
        '[' + '{"type":"directory","name":"d","contents":[' * depth
        + ']}' * depth + ']'
    )
    with pytest.raises(TreeParseError, match="nest"):
        parse_tree(text)
