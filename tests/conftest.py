from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared `tree -J` sample listings used across unit and integration tests.
"""

import os
from pathlib import Path
import sys

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from treefactor.core.serialization.codec import parse_tree  # noqa: E402
from treefactor.domain.tree import Tree  # noqa: E402

# -----------------------------------------------------------------------------
# Sample Listings
# -----------------------------------------------------------------------------

# 7 directories (excluding root) and 11 files
SAMPLE_TREE_JSON = """[
  {"type":"directory","name":"root","contents":[
    {"type":"directory","name":"a","contents":[
      {"type":"directory","name":"1","contents":[
        {"type":"file","name":"image.jpg"},
        {"type":"file","name":"image.png"}
    ]},
      {"type":"directory","name":"2"},
      {"type":"directory","name":"duplicate-dir","contents":[
        {"type":"file","name":"nested-duplicate"},
        {"type":"file","name":"file.txt"}
    ]},
      {"type":"file","name":"duplicate.txt"},
      {"type":"file","name":"icon.svg"}
  ]},
    {"type":"directory","name":"b","contents":[
      {"type":"directory","name":"1","contents":[
        {"type":"file","name":"file.txt"}
    ]},
      {"type":"directory","name":"duplicate-dir","contents":[
        {"type":"file","name":"nested-duplicate"}
    ]},
      {"type":"file","name":"duplicate.txt"},
      {"type":"file","name":"file.md"}
  ]},
    {"type":"file","name":"file.dat"}
  ]},
  {"type":"report","directories":7,"files":11}
]"""
SAMPLE_TREE_SIZE = 19

# Root name with spaces and slashes; the report is deliberately stale
ASSETS_TREE_JSON = """[
  {"type":"directory","name":"beatonma-gulp/src/raw assets","contents":[
    {"type":"directory","name":"apps","contents":[
      {"type":"directory","name":"android","contents":[
        {"type":"file","name":"form.svg"},
        {"type":"file","name":"io16.svg"}
      ]},
      {"type":"file","name":"microformats-reader.svg"}
  ]},
    {"type":"directory","name":"app-type","contents":[
      {"type":"file","name":"android.svg"},
      {"type":"file","name":"arduino.svg"},
      {"type":"file","name":"chrome.svg"},
      {"type":"file","name":"django.svg"},
      {"type":"file","name":"node-js.svg"},
      {"type":"file","name":"webapp.png"},
      {"type":"file","name":"python.svg"},
      {"type":"file","name":"webapp.svg"}
  ]},
    {"type":"file","name":"mb.svg"}
  ]}
,
  {"type":"report","directories":2,"files":11}
]
"""
ASSETS_TREE_SIZE = 16


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_tree() -> Tree:
    """Return a freshly parsed copy of the 19-node 'root' listing."""
    return parse_tree(SAMPLE_TREE_JSON)


@pytest.fixture
def assets_tree() -> Tree:
    """Return a freshly parsed copy of the 'raw assets' listing."""
    return parse_tree(ASSETS_TREE_JSON)


@pytest.fixture
def sample_tree_json() -> str:
    return SAMPLE_TREE_JSON


@pytest.fixture
def sample_tree_file(tmp_path: Path) -> Path:
    """Write the 'root' listing to disk, as `tree -J > listing.json` would."""
    path = tmp_path / "listing.json"
    path.write_text(SAMPLE_TREE_JSON, encoding="utf-8")
    return path
