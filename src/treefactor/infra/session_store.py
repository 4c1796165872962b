from __future__ import annotations

"""
Session Persistence Layer.

Stores the working state of an editing session as opaque text in a single
JSON file: the tree as originally loaded and the tree as edited so far. Trees
are persisted in their `tree -J` serialized form.
"""

import json
import logging
import os
from enum import Enum
from typing import Dict, Optional

from treefactor.core.serialization.codec import dump_tree, parse_tree
from treefactor.domain.constants import SESSION_FILE_NAME
from treefactor.domain.tree import Tree
from treefactor.infra.fs import get_user_data_dir, read_text_file, write_text_file

logger = logging.getLogger(__name__)


class PersistenceKey(str, Enum):
    INITIAL_TREE = "initial_tree"
    EDITED_TREE = "edited_tree"


def get_default_session_path() -> str:
    """Resolve the session file inside the user data directory."""
    return os.path.join(get_user_data_dir(), SESSION_FILE_NAME)


class SessionStore:
    """
    Key/value store for session text, backed by one JSON file.

    Every operation reads the file afresh, so separate CLI invocations always
    observe each other's writes.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or get_default_session_path()

    # --- Raw text access ---

    def save(self, key: PersistenceKey, value: Optional[str]) -> None:
        """
        Store a value under the given key.

        An empty or missing value removes the key instead.
        """
        data = self._read()
        if value:
            data[key.value] = value
        else:
            data.pop(key.value, None)
        self._write(data)

    def load(self, key: PersistenceKey) -> Optional[str]:
        return self._read().get(key.value)

    def is_saved(self, key: PersistenceKey) -> bool:
        return key.value in self._read()

    def remove(self, key: PersistenceKey) -> None:
        self.save(key, None)

    def clear(self) -> None:
        self._write({})

    # --- Tree access ---

    def load_tree(self, key: PersistenceKey) -> Optional[Tree]:
        """
        Load and parse a stored tree.

        Returns:
            Optional[Tree]: The tree, or None if nothing is stored under the key.

        Raises:
            TreeParseError: If the stored text is not a valid tree listing.
        """
        text = self.load(key)
        if text is None:
            return None
        return parse_tree(text)

    def save_tree(self, key: PersistenceKey, tree: Optional[Tree]) -> None:
        self.save(key, dump_tree(tree) if tree is not None else None)

    # --- Internal ---

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            data = json.loads(read_text_file(self.path))
        except (OSError, ValueError) as e:
            logger.warning(f"Session file '{self.path}' is unreadable ({e}). Starting empty.")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Session file '{self.path}' is corrupted. Starting empty.")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        write_text_file(self.path, json.dumps(data, ensure_ascii=False, indent=2))
        logger.debug(f"Session saved to {self.path}")
