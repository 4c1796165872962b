from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global flags and one sub-command per
editing action) and translates parsed namespaces into configuration
overrides.
"""

import argparse
import json
from typing import Any, Dict, List

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the Treefactor CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="treefactor",
        description=(
            "Experiment with the structure of a file tree without touching real data. "
            "Accepts the JSON listing printed by 'tree -J'."
        ),
    )

    # --- Session and Diagnostics ---
    p.add_argument(
        "--store",
        dest="store_path",
        default=None,
        help="Session file holding the loaded and edited trees.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore saved preferences and use built-in defaults.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print machine-readable JSON instead of text.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- load ---
    p_load = sub.add_parser("load", help="Start a session from a 'tree -J' JSON file.")
    p_load.add_argument("file", help="Path of the JSON listing ('-' reads stdin).")

    # --- show ---
    p_show = sub.add_parser("show", help="Render the edited (or original) tree.")
    _add_original_flag(p_show)
    p_show.add_argument(
        "--files",
        dest="show_files",
        action="store_true",
        default=None,
        help="Draw file entries.",
    )
    p_show.add_argument(
        "--no-files",
        dest="show_files",
        action="store_false",
        help="Draw directories only.",
    )
    p_show.add_argument(
        "--summary",
        dest="show_directory_summary",
        action="store_true",
        default=None,
        help="List the file types contained in each directory.",
    )

    # --- move ---
    p_move = sub.add_parser("move", help="Move a node into another directory.")
    p_move.add_argument("from_path", metavar="FROM", help="Full path of the node to move.")
    p_move.add_argument("to_path", metavar="TO", help="Full path of the destination directory.")

    # --- find ---
    p_find = sub.add_parser("find", help="List nodes whose name contains a substring.")
    _add_original_flag(p_find)
    p_find.add_argument("query", help="Substring to look for.")

    # --- report ---
    p_report = sub.add_parser("report", help="Count directories and files.")
    _add_original_flag(p_report)

    # --- export ---
    p_export = sub.add_parser("export", help="Write the tree back as 'tree -J' JSON.")
    _add_original_flag(p_export)
    p_export.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Destination file (prints to stdout when omitted).",
    )
    p_export.add_argument(
        "--indent",
        dest="json_indent",
        type=int,
        default=None,
        help="JSON indentation width.",
    )

    # --- reset ---
    sub.add_parser("reset", help="Discard all edits and return to the original tree.")

    # --- config ---
    p_config = sub.add_parser("config", help="Show or change saved preferences.")
    p_config.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Persist a preference (repeatable).",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options that were explicitly given produce an override.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.debug:
        overrides["log_level"] = "DEBUG"

    for key in ("show_files", "show_directory_summary", "json_indent"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value

    return overrides


def parse_assignments(assignments: List[str]) -> Dict[str, Any]:
    """
    Split KEY=VALUE pairs given to 'config --set'.

    Values are decoded as JSON literals when possible (`true`, `4`, `null`)
    and kept as plain strings otherwise.

    Raises:
        ValueError: If a pair has no '=' or an empty key.
    """
    out: Dict[str, Any] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, received '{item}'.")
        value = value.strip()
        try:
            out[key] = json.loads(value)
        except ValueError:
            out[key] = value
    return out

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _add_original_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--original",
        action="store_true",
        help="Use the tree as originally loaded instead of the edited one.",
    )
