from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: configuration resolution (defaults,
persistent preferences and command-line overrides), logging bootstrap,
session loading, command dispatch and result rendering.

Exit codes:
    0   success
    1   rejected move, empty search or unexpected failure
    2   invalid input (unparseable or non-UTF-8 listing, missing file, no
        active session, unknown preference)
    130 interrupted by the user
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional

from treefactor.core.analysis.tree_renderer import render_tree
from treefactor.core.serialization.codec import dump_tree, parse_tree
from treefactor.core.validation import validate_config
from treefactor.domain.config import get_default_config, load_config, save_config
from treefactor.domain.constants import APP_SETTINGS_KEYS, RENDER_KEYS
from treefactor.domain.errors import TreeParseError
from treefactor.domain.tree import Tree
from treefactor.infra.fs import normalize_path, read_text_file, write_text_file
from treefactor.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from treefactor.infra.session_store import PersistenceKey, SessionStore
from treefactor.interface.cli import args as cli_args

logger = get_logger(__name__)

NO_SESSION_MSG = "No tree loaded. Run 'treefactor load FILE' first."

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve configuration (Default vs Persistent state) and overrides
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console stderr, optional rotating file)
    configure_logging(LoggingConfig(
        level=conf["log_level"],
        console=True,
        log_file=get_default_log_path() if conf["log_to_file"] else None,
    ))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    store = SessionStore(normalize_path(args.store_path, "") if args.store_path else None)
    logger.debug(f"Command '{args.command}' using session file {store.path}")

    # 4. Command dispatch
    handler = _COMMANDS[args.command]
    try:
        return handler(args, store, conf)
    except TreeParseError as e:
        return _fail(f"Parsing error: {e}", 2)
    except UnicodeDecodeError as e:
        return _fail(f"Parsing error: input is not UTF-8 text ({e.reason})", 2)
    except FileNotFoundError as e:
        return _fail(f"File not found: {e.filename}", 2)
    except OSError as e:
        logger.error(f"I/O failure: {e}")
        return _fail(f"I/O failure: {e}", 1)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.critical(f"Unexpected failure: {e}", exc_info=True)
        return _fail(f"Unexpected failure: {e}", 1)

# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

def _cmd_load(args: Any, store: SessionStore, conf: Dict[str, Any]) -> int:
    """Parse a listing and start a fresh session with it."""
    text = sys.stdin.read() if args.file == "-" else read_text_file(args.file)
    tree = parse_tree(text)

    store.save_tree(PersistenceKey.INITIAL_TREE, tree)
    store.save_tree(PersistenceKey.EDITED_TREE, tree)

    report = tree.report()
    logger.info(f"Session started from '{args.file}' ({tree.size()} nodes)")
    if args.json_output:
        _print_json({"root": tree.name, **asdict(report)})
    else:
        print(f"Loaded '{tree.name}': {report.directories} directories, {report.files} files")
    return 0


def _cmd_show(args: Any, store: SessionStore, conf: Dict[str, Any]) -> int:
    tree = _active_tree(store, args.original)
    if tree is None:
        return _fail(NO_SESSION_MSG, 2)

    if args.json_output:
        print(dump_tree(tree, indent=conf["json_indent"]))
        return 0

    lines = render_tree(
        tree,
        show_files=conf["show_files"],
        show_directory_summary=conf["show_directory_summary"],
    )
    print("\n".join(lines))
    return 0


def _cmd_move(args: Any, store: SessionStore, conf: Dict[str, Any]) -> int:
    """Apply one move to the edited tree and persist it on success."""
    tree = _active_tree(store, original=False)
    if tree is None:
        return _fail(NO_SESSION_MSG, 2)

    new_path = tree.move(args.from_path, args.to_path)
    if new_path is None:
        reason = tree.plan_move(args.from_path, args.to_path).reason
        if args.json_output:
            _print_json({"ok": False, "path": None, "reason": reason})
        else:
            print(f"Move rejected: {reason}", file=sys.stderr)
        return 1

    store.save_tree(PersistenceKey.EDITED_TREE, tree)
    if args.json_output:
        _print_json({"ok": True, "path": new_path, "reason": ""})
    else:
        print(new_path)
    return 0


def _cmd_find(args: Any, store: SessionStore, conf: Dict[str, Any]) -> int:
    tree = _active_tree(store, args.original)
    if tree is None:
        return _fail(NO_SESSION_MSG, 2)

    matches = [
        node.full_path for node in tree.walk()
        if node is not tree and args.query in node.name
    ]
    if args.json_output:
        _print_json({"query": args.query, "matches": matches})
    else:
        for path in matches:
            print(path)
    return 0 if matches else 1


def _cmd_report(args: Any, store: SessionStore, conf: Dict[str, Any]) -> int:
    tree = _active_tree(store, args.original)
    if tree is None:
        return _fail(NO_SESSION_MSG, 2)

    report = tree.report()
    if args.json_output:
        _print_json(asdict(report))
    else:
        print(f"{report.directories} directories, {report.files} files")
    return 0


def _cmd_export(args: Any, store: SessionStore, conf: Dict[str, Any]) -> int:
    tree = _active_tree(store, args.original)
    if tree is None:
        return _fail(NO_SESSION_MSG, 2)

    text = dump_tree(tree, indent=conf["json_indent"])
    if args.output_path:
        write_text_file(args.output_path, text + "\n")
        logger.info(f"Tree exported to {args.output_path}")
    else:
        print(text)
    return 0


def _cmd_reset(args: Any, store: SessionStore, conf: Dict[str, Any]) -> int:
    """Replace the edited tree with the original one."""
    initial = store.load(PersistenceKey.INITIAL_TREE)
    if initial is None:
        return _fail(NO_SESSION_MSG, 2)

    store.save(PersistenceKey.EDITED_TREE, initial)
    logger.info("Edits discarded.")
    if args.json_output:
        _print_json({"ok": True})
    else:
        print("Edits discarded.")
    return 0


def _cmd_config(args: Any, store: SessionStore, conf: Dict[str, Any]) -> int:
    """
    Print the persisted preferences, applying any --set assignments first.
    """
    try:
        updates = cli_args.parse_assignments(args.assignments)
    except ValueError as e:
        return _fail(str(e), 2)

    unknown = sorted(k for k in updates if k not in APP_SETTINGS_KEYS + RENDER_KEYS)
    if unknown:
        return _fail(f"Unknown preference(s): {', '.join(unknown)}", 2)

    saved, warnings = validate_config({**load_config(), **updates}, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")
    if updates:
        save_config(saved)
        logger.info(f"Preferences updated: {', '.join(sorted(updates))}")

    if args.json_output:
        _print_json(saved)
    else:
        for key in APP_SETTINGS_KEYS + RENDER_KEYS:
            print(f"{key} = {json.dumps(saved[key])}")
    return 0


_COMMANDS: Dict[str, Callable[[Any, SessionStore, Dict[str, Any]], int]] = {
    "load": _cmd_load,
    "show": _cmd_show,
    "move": _cmd_move,
    "find": _cmd_find,
    "report": _cmd_report,
    "export": _cmd_export,
    "reset": _cmd_reset,
    "config": _cmd_config,
}

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge non-None overrides into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out


def _active_tree(store: SessionStore, original: bool) -> Optional[Tree]:
    key = PersistenceKey.INITIAL_TREE if original else PersistenceKey.EDITED_TREE
    return store.load_tree(key)


def _print_json(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _fail(message: str, code: int) -> int:
    print(f"ERROR: {message}", file=sys.stderr)
    return code

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
