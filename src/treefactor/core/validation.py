from __future__ import annotations

"""
Configuration Validation Service.

Ensures that settings coming from config.json or the command line conform to
the expected schema before they reach the logging, rendering and
serialization layers. Handles type coercion and default value injection.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from treefactor.domain.config import get_default_config
from treefactor.domain.constants import LOG_LEVELS, MAX_JSON_INDENT

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided settings dictionary.

    Converts untrusted inputs into strictly typed values and fills missing
    keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Field Processing & Normalization
    for field in ("log_to_file", "show_files", "show_directory_summary"):
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["log_level"] = _as_level(merged.get("log_level"), defaults["log_level"], warnings, strict)
    merged["json_indent"] = _as_indent(merged.get("json_indent"), warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_level(value: Any, fallback: str, warnings: List[str], strict: bool) -> str:
    """Normalize a logging level name to its upper-case form."""
    if value is None:
        return fallback
    if not isinstance(value, str):
        msg = f"Invalid field 'log_level': expected str, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    level = value.strip().upper()
    if level == "WARN":
        level = "WARNING"
    if level in LOG_LEVELS:
        return level

    msg = f"Unknown log level '{value}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using {fallback}.")
    return fallback


def _as_indent(value: Any, warnings: List[str], strict: bool) -> Optional[int]:
    """Accept None (compact output) or an integer indentation in range."""
    if value is None:
        return None

    if isinstance(value, str) and not strict:
        s = value.strip()
        if s.isdigit():
            warnings.append(f"Field 'json_indent' converted from '{value}' to int.")
            value = int(s)

    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"Invalid field 'json_indent': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using compact output.")
        return None

    if not 0 <= value <= MAX_JSON_INDENT:
        msg = f"Field 'json_indent' out of range (0-{MAX_JSON_INDENT}): {value}."
        if strict:
            raise ValueError(msg)
        clamped = min(max(value, 0), MAX_JSON_INDENT)
        warnings.append(f"{msg} Clamped to {clamped}.")
        return clamped

    return value
