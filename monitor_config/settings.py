"""Settings loader and validator for monitor-config.

Provides ``load_settings(path)`` which reads a JSON settings file (with
comment and trailing-comma tolerant sanitizer) and merges it over the
defaults, falling back to ``~/.config/monitor-config/settings.json``.

Also provides ``validate_settings(conf)`` which normalizes and
validates settings keys, raising ``ValueError`` on invalid values.
"""

from __future__ import annotations

import json
import logging
import os
import re

from monitor_config.store import DEFAULT_LAYOUT_FILE

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = '~/.config/monitor-config/settings.json'

# Single source of truth for default settings
DEFAULT_SETTINGS: dict = {
    'layout_file': DEFAULT_LAYOUT_FILE,
    'kscreen_doctor': 'kscreen-doctor',
    'command_timeout': 10.0,
    'debug': False,
}


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _sanitize_json_text(s: str) -> str:
    """Remove ``#``/``//`` comments and trailing commas from JSON-like text."""
    # Hash-style line comments
    s = re.sub(r"^[ \t]*#.*$", "", s, flags=re.MULTILINE)
    # C++-style line comments
    s = re.sub(r"^[ \t]*//.*$", "", s, flags=re.MULTILINE)
    s = re.sub(r"[ \t]+//.*$", "", s, flags=re.MULTILINE)
    # Trailing commas before } or ]
    s = re.sub(r",[ \t\r\n]*(\}|\])", r"\1", s)
    return s


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------

def validate_settings(conf: dict | None) -> dict:
    """Validate and normalize a settings dictionary.

    Returns a normalized dict with all expected keys.
    Raises ``ValueError`` on invalid values.
    """
    if conf is None:
        conf = {}

    defaults = dict(DEFAULT_SETTINGS)
    out = dict(defaults)

    # layout_file: non-empty string
    lf = conf.get('layout_file', defaults['layout_file'])
    if not isinstance(lf, str) or not lf.strip():
        raise ValueError("Invalid 'layout_file': must be a non-empty string")
    out['layout_file'] = lf

    # kscreen_doctor: non-empty string (binary name or path)
    kd = conf.get('kscreen_doctor', defaults['kscreen_doctor'])
    if not isinstance(kd, str) or not kd.strip():
        raise ValueError("Invalid 'kscreen_doctor': must be a non-empty string")
    out['kscreen_doctor'] = kd

    # command_timeout: positive float, or null for no timeout
    ct = conf.get('command_timeout', defaults['command_timeout'])
    if ct is not None:
        if isinstance(ct, bool):
            raise ValueError(f"Invalid 'command_timeout': {ct}")
        try:
            ct = float(ct)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid 'command_timeout': {ct}")
        if ct <= 0:
            raise ValueError("Invalid 'command_timeout': must be > 0")
    out['command_timeout'] = ct

    # debug: boolean
    dbg = conf.get('debug', defaults['debug'])
    if not isinstance(dbg, bool):
        raise ValueError("Invalid 'debug' flag: must be boolean")
    out['debug'] = dbg

    return out


def _read_and_merge(path: str, target: dict) -> bool:
    """Read a JSON file, validate, and merge into *target*.

    Returns True on success, False on any error.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read settings %s: %s", path, exc)
        return False

    try:
        conf = json.loads(raw)
    except json.JSONDecodeError:
        try:
            conf = json.loads(_sanitize_json_text(raw))
        except json.JSONDecodeError as exc:
            logger.warning("JSON parse error in %s: %s", path, exc)
            return False

    if not isinstance(conf, dict):
        logger.warning("Ignoring settings %s: top level must be an object", path)
        return False

    try:
        validated = validate_settings(conf)
    except ValueError as verr:
        logger.warning("Invalid settings %s: %s", path, verr)
        return False

    # Only override keys explicitly present in source
    for k in conf:
        if k in validated:
            target[k] = validated[k]
        else:
            logger.warning("Unknown settings key %r in %s", k, path)
    return True


# ------------------------------------------------------------------
# Top-level loader
# ------------------------------------------------------------------

def load_settings(settings_path: str | None = None) -> dict:
    """Load and merge settings.

    If *settings_path* is given, uses only that file (returns defaults if
    the file does not exist).  Otherwise falls back to
    ``~/.config/monitor-config/settings.json``.

    Returns the effective settings dict (always has all default keys).
    """
    settings = dict(DEFAULT_SETTINGS)
    path = settings_path or os.path.expanduser(DEFAULT_SETTINGS_FILE)
    if os.path.exists(path):
        if _read_and_merge(path, settings):
            logger.debug("Loaded settings from %s", path)
    return settings
