"""Settings file I/O for notes-tags.

Manages a JSON settings file at XDG_CONFIG_HOME/notes-tags/settings.json.
Unknown keys are preserved on save; missing keys fall back to DEFAULTS.

This module is a STABLE BOUNDARY.
Import as: import notes_tags.io.settings
"""

import json
import os
import tempfile
from pathlib import Path

# [LAW:one-source-of-truth] Default values for every known setting.
DEFAULTS: dict[str, object] = {
    "hide_delay_ms": 150,
    "preview_limit": 100,
    "seed_hue": 230.0,
}


def get_config_path() -> Path:
    """Return path to settings file.

    Uses XDG_CONFIG_HOME (default ~/.config) / notes-tags / settings.json.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "notes-tags" / "settings.json"


def load_settings() -> dict:
    """Load settings from JSON file. Returns empty dict on missing/corrupt file."""
    path = get_config_path()
    # [LAW:dataflow-not-control-flow] Always attempt read; empty dict is the "no data" value.
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def save_settings(data: dict) -> None:
    """Atomic write of settings dict to JSON file.

    Creates parent directories if needed. Writes to temp file then renames
    to avoid partial writes on crash.
    """
    write_text_atomic(get_config_path(), json.dumps(data, indent=2) + "\n")


def load_setting(key: str, default=None):
    """Load a single setting by key. Falls back to DEFAULTS, then default."""
    return load_settings().get(key, DEFAULTS.get(key, default))


def save_setting(key: str, value) -> None:
    """Save a single setting by key (merge into existing settings)."""
    data = load_settings()
    data[key] = value
    save_settings(data)


def _coerce(value, cast, fallback):
    try:
        return cast(value)
    except (TypeError, ValueError):
        return fallback


def load_hide_delay() -> float:
    """Hover hide debounce in seconds."""
    default_ms = DEFAULTS["hide_delay_ms"]
    ms = _coerce(load_setting("hide_delay_ms"), float, default_ms)
    return max(0.0, ms) / 1000.0


def load_preview_limit() -> int:
    default = DEFAULTS["preview_limit"]
    return max(1, _coerce(load_setting("preview_limit"), int, default))


def load_seed_hue() -> float:
    """Palette seed hue in degrees. NOTES_TAGS_SEED_HUE overrides the file."""
    default = DEFAULTS["seed_hue"]
    raw = os.environ.get("NOTES_TAGS_SEED_HUE")
    if raw is None:
        raw = load_setting("seed_hue")
    return _coerce(raw, float, default) % 360.0


def write_text_atomic(path: Path, text: str) -> None:
    """Write text to path via temp file + rename in the same directory."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
