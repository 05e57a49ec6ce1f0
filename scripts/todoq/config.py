"""
Runtime configuration.

Values come from, in order of precedence: explicit arguments (CLI flags),
the YAML config file, then the defaults below.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml
from rich.color import Color, ColorParseError

from todoq.errors import ConfigError
from todoq.keymap import DEFAULT_KEYMAP, normalize_keymap

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 30


def app_dir() -> Path:
    """``$XDG_CONFIG_HOME/todoq``, falling back to ``~/.config/todoq``."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "todoq"


def default_config_path() -> Path:
    return app_dir() / "config.yaml"


@dataclass(frozen=True)
class Theme:
    """Colours for the task list.

    The list uses ``fg``, ``dim``, ``selection`` and ``accent`` (the cursor
    marker). ``danger`` and ``border`` are read and validated so existing
    config files keep loading, but nothing draws with them yet.
    """

    name: str
    accent: str
    fg: str
    dim: str
    danger: str
    selection: str
    border: str = "round"


DEFAULT_THEME_DARK = Theme(
    name="dark",
    accent="cyan",
    fg="white",
    dim="grey50",
    danger="red",
    selection="#1f2937",
)

DEFAULT_THEME_LIGHT = Theme(
    name="light",
    accent="blue",
    fg="black",
    dim="#6b7280",
    danger="red",
    selection="#e5e7eb",
)

THEME_PRESETS = {"dark": DEFAULT_THEME_DARK, "light": DEFAULT_THEME_LIGHT}


@dataclass
class AppConfig:
    """Resolved application settings."""

    data_path: Path
    export_dir: Path
    theme: Theme = DEFAULT_THEME_DARK
    keymap: dict[str, list[str]] = field(default_factory=lambda: normalize_keymap(DEFAULT_KEYMAP))
    list_window_size: int = DEFAULT_WINDOW_SIZE
    log_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.log_dir is None:
            self.log_dir = app_dir() / "logs"


def _resolve_theme(raw: Any) -> Theme:
    if raw is None:
        return DEFAULT_THEME_DARK
    if not isinstance(raw, dict):
        raise ConfigError(f"theme must be a mapping, got {type(raw).__name__}")
    preset = raw.get("preset")
    if preset is not None:
        if preset not in THEME_PRESETS:
            raise ConfigError(f"Unknown theme preset: {preset}")
        return THEME_PRESETS[preset]
    if "name" in raw:
        base = asdict(DEFAULT_THEME_DARK)
        unknown = set(raw) - set(base)
        if unknown:
            raise ConfigError(f"Unknown theme keys: {', '.join(sorted(unknown))}")
        base.update({k: str(v) for k, v in raw.items()})
        for key in ("accent", "fg", "dim", "danger", "selection"):
            try:
                Color.parse(base[key])
            except ColorParseError as e:
                raise ConfigError(f"theme.{key}: {e}") from e
        return Theme(**base)
    return DEFAULT_THEME_DARK


def _read_config_file(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return {}
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")
    return data


def load_config(
    data_path: Path | str | None = None,
    export_dir: Path | str | None = None,
    config_path: Path | str | None = None,
) -> AppConfig:
    """Build an AppConfig from arguments, the config file and defaults."""
    config_path = Path(config_path) if config_path else default_config_path()
    user = _read_config_file(config_path)
    base = app_dir()

    window = user.get("listWindowSize", DEFAULT_WINDOW_SIZE)
    if isinstance(window, bool) or not isinstance(window, int) or window < 1:
        raise ConfigError(f"listWindowSize must be a positive integer, got {window!r}")

    user_keymap = user.get("keymap") or {}
    if not isinstance(user_keymap, dict):
        raise ConfigError("keymap must be a mapping of action to key(s)")
    for action, binding in user_keymap.items():
        if isinstance(binding, str):
            continue
        if not isinstance(binding, list) or not all(isinstance(b, str) for b in binding):
            raise ConfigError(f"keymap.{action} must be a key name or a list of key names, got {binding!r}")
    keymap = normalize_keymap({**DEFAULT_KEYMAP, **user_keymap})

    cfg = AppConfig(
        data_path=Path(data_path or user.get("dataPath") or base / "data.json").expanduser(),
        export_dir=Path(export_dir or user.get("exportDir") or base / "export").expanduser(),
        theme=_resolve_theme(user.get("theme")),
        keymap=keymap,
        list_window_size=window,
        log_dir=Path(user["logDir"]).expanduser() if user.get("logDir") else None,
    )
    logger.debug("Config resolved: data=%s export=%s", cfg.data_path, cfg.export_dir)
    return cfg


def write_sample_config(config_path: Path | str | None = None) -> bool:
    """Write a sample config file if none exists. Returns True if written."""
    config_path = Path(config_path) if config_path else default_config_path()
    if config_path.exists():
        return False
    base = app_dir()
    sample = {
        "dataPath": str(base / "data.json"),
        "exportDir": str(base / "export"),
        "theme": {"preset": "dark"},
        "keymap": {"down": ["j", "downArrow"], "up": ["k", "upArrow"]},
        "listWindowSize": DEFAULT_WINDOW_SIZE,
    }
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(yaml.safe_dump(sample, sort_keys=False), encoding="utf-8")
    logger.info("Wrote sample config to %s", config_path)
    return True
