"""Settings file for fplan.

The file is TOML and lives at $XDG_CONFIG_HOME/fplan/config.toml unless
FPLAN_CONFIG names another path. Only presentation and logging settings
are kept there; ledger records are never written to disk by this module.
"""

import copy
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

CONFIG_ENV_VAR = "FPLAN_CONFIG"

DEFAULT_CONFIG: dict[str, Any] = {
    "log_level": "WARNING",
    "report": {
        "sort_by": "value",
        "histogram": True,
    },
    "export": {
        "indent": 2,
    },
}


def get_xdg_config_home() -> Path:
    """XDG config directory, ~/.config when XDG_CONFIG_HOME is unset."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Locate the settings file.

    Returns:
        $FPLAN_CONFIG if set, otherwise the XDG location.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_xdg_config_home() / "fplan" / "config.toml"


def _merge(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Read settings, filling in every key the file leaves out.

    Args:
        config_path: Settings file. Defaults to get_config_path().

    Returns:
        Settings dictionary; a copy of DEFAULT_CONFIG when the file is absent.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    with path.open("rb") as f:
        return _merge(DEFAULT_CONFIG, tomllib.load(f))


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Write settings as TOML, readable by the owner only."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomli_w.dumps(config), encoding="utf-8")
    path.chmod(0o600)


def create_default_config(config_path: Path | None = None) -> None:
    """Write DEFAULT_CONFIG to the settings file (used by `fplan init`)."""
    save_config(copy.deepcopy(DEFAULT_CONFIG), config_path)


def get_report_settings(config: dict[str, Any]) -> tuple[str, bool]:
    """Get (sort_by, histogram) for reports, falling back to defaults on bad values."""
    report = config.get("report")
    if not isinstance(report, dict):
        report = {}
    sort_by = report.get("sort_by", "value")
    if sort_by not in ("value", "alpha"):
        sort_by = "value"
    histogram = report.get("histogram", True)
    return sort_by, bool(histogram)


def get_export_indent(config: dict[str, Any]) -> int:
    """Get the JSON indent used when exporting bundles."""
    export = config.get("export")
    if not isinstance(export, dict):
        export = {}
    indent = export.get("indent", 2)
    if not isinstance(indent, int) or isinstance(indent, bool) or indent < 0:
        return 2
    return indent
