"""Configuration file and environment handling for the CLI."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console

from pynotesync.exceptions import ConfigError

console = Console()

config_dir = os.path.expanduser("~/.config/pynotesync")
config_path = os.path.join(config_dir, "config.json")

# setting name -> environment variable overriding the config file
ENV_VARS: Dict[str, str] = {
    "store_url": "PYNOTESYNC_STORE_URL",
    "api_key": "PYNOTESYNC_API_KEY",
    "owner_id": "PYNOTESYNC_OWNER_ID",
    "gemini_api_key": "GEMINI_API_KEY",
    "autosave_delay": "PYNOTESYNC_AUTOSAVE_DELAY",
}
SECRET_KEYS = {"api_key", "gemini_api_key"}


def load_config() -> Dict[str, Any]:
    """Load configuration from file."""
    try:
        if os.path.exists(config_path):
            with open(config_path, "r", encoding="utf-8") as f:
                return json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not load config file: {exc}")
    return {}


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file."""
    try:
        Path(config_dir).mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        # Ensure file has restrictive permissions
        os.chmod(config_path, 0o600)
    except OSError as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not save config file: {exc}")


def get_setting(key: str, default: Any = None) -> Any:
    """Resolve a setting: environment variable > config file > default."""
    env_name = ENV_VARS.get(key)
    if env_name and os.getenv(env_name):
        return os.getenv(env_name)
    return load_config().get(key, default)


def get_owner_id(provided: Optional[int] = None) -> Optional[int]:
    """Owner id from the command line, environment or config file."""
    if provided is not None:
        return provided
    raw = get_setting("owner_id")
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError("owner_id", f"owner_id must be numeric, got {raw!r}") from exc


def get_autosave_delay() -> float:
    raw = get_setting("autosave_delay", 1.0)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            "autosave_delay", f"autosave_delay must be a number, got {raw!r}"
        ) from exc
