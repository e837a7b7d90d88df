#config/config.py
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import tomlkit

from kappagotchi.core.rules import RuleTable

_log = logging.getLogger(__name__)

# defaults.toml ships inside the package
DEFAULTS_PATH = Path(__file__).resolve().parent / "defaults.toml"
USER_CONFIG_PATH = Path("~/.kappagotchi/config.toml")
DEFAULT_STATE_FILENAME = "state.json"


def _load_toml(path: Path) -> dict:
    """Safely load a TOML file, returning an empty dictionary if the file is missing or invalid."""
    if not path.exists():
        _log.debug("Config file not found: %s", path)
        return {}
    try:
        data = tomlkit.loads(path.read_text(encoding="utf-8")).unwrap()
        _log.debug("Loaded config from %s", path)
        return data
    except Exception:
        _log.exception("Failed to parse TOML: %s", path)
        return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge the override dictionary into the base dictionary."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def default_config_path() -> Path:
    """User config path, overridable with KAPPA_CONFIG."""
    return Path(os.environ.get("KAPPA_CONFIG", str(USER_CONFIG_PATH))).expanduser()


def load_config(system_path: Union[Path, str, None] = None) -> Dict[str, Any]:
    """
    Load defaults.toml and merge the user's config over it.

    Args:
        system_path (Path, optional): Path to a user configuration file. If None,
                                       KAPPA_CONFIG or ~/.kappagotchi/config.toml is used.

    Returns:
        dict: The merged configuration (plain Python types).
    """
    cfg = _load_toml(DEFAULTS_PATH)

    user_path = Path(system_path).expanduser() if system_path else default_config_path()
    user_cfg = _load_toml(user_path)

    if user_cfg:
        cfg = _deep_merge(cfg, user_cfg)
        _log.info("Configuration merged from %s", user_path)

    return cfg


def load_rules(config: Optional[Dict[str, Any]] = None) -> RuleTable:
    """Build the frozen rule table; raises ConfigValidationError on bad values."""
    return RuleTable.from_config(config if config is not None else load_config())


def save_config(config: Dict[str, Any], config_path: Union[Path, str]) -> bool:
    """
    Save configuration to a TOML file atomically.

    Returns:
        True if successful, False otherwise
    """
    path = Path(config_path).expanduser()
    temp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path.write_text(tomlkit.dumps(config), encoding="utf-8")
        os.replace(temp_path, path)
        _log.info("Configuration saved to %s", path)
        return True
    except Exception as e:
        _log.error("Error saving configuration to %s: %s", path, e)
        if temp_path.exists():
            temp_path.unlink()
        return False


def get_state_path(config: Dict[str, Any], filename: Optional[str] = None) -> Path:
    """
    Path of the saved game: <main.base_dir>/<main.state_file>.

    The directory is created if needed; falls back to /tmp/kappagotchi when it
    cannot be.
    """
    main = config.get("main", {})
    base_dir = Path(main.get("base_dir", "~/.kappagotchi")).expanduser()
    filename = filename or main.get("state_file", DEFAULT_STATE_FILENAME)
    try:
        base_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        _log.error("Could not create directory %s: %s", base_dir, e)
        base_dir = Path("/tmp/kappagotchi")
        base_dir.mkdir(parents=True, exist_ok=True)
    state_path = base_dir / filename
    _log.debug("State path: %s", state_path)
    return state_path
