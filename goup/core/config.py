"""Configuration management for goup."""
import os
from pathlib import Path
import yaml
from typing import Dict, Any, Mapping, Optional

from .. import constants
from ..utils.exceptions import ConfigValidationError

def init_paths(base_path: Optional[Path] = None) -> None:
    """Initialize global paths for goup.
    
    Args:
        base_path: Optional custom base path. If None, uses ~/.config/goup
        
    Raises:
        ValueError: If base_path is not writable
    """
    if base_path is not None and not (base_path.exists() or base_path.parent.exists()):
        raise ValueError(f"Base path {base_path} does not exist and cannot be created")
    
    constants.GOUP_HOME = base_path or Path.home() / ".config" / "goup"
    constants.GOUP_CONFIG_FILE = constants.GOUP_HOME / "config.yaml"

def _ensure_config_dir() -> None:
    """Ensure configuration directory exists.
    
    Raises:
        RuntimeError: If directory cannot be created
    """
    try:
        constants.GOUP_HOME.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RuntimeError(f"Failed to create config directory {constants.GOUP_HOME}: {e}")

def load_global_config() -> Dict[str, Any]:
    """Load global configuration from YAML file, filling in defaults."""
    config = constants.DEFAULT_CONFIG.copy()
    if not constants.GOUP_CONFIG_FILE.exists():
        return config
        
    try:
        with open(constants.GOUP_CONFIG_FILE, 'r') as f:
            user_config = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        raise RuntimeError(f"Failed to load config file {constants.GOUP_CONFIG_FILE}: {e}")
    if not isinstance(user_config, dict):
        raise ConfigValidationError(f"Config file {constants.GOUP_CONFIG_FILE} must contain a mapping")
    config.update(user_config)
    return config

def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to YAML file.
    
    Args:
        config: Configuration dictionary to save
        
    Raises:
        RuntimeError: If config cannot be saved
    """
    _ensure_config_dir()
    try:
        with open(constants.GOUP_CONFIG_FILE, 'w') as f:
            yaml.dump(config, f)
    except (yaml.YAMLError, OSError) as e:
        raise RuntimeError(f"Failed to save config file {constants.GOUP_CONFIG_FILE}: {e}")

def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ('true', 'yes', '1', 'on'):
        return True
    if lowered in ('false', 'no', '0', 'off'):
        return False
    raise ValueError(f"not a boolean: {value!r}")

def coerce_config_value(key: str, value: str) -> Any:
    """Convert a string from the command line to the type of a config key.
    
    Args:
        key: Global config key
        value: Raw string value
        
    Returns:
        The value converted to the type of the key's default
        
    Raises:
        ConfigValidationError: If the key is unknown or the value invalid
    """
    if key not in constants.DEFAULT_CONFIG:
        valid = ", ".join(constants.DEFAULT_CONFIG.keys())
        raise ConfigValidationError(f"Unknown config key '{key}'. Valid keys: {valid}")

    default = constants.DEFAULT_CONFIG[key]
    try:
        # bool before int: bool is a subclass of int
        if isinstance(default, bool):
            return _parse_bool(value)
        if isinstance(default, int):
            number = int(value)
            if number <= 0:
                raise ValueError("must be positive")
            return number
    except ValueError as e:
        raise ConfigValidationError(f"Invalid value for '{key}': {e}")
    return value

def set_config_value(key: str, value: str) -> Dict[str, Any]:
    """Validate, store and persist a single global config value."""
    config = load_global_config()
    config[key] = coerce_config_value(key, value)
    save_global_config(config)
    return config

def resolve_install_dir(
    global_config: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None
) -> Path:
    """Resolve the directory Go gets installed into.
    
    Precedence: GOINSTALLDIR, then the 'install_dir' config key, then ~/.go.
    
    Args:
        global_config: Loaded global config (loaded from disk if None)
        environ: Environment mapping (os.environ if None)
        
    Returns:
        Path: Absolute install directory
    """
    if environ is None:
        environ = os.environ
    if global_config is None:
        global_config = load_global_config()

    dst = environ.get(constants.INSTALL_DIR_ENV) or global_config.get('install_dir')
    if dst:
        return Path(dst).expanduser().absolute()
    return Path.home() / constants.DEFAULT_INSTALL_DIRNAME
