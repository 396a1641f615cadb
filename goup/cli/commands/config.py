"""Config command implementations."""
import yaml

from ...core import config
from ...utils.exceptions import ConfigValidationError

def config_list_command(args) -> None:
    """Print the effective global configuration."""
    global_config = config.load_global_config()
    print(yaml.dump(global_config, default_flow_style=False).rstrip())
    print(f"# config file: {config.constants.GOUP_CONFIG_FILE}")

def config_get_command(args) -> None:
    """Print a single global config value."""
    global_config = config.load_global_config()
    if args.key not in global_config:
        raise ConfigValidationError(f"Unknown config key '{args.key}'")
    print(global_config[args.key])

def config_set_command(args) -> None:
    """Set a single global config value."""
    global_config = config.set_config_value(args.key, args.value)
    print(f"Set {args.key} = {global_config[args.key]}")
