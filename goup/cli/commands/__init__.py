"""Command implementations for goup CLI."""

from .install import install_command, where_command
from .config import (
    config_get_command,
    config_list_command,
    config_set_command
)

__all__ = [
    'install_command',
    'where_command',
    'config_get_command',
    'config_list_command',
    'config_set_command'
]
