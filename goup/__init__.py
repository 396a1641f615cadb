"""goup - fetch and install Go toolchains into a user directory."""
from .cli.cli import main
from .core.config import init_paths

# Initialize global paths
init_paths()

__version__ = "0.1.0"
__all__ = ['main']
