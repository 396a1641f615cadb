"""Command-line interface module for goup."""
from .cli import main
from . import commands

__all__ = ['main', 'commands']
