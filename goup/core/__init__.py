"""Core functionality for goup."""

from . import config
from . import platform
from . import fetch
from . import extract
from . import permissions
from . import install

__all__ = ['config', 'platform', 'fetch', 'extract', 'permissions', 'install']
