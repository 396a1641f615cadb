"""Platform-specific functionality."""
import platform
from typing import Tuple

from .. import constants
from ..utils.exceptions import PlatformError

def _supported_platforms_text() -> str:
    return "\n".join(f"- {os}: {', '.join(archs)}" for os, archs in constants.SUPPORTED_PLATFORMS.items())

def get_platform_info() -> Tuple[str, str]:
    """Get the host platform as Go names it.
    
    Returns:
        tuple: (goos, goarch), e.g. ('linux', 'amd64')
        
    Raises:
        PlatformError: If the platform/architecture combination is not supported
    """
    system = platform.system()
    machine = platform.machine().lower()

    os_name = constants.SYSTEM_MAP.get(system)
    if not os_name:
        raise PlatformError(f"Unsupported platform: {system}")

    arch = constants.ARCH_MAP.get(machine)
    if not arch or arch not in constants.SUPPORTED_PLATFORMS[os_name]:
        raise PlatformError(
            f"Platform {os_name}/{arch or machine} is not supported. Supported platforms are:\n" +
            _supported_platforms_text()
        )

    return os_name, arch

def is_windows() -> bool:
    """Check if running on Windows."""
    return platform.system() == "Windows"

def get_go_bin_name() -> str:
    """Get the platform-specific go binary name.
    
    Returns:
        str: 'go.exe' on Windows, 'go' elsewhere
    """
    return "go.exe" if is_windows() else "go"
