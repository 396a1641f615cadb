"""Global constants and default configurations for goup."""

# Global paths will be initialized by core.config
GOUP_HOME = None
GOUP_CONFIG_FILE = None

# Environment variable overriding the install directory
INSTALL_DIR_ENV = "GOINSTALLDIR"
DEFAULT_INSTALL_DIRNAME = ".go"

# golang.org/toolchain module version used for packaging
TOOLCHAIN_MODULE_VERSION = "v0.0.1"
DEFAULT_TOOLCHAIN_VERSION = "go1.21.0beta1"
DEFAULT_TOOLCHAIN_BASE_URL = "https://github.com/hyangah/goup/raw/main/res"

DEFAULT_FETCH_TIMEOUT = 60
MAX_ARCHIVE_SIZE = 500 * 1024 * 1024  # 500MB

# Marker the module proxy puts in 404/410 bodies when the origin fetch timed out
FETCH_TIMED_OUT_MARKER = "fetch timed out"

# Primary entry point and the tools it invokes, relative to the install dir
PRIMARY_EXECUTABLE = "bin/go"
AUXILIARY_EXECUTABLES = ("pkg/tool", "bin/gofmt")

# Default configuration
DEFAULT_CONFIG = {
    "install_dir": "",
    "toolchain_version": DEFAULT_TOOLCHAIN_VERSION,
    "toolchain_base_url": DEFAULT_TOOLCHAIN_BASE_URL,
    "fetch_timeout": DEFAULT_FETCH_TIMEOUT,
    "fetch_disabled": False,
}

NOTICE = """
The go command by default downloads and authenticates modules
using the Go module mirror and Go checksum database run by Google.
See https://proxy.golang.org/privacy for privacy information
about these services and the go command documentation for configuration
details including how to disable the use of these servers or
use different ones.
"""

# System name mappings (platform.system() -> GOOS)
SYSTEM_MAP = {
    'Darwin': 'darwin',
    'Windows': 'windows',
    'Linux': 'linux',
    'FreeBSD': 'freebsd'
}

# platform.machine() (lowercased) -> GOARCH
ARCH_MAP = {
    'x86_64': 'amd64',
    'amd64': 'amd64',
    'aarch64': 'arm64',
    'arm64': 'arm64',
    'i386': '386',
    'i686': '386',
    'x86': '386',
    'armv6l': 'armv6l',
    'armv7l': 'armv6l'
}

# Platform support information
SUPPORTED_PLATFORMS = {
    'darwin': ['amd64', 'arm64'],
    'linux': ['amd64', 'arm64', '386', 'armv6l'],
    'windows': ['amd64', 'arm64', '386'],
    'freebsd': ['amd64', '386']
}
