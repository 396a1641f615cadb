"""Fetch-and-install of Go toolchain archives."""
import subprocess
import threading
from pathlib import Path
from typing import Iterable, Optional

import requests

from .. import constants
from . import extract as extractor
from . import permissions
from .fetch import fetch, format_bytes
from ..utils.exceptions import CommandError

def toolchain_uri(
    version: str,
    os_name: str,
    arch: str,
    base_url: str = constants.DEFAULT_TOOLCHAIN_BASE_URL
) -> str:
    """Build the download URL of a toolchain installer zip.

    Args:
        version: Go version, e.g. 'go1.21.0beta1'
        os_name: GOOS
        arch: GOARCH
        base_url: Directory URL holding the zips

    Returns:
        str: e.g. '<base_url>/v0.0.1-go1.21.0beta1-installer.linux-amd64.zip'
    """
    name = f"{constants.TOOLCHAIN_MODULE_VERSION}-{version}-installer.{os_name}-{arch}"
    return f"{base_url.rstrip('/')}/{name}.zip"

def primary_binary(destination: Path, primary: str = constants.PRIMARY_EXECUTABLE) -> Path:
    return Path(destination) / primary

def is_installed(destination: Path, primary: str = constants.PRIMARY_EXECUTABLE) -> bool:
    """Check whether the primary entry point exists under destination."""
    return primary_binary(destination, primary).exists()

def fetch_and_install(
    uri: str,
    destination: Path,
    cancel_event: Optional[threading.Event] = None,
    *,
    timeout: float = constants.DEFAULT_FETCH_TIMEOUT,
    fetch_disabled: bool = False,
    session: Optional[requests.Session] = None,
    primary: str = constants.PRIMARY_EXECUTABLE,
    auxiliary: Iterable[str] = constants.AUXILIARY_EXECUTABLES,
    quiet: bool = False
) -> extractor.InstalledTree:
    """Download the archive at uri and install it under destination.

    Errors propagate unchanged; a failed attempt may leave destination
    partially populated and the caller decides whether to remove it.

    Args:
        uri: Archive URL
        destination: Absolute install directory
        cancel_event: Event that aborts the download when set
        timeout: Request timeout in seconds
        fetch_disabled: Passed through to fetch
        session: Optional requests session
        primary: Primary entry point, relative to destination
        auxiliary: Paths made executable before the primary
        quiet: Suppress progress output

    Returns:
        InstalledTree: The extracted files and directories
    """
    payload = fetch(
        uri,
        cancel_event,
        timeout=timeout,
        fetch_disabled=fetch_disabled,
        session=session,
        quiet=quiet
    )
    if not quiet:
        print(f"Downloaded {format_bytes(len(payload))}, extracting to {destination}")

    tree = extractor.extract(payload, destination)
    permissions.finalize_permissions(tree.root, primary, auxiliary)
    return tree

def run_installed(binary: Path, *args: str) -> None:
    """Run an installed binary with inherited stdio.

    Raises:
        CommandError: If the binary cannot be started or exits non-zero
    """
    command = [str(binary), *args]
    try:
        subprocess.run(command, check=True)
    except (subprocess.CalledProcessError, OSError) as e:
        raise CommandError(f"{' '.join(command)} failed: {e}") from e
