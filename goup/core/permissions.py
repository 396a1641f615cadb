"""Execute-bit restoration for freshly extracted toolchains."""
import os
import stat
from pathlib import Path
from typing import Iterable, Iterator, Set

from .. import constants
from . import platform
from ..utils.exceptions import FilesystemError

EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH

def _raise_walk_error(error: OSError) -> None:
    raise FilesystemError("walk", error.filename or "", error) from error

def _plain_files(path: Path) -> Iterator[Path]:
    """Yield regular files at or below path, in a stable order."""
    if path.is_symlink():
        return
    if path.is_file():
        yield path
        return
    if not path.is_dir():
        return
    for dirpath, dirnames, filenames in os.walk(path, onerror=_raise_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            file_path = Path(dirpath) / name
            if not file_path.is_symlink():
                yield file_path

def allow_exec(path: Path) -> None:
    """Add the execute bits to path, keeping its read/write bits."""
    try:
        mode = stat.S_IMODE(os.stat(path).st_mode)
        if mode & EXEC_BITS == EXEC_BITS:
            return
        os.chmod(path, mode | EXEC_BITS)
    except OSError as e:
        raise FilesystemError("chmod", str(path), e) from e

def finalize_permissions(
    root: Path,
    primary: str = constants.PRIMARY_EXECUTABLE,
    auxiliary: Iterable[str] = constants.AUXILIARY_EXECUTABLES
) -> bool:
    """Set execute bits on every file of an extracted tree.

    Skipped on Windows, and when the primary entry point is already
    executable. Auxiliary paths are handled first and the primary entry
    point last: other installers racing on the same tree take an
    executable primary as "setup complete".

    Args:
        root: Extraction root
        primary: Primary entry point, relative to root
        auxiliary: Files or directories the primary invokes, relative to root

    Returns:
        bool: True if modes were changed

    Raises:
        FilesystemError: If the primary entry point is missing or a chmod fails
    """
    if platform.is_windows():
        return False

    root = Path(root)
    primary_path = root / primary
    try:
        primary_mode = os.stat(primary_path).st_mode
    except OSError as e:
        raise FilesystemError("stat", str(primary_path), e) from e
    if primary_mode & EXEC_BITS:
        return False

    done: Set[Path] = {primary_path}
    for target in [root / name for name in auxiliary] + [root]:
        for file_path in _plain_files(target):
            if file_path in done:
                continue
            allow_exec(file_path)
            done.add(file_path)

    allow_exec(primary_path)
    return True
