"""Safe zip extraction for downloaded toolchains."""
import io
import os
import shutil
import stat
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, List, Tuple, Union

from ..utils.exceptions import CorruptArchiveError, FilesystemError, PathTraversalError

# Mode for entries written by tools that store no POSIX permissions
DEFAULT_FILE_MODE = 0o666


@dataclass(frozen=True)
class ArchiveEntry:
    """A read-only view of one member of a decoded archive."""
    name: str
    size: int
    mode: int
    is_dir: bool
    _archive: zipfile.ZipFile = field(repr=False, compare=False)
    _info: zipfile.ZipInfo = field(repr=False, compare=False)

    def open(self) -> IO[bytes]:
        """Open the decompressed content stream of the entry."""
        return self._archive.open(self._info)


@dataclass
class InstalledTree:
    """Files and directories created under root by an extraction."""
    root: Path
    files: List[Path] = field(default_factory=list)
    directories: List[Path] = field(default_factory=list)


SUPPORTED_COMPRESSION = frozenset({
    zipfile.ZIP_STORED,
    zipfile.ZIP_DEFLATED,
    zipfile.ZIP_BZIP2,
    zipfile.ZIP_LZMA,
})

# General purpose flag bit 0
ENCRYPTED_FLAG = 0x1


def _entry_mode(info: zipfile.ZipInfo) -> int:
    # Permission bits only: setuid, setgid and sticky are dropped
    mode = stat.S_IMODE(info.external_attr >> 16) & 0o777
    if info.is_dir():
        return mode or 0o777
    return mode or DEFAULT_FILE_MODE

def _check_readable(info: zipfile.ZipInfo) -> None:
    if info.flag_bits & ENCRYPTED_FLAG:
        raise CorruptArchiveError(f"Archive entry {info.filename!r} is encrypted")
    if info.compress_type not in SUPPORTED_COMPRESSION:
        raise CorruptArchiveError(
            f"Archive entry {info.filename!r} uses unsupported compression method {info.compress_type}"
        )

def decode_archive(payload: bytes) -> Tuple[zipfile.ZipFile, List[ArchiveEntry]]:
    """Parse payload as a zip archive.

    Args:
        payload: Raw archive bytes

    Returns:
        tuple: (open ZipFile, entries in stored order). The caller closes the ZipFile.

    Raises:
        CorruptArchiveError: If the payload cannot be decoded, or an entry
            is encrypted or compressed with an unsupported method
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(payload))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, ValueError) as e:
        raise CorruptArchiveError(f"Failed to read zip archive ({len(payload)} bytes): {e}") from e

    try:
        for info in archive.infolist():
            _check_readable(info)
    except CorruptArchiveError:
        archive.close()
        raise

    entries = [
        ArchiveEntry(
            name=info.filename,
            size=info.file_size,
            mode=_entry_mode(info),
            is_dir=info.is_dir(),
            _archive=archive,
            _info=info,
        )
        for info in archive.infolist()
    ]
    return archive, entries

def resolve_entry_path(destination: Union[str, Path], name: str) -> str:
    """Resolve an archive entry name against destination.

    Args:
        destination: Extraction root
        name: Untrusted archive-internal path

    Returns:
        str: Normalized absolute output path

    Raises:
        PathTraversalError: If the path is not destination or below it
    """
    root = os.path.normpath(os.path.abspath(destination))
    target = os.path.normpath(os.path.join(root, name))
    if target != root and not target.startswith(root.rstrip(os.sep) + os.sep):
        raise PathTraversalError(name, root)
    return target

def _makedirs(path: str) -> None:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise FilesystemError("mkdir", path, e) from e

def _open_entry(entry: ArchiveEntry) -> IO[bytes]:
    try:
        return entry.open()
    except (zipfile.BadZipFile, NotImplementedError, RuntimeError, EOFError) as e:
        # Bad local header, unsupported method or encryption
        raise CorruptArchiveError(f"Failed to open {entry.name!r} in archive: {e}") from e

def _write_entry(entry: ArchiveEntry, target: str) -> None:
    # The source is opened first so an unreadable entry leaves no empty file behind
    with _open_entry(entry) as src:
        try:
            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, entry.mode)
        except OSError as e:
            raise FilesystemError("open", target, e) from e

        with os.fdopen(fd, 'wb') as dst:
            try:
                shutil.copyfileobj(src, dst)
            except (zipfile.BadZipFile, zlib.error, EOFError) as e:
                # CRC mismatch or truncated member data
                raise CorruptArchiveError(f"Failed to read {entry.name!r} from archive: {e}") from e
            except OSError as e:
                raise FilesystemError("write", target, e) from e

def extract_entries(entries: List[ArchiveEntry], destination: Path) -> InstalledTree:
    """Place decoded entries under destination, in order.

    The first entry that resolves outside destination aborts the whole
    extraction. Entries written before it are left in place.

    Args:
        entries: Decoded archive entries
        destination: Extraction root

    Returns:
        InstalledTree: What was created

    Raises:
        PathTraversalError: If an entry escapes destination
        FilesystemError: If creating a directory or writing a file fails
        CorruptArchiveError: If an entry's data is damaged
    """
    root = Path(os.path.normpath(os.path.abspath(destination)))
    _makedirs(str(root))
    tree = InstalledTree(root=root)

    for entry in entries:
        target = resolve_entry_path(root, entry.name)

        if entry.is_dir:
            _makedirs(target)
            tree.directories.append(Path(target))
            continue

        _makedirs(os.path.dirname(target))
        _write_entry(entry, target)
        tree.files.append(Path(target))

    return tree

def extract(payload: bytes, destination: Path) -> InstalledTree:
    """Decode payload as a zip archive and extract it under destination.

    Nothing is written if the payload cannot be decoded.

    Args:
        payload: Raw archive bytes
        destination: Extraction root, created if missing

    Returns:
        InstalledTree: What was created
    """
    archive, entries = decode_archive(payload)
    with archive:
        return extract_entries(entries, destination)
