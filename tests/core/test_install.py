"""Tests for fetch-and-install."""
import stat
import sys

import pytest
from unittest.mock import patch, MagicMock

from goup.core import install
from goup.utils.exceptions import (
    CommandError,
    CorruptArchiveError,
    NotFoundError,
    PathTraversalError,
    ServerError,
)

URL = "https://example.com/res/v0.0.1-go1.21.0beta1-installer.linux-amd64.zip"

@pytest.fixture(autouse=True)
def not_windows():
    with patch('goup.core.platform.is_windows', return_value=False):
        yield

def test_toolchain_uri():
    assert install.toolchain_uri("go1.21.0beta1", "linux", "amd64", "https://example.com/res/") == URL

def test_toolchain_uri_default_base():
    uri = install.toolchain_uri("go1.21.0beta1", "darwin", "arm64")
    assert uri == ("https://github.com/hyangah/goup/raw/main/res/"
                   "v0.0.1-go1.21.0beta1-installer.darwin-arm64.zip")

def test_is_installed(tmp_path):
    assert not install.is_installed(tmp_path)
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / "go").write_bytes(b"")
    assert install.is_installed(tmp_path)

def test_fetch_and_install(tmp_path, toolchain_zip, mock_response):
    """Test the full pipeline extracts and makes binaries executable."""
    dest = tmp_path / "go"
    response = mock_response(200, toolchain_zip)
    with patch('requests.get', return_value=response):
        tree = install.fetch_and_install(URL, dest, quiet=True)

    assert tree.root == dest
    go = dest / "bin" / "go"
    assert go.read_bytes() == b"#!/bin/sh\necho go\n"
    assert stat.S_IMODE(go.stat().st_mode) & 0o111 == 0o111
    assert stat.S_IMODE((dest / "pkg" / "tool" / "linux_amd64" / "link").stat().st_mode) & 0o111
    response.close.assert_called_once()

def test_fetch_and_install_passes_options(tmp_path, toolchain_zip):
    cancel = MagicMock()
    with (
        patch('goup.core.install.fetch', return_value=toolchain_zip) as mock_fetch,
        patch('goup.core.permissions.finalize_permissions') as mock_finalize
    ):
        install.fetch_and_install(URL, tmp_path, cancel, timeout=5, fetch_disabled=True, quiet=True)

    mock_fetch.assert_called_once_with(
        URL, cancel, timeout=5, fetch_disabled=True, session=None, quiet=True
    )
    mock_finalize.assert_called_once()

def test_fetch_and_install_fetch_error_writes_nothing(tmp_path, mock_response):
    dest = tmp_path / "go"
    with patch('requests.get', return_value=mock_response(503, reason="Service Unavailable")):
        with pytest.raises(ServerError):
            install.fetch_and_install(URL, dest, quiet=True)
    assert not dest.exists()

def test_fetch_and_install_not_found(tmp_path, mock_response):
    with patch('requests.get', return_value=mock_response(404, text="not found")):
        with pytest.raises(NotFoundError):
            install.fetch_and_install(URL, tmp_path / "go", quiet=True)

def test_fetch_and_install_corrupt(tmp_path, toolchain_zip, mock_response):
    dest = tmp_path / "go"
    with patch('requests.get', return_value=mock_response(200, toolchain_zip[:100])):
        with pytest.raises(CorruptArchiveError):
            install.fetch_and_install(URL, dest, quiet=True)
    assert not dest.exists()

def test_fetch_and_install_traversal_skips_finalize(tmp_path, make_zip, mock_response):
    payload = make_zip([("bin/go", b"go", 0o644), ("../../evil", b"x", 0o644)])
    with (
        patch('requests.get', return_value=mock_response(200, payload)),
        patch('goup.core.permissions.finalize_permissions') as mock_finalize
    ):
        with pytest.raises(PathTraversalError):
            install.fetch_and_install(URL, tmp_path / "go", quiet=True)
    mock_finalize.assert_not_called()

def test_fetch_and_install_prints_status(tmp_path, toolchain_zip, mock_response, capsys):
    with patch('requests.get', return_value=mock_response(200, toolchain_zip)):
        install.fetch_and_install(URL, tmp_path, quiet=False)
    assert "extracting to" in capsys.readouterr().out

def test_run_installed_success():
    install.run_installed(sys.executable, "-c", "pass")

def test_run_installed_failure():
    with pytest.raises(CommandError, match="failed"):
        install.run_installed(sys.executable, "-c", "raise SystemExit(3)")

def test_run_installed_missing_binary(tmp_path):
    with pytest.raises(CommandError):
        install.run_installed(tmp_path / "missing", "version")

def test_run_installed_command_line():
    with patch('subprocess.run') as mock_run:
        install.run_installed("/opt/go/bin/go", "version")
    mock_run.assert_called_once_with(["/opt/go/bin/go", "version"], check=True)
