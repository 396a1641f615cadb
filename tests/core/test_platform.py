"""Tests for platform detection functionality"""
import pytest
from unittest.mock import patch

from goup.core.platform import get_go_bin_name, get_platform_info, is_windows
from goup.utils.exceptions import PlatformError

@pytest.fixture
def mock_platform():
    with (
        patch('platform.system') as mock_system,
        patch('platform.machine') as mock_machine
    ):
        yield {
            'system': mock_system,
            'machine': mock_machine
        }

def test_is_windows_true(mock_platform):
    """Test is_windows returns True on Windows platform"""
    mock_platform['system'].return_value = 'Windows'
    assert is_windows() is True

def test_is_windows_false(mock_platform):
    """Test is_windows returns False on non-Windows platform"""
    mock_platform['system'].return_value = 'Linux'
    assert is_windows() is False

@pytest.mark.parametrize("system,machine,expected", [
    ('Linux', 'x86_64', ('linux', 'amd64')),
    ('Linux', 'aarch64', ('linux', 'arm64')),
    ('Linux', 'armv7l', ('linux', 'armv6l')),
    ('Darwin', 'arm64', ('darwin', 'arm64')),
    ('Windows', 'AMD64', ('windows', 'amd64')),
    ('FreeBSD', 'amd64', ('freebsd', 'amd64')),
])
def test_get_platform_info(mock_platform, system, machine, expected):
    mock_platform['system'].return_value = system
    mock_platform['machine'].return_value = machine
    assert get_platform_info() == expected

def test_get_platform_info_unsupported_os(mock_platform):
    mock_platform['system'].return_value = 'Plan9'
    mock_platform['machine'].return_value = 'x86_64'
    with pytest.raises(PlatformError, match="Unsupported platform"):
        get_platform_info()

def test_get_platform_info_unsupported_arch(mock_platform):
    mock_platform['system'].return_value = 'Darwin'
    mock_platform['machine'].return_value = 'i386'
    with pytest.raises(PlatformError, match="not supported"):
        get_platform_info()

def test_get_go_bin_name(mock_platform):
    mock_platform['system'].return_value = 'Windows'
    assert get_go_bin_name() == 'go.exe'
    mock_platform['system'].return_value = 'Linux'
    assert get_go_bin_name() == 'go'
