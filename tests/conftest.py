"""Test fixtures for goup"""
import io
import zipfile

import pytest
from unittest.mock import MagicMock

def build_zip(entries):
    """Build zip bytes from (name, content, mode) tuples.

    A content of None marks a directory entry.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as zf:
        for name, content, mode in entries:
            info = zipfile.ZipInfo(name)
            info.create_system = 3  # unix, so external_attr carries mode bits
            if content is None:
                info.external_attr = (0o40755 << 16) | 0x10
                zf.writestr(info, b"")
            else:
                info.external_attr = (0o100000 | mode) << 16
                info.compress_type = zipfile.ZIP_DEFLATED
                zf.writestr(info, content)
    return buffer.getvalue()

@pytest.fixture
def make_zip():
    """Fixture returning the zip builder"""
    return build_zip

@pytest.fixture
def toolchain_zip():
    """A small archive shaped like a Go toolchain"""
    return build_zip([
        ("bin/", None, 0),
        ("bin/go", b"#!/bin/sh\necho go\n", 0o644),
        ("bin/gofmt", b"#!/bin/sh\necho gofmt\n", 0o644),
        ("pkg/tool/linux_amd64/compile", b"compile", 0o644),
        ("pkg/tool/linux_amd64/link", b"link", 0o644),
        ("src/fmt/print.go", b"package fmt\n", 0o644),
    ])

@pytest.fixture
def mock_response():
    """Factory for streaming requests.Response mocks"""
    def factory(status_code=200, body=b"", reason="OK", headers=None, text=None):
        response = MagicMock()
        response.status_code = status_code
        response.reason = reason
        response.headers = {'content-length': str(len(body))} if headers is None else headers
        response.text = body.decode(errors='replace') if text is None else text
        response.iter_content.side_effect = lambda chunk_size: iter(
            [body[i:i + chunk_size] for i in range(0, len(body), chunk_size)]
        )
        return response
    return factory
