"""Tests for the error taxonomy"""
import pytest

from goup.utils import exceptions as exc

@pytest.mark.parametrize("error", [
    exc.ServerError("boom"),
    exc.FetchTimeoutError("timeout", body="fetch timed out"),
])
def test_transient_errors(error):
    assert exc.is_transient(error)

@pytest.mark.parametrize("error", [
    exc.RequestConstructionError("bad"),
    exc.NetworkError("reset"),
    exc.FetchCancelledError("cancelled"),
    exc.NotFoundError("missing"),
    exc.FetchDisabledError("disabled"),
    exc.UnexpectedStatusError(418, "I'm a teapot"),
    exc.CorruptArchiveError("bad zip"),
    exc.PathTraversalError("../x", "/dest"),
    exc.FilesystemError("open", "/dest/x", PermissionError("denied")),
    ValueError("not ours"),
])
def test_permanent_errors(error):
    assert not exc.is_transient(error)

def test_hierarchy():
    assert issubclass(exc.InvalidURLError, exc.RequestConstructionError)
    assert issubclass(exc.InvalidURLError, ValueError)
    assert issubclass(exc.FetchCancelledError, exc.NetworkError)
    assert issubclass(exc.PathTraversalError, exc.ExtractionError)
    assert issubclass(exc.PathTraversalError, exc.SecurityError)
    assert issubclass(exc.CorruptArchiveError, exc.ArchiveError)
    for cls in (exc.FetchError, exc.ArchiveError, exc.ExtractionError):
        assert issubclass(cls, exc.GoupError)

def test_filesystem_error_fields():
    cause = PermissionError("denied")
    error = exc.FilesystemError("mkdir", "/dest/bin", cause)
    assert error.operation == "mkdir"
    assert error.path == "/dest/bin"
    assert error.cause is cause
    assert str(error) == "mkdir /dest/bin: denied"

def test_path_traversal_message():
    error = exc.PathTraversalError("../../etc/passwd", "/home/u/.go")
    assert "'../../etc/passwd'" in str(error)
    assert "/home/u/.go" in str(error)
