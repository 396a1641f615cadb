"""Archive download for goup."""
import re
import threading
from typing import Optional
from urllib.parse import urlparse

import certifi
import requests

from .. import constants
from ..utils.exceptions import (
    ArchiveTooLargeError,
    FetchCancelledError,
    FetchDisabledError,
    FetchError,
    FetchTimeoutError,
    InvalidURLError,
    NetworkError,
    NotFoundError,
    RequestConstructionError,
    ServerError,
    UnexpectedStatusError,
)

CHUNK_SIZE = 64 * 1024

def format_bytes(size: int) -> str:
    """Convert bytes to human-readable format."""
    power = 2**10
    for unit in ("B", "KB", "MB", "GB"):
        if size < power:
            return f"{size:.1f} {unit}"
        size /= power
    return f"{size:.1f} TB"

def validate_url(url: str) -> None:
    """Validate a URL for download.

    Args:
        url: URL to validate

    Raises:
        InvalidURLError: If URL is invalid
    """
    try:
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("Invalid URL structure")
        if parsed.scheme not in ['http', 'https']:
            raise ValueError("Unsupported URL scheme")
        if not parsed.hostname or re.search(r'[^\w\-\.]', parsed.hostname):
            raise ValueError("Invalid characters in domain")
    except ValueError as e:
        raise InvalidURLError(f"Invalid URL '{url}': {e}")

def response_error(response: requests.Response, fetch_disabled: bool = False) -> Optional[FetchError]:
    """Translate the response status code to an appropriate error.

    Only 404 and 410 responses have their body read here.

    Args:
        response: Response whose body has not been consumed yet
        fetch_disabled: Whether fetching from origin is disabled upstream

    Returns:
        None for 2xx responses, otherwise the error to raise
    """
    status = response.status_code
    if 200 <= status < 300:
        return None
    if status >= 500:
        return ServerError(f"internal server error ({status} {response.reason})")
    if status in (404, 410):
        try:
            body = response.text
        except requests.exceptions.RequestException as e:
            return NetworkError(f"Failed to read {status} response body: {e}")
        if constants.FETCH_TIMED_OUT_MARKER in body:
            return FetchTimeoutError(f"{body!r}: timeout", body=body)
        if fetch_disabled:
            return FetchDisabledError(f"{body!r}: not fetched", body=body)
        return NotFoundError(f"{body!r}: not found", body=body)
    return UnexpectedStatusError(status, response.reason or "")

def _check_cancelled(cancel_event: Optional[threading.Event], url: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise FetchCancelledError(f"Download of {url} cancelled")

def _expected_length(response: requests.Response) -> Optional[int]:
    # iter_content decodes gzip/deflate, so the header no longer matches what we read
    if response.headers.get('content-encoding'):
        return None
    try:
        return int(response.headers['content-length'])
    except (KeyError, ValueError):
        return None

def fetch(
    url: str,
    cancel_event: Optional[threading.Event] = None,
    *,
    timeout: float = constants.DEFAULT_FETCH_TIMEOUT,
    fetch_disabled: bool = False,
    max_size: Optional[int] = constants.MAX_ARCHIVE_SIZE,
    session: Optional[requests.Session] = None,
    quiet: bool = False
) -> bytes:
    """Download an archive into memory.

    The connection is released before returning, whatever the outcome.
    No retries are attempted.

    Args:
        url: The URL to download from
        cancel_event: Event that aborts the download when set
        timeout: Connect/read timeout in seconds
        fetch_disabled: Report 404/410 as FetchDisabledError instead of NotFoundError
        max_size: Maximum allowed download size in bytes (None for no limit)
        session: Optional requests session to issue the request with
        quiet: Suppress progress output

    Returns:
        bytes: The complete response body

    Raises:
        RequestConstructionError: If the request cannot be built
        NetworkError: On connection failure, truncated body or cancellation
        FetchError: For any non-2xx response, see response_error
    """
    validate_url(url)
    _check_cancelled(cancel_event, url)

    get = session.get if session is not None else requests.get
    try:
        response = get(url, stream=True, verify=certifi.where(), timeout=timeout)
    except (requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL,
            requests.exceptions.InvalidHeader) as e:
        raise RequestConstructionError(f"Failed to build request for {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        raise NetworkError(f"Download failed: {e}") from e

    try:
        error = response_error(response, fetch_disabled)
        if error is not None:
            raise error

        total_size = _expected_length(response)
        if max_size and total_size and total_size > max_size:
            raise ArchiveTooLargeError(f"File size {total_size} exceeds limit {max_size}")

        buffer = bytearray()
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                _check_cancelled(cancel_event, url)
                if not chunk:
                    continue
                buffer.extend(chunk)
                if max_size and len(buffer) > max_size:
                    raise ArchiveTooLargeError(f"File size exceeds limit {max_size}")
                if not quiet and total_size:
                    progress = len(buffer) / total_size * 100
                    print(f"\rDownloading: {format_bytes(len(buffer))}/{format_bytes(total_size)} ({progress:.1f}%)",
                          end='', flush=True)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Download failed: {e}") from e
        finally:
            if not quiet and total_size:
                print()

        if total_size is not None and len(buffer) != total_size:
            raise NetworkError(f"Download of {url} truncated: got {len(buffer)} of {total_size} bytes")
        return bytes(buffer)
    finally:
        response.close()
