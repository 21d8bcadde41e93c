"""Byte-window acquisition.

Reads ``[start, end)`` from a source so the matcher can inspect it. Sources can
be raw bytes, local paths, binary file objects, or http(s) URLs. URLs are read
with an HTTP ``Range`` request so only the window is transferred.

A short read is not an error: the window is simply shorter, and the missing
positions count as absent when matching. Real failures raise
AcquisitionError.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import IO, Any, Union

import aiohttp

from magicsniff.exceptions import AcquisitionError
from magicsniff.utils.file_detection import is_url
from magicsniff.utils.retry import retry_async

logger = logging.getLogger("magicsniff.reader")

Source = Union[str, Path, bytes, bytearray, memoryview, IO[bytes]]

DEFAULT_TIMEOUT = 10.0

# Network failures worth another attempt; HTTP error statuses are not retried
RETRYABLE_ERRORS: tuple[type[Exception], ...] = (aiohttp.ClientError, asyncio.TimeoutError)


def read_window(
    source: Source,
    start: int = 0,
    end: int = 32,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    retries: int = 2,
) -> bytes:
    """Read the bytes in ``[start, end)`` from ``source``.

    Args:
        source: Bytes, path, binary file object, or http(s) URL.
        start: First byte offset.
        end: End offset, exclusive.
        timeout: Total seconds allowed for a URL read.
        retries: Retries for transient URL failures.

    Returns:
        Up to ``end - start`` bytes; fewer if the source is shorter.

    Raises:
        ValueError: If the range is invalid.
        AcquisitionError: If the source cannot be read.
    """
    _check_range(start, end)
    if is_url(source):
        return _run_async(
            read_window_async(source, start, end, timeout=timeout, retries=retries)
        )
    return _read_local(source, start, end)


async def read_window_async(
    source: Source,
    start: int = 0,
    end: int = 32,
    *,
    session: aiohttp.ClientSession | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    retries: int = 2,
) -> bytes:
    """Async version of read_window().

    URLs are fetched with aiohttp, reusing ``session`` when given. Local
    sources are read in the default executor so the event loop never blocks.
    """
    _check_range(start, end)
    if not is_url(source):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _read_local, source, start, end)

    url = str(source)
    try:
        return await retry_async(
            _fetch_range,
            url,
            start,
            end,
            session=session,
            timeout=timeout,
            max_retries=retries,
            retryable_exceptions=RETRYABLE_ERRORS,
        )
    except asyncio.TimeoutError as e:
        raise AcquisitionError(
            f"Timed out after {timeout}s reading {url}", source=url
        ) from e
    except aiohttp.ClientError as e:
        raise AcquisitionError(f"HTTP error reading {url}: {e}", source=url) from e


# ----------------------------------------------------------------------
# HTTP
# ----------------------------------------------------------------------


async def _fetch_range(
    url: str,
    start: int,
    end: int,
    *,
    session: aiohttp.ClientSession | None,
    timeout: float,
) -> bytes:
    if end == start:
        return b""

    own_session = session is None
    if session is None:
        session = aiohttp.ClientSession()
    try:
        headers = {"Range": f"bytes={start}-{end - 1}"}
        logger.debug("Requesting %s with Range %s", url, headers["Range"])
        async with session.get(
            url,
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as resp:
            if resp.status == 416:
                # Range starts past the end of the resource
                return b""
            if resp.status == 206:
                return await _read_prefix(resp, end - start)
            if resp.status == 200:
                logger.debug("Server ignored Range header for %s; slicing locally", url)
                data = await _read_prefix(resp, end)
                return data[start:end]

            body = await resp.text(errors="replace")
            raise AcquisitionError(
                f"Reading {url} failed with HTTP {resp.status}",
                source=url,
                details={"status_code": resp.status, "response_body": body[:500]},
            )
    finally:
        if own_session:
            await session.close()


async def _read_prefix(resp: aiohttp.ClientResponse, limit: int) -> bytes:
    """Read at most ``limit`` bytes of a response body without buffering the rest."""
    buf = bytearray()
    while len(buf) < limit:
        chunk = await resp.content.read(limit - len(buf))
        if not chunk:
            break
        buf.extend(chunk)
    return bytes(buf)


# ----------------------------------------------------------------------
# Local sources
# ----------------------------------------------------------------------


def _read_local(source: Source, start: int, end: int) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source[start:end])

    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            with path.open("rb") as fp:
                fp.seek(start)
                return _read_up_to(fp, end - start)
        except OSError as e:
            raise AcquisitionError(
                f"Cannot read {path}: {e.strerror or e}",
                source=str(path),
                details={"errno": e.errno},
            ) from e

    if hasattr(source, "read"):
        return _read_file_object(source, start, end)

    raise AcquisitionError(f"Unsupported source type: {type(source).__name__}")


def _read_file_object(fp: Any, start: int, end: int) -> bytes:
    name = str(getattr(fp, "name", ""))
    try:
        if getattr(fp, "seekable", lambda: False)():
            position = fp.tell()
            try:
                fp.seek(start)
                return _read_up_to(fp, end - start)
            finally:
                fp.seek(position)
        # Forward-only stream: consume up to ``end`` and slice
        return _read_up_to(fp, end)[start:]
    except (OSError, ValueError, TypeError) as e:
        # ValueError: closed file. TypeError: text-mode file.
        raise AcquisitionError(f"Cannot read from stream {name}: {e}", source=name) from e


def _read_up_to(fp: Any, size: int) -> bytes:
    buf = bytearray()
    while len(buf) < size:
        chunk = fp.read(size - len(buf))
        if not chunk:
            break
        buf.extend(chunk)
    return bytes(buf)


def _check_range(start: int, end: int) -> None:
    if start < 0:
        raise ValueError(f"Window start must be non-negative, got {start}")
    if end < start:
        raise ValueError(f"Window end ({end}) is before start ({start})")


def _run_async(coro: Any) -> Any:
    """Run an async coroutine from synchronous code."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop and loop.is_running():
        # Already inside an event loop: run in a fresh thread
        import concurrent.futures

        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()
    else:
        return asyncio.run(coro)
