"""Sniffer — the main entry point for magicsniff.

Reads the leading bytes of a source and classifies them against a signature
table, so the reported type reflects the content rather than the file name.

Usage:
    from magicsniff import Sniffer

    sniffer = Sniffer()  # built-in table, settings from env vars

    result = sniffer.classify_file("upload.jpg")
    print(result.mime)        # "image/png" if the bytes are really PNG
    print(result.extension)   # "png"

    # Unknown content falls back to the declared type
    result = sniffer.classify_file("notes.txt")
    print(result.is_recognized, result.mime)  # False "text/plain"
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import aiohttp

from magicsniff.config import SnifferConfig
from magicsniff.matcher import ByteWindow, Matcher
from magicsniff.reader import Source, _run_async, read_window, read_window_async
from magicsniff.results import MatchResult
from magicsniff.signatures import SignatureTable
from magicsniff.standard import STANDARD_TABLE
from magicsniff.utils.file_detection import declared_mime_type, is_url

logger = logging.getLogger("magicsniff")


class Sniffer:
    """Content-type sniffer bound to one signature table and configuration.

    The table is read-only, so one Sniffer can serve many threads or tasks.
    The only mutable state is the lazily created aiohttp session used for
    URL reads from ``classify_file_async``.
    """

    def __init__(
        self,
        config: SnifferConfig | None = None,
        *,
        table: SignatureTable | None = None,
        signatures_file: str = "",
        **kwargs: Any,
    ) -> None:
        """Initialize the sniffer.

        Args:
            config: Full SnifferConfig. If not provided, auto-loads from env.
            table: Signature table to use. Overrides any configured file.
            signatures_file: Path to a JSON table (alternative to config).
            **kwargs: Other SnifferConfig fields when ``config`` is omitted.
        """
        if config is not None:
            self._config = config
        else:
            self._config = SnifferConfig(signatures_file=signatures_file, **kwargs)

        self._config.validate()

        if table is not None:
            resolved = table
        elif self._config.signatures_file:
            resolved = SignatureTable.load(self._config.signatures_file)
        else:
            resolved = STANDARD_TABLE

        self._matcher = Matcher(resolved)
        self._session: aiohttp.ClientSession | None = None
        self._session_loop: asyncio.AbstractEventLoop | None = None

        logger.info(
            "Sniffer initialized with %d %s signatures (%d-byte window from offset %d)",
            len(resolved),
            "custom" if table is not None or self._config.uses_custom_table else "built-in",
            self._config.window_size,
            self._config.window_start,
        )

    @property
    def config(self) -> SnifferConfig:
        return self._config

    @property
    def table(self) -> SignatureTable:
        return self._matcher.table

    # ------------------------------------------------------------------
    # Primary API
    # ------------------------------------------------------------------

    def classify(self, buffer: ByteWindow, fallback_mime: str | None = None) -> MatchResult:
        """Classify bytes the caller has already read.

        Args:
            buffer: Leading bytes of the content.
            fallback_mime: Reported when nothing matches. Defaults to the
                configured fallback.
        """
        if fallback_mime is None:
            fallback_mime = self._config.fallback_mime
        return self._matcher.classify(buffer, fallback_mime)

    def classify_file(
        self,
        source: Source,
        fallback_mime: str | None = None,
        window_range: tuple[int, int] | None = None,
        *,
        filename: str = "",
    ) -> MatchResult:
        """Read a byte window from ``source`` and classify it.

        Args:
            source: Path, URL, binary file object, or raw bytes.
            fallback_mime: Reported when nothing matches. Defaults to the type
                declared by the source's name, then the configured fallback.
            window_range: ``(start, end)`` to read. Defaults to the configured window.
            filename: Name hint for sources without one (raw bytes, streams).

        Raises:
            AcquisitionError: If the source cannot be read.
        """
        start, end = window_range or self._config.window_range
        buffer = read_window(
            source,
            start,
            end,
            timeout=self._config.http_timeout,
            retries=self._config.http_retries,
        )
        return self.classify(buffer, self._resolve_fallback(source, fallback_mime, filename))

    async def classify_file_async(
        self,
        source: Source,
        fallback_mime: str | None = None,
        window_range: tuple[int, int] | None = None,
        *,
        filename: str = "",
    ) -> MatchResult:
        """Async version of classify_file(). Same interface, non-blocking."""
        start, end = window_range or self._config.window_range
        buffer = await read_window_async(
            source,
            start,
            end,
            session=await self._get_session() if is_url(source) else None,
            timeout=self._config.http_timeout,
            retries=self._config.http_retries,
        )
        return self.classify(buffer, self._resolve_fallback(source, fallback_mime, filename))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _resolve_fallback(
        self,
        source: Source,
        fallback_mime: str | None,
        filename: str,
    ) -> str:
        if fallback_mime is not None:
            return fallback_mime
        return declared_mime_type(source, filename) or self._config.fallback_mime

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._session_loop = asyncio.get_running_loop()
        return self._session

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close_async(self) -> None:
        """Close the HTTP session, if one was opened."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._session_loop = None

    def close(self) -> None:
        """Close the HTTP session from synchronous code.

        Async callers should use ``close_async()`` or ``async with`` so the
        session is closed on the loop that opened it. If that loop has already
        been closed, its connections are gone and the session is just dropped.
        """
        if self._session is None:
            return
        if self._session_loop is not None and self._session_loop.is_closed():
            logger.debug("Session loop already closed; dropping HTTP session")
            self._session = None
            self._session_loop = None
            return
        _run_async(self.close_async())

    def __enter__(self) -> Sniffer:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    async def __aenter__(self) -> Sniffer:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close_async()

    def __repr__(self) -> str:
        return f"Sniffer(signatures={len(self.table)}, window={self._config.window_range})"


# ----------------------------------------------------------------------
# Module-level helpers
# ----------------------------------------------------------------------


def classify_file(
    source: str | Path | bytes | Any,
    fallback_mime: str | None = None,
    window_range: tuple[int, int] = (0, 32),
    *,
    table: SignatureTable | None = None,
    filename: str = "",
) -> MatchResult:
    """Read ``window_range`` from ``source`` and classify it in one call.

    Uses the built-in table unless ``table`` is given. Ignores environment
    configuration; build a Sniffer for that.
    """
    sniffer = Sniffer(SnifferConfig(_loaded=True), table=table)
    return sniffer.classify_file(source, fallback_mime, window_range, filename=filename)


async def classify_file_async(
    source: str | Path | bytes | Any,
    fallback_mime: str | None = None,
    window_range: tuple[int, int] = (0, 32),
    *,
    table: SignatureTable | None = None,
    filename: str = "",
) -> MatchResult:
    """Async version of classify_file()."""
    async with Sniffer(SnifferConfig(_loaded=True), table=table) as sniffer:
        return await sniffer.classify_file_async(
            source, fallback_mime, window_range, filename=filename
        )
