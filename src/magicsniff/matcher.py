"""Signature matching — maps a byte window to a recognized type.

The matcher walks the table in order and stops at the first entry whose
pattern matches at its offset. There is no attempt to find a longer or
"better" match. Matching is pure and total: a buffer that is too short simply
fails to match.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from magicsniff.results import MatchResult, Recognized, Unknown
from magicsniff.signatures import ANY, SignatureEntry, SignatureTable

logger = logging.getLogger("magicsniff.matcher")

ByteWindow = Sequence[int]


def matches(buffer: ByteWindow, entry: SignatureEntry) -> bool:
    """Check whether ``buffer`` carries ``entry``'s pattern at its offset.

    Wildcard positions always match, even past the end of the buffer. A
    concrete byte past the end is absent and fails the match.
    """
    size = len(buffer)
    offset = entry.offset
    for i, expected in enumerate(entry.pattern):
        if expected is ANY:
            continue
        pos = offset + i
        if pos >= size or buffer[pos] != expected:
            return False
    return True


def find_entry(buffer: ByteWindow, table: SignatureTable) -> SignatureEntry | None:
    """Return the first entry in ``table`` that matches, or None."""
    for entry in table.entries():
        if matches(buffer, entry):
            return entry
    return None


def classify(
    buffer: ByteWindow,
    table: SignatureTable,
    fallback_mime: str = "",
) -> MatchResult:
    """Classify ``buffer`` against ``table``.

    Args:
        buffer: Leading bytes of the content.
        table: Signature table, scanned in order.
        fallback_mime: Reported in ``Unknown`` when nothing matches.

    Returns:
        ``Recognized`` for the first matching entry, else ``Unknown``.
    """
    entry = find_entry(buffer, table)
    if entry is None:
        return Unknown(fallback_mime=fallback_mime)
    return Recognized(mime=entry.mime, extensions=entry.extensions)


class Matcher:
    """Classifier bound to one signature table."""

    def __init__(self, table: SignatureTable) -> None:
        self._table = table

    @property
    def table(self) -> SignatureTable:
        return self._table

    @staticmethod
    def matches(buffer: ByteWindow, entry: SignatureEntry) -> bool:
        return matches(buffer, entry)

    def match_entry(self, buffer: ByteWindow) -> SignatureEntry | None:
        return find_entry(buffer, self._table)

    def classify(self, buffer: ByteWindow, fallback_mime: str = "") -> MatchResult:
        result = classify(buffer, self._table, fallback_mime)
        if result.is_recognized:
            logger.debug("Matched %s (%d bytes inspected)", result.mime, len(buffer))
        else:
            logger.debug(
                "No signature matched %d bytes; falling back to %r",
                len(buffer),
                fallback_mime,
            )
        return result

    def __repr__(self) -> str:
        return f"Matcher(table={self._table!r})"
