"""Signature entries and the ordered, read-only signature table.

A signature entry describes one recognized format: the MIME type, its
candidate extensions, and the byte pattern expected at a fixed offset. Pattern
positions are either a concrete byte (0-255) or the ``ANY`` wildcard.

Tables are built once and never mutated. Adding formats means building a new
table (see ``SignatureTable.extended``).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Union

from magicsniff.exceptions import ConfigurationError

logger = logging.getLogger("magicsniff.signatures")


class Wildcard(Enum):
    """Pattern position that matches any byte, including an absent one."""

    ANY = "any"

    def __repr__(self) -> str:
        return "ANY"


ANY = Wildcard.ANY

PatternByte = Union[int, Wildcard]

# Spellings accepted for a wildcard in configuration records
WILDCARD_TOKENS: frozenset[str] = frozenset({"??", "*", "any"})


def parse_pattern(value: Any) -> tuple[PatternByte, ...]:
    """Normalize a pattern from any supported spelling.

    Accepts bytes, a list of ints / ``None`` / ``ANY`` / ``"??"``, or a hex
    string such as ``"52 49 46 46 ?? ?? ?? ?? 57 45 42 50"``.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return tuple(bytes(value))
    if isinstance(value, str):
        return tuple(_parse_hex_token(t) for t in _split_hex(value))
    if not isinstance(value, Iterable):
        raise ConfigurationError(f"Pattern must be a sequence, got {type(value).__name__}")

    result: list[PatternByte] = []
    for item in value:
        if item is None or item is ANY:
            result.append(ANY)
        elif isinstance(item, bool):
            raise ConfigurationError(f"Invalid pattern byte: {item!r}")
        elif isinstance(item, int):
            result.append(item)
        elif isinstance(item, str):
            result.append(_parse_hex_token(item))
        else:
            raise ConfigurationError(f"Invalid pattern byte: {item!r}")
    return tuple(result)


def _split_hex(text: str) -> list[str]:
    tokens: list[str] = []
    for chunk in text.replace(",", " ").split():
        if chunk.lower() in WILDCARD_TOKENS or chunk.lower().startswith("0x"):
            tokens.append(chunk)
        else:
            # "89504E47" is read as four bytes
            if len(chunk) % 2:
                raise ConfigurationError(f"Odd number of hex digits in pattern: {chunk!r}")
            tokens.extend(chunk[i : i + 2] for i in range(0, len(chunk), 2))
    return tokens


def _parse_hex_token(token: str) -> PatternByte:
    if token.lower() in WILDCARD_TOKENS:
        return ANY
    try:
        return int(token, 16)
    except ValueError as e:
        raise ConfigurationError(f"Invalid hex byte in pattern: {token!r}") from e


@dataclass(frozen=True)
class SignatureEntry:
    """One recognized format.

    Attributes:
        mime: Canonical MIME type, e.g. ``"image/png"``.
        extensions: Candidate extensions without the dot; the first is canonical.
        pattern: Bytes expected at ``offset``; ``ANY`` matches anything.
        offset: Position in the buffer where the pattern starts.
    """

    mime: str
    extensions: tuple[str, ...] = ()
    pattern: tuple[PatternByte, ...] = field(default=())
    offset: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.mime, str) or not self.mime:
            raise ConfigurationError("Signature entry requires a non-empty mime type")

        if isinstance(self.extensions, str):
            extensions: tuple[str, ...] = (self.extensions,)
        elif isinstance(self.extensions, (list, tuple)):
            extensions = tuple(self.extensions)
        else:
            raise ConfigurationError(
                f"Extensions for {self.mime} must be a string or a list of strings, "
                f"got {type(self.extensions).__name__}"
            )
        if not all(isinstance(ext, str) for ext in extensions):
            raise ConfigurationError(
                f"Extensions for {self.mime} must be strings",
                details={"extensions": list(extensions)},
            )
        object.__setattr__(self, "extensions", tuple(ext.lstrip(".") for ext in extensions))

        pattern = parse_pattern(self.pattern)
        if not pattern:
            raise ConfigurationError(f"Signature for {self.mime} has an empty pattern")
        for value in pattern:
            if value is not ANY and not 0 <= value <= 0xFF:  # type: ignore[operator]
                raise ConfigurationError(
                    f"Pattern byte {value!r} for {self.mime} is outside 0-255"
                )
        object.__setattr__(self, "pattern", pattern)

        if isinstance(self.offset, bool) or not isinstance(self.offset, int) or self.offset < 0:
            raise ConfigurationError(
                f"Offset for {self.mime} must be a non-negative integer, got {self.offset!r}"
            )

    @property
    def extension(self) -> str:
        """Canonical extension, or an empty string."""
        return self.extensions[0] if self.extensions else ""

    @property
    def span(self) -> int:
        """Buffer length needed for every pattern position to be present."""
        return self.offset + len(self.pattern)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> SignatureEntry:
        """Build an entry from a configuration record.

        ``ext`` (a single string) is accepted in place of ``extensions``.
        """
        if not isinstance(record, Mapping):
            raise ConfigurationError(
                f"Signature record must be an object, got {type(record).__name__}"
            )
        if "pattern" not in record and "signature" not in record:
            raise ConfigurationError("Signature record is missing 'pattern'")

        extensions = record.get("extensions")
        if extensions is None:
            ext = record.get("ext", "")
            extensions = [ext] if ext else []

        return cls(
            mime=record.get("mime", ""),
            extensions=extensions,
            pattern=record.get("pattern", record.get("signature")),
            offset=record.get("offset", 0),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "mime": self.mime,
            "extensions": list(self.extensions),
            "offset": self.offset,
            "pattern": [None if value is ANY else value for value in self.pattern],
        }


class SignatureTable:
    """Ordered, immutable sequence of signature entries.

    Order is precedence: the first entry that matches wins. Safe to share
    between threads and tasks since nothing mutates it after construction.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[SignatureEntry] = ()) -> None:
        collected = tuple(entries)
        for index, entry in enumerate(collected):
            if not isinstance(entry, SignatureEntry):
                raise ConfigurationError(
                    f"Table item {index} is not a SignatureEntry: {type(entry).__name__}"
                )
        self._entries: tuple[SignatureEntry, ...] = collected

    def entries(self) -> tuple[SignatureEntry, ...]:
        """Entries in construction order."""
        return self._entries

    def __iter__(self) -> Iterator[SignatureEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SignatureTable):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"SignatureTable(entries={len(self._entries)})"

    @property
    def max_span(self) -> int:
        """Largest buffer length any entry needs to be fully compared."""
        return max((entry.span for entry in self._entries), default=0)

    def extended(
        self,
        entries: Iterable[SignatureEntry],
        *,
        prepend: bool = False,
    ) -> SignatureTable:
        """Return a new table with extra entries; this table is unchanged.

        With ``prepend=True`` the new entries take precedence over existing ones.
        """
        extra = tuple(entries)
        if prepend:
            return SignatureTable(extra + self._entries)
        return SignatureTable(self._entries + extra)

    # ------------------------------------------------------------------
    # Configuration records
    # ------------------------------------------------------------------

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> SignatureTable:
        """Build a table from configuration records, validating each one."""
        entries: list[SignatureEntry] = []
        for index, record in enumerate(records):
            try:
                entries.append(SignatureEntry.from_record(record))
            except ConfigurationError as e:
                raise ConfigurationError(
                    f"Invalid signature record at index {index}: {e}",
                    details={"index": index, **e.details},
                ) from e
        return cls(entries)

    def to_records(self) -> list[dict[str, Any]]:
        return [entry.to_record() for entry in self._entries]

    @classmethod
    def load(cls, path: str | Path) -> SignatureTable:
        """Load a table from a JSON file.

        The file holds either a list of records or an object with a
        ``"signatures"`` list.
        """
        file_path = Path(path)
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"Cannot read signatures file {file_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Signatures file {file_path} is not valid JSON: {e}") from e

        if isinstance(data, dict):
            data = data.get("signatures")
        if not isinstance(data, list):
            raise ConfigurationError(
                f"Signatures file {file_path} must contain a list of records",
                details={"path": str(file_path)},
            )

        table = cls.from_records(data)
        logger.info("Loaded %d signatures from %s", len(table), file_path)
        return table

    def dump(self, path: str | Path) -> None:
        """Write the table to a JSON file in record form."""
        Path(path).write_text(json.dumps(self.to_records(), indent=2), encoding="utf-8")
