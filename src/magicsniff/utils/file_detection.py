"""Declared-type helpers.

The declared type is what a source claims to be from its name alone, the way
a browser fills in ``File.type``. It is only used as the fallback when no
signature matches. Uses stdlib mimetypes.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path, PurePosixPath
from typing import IO, Any
from urllib.parse import urlsplit

URL_SCHEMES: tuple[str, ...] = ("http://", "https://")


def is_url(value: object) -> bool:
    """True for http(s) URL strings."""
    return isinstance(value, str) and value.lower().startswith(URL_SCHEMES)


def source_name(source: Any) -> str:
    """Best-effort file name for a source, or an empty string.

    Works for paths, URLs and file objects that carry a ``name``.
    """
    if isinstance(source, Path):
        return source.name
    if isinstance(source, str):
        if is_url(source):
            return PurePosixPath(urlsplit(source).path).name
        return Path(source).name
    name = getattr(source, "name", None)
    if isinstance(name, str):
        return Path(name).name
    return ""


def declared_mime_type(source: str | Path | bytes | IO[bytes], filename: str = "") -> str:
    """Guess the MIME type a source declares through its name.

    Args:
        source: Path, URL, file object or raw bytes.
        filename: Name hint, used first when given (e.g. for raw bytes).

    Returns:
        The guessed MIME type, or an empty string when there is no name or
        the extension is not known.
    """
    name = filename or source_name(source)
    if not name:
        return ""
    mime, _ = mimetypes.guess_type(name, strict=False)
    return mime or ""


def declared_extension(source: str | Path | bytes | IO[bytes], filename: str = "") -> str:
    """Lower-cased extension from the source's name, without the dot."""
    name = filename or source_name(source)
    return Path(name).suffix.lower().lstrip(".") if name else ""
