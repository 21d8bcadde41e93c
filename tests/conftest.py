"""Shared test fixtures for the magicsniff test suite."""

from __future__ import annotations

import pytest

from magicsniff.config import SnifferConfig
from magicsniff.signatures import ANY, SignatureEntry, SignatureTable

# Sample windows, padded the way a 32-byte read of a real file would be
PNG_HEADER = b"\x89PNG\r\n\x1a\n"
PNG_WINDOW = PNG_HEADER + b"\x00\x00\x00\rIHDR" + bytes(16)

MP4_WINDOW = b"\x00\x00\x00\x20" + b"ftypisom" + b"\x00\x00\x02\x00" + bytes(16)

WEBP_WINDOW = b"RIFF\x24\x08\x00\x00WEBPVP8 " + bytes(16)

PDF_WINDOW = b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n" + bytes(17)

ZERO_WINDOW = bytes(32)

ENV_VARS = (
    "MAGICSNIFF_WINDOW_START",
    "MAGICSNIFF_WINDOW_END",
    "MAGICSNIFF_FALLBACK_MIME",
    "MAGICSNIFF_SIGNATURES_FILE",
    "MAGICSNIFF_HTTP_TIMEOUT",
    "MAGICSNIFF_HTTP_RETRIES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own MAGICSNIFF_* settings out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def default_config() -> SnifferConfig:
    """Config with defaults only, environment ignored."""
    return SnifferConfig(_loaded=True)


@pytest.fixture
def png_entry() -> SignatureEntry:
    return SignatureEntry(mime="image/png", extensions=("png",), pattern=PNG_HEADER)


@pytest.fixture
def mp4_entry() -> SignatureEntry:
    return SignatureEntry(
        mime="video/mp4",
        extensions=("mp4",),
        pattern=b"ftypisom",
        offset=4,
    )


@pytest.fixture
def webp_entry() -> SignatureEntry:
    return SignatureEntry(
        mime="image/webp",
        extensions=("webp",),
        pattern=(0x52, 0x49, 0x46, 0x46, ANY, ANY, ANY, ANY, 0x57, 0x45, 0x42, 0x50),
    )


@pytest.fixture
def sample_table(
    png_entry: SignatureEntry,
    mp4_entry: SignatureEntry,
    webp_entry: SignatureEntry,
) -> SignatureTable:
    return SignatureTable([png_entry, mp4_entry, webp_entry])


@pytest.fixture
def sample_records() -> list[dict]:
    return [
        {"mime": "image/png", "extensions": ["png"], "pattern": [0x89, 0x50, 0x4E, 0x47]},
        {"mime": "video/mp4", "ext": "mp4", "offset": 4, "pattern": "66 74 79 70 69 73 6F 6D"},
        {"mime": "image/webp", "extensions": ["webp"], "pattern": "52 49 46 46 ?? ?? ?? ?? 57 45 42 50"},
    ]
