"""Configuration for magicsniff."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from magicsniff.exceptions import ConfigurationError

logger = logging.getLogger("magicsniff")

DEFAULT_FALLBACK_MIME = "application/octet-stream"
DEFAULT_WINDOW_END = 32


@dataclass
class SnifferConfig:
    """Settings for reading byte windows and classifying them.

    Values passed in directly win. Anything left at its default is read from
    environment variables or a .env file.

    Environment variables:
        MAGICSNIFF_WINDOW_START     — first byte of the read window (default 0)
        MAGICSNIFF_WINDOW_END       — end of the read window, exclusive (default 32)
        MAGICSNIFF_FALLBACK_MIME    — type reported when nothing can be inferred
        MAGICSNIFF_SIGNATURES_FILE  — JSON signature table replacing the built-in one
        MAGICSNIFF_HTTP_TIMEOUT     — seconds allowed for a URL read (default 10)
        MAGICSNIFF_HTTP_RETRIES     — retries for transient URL read failures (default 2)
    """

    # Read window
    window_start: int = 0
    window_end: int = DEFAULT_WINDOW_END

    # Classification
    fallback_mime: str = ""
    signatures_file: str = ""

    # URL acquisition
    http_timeout: float = 10.0
    http_retries: int = 2

    # Misc
    env_file: str | None = None
    _loaded: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        if not self._loaded:
            self._load_from_env()
            self._loaded = True
        if not self.fallback_mime:
            self.fallback_mime = DEFAULT_FALLBACK_MIME

    def _load_from_env(self) -> None:
        """Load missing values from environment variables / .env file."""
        if self.env_file:
            env_path = Path(self.env_file)
            if env_path.exists():
                load_dotenv(env_path)
            else:
                logger.warning("Specified .env file not found: %s", self.env_file)
        else:
            load_dotenv()  # auto-discover .env in cwd or parents

        if self.window_start == 0:
            self.window_start = _env_int("MAGICSNIFF_WINDOW_START", 0)
        if self.window_end == DEFAULT_WINDOW_END:
            self.window_end = _env_int("MAGICSNIFF_WINDOW_END", DEFAULT_WINDOW_END)
        if not self.fallback_mime:
            self.fallback_mime = os.getenv("MAGICSNIFF_FALLBACK_MIME", "")
        if not self.signatures_file:
            self.signatures_file = os.getenv("MAGICSNIFF_SIGNATURES_FILE", "")
        if self.http_timeout == 10.0:
            self.http_timeout = _env_float("MAGICSNIFF_HTTP_TIMEOUT", 10.0)
        if self.http_retries == 2:
            self.http_retries = _env_int("MAGICSNIFF_HTTP_RETRIES", 2)

    def validate(self) -> None:
        """Validate the configuration. Raises ConfigurationError if unusable."""
        if self.window_start < 0:
            raise ConfigurationError(
                f"Window start must be non-negative, got {self.window_start}"
            )
        if self.window_end < self.window_start:
            raise ConfigurationError(
                f"Window end ({self.window_end}) is before window start ({self.window_start})"
            )
        if self.http_timeout <= 0:
            raise ConfigurationError(
                f"HTTP timeout must be positive, got {self.http_timeout}"
            )
        if self.http_retries < 0:
            raise ConfigurationError(
                f"HTTP retries must be zero or more, got {self.http_retries}"
            )
        if self.signatures_file and not Path(self.signatures_file).is_file():
            raise ConfigurationError(
                f"Signatures file not found: {self.signatures_file}. "
                "Unset MAGICSNIFF_SIGNATURES_FILE to use the built-in table."
            )

    @property
    def window_range(self) -> tuple[int, int]:
        return (self.window_start, self.window_end)

    @property
    def window_size(self) -> int:
        return self.window_end - self.window_start

    @property
    def uses_custom_table(self) -> bool:
        return bool(self.signatures_file)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
