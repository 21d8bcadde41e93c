"""Classification results: a recognized format or an unknown fallback."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class MatchStatus(str, Enum):
    """Whether a signature matched."""

    RECOGNIZED = "recognized"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Recognized:
    """A signature matched; ``mime`` and ``extensions`` come from its entry."""

    mime: str
    extensions: tuple[str, ...] = ()

    status = MatchStatus.RECOGNIZED

    def __post_init__(self) -> None:
        object.__setattr__(self, "extensions", tuple(self.extensions))

    @property
    def is_recognized(self) -> bool:
        return True

    @property
    def extension(self) -> str:
        return self.extensions[0] if self.extensions else ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "mime": self.mime,
            "ext": self.extension,
            "extensions": list(self.extensions),
        }


@dataclass(frozen=True)
class Unknown:
    """No signature matched.

    ``fallback_mime`` is whatever the caller already believed about the
    content, typically its declared content type. Not an error.
    """

    fallback_mime: str = ""

    status = MatchStatus.UNKNOWN

    @property
    def is_recognized(self) -> bool:
        return False

    @property
    def mime(self) -> str:
        return self.fallback_mime

    @property
    def extensions(self) -> tuple[str, ...]:
        return ()

    @property
    def extension(self) -> str:
        return ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "mime": self.fallback_mime,
            "ext": "",
            "extensions": [],
        }


MatchResult = Union[Recognized, Unknown]
