"""Content-type sniffing from magic bytes rather than file names."""

from magicsniff.client import Sniffer, classify_file, classify_file_async
from magicsniff.config import SnifferConfig
from magicsniff.exceptions import (
    AcquisitionError,
    ConfigurationError,
    MagicSniffError,
)
from magicsniff.matcher import Matcher, classify, matches
from magicsniff.reader import read_window, read_window_async
from magicsniff.results import MatchResult, MatchStatus, Recognized, Unknown
from magicsniff.signatures import ANY, SignatureEntry, SignatureTable, Wildcard
from magicsniff.standard import STANDARD_TABLE

__version__ = "0.1.0"

__all__ = [
    "Sniffer",
    "SnifferConfig",
    "classify_file",
    "classify_file_async",
    "classify",
    "matches",
    "Matcher",
    "read_window",
    "read_window_async",
    "SignatureEntry",
    "SignatureTable",
    "STANDARD_TABLE",
    "ANY",
    "Wildcard",
    "MatchResult",
    "MatchStatus",
    "Recognized",
    "Unknown",
    "MagicSniffError",
    "ConfigurationError",
    "AcquisitionError",
]
