"""Built-in signature table.

Covers common upload formats only; it is not a complete sniffing standard.
Order is precedence. Where formats share a prefix (RIFF containers, ISO BMFF
``ftyp`` brands) the specific entries are listed before broader ones.

Patterns are hex strings; ``??`` is a wildcard.
"""

from __future__ import annotations

from typing import Any

from magicsniff.signatures import SignatureTable

STANDARD_SIGNATURES: list[dict[str, Any]] = [
    # Images
    {"mime": "image/png", "extensions": ["png"], "pattern": "89 50 4E 47 0D 0A 1A 0A"},
    {"mime": "image/jpeg", "extensions": ["jpg", "jpeg"], "pattern": "FF D8 FF"},
    {"mime": "image/gif", "extensions": ["gif"], "pattern": "47 49 46 38 ?? 61"},  # GIF87a / GIF89a
    {"mime": "image/webp", "extensions": ["webp"], "pattern": "52 49 46 46 ?? ?? ?? ?? 57 45 42 50"},
    {"mime": "image/bmp", "extensions": ["bmp"], "pattern": "42 4D"},
    {"mime": "image/tiff", "extensions": ["tif", "tiff"], "pattern": "49 49 2A 00"},
    {"mime": "image/tiff", "extensions": ["tif", "tiff"], "pattern": "4D 4D 00 2A"},
    {"mime": "image/x-icon", "extensions": ["ico"], "pattern": "00 00 01 00"},
    {"mime": "image/vnd.adobe.photoshop", "extensions": ["psd"], "pattern": "38 42 50 53"},
    {"mime": "image/heic", "extensions": ["heic"], "offset": 4, "pattern": "66 74 79 70 68 65 69 63"},
    {"mime": "image/avif", "extensions": ["avif"], "offset": 4, "pattern": "66 74 79 70 61 76 69 66"},
    # Video / audio in ISO BMFF containers (ftyp brand at offset 4)
    {"mime": "video/mp4", "extensions": ["mp4"], "offset": 4, "pattern": "66 74 79 70 69 73 6F 6D"},
    {"mime": "video/mp4", "extensions": ["mp4"], "offset": 4, "pattern": "66 74 79 70 6D 70 34 32"},
    {"mime": "video/mp4", "extensions": ["mp4"], "offset": 4, "pattern": "66 74 79 70 4D 53 4E 56"},
    {"mime": "audio/mp4", "extensions": ["m4a"], "offset": 4, "pattern": "66 74 79 70 4D 34 41 20"},
    {"mime": "video/x-m4v", "extensions": ["m4v"], "offset": 4, "pattern": "66 74 79 70 4D 34 56 20"},
    {"mime": "video/quicktime", "extensions": ["mov"], "offset": 4, "pattern": "66 74 79 70 71 74 20 20"},
    {"mime": "video/3gpp", "extensions": ["3gp"], "offset": 4, "pattern": "66 74 79 70 33 67 70"},
    # Other containers
    {"mime": "video/x-msvideo", "extensions": ["avi"], "pattern": "52 49 46 46 ?? ?? ?? ?? 41 56 49 20"},
    {"mime": "audio/wav", "extensions": ["wav"], "pattern": "52 49 46 46 ?? ?? ?? ?? 57 41 56 45"},
    {"mime": "video/x-matroska", "extensions": ["mkv", "webm"], "pattern": "1A 45 DF A3"},
    {"mime": "video/x-flv", "extensions": ["flv"], "pattern": "46 4C 56 01"},
    {"mime": "audio/ogg", "extensions": ["ogg", "oga", "ogv"], "pattern": "4F 67 67 53"},
    {"mime": "audio/flac", "extensions": ["flac"], "pattern": "66 4C 61 43"},
    {"mime": "audio/mpeg", "extensions": ["mp3"], "pattern": "49 44 33"},
    {"mime": "audio/midi", "extensions": ["mid", "midi"], "pattern": "4D 54 68 64"},
    # Documents
    {"mime": "application/pdf", "extensions": ["pdf"], "pattern": "25 50 44 46 2D"},
    {"mime": "application/rtf", "extensions": ["rtf"], "pattern": "7B 5C 72 74 66"},
    {
        "mime": "application/x-cfb",
        "extensions": ["msi", "doc", "xls", "ppt"],
        "pattern": "D0 CF 11 E0 A1 B1 1A E1",
    },
    {"mime": "application/x-sqlite3", "extensions": ["sqlite"], "pattern": "53 51 4C 69 74 65 20 66 6F 72 6D 61 74 20 33 00"},
    # Archives
    {"mime": "application/zip", "extensions": ["zip"], "pattern": "50 4B 03 04"},
    {"mime": "application/x-rar-compressed", "extensions": ["rar"], "pattern": "52 61 72 21 1A 07"},
    {"mime": "application/x-7z-compressed", "extensions": ["7z"], "pattern": "37 7A BC AF 27 1C"},
    {"mime": "application/gzip", "extensions": ["gz"], "pattern": "1F 8B 08"},
    {"mime": "application/x-bzip2", "extensions": ["bz2"], "pattern": "42 5A 68"},
    {"mime": "application/x-xz", "extensions": ["xz"], "pattern": "FD 37 7A 58 5A 00"},
    # Needs a window of at least 262 bytes
    {"mime": "application/x-tar", "extensions": ["tar"], "offset": 257, "pattern": "75 73 74 61 72"},
    # Executables and bytecode
    {"mime": "application/x-elf", "extensions": ["elf"], "pattern": "7F 45 4C 46"},
    {"mime": "application/x-msdownload", "extensions": ["exe", "dll"], "pattern": "4D 5A"},
    {"mime": "application/java-vm", "extensions": ["class"], "pattern": "CA FE BA BE"},
    {"mime": "application/wasm", "extensions": ["wasm"], "pattern": "00 61 73 6D"},
    # Fonts
    {"mime": "font/woff", "extensions": ["woff"], "pattern": "77 4F 46 46"},
    {"mime": "font/woff2", "extensions": ["woff2"], "pattern": "77 4F 46 32"},
    {"mime": "font/otf", "extensions": ["otf"], "pattern": "4F 54 54 4F 00"},
    {"mime": "font/ttf", "extensions": ["ttf"], "pattern": "00 01 00 00 00"},
]

STANDARD_TABLE: SignatureTable = SignatureTable.from_records(STANDARD_SIGNATURES)
