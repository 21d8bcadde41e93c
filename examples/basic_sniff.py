"""Detect a file's real type from its magic bytes.

Compares the type implied by the file name with the type found in the
content, which exposes renamed or spoofed uploads.

Usage:
    python examples/basic_sniff.py path/to/file [more files...]
"""

import sys

from magicsniff import Sniffer
from magicsniff.utils.file_detection import declared_extension, declared_mime_type

paths = sys.argv[1:] or [__file__]

with Sniffer() as sniffer:
    for path in paths:
        declared = declared_mime_type(path) or "(none)"
        extension = declared_extension(path)
        result = sniffer.classify_file(path)

        print(f"{path}")
        print(f"  Declared: {declared} (.{extension or '?'})")
        if result.is_recognized:
            print(f"  Detected: {result.mime} (.{result.extension})")
            if declared != result.mime:
                print("  Warning: content does not match the file name")
            elif extension and extension not in result.extensions:
                print(f"  Note: .{extension} is not a usual extension for {result.mime}")
        else:
            print(f"  No signature matched; falling back to {result.mime}")
