"""Async sniffing patterns.

Classifies several local files and URLs concurrently. Only the byte-window
reads are asynchronous; classification itself is synchronous and cheap.

Usage:
    python examples/async_sniffing.py https://example.com/logo.png ./report.pdf
"""

import asyncio
import sys

from magicsniff import Sniffer


async def main(sources: list[str]) -> None:
    async with Sniffer() as sniffer:
        print(f"Sniffing {len(sources)} sources concurrently...\n")

        tasks = [sniffer.classify_file_async(source) for source in sources]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        for source, result in zip(sources, results):
            if isinstance(result, Exception):
                print(f"  ERROR: {source} → {result}")
            elif result.is_recognized:
                print(f"  {result.mime:<28} {source}")
            else:
                print(f"  {'unknown (' + result.mime + ')':<28} {source}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:] or [__file__]))
