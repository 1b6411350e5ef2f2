#!/usr/bin/env python3
"""
Example 2: Compression-Aware File Access

This example writes a file compressed, then reads it back by its
uncompressed name:
- open_writer() picks the compression from the suffix and removes stale variants
- resolve_readable() shows which physical file a name maps to
- open_any_err() / count_lines() read whatever variant exists
- Error handling for missing and unreadable files
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from genutil_pkg import (
    FileOpenError,
    count_file_lines,
    count_lines,
    open_any_err,
    open_writer,
    readable_filename_command,
    resolve_readable,
    setup_logging,
)


def main():
    output_dir = Path(__file__).parent / "output" / "compressed_files"
    output_dir.mkdir(parents=True, exist_ok=True)
    setup_logging("DEBUG", log_file=output_dir / "genutil.log")

    print("=" * 70)
    print("Compression-Aware File Access")
    print("=" * 70)
    print()

    prices = output_dir / "prices.csv"
    with open_writer(prices.with_name("prices.csv.gz")) as f:
        f.write("# daily close\n")
        f.write("symbol,price\n")
        f.write("AAA,1.50\n")
        f.write("BBB,2.25\n")

    res = resolve_readable(prices)
    print(f"Requested: {res.requested}")
    print(f"Resolved:  {res.path} ({res.method.value}, {res.status.value})")
    print(f"Command:   {readable_filename_command(prices)}")
    print()

    with open_any_err(prices) as stream:
        header = stream.readline()
        print(f"First line: {header.decode().rstrip()}")

    print(f"Lines: {count_lines(prices)}")
    print(f"Lines without comments: {count_file_lines(prices, 'WhitespaceHash')}")
    print()

    missing = open_any_err(output_dir / "missing.csv")
    print(f"Missing file opens as: {missing}")

    try:
        open_any_err(output_dir)
    except FileOpenError as e:
        print(f"Unreadable path: {e}")


if __name__ == "__main__":
    main()
