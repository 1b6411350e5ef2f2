#!/usr/bin/env python3
"""
Example 1: Ordered Projections

This example shows how to walk a mapping in a deterministic order:
- By key
- By value, ascending and descending
- By absolute value, e.g. to list the largest moves first
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from genutil_pkg import SortOrder, sorted_keys, sorted_unique_keys


def main():
    daily_change = {"AAA": -5.0, "BBB": 3.0, "CCC": -4.0, "DDD": 0.5}

    print("=" * 70)
    print("Ordered Projections")
    print("=" * 70)
    print()

    for order in SortOrder:
        keys = sorted_keys(daily_change, order)
        print(f"{order.name:<25} {', '.join(keys)}")

    print()
    print("Largest moves first:")
    for symbol in sorted_keys(daily_change, "ByValueAbsDescending"):
        print(f"  {symbol}: {daily_change[symbol]:+.2f}")

    print()
    yesterday = {"AAA": 1.0, "EEE": 2.0}
    print(f"Symbols seen on either day: {sorted_unique_keys(daily_change, yesterday)}")


if __name__ == "__main__":
    main()
