#!/usr/bin/env python3

# Read/write statistics for a rectangular (time, sector) region
# File: analyze_region.py

from dataclasses import dataclass

# Every request in a region is counted as 4 KB regardless of its real
# length. The size histogram uses real lengths, so the two can disagree.
KB_PER_REGION_EVENT = 4


@dataclass(frozen=True)
class RegionSelection:
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def contains(self, x, y):
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max


@dataclass(frozen=True)
class RegionStats:
    read_count: int = 0
    write_count: int = 0
    read_kb: int = 0
    write_kb: int = 0


def aggregate_region(series, region):
    """Count read and write points of series that fall inside region.

    Series are classified by label, so only "Read" and "Write" series
    contribute; bounds are inclusive.
    """
    read_count = 0
    write_count = 0

    for s in series:
        is_read = 'Read' in s.label
        is_write = 'Write' in s.label
        if not (is_read or is_write):
            continue
        for p in s.points:
            if region.contains(p.x, p.y):
                if is_read:
                    read_count += 1
                if is_write:
                    write_count += 1

    return RegionStats(
        read_count=read_count,
        write_count=write_count,
        read_kb=read_count * KB_PER_REGION_EVENT,
        write_kb=write_count * KB_PER_REGION_EVENT,
    )
