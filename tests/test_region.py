#!/usr/bin/env python3
"""
Test region statistics over the (time, sector) plane.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.dirname(__file__))

from parse_block_trace import parse_trace
from build_series import build_series
from analyze_region import RegionSelection, RegionStats, aggregate_region
from trace_samples import SINGLE_READ, PLACEHOLDER_WRITE, MIXED_TRACE


class TestAggregateRegion(unittest.TestCase):

    def setUp(self):
        self.series = build_series(parse_trace(MIXED_TRACE))

    def test_single_read_example(self):
        series = build_series(parse_trace(SINGLE_READ + PLACEHOLDER_WRITE))
        stats = aggregate_region(series, RegionSelection(1000, 2000, 0, 2000))
        self.assertEqual(stats, RegionStats(read_count=1, write_count=0, read_kb=4, write_kb=0))

    def test_everything_region_counts_all_reads_and_writes(self):
        stats = aggregate_region(self.series, RegionSelection(0, 1e9, 0, 1e12))
        self.assertEqual(stats.read_count, 4)
        self.assertEqual(stats.write_count, 2)

    def test_kb_is_four_per_request(self):
        # the 1024 KB read still counts as 4 KB
        stats = aggregate_region(self.series, RegionSelection(100.0009, 100.0009, 99999, 99999))
        self.assertEqual(stats, RegionStats(read_count=1, write_count=0, read_kb=4, write_kb=0))

    def test_bounds_are_inclusive(self):
        stats = aggregate_region(self.series, RegionSelection(100.0001, 100.0002, 2048, 4096))
        self.assertEqual(stats.read_count, 1)
        self.assertEqual(stats.write_count, 1)

    def test_discard_flush_other_ignored(self):
        # covers the discard at sector 50000, the flush at 0 and the other at 12
        stats = aggregate_region(self.series, RegionSelection(100.0005, 100.0006, 0, 50000))
        self.assertEqual(stats, RegionStats())
        stats = aggregate_region(self.series, RegionSelection(100.001, 100.001, 0, 100))
        self.assertEqual(stats, RegionStats())

    def test_counts_never_exceed_total(self):
        regions = [
            RegionSelection(100.0, 100.0005, 0, 5000),
            RegionSelection(100.0003, 100.0008, 10000, 30000),
            RegionSelection(0, 1, 0, 1),
        ]
        for region in regions:
            stats = aggregate_region(self.series, region)
            self.assertLessEqual(stats.read_count + stats.write_count, 6)

    def test_empty_series(self):
        self.assertEqual(aggregate_region([], RegionSelection(0, 1, 0, 1)), RegionStats())


if __name__ == '__main__':
    unittest.main()
