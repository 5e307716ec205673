#!/usr/bin/env python3
"""
Test scatter series construction: labels, markers per device, colors per I/O type.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.dirname(__file__))

from parse_block_trace import OperationCategory, parse_trace
from build_series import COLOR_MAP, MARKER_LIST, build_series, series_table
from trace_samples import SINGLE_READ, MIXED_TRACE


def many_devices_trace(count):
    lines = []
    for minor in range(count):
        lines.append(f"{minor + 1}.000000: block_rq_issue: 8,{minor + 1} R 0 () {minor} + 8")
    return "\n".join(lines) + "\n"


class TestBuildSeries(unittest.TestCase):

    def test_single_read_series(self):
        series = build_series(parse_trace(SINGLE_READ))
        self.assertEqual(len(series), 1)

        s = series[0]
        self.assertEqual(s.label, '8,0 Read')
        self.assertEqual(s.marker, 'o')
        self.assertEqual(s.color, COLOR_MAP[OperationCategory.READ])
        self.assertFalse(s.show_line)
        self.assertEqual(s.radius, 3)
        self.assertEqual(len(s.points), 1)
        self.assertEqual((s.points[0].x, s.points[0].y, s.points[0].size_kb), (1234.5, 1000, 4))

    def test_series_follow_grouping_order(self):
        series = build_series(parse_trace(MIXED_TRACE))
        self.assertEqual([s.label for s in series], [
            '8,0 Read', '8,0 Write', '8,16 Write', '8,0 Flush',
            '8,16 Discard', '8,16 Read', '8,0 Other',
        ])

    def test_marker_per_device_color_per_category(self):
        series = build_series(parse_trace(MIXED_TRACE))
        for s in series:
            expected_marker = MARKER_LIST[0] if s.device == (8, 0) else MARKER_LIST[1]
            self.assertEqual(s.marker, expected_marker)
            self.assertEqual(s.color, COLOR_MAP[s.category])

        colors = {s.category: s.color for s in series}
        self.assertEqual(colors[OperationCategory.READ], '#e11d48')
        self.assertEqual(colors[OperationCategory.WRITE], '#3b82f6')
        self.assertEqual(colors[OperationCategory.DISCARD], '#10b981')
        self.assertEqual(colors[OperationCategory.FLUSH], '#f97316')
        self.assertEqual(colors[OperationCategory.OTHER], '#6b7280')

    def test_ninth_device_wraps_to_first_marker(self):
        series = build_series(parse_trace(many_devices_trace(10)))
        markers = [s.marker for s in series]
        self.assertEqual(markers[:8], MARKER_LIST)
        self.assertEqual(markers[8], MARKER_LIST[0])
        self.assertEqual(markers[9], MARKER_LIST[1])

    def test_markers_are_deterministic(self):
        first = build_series(parse_trace(MIXED_TRACE))
        second = build_series(parse_trace(MIXED_TRACE))
        self.assertEqual(first, second)

    def test_empty_grouping(self):
        self.assertEqual(build_series({}), [])
        self.assertTrue(series_table([]).empty)


class TestSeriesTable(unittest.TestCase):

    def test_one_row_per_point(self):
        series = build_series(parse_trace(MIXED_TRACE))
        df = series_table(series)

        self.assertEqual(len(df), 9)
        self.assertEqual(list(df.columns), ['Series', 'Device', 'Category', 'Timestamp', 'Sector', 'SizeKB'])
        self.assertEqual(list(df['Series'][:3]), ['8,0 Read'] * 3)
        self.assertEqual(list(df['Sector'][:3]), [2048, 2056, 99999])
        self.assertEqual(df['SizeKB'].sum(), 4 + 2 + 1024 + 64 + 8 + 0 + 1024 + 16 + 4)


if __name__ == '__main__':
    unittest.main()
