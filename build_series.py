#!/usr/bin/env python3

# Converts grouped block trace events into scatter series
# Marker identifies the device, color identifies the I/O type
# File: build_series.py

from dataclasses import dataclass
from collections import namedtuple

import pandas as pd

from parse_block_trace import OperationCategory, format_device

# circle, cross, triangle, rect, star, rectRot, dash, polygon
MARKER_LIST = ['o', 'x', '^', 's', '*', 'D', '_', 'p']

COLOR_MAP = {
    OperationCategory.READ: '#e11d48',
    OperationCategory.WRITE: '#3b82f6',
    OperationCategory.DISCARD: '#10b981',
    OperationCategory.FLUSH: '#f97316',
    OperationCategory.OTHER: '#6b7280',
}

TracePoint = namedtuple('TracePoint', ['x', 'y', 'size_kb'])


@dataclass(frozen=True)
class Series:
    label: str
    device: tuple
    category: OperationCategory
    points: tuple
    marker: str
    color: str
    show_line: bool = False
    radius: int = 3


def build_series(grouping):
    """Build one Series per SeriesKey, in the grouping's insertion order.

    Devices get markers in order of first appearance across the whole
    grouping; the ninth distinct device wraps back to the first marker.
    """
    series = []
    device_index = {}

    for key, events in grouping.items():
        if key.device not in device_index:
            device_index[key.device] = len(device_index)
        marker = MARKER_LIST[device_index[key.device] % len(MARKER_LIST)]

        series.append(Series(
            label=f"{format_device(key.device)} {key.category}",
            device=key.device,
            category=key.category,
            points=tuple(TracePoint(e.timestamp, e.sector_start, e.size_kb) for e in events),
            marker=marker,
            color=COLOR_MAP[key.category],
        ))
    return series


def series_table(series):
    """One row per plotted point, series order preserved."""
    rows = []
    for s in series:
        for p in s.points:
            rows.append({
                'Series': s.label,
                'Device': format_device(s.device),
                'Category': str(s.category),
                'Timestamp': p.x,
                'Sector': p.y,
                'SizeKB': p.size_kb,
            })
    return pd.DataFrame(rows, columns=['Series', 'Device', 'Category', 'Timestamp', 'Sector', 'SizeKB'])
