#!/usr/bin/env python3

# Parser for ftrace block_rq_issue output
# Turns raw trace text into typed events grouped per (device, I/O type)
# File: parse_block_trace.py

import re
import sys
import logging
from enum import Enum
from dataclasses import dataclass
from collections import namedtuple

logger = logging.getLogger(__name__)

SECTOR_BYTES = 512

# 1234.500000: block_rq_issue: 8,0 R 0 () 1000 + 8
TRACE_PATTERN = re.compile(
    r'(?P<timestamp>\d+\.\d+):\s+block_rq_issue:\s+'
    r'(?P<major>\d+),(?P<minor>\d+)\s+'
    r'(?P<rwbs>[RWDFMS]+)\s+'
    r'(?P<size>\d+)?\s*\(\)\s+'
    r'(?P<sector>\d+)\s+\+\s+(?P<length>\d+)'
)

PLACEHOLDER_DEVICE = (0, 0)


class OperationCategory(Enum):
    READ = 'Read'
    WRITE = 'Write'
    DISCARD = 'Discard'
    FLUSH = 'Flush'
    OTHER = 'Other'

    def __str__(self):
        return self.value


SeriesKey = namedtuple('SeriesKey', ['device', 'category'])


def format_device(device):
    return f"{device[0]},{device[1]}"


def classify_flags(flags):
    """Map an rwbs flag string to exactly one OperationCategory.

    Discard wins over everything, then Flush. A request counts as a
    Read only when no W is present; anything else carrying W is a Write.
    """
    if 'D' in flags:
        return OperationCategory.DISCARD
    if 'F' in flags:
        return OperationCategory.FLUSH
    if 'R' in flags and 'W' not in flags:
        return OperationCategory.READ
    if 'W' in flags:
        return OperationCategory.WRITE
    return OperationCategory.OTHER


@dataclass(frozen=True)
class TraceEvent:
    """One block_rq_issue record."""
    timestamp: float
    device: tuple
    flags: str
    sector_start: int
    length_sectors: int

    @property
    def size_kb(self):
        return self.length_sectors * SECTOR_BYTES / 1024

    @property
    def category(self):
        return classify_flags(self.flags)

    @property
    def series_key(self):
        return SeriesKey(self.device, self.category)


def _to_text(text):
    if text is None:
        return ''
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode('utf-8', errors='replace')
    return str(text)


def iter_events(text):
    """Yield every event in text, in file order.

    Non-matching lines are skipped, as are requests on the 0,0
    placeholder device.
    """
    for match in TRACE_PATTERN.finditer(_to_text(text)):
        device = (int(match.group('major')), int(match.group('minor')))
        if device == PLACEHOLDER_DEVICE:
            continue
        yield TraceEvent(
            timestamp=float(match.group('timestamp')),
            device=device,
            flags=match.group('rwbs'),
            sector_start=int(match.group('sector')),
            length_sectors=int(match.group('length')),
        )


def group_events(events):
    """Group events by SeriesKey, keeping first-seen key order."""
    grouping = {}
    for event in events:
        grouping.setdefault(event.series_key, []).append(event)
    return grouping


def parse_trace(text):
    """Parse raw trace text into an insertion-ordered SeriesKey -> events dict."""
    grouping = group_events(iter_events(text))
    logger.debug(f"Parsed {count_events(grouping)} events into {len(grouping)} series")
    return grouping


def count_events(grouping):
    return sum(len(events) for events in grouping.values())


def load_trace_text(trace_file):
    """Read a trace file as text; undecodable bytes are replaced."""
    with open(trace_file, 'r', encoding='utf-8', errors='replace') as f:
        return f.read()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python3 parse_block_trace.py <trace_file>")
        sys.exit(1)

    grouping = parse_trace(load_trace_text(sys.argv[1]))
    for key, events in grouping.items():
        print(f"{format_device(key.device):>8} {str(key.category):8} {len(events):8,} events")
    print(f"Total: {count_events(grouping):,} events")
