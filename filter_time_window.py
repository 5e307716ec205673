#!/usr/bin/env python3

# Time-window filter for block traces
# Always re-parses the raw text so repeated filtering never compounds
# File: filter_time_window.py

import math
import logging

from parse_block_trace import parse_trace, count_events

logger = logging.getLogger(__name__)


def parse_bound(value):
    """Turn user input into a float bound, or None for 'no bound'."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        bound = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(bound):
        return None
    return bound


def filter_by_time(raw_text, lower=None, upper=None):
    """Parse raw_text and keep events with lower <= timestamp <= upper.

    Either bound may be omitted. Series left with no events are dropped.
    """
    lower = parse_bound(lower)
    upper = parse_bound(upper)

    filtered = {}
    for key, events in parse_trace(raw_text).items():
        kept = [
            e for e in events
            if (lower is None or e.timestamp >= lower)
            and (upper is None or e.timestamp <= upper)
        ]
        if kept:
            filtered[key] = kept

    logger.debug(f"Time filter [{lower}, {upper}] kept {count_events(filtered)} events")
    return filtered
