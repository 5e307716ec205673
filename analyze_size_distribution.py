#!/usr/bin/env python3

# Request size distribution for read and write block requests
# File: analyze_size_distribution.py

from dataclasses import dataclass

import numpy as np
import pandas as pd

from parse_block_trace import OperationCategory

# Upper bounds in KB; anything above the last bin is counted in it
SIZE_BINS = [4, 8, 16, 32, 64, 128, 256]


@dataclass(frozen=True)
class SizeHistogram:
    bins: tuple
    read_count: dict
    write_count: dict

    @property
    def labels(self):
        return [f"{b}K" for b in self.bins]

    def total_read(self):
        return sum(self.read_count.values())

    def total_write(self):
        return sum(self.write_count.values())


def assign_bins(sizes_kb, bins=SIZE_BINS):
    """Return the bin for each size: first bound >= size, else the last bound."""
    edges = np.asarray(bins, dtype=float)
    idx = np.searchsorted(edges, np.asarray(sizes_kb, dtype=float), side='left')
    idx = np.minimum(idx, len(edges) - 1)
    return [bins[i] for i in idx]


def build_size_histogram(grouping):
    """Count Read and Write events per size bin.

    Discard, Flush and Other series are left out entirely.
    """
    read_count = {b: 0 for b in SIZE_BINS}
    write_count = {b: 0 for b in SIZE_BINS}

    for key, events in grouping.items():
        if key.category == OperationCategory.READ:
            counts = read_count
        elif key.category == OperationCategory.WRITE:
            counts = write_count
        else:
            continue
        for b in assign_bins([e.size_kb for e in events]):
            counts[b] += 1

    return SizeHistogram(bins=tuple(SIZE_BINS), read_count=read_count, write_count=write_count)


def read_write_ratio(histogram):
    return histogram.total_read(), histogram.total_write()


def size_ratio(histogram):
    """Read plus write requests per bin."""
    return {b: histogram.read_count[b] + histogram.write_count[b] for b in histogram.bins}


def histogram_table(histogram):
    totals = size_ratio(histogram)
    data = []
    for b, label in zip(histogram.bins, histogram.labels):
        data.append({
            'Bin': b,
            'Label': label,
            'Read': histogram.read_count[b],
            'Write': histogram.write_count[b],
            'Total': totals[b],
        })
    return pd.DataFrame(data, columns=['Bin', 'Label', 'Read', 'Write', 'Total'])
