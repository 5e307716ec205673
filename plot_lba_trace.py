#!/usr/bin/env python3

# Renders LBA access patterns and request size distributions
# File: plot_lba_trace.py

from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
import seaborn as sns

plt.rcParams['font.size'] = 10
plt.rcParams['axes.linewidth'] = 0.8
plt.rcParams['grid.linewidth'] = 0.5
plt.rcParams['legend.fontsize'] = 8

READ_BAR_COLOR = (239 / 255, 68 / 255, 68 / 255, 0.6)
WRITE_BAR_COLOR = (59 / 255, 130 / 255, 246 / 255, 0.6)
SIZE_PIE_COLORS = ['#f87171', '#fb923c', '#fbbf24', '#34d399', '#60a5fa', '#a78bfa', '#f472b6']


class LBATracePlotter:
    """Draws the series and histogram produced by the trace engine"""

    def __init__(self, series, histogram=None, region=None):
        self.series = series
        self.histogram = histogram
        self.region = region
        sns.set_style('whitegrid')

    def create_scatter(self):
        """LBA vs time, one scatter per series"""

        fig, ax = plt.subplots(figsize=(12, 6))

        for s in self.series:
            if not s.points:
                continue
            xs = [p.x for p in s.points]
            ys = [p.y for p in s.points]
            ax.scatter(xs, ys, marker=s.marker, color=s.color,
                       s=(2 * s.radius) ** 2, label=s.label)

        if self.region is not None:
            r = self.region
            ax.add_patch(mpatches.Rectangle(
                (r.x_min, r.y_min), r.x_max - r.x_min, r.y_max - r.y_min,
                edgecolor=(54 / 255, 162 / 255, 235 / 255, 0.6),
                facecolor=(54 / 255, 162 / 255, 235 / 255, 0.1),
                linewidth=1))

        ax.set_title('LBA Access Pattern (Marker: Device / Color: I/O Type)')
        ax.set_xlabel('Time (s)')
        ax.set_ylabel('LBA (Sector)')
        if self.series:
            ax.legend(loc='upper center', bbox_to_anchor=(0.5, -0.12),
                      ncol=min(len(self.series), 5))

        plt.tight_layout()
        return fig

    def create_size_distribution(self):
        """Grouped bars of read and write requests per size bin"""

        fig, ax = plt.subplots(figsize=(10, 6))
        h = self.histogram

        x = np.arange(len(h.bins))
        width = 0.35

        ax.bar(x - width / 2, [h.read_count[b] for b in h.bins], width,
               label='Read Requests', color=READ_BAR_COLOR)
        ax.bar(x + width / 2, [h.write_count[b] for b in h.bins], width,
               label='Write Requests', color=WRITE_BAR_COLOR)

        ax.set_title('I/O Size Distribution')
        ax.set_xlabel('Request Size (KB)')
        ax.set_ylabel('Count')
        ax.set_xticks(x)
        ax.set_xticklabels(h.labels)
        ax.set_ylim(bottom=0)
        ax.legend(loc='upper center', bbox_to_anchor=(0.5, -0.12), ncol=2)

        plt.tight_layout()
        return fig

    def create_ratio_pies(self):
        """Read vs write count and request size share, side by side"""

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
        h = self.histogram

        rw = [h.total_read(), h.total_write()]
        if sum(rw) > 0:
            ax1.pie(rw, labels=['Read', 'Write'], colors=[READ_BAR_COLOR, WRITE_BAR_COLOR],
                    wedgeprops={'linewidth': 1, 'edgecolor': 'white'})
        ax1.set_title('Read vs Write Count Ratio')

        totals = [h.read_count[b] + h.write_count[b] for b in h.bins]
        if sum(totals) > 0:
            ax2.pie(totals, labels=h.labels, colors=SIZE_PIE_COLORS,
                    wedgeprops={'linewidth': 1, 'edgecolor': 'white'})
        ax2.set_title('Request Size Ratio')

        plt.tight_layout()
        return fig

    def save_all_figures(self, output_dir):
        """Save every figure as PNG and return the written paths"""

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        figures = [('lba_access_pattern.png', self.create_scatter)]
        if self.histogram is not None:
            figures.append(('size_distribution.png', self.create_size_distribution))
            figures.append(('ratio_pies.png', self.create_ratio_pies))

        written = []
        for name, create in figures:
            fig = create()
            fig.savefig(output_dir / name, dpi=150, bbox_inches='tight')
            plt.close(fig)
            print(f"  ✓ {name}")
            written.append(output_dir / name)
        return written
