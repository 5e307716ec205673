#!/usr/bin/env python3

"""
LBA Trace Visualizer
Parses ftrace block_rq_issue output, plots the LBA access pattern per
device and I/O type, and reports request size and region statistics.
"""

import argparse
import logging
import os
import sys

from parse_block_trace import parse_trace, load_trace_text, count_events, format_device
from build_series import build_series, series_table
from filter_time_window import filter_by_time, parse_bound
from analyze_size_distribution import (
    build_size_histogram,
    histogram_table,
    read_write_ratio,
)
from analyze_region import RegionSelection, RegionStats, aggregate_region
from plot_lba_trace import LBATracePlotter


class LBATraceAnalyzer:
    def __init__(self):
        self.raw_text = ''
        self.grouping = {}
        self.series = []
        self.histogram = build_size_histogram({})
        self.region = None
        self.stats = RegionStats()

    def load_file(self, trace_file):
        """Read a trace file and rebuild series and size histogram."""
        self.load_text(load_trace_text(trace_file))

    def load_text(self, text):
        self.raw_text = text
        self.grouping = parse_trace(text)
        self.series = build_series(self.grouping)
        self.histogram = build_size_histogram(self.grouping)

    def apply_time_filter(self, start=None, end=None):
        """Replace the plotted series with a time-filtered view of the raw text.

        The size histogram keeps describing the whole trace.
        """
        self.grouping = filter_by_time(self.raw_text, start, end)
        self.series = build_series(self.grouping)
        return self.series

    def select_region(self, x_min, x_max, y_min, y_max):
        self.region = RegionSelection(x_min, x_max, y_min, y_max)
        self.stats = aggregate_region(self.series, self.region)
        return self.stats

    def print_summary(self):
        print("\n" + "=" * 70)
        print("LBA TRACE SUMMARY")
        print("=" * 70)

        print(f"\nEvents: {count_events(self.grouping):,} in {len(self.series)} series")
        for s in self.series:
            first = s.points[0].x
            last = s.points[-1].x
            print(f"  {s.label:18} [{s.marker}] {len(s.points):8,} requests  {first:.6f}s - {last:.6f}s")

        devices = {s.device for s in self.series}
        if devices:
            print(f"Devices: {', '.join(format_device(d) for d in sorted(devices))}")

        print("\nREQUEST SIZE DISTRIBUTION:")
        print("-" * 40)
        print(histogram_table(self.histogram).to_string(index=False))
        reads, writes = read_write_ratio(self.histogram)
        total = reads + writes
        if total > 0:
            print(f"\nRead/Write ratio: {reads:,} reads ({reads * 100 / total:.1f}%), "
                  f"{writes:,} writes ({writes * 100 / total:.1f}%)")

        if self.region is not None:
            r = self.region
            print("\nSELECTED REGION STATS:")
            print("-" * 40)
            print(f"Region: time {r.x_min} - {r.x_max}s, sector {r.y_min} - {r.y_max}")
            print(f"Read Count:  {self.stats.read_count:,}")
            print(f"Write Count: {self.stats.write_count:,}")
            print(f"Read Size:   {self.stats.read_kb:,} KB")
            print(f"Write Size:  {self.stats.write_kb:,} KB")
            print("(Size assumes 4KB per request)")

    def export_results(self, prefix):
        """Write series points and the size histogram as CSV."""
        series_file = f"{prefix}_series.csv"
        histogram_file = f"{prefix}_size_histogram.csv"
        series_table(self.series).to_csv(series_file, index=False)
        histogram_table(self.histogram).to_csv(histogram_file, index=False)
        print(f"Results exported to {series_file} and {histogram_file}")
        return series_file, histogram_file

    def generate_visualizations(self, output_dir="plots"):
        print("Generating figures...")
        plotter = LBATracePlotter(self.series, self.histogram, self.region)
        written = plotter.save_all_figures(output_dir)
        print(f"\nVisualizations saved to '{output_dir}' directory")
        return written


def build_parser():
    parser = argparse.ArgumentParser(
        description="Visualize LBA access patterns from block_rq_issue traces"
    )
    parser.add_argument("trace_file", help="ftrace output containing block_rq_issue lines")
    parser.add_argument("--start", default="", help="Time filter start in seconds, e.g. 1234.567")
    parser.add_argument("--end", default="", help="Time filter end in seconds")
    parser.add_argument(
        "--region", nargs=4, type=float, metavar=("XMIN", "XMAX", "YMIN", "YMAX"),
        help="Report read/write stats for a time/sector rectangle",
    )
    parser.add_argument(
        "-v", "--visualize", action="store_true", help="Generate visualization plots"
    )
    parser.add_argument(
        "-o", "--output", default="plots", help="Output directory for plots"
    )
    parser.add_argument("-e", "--export", help="Export results to CSV files with this prefix")
    parser.add_argument(
        "--no-summary", action="store_true", help="Skip printing summary to console"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not os.path.exists(args.trace_file):
        print(f"Error: Trace file '{args.trace_file}' not found.")
        sys.exit(1)

    print(f"Analyzing block trace from: {args.trace_file}")

    analyzer = LBATraceAnalyzer()
    analyzer.load_file(args.trace_file)

    if not analyzer.series:
        print("No block_rq_issue events found in trace data.")
        sys.exit(1)

    if parse_bound(args.start) is not None or parse_bound(args.end) is not None:
        analyzer.apply_time_filter(args.start, args.end)

    if args.region:
        analyzer.select_region(*args.region)

    if not args.no_summary:
        analyzer.print_summary()

    if args.visualize:
        analyzer.generate_visualizations(args.output)

    if args.export:
        analyzer.export_results(args.export)

    print(f"\nAnalysis complete. Found {count_events(analyzer.grouping):,} requests.")


if __name__ == "__main__":
    main()
