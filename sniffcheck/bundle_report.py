"""Text and JSON reporting for bundle-size analysis, plus its command."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from sniffcheck.bundle import (
    LARGE_CHUNK_BYTES,
    MAX_TOTAL_BYTES,
    BundleError,
    BundleReport,
    BundleSummary,
    analyze_bundle,
    has_oversized_chunks,
)

_TOP_CHUNKS = 10


def _size_band(size_bytes: int) -> str:
    if size_bytes > LARGE_CHUNK_BYTES:
        return "large"
    if size_bytes > 200_000:
        return "medium"
    return "small"


def format_report(report: BundleReport, quiet: bool = False) -> str:
    """Render a bundle report as human-readable text."""
    lines: list[str] = []
    if not quiet:
        lines += ["", "📊 Bundle Analysis Report", "========================", ""]

    if not report.chunks:
        lines.append("⚠️ No bundle chunks found.")
        return "\n".join(lines)

    largest_first = sorted(report.chunks, key=lambda c: c.size_bytes, reverse=True)

    lines += ["📦 LARGEST CHUNKS", "─────────────────"]
    for rank, chunk in enumerate(largest_first[:_TOP_CHUNKS], start=1):
        lines.append(f"  {rank}. {chunk.name} - {chunk.size_bytes // 1024} KB")
        if chunk.size_compressed is not None:
            lines.append(f"     💾 Compressed: {chunk.size_compressed // 1024} KB")
    lines.append("")

    if report.summary.warnings:
        lines += ["⚠️  WARNINGS", "───────────"]
        lines += [f"  • {warning}" for warning in report.summary.warnings]
        lines.append("")

    if report.recommendations:
        lines += ["💡 RECOMMENDATIONS", "──────────────────"]
        lines += [f"  • {rec}" for rec in report.recommendations]
        lines.append("")

    lines.append(format_summary(report.summary))
    return "\n".join(lines)


def format_summary(summary: BundleSummary) -> str:
    """Render the totals section of a bundle report."""
    lines = ["📈 SUMMARY", "─────────"]
    total_mb = summary.total_size / 1_000_000.0
    lines.append(f"  Total bundle size: {total_mb:.2f} MB")

    if summary.total_compressed > 0:
        compressed_mb = summary.total_compressed / 1_000_000.0
        lines.append(f"  Compressed size: {compressed_mb:.2f} MB")
        lines.append(
            f"  Compression ratio: {(1.0 - summary.compression_ratio) * 100.0:.1f}%"
        )

    lines.append(f"  Number of chunks: {summary.chunk_count}")
    if summary.largest_chunk is not None:
        lines.append(f"  Largest chunk: {summary.largest_chunk}")
    lines.append("")

    if summary.total_size > 1_000_000:
        lines += [
            "🚀 PERFORMANCE IMPACT",
            "────────────────────",
            "  ⚠️ Large bundle size may impact loading performance",
            "  💡 Consider implementing code splitting and lazy loading",
            "",
        ]

    lines.append(
        "💡 TIP: Use tools like webpack-bundle-analyzer for detailed analysis"
    )
    return "\n".join(lines)


def run(
    json_output: bool = False,
    quiet: bool = False,
    root: str | Path | None = None,
) -> int:
    """Analyse the bundle under root and print the result.

    Returns 1 when the bundle is too large or has oversized chunks, else 0.
    Raises BundleError when no build output is found.
    """
    root = Path.cwd() if root is None else Path(root)
    if not quiet:
        print("🔍 Analyzing bundle size...")
        print("🔍 Searching for build output directories...")

    report = analyze_bundle(root)

    if json_output:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_report(report, quiet))

    too_large = report.summary.total_size > MAX_TOTAL_BYTES
    return 1 if too_large or has_oversized_chunks(report) else 0


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point for bundle analysis."""
    parser = argparse.ArgumentParser(
        prog="sniff-bundle", description="Analyse build output bundle sizes."
    )
    parser.add_argument("--json", action="store_true", help="print JSON output")
    parser.add_argument("-q", "--quiet", action="store_true", help="less output")
    parser.add_argument("--root", default=None, help="project root directory")
    args = parser.parse_args(argv)
    try:
        return run(json_output=args.json, quiet=args.quiet, root=args.root)
    except (BundleError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())