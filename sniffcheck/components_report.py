"""Text and JSON reporting for component analysis, plus its command."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from sniffcheck.components import (
    ComponentAnalysis,
    ComponentReport,
    ComponentSummary,
    IssueSeverity,
)
from sniffcheck.components_analysis import analyze_components

DEFAULT_THRESHOLD = 100
THRESHOLD_EXCEEDED = 1

_SEVERITY_EMOJI = {"critical": "🚨", "error": "⚠️", "warning": "💡"}
_ISSUE_ICON = {
    IssueSeverity.CRITICAL: "🚨",
    IssueSeverity.ERROR: "❌",
    IssueSeverity.WARNING: "⚠️",
}


def _severity_of(component: ComponentAnalysis) -> str:
    severities = {issue.severity for issue in component.issues}
    if IssueSeverity.CRITICAL in severities:
        return "critical"
    if IssueSeverity.ERROR in severities:
        return "error"
    return "warning"


def format_component_report(
    report: ComponentReport, threshold: int = DEFAULT_THRESHOLD, quiet: bool = False
) -> str:
    """Render a component report, most severe components first."""
    lines: list[str] = []
    if not quiet:
        lines += ["", "🧩 Component Analysis Report", "==========================", ""]

    if not report.components:
        lines.append("✅ No large components found! Your components are well-sized.")
        return "\n".join(lines)

    order = {"critical": 0, "error": 1, "warning": 2}
    ranked = sorted(report.components, key=lambda c: order[_severity_of(c)])
    lines += [format_component_analysis(c, _severity_of(c)) for c in ranked]

    lines.append(format_component_summary(report.summary, threshold))

    if report.recommendations:
        lines += ["💡 RECOMMENDATIONS", "─────────────────"]
        lines += [f"  {rec}" for rec in report.recommendations]
        lines.append("")
    return "\n".join(lines)


def format_component_analysis(component: ComponentAnalysis, severity: str) -> str:
    """Render one component with its issues, suggestions and extractions."""
    emoji = _SEVERITY_EMOJI.get(severity, "📄")
    lines = [
        f"{emoji} {severity}: {component.component_name} "
        f"({component.line_count} lines, complexity: {component.complexity_score})",
        f"   📁 {component.file_path}",
        f"   🏗️  {component.framework.value} {component.component_type.value} component",
    ]
    lines += [
        f"   {_ISSUE_ICON[issue.severity]} {issue.description}"
        for issue in component.issues
    ]
    if component.refactor_suggestions:
        lines.append("   💡 Refactor suggestions:")
        lines += [f"     • {s}" for s in component.refactor_suggestions]
    if component.extractable_parts:
        lines.append("   📦 Extractable parts:")
        lines += [
            f"     • {part.description} → {part.suggested_filename}"
            for part in component.extractable_parts
        ]
    lines.append("")
    return "\n".join(lines)


def format_component_summary(
    summary: ComponentSummary, threshold: int = DEFAULT_THRESHOLD
) -> str:
    """Render the totals section of a component report."""
    lines = [
        "📈 SUMMARY",
        "─────────",
        f"  Components analyzed: {summary.total_components}",
        f"  Large components (>100 lines): {summary.large_components}",
        f"  Complex components (high complexity): {summary.complex_components}",
        f"  Components needing refactor: {summary.components_needing_refactor}",
        f"  Potential extractions found: {summary.potential_extractions}",
        "",
        f"💡 TIP: Keep components under {threshold} lines for better maintainability",
    ]
    return "\n".join(lines)


def run(
    threshold: int = DEFAULT_THRESHOLD,
    json_output: bool = False,
    quiet: bool = False,
    root: str | Path | None = None,
) -> int:
    """Analyse components under root and print the result.

    Returns a non-zero exit code when any component needs refactoring.
    """
    root = Path.cwd() if root is None else Path(root)
    if not quiet:
        print("🔍 Scanning for React, Vue, Angular, and Svelte components...")

    report = analyze_components(root, threshold)

    if json_output:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_component_report(report, threshold, quiet))

    needing_refactor = report.summary.components_needing_refactor
    if not quiet:
        if needing_refactor == 0:
            print("✅ Component analysis completed")
        else:
            print("❌ Component analysis found issues")
    return THRESHOLD_EXCEEDED if needing_refactor > 0 else 0


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point for component analysis."""
    parser = argparse.ArgumentParser(
        prog="sniff-components", description="Find oversized or complex components."
    )
    parser.add_argument(
        "-t",
        "--threshold",
        type=int,
        default=DEFAULT_THRESHOLD,
        help="minimum line count for a component to be analysed",
    )
    parser.add_argument("--json", action="store_true", help="print JSON output")
    parser.add_argument("-q", "--quiet", action="store_true", help="less output")
    parser.add_argument("--root", default=None, help="project root directory")
    args = parser.parse_args(argv)
    try:
        return run(
            threshold=args.threshold,
            json_output=args.json,
            quiet=args.quiet,
            root=args.root,
        )
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())