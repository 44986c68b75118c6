"""Scanning a project for oversized or complex UI components."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator

from sniffcheck.components import (
    ComponentAnalysis,
    ComponentIssue,
    ComponentReport,
    ComponentSummary,
    ExtractablePart,
    ExtractableType,
    Framework,
    IssueSeverity,
    IssueType,
    calculate_complexity_score,
    count_props,
    count_react_hooks,
    detect_component_type,
    detect_framework_from_content,
    extract_component_name,
    find_max_indentation,
)

_SKIPPED_PARENTS = ("node_modules", ".git", "dist", "build")
_HOOK_LINE = re.compile(r"(useState|useEffect|useCallback|useMemo)\s*\([^)]*\)")
_UTILITY_LINE = re.compile(r"const\s+([a-z][a-zA-Z0-9]*)\s*=\s*\([^)]*\)\s*=>\s*\{")


def _lines(content: str) -> list[str]:
    parts = content.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _walk(path: Path, descend: bool) -> Iterator[Path]:
    yield path
    if not descend:
        return
    try:
        children = sorted(path.iterdir(), key=lambda p: p.name)
    except OSError:
        return
    for child in children:
        yield from _walk(child, child.is_dir() and not child.is_symlink())


def _read_text(path: Path) -> str | None:
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError):
        return None


def find_component_files(root: str | Path) -> list[Path]:
    """Paths that look like component files.

    Entries whose immediate parent directory looks like a dependency or
    build-output directory are skipped.
    """
    root = Path(root)
    found = []
    for path in _walk(root, root.is_dir()):
        parent_name = path.parent.name
        if any(skip in parent_name for skip in _SKIPPED_PARENTS):
            continue
        extension = path.suffix[1:]
        if extension in ("tsx", "jsx", "vue", "svelte"):
            found.append(path)
        elif extension in ("ts", "js"):
            stem = path.stem
            if stem[:1].isupper() or "Component" in stem or "component" in stem:
                found.append(path)
    return found


def analyze_components(root: str | Path, threshold: int) -> ComponentReport:
    """Analyse every component under root with at least `threshold` lines."""
    components = []
    for file_path in find_component_files(root):
        content = _read_text(file_path)
        if content is None:
            continue
        line_count = len(_lines(content))
        if line_count >= threshold:
            components.append(analyze_single_component(file_path, content, line_count))
    return ComponentReport(
        components=components,
        summary=create_component_summary(components),
        recommendations=generate_global_recommendations(components),
    )


def analyze_single_component(
    file_path: str | Path, content: str, line_count: int
) -> ComponentAnalysis:
    """Full analysis of one component file."""
    framework = detect_framework_from_content(content)
    issues = detect_component_issues(content, line_count, framework)
    return ComponentAnalysis(
        file_path=str(file_path),
        component_name=extract_component_name(file_path, content, framework),
        component_type=detect_component_type(content, framework),
        framework=framework,
        line_count=line_count,
        complexity_score=calculate_complexity_score(content, framework),
        issues=issues,
        refactor_suggestions=generate_refactor_suggestions(
            issues, framework, line_count
        ),
        extractable_parts=find_extractable_parts(content, framework),
    )


def detect_component_issues(
    content: str, line_count: int, framework: Framework
) -> list[ComponentIssue]:
    """Size, hook, prop and nesting problems in a component."""
    issues = []
    if line_count > 200:
        issues.append(
            ComponentIssue(
                IssueType.TOO_MANY_LINES,
                1,
                f"Component has {line_count} lines (>200 is critical)",
                IssueSeverity.CRITICAL,
            )
        )
    elif line_count > 100:
        issues.append(
            ComponentIssue(
                IssueType.TOO_MANY_LINES,
                1,
                f"Component has {line_count} lines (>100 needs refactoring)",
                IssueSeverity.ERROR,
            )
        )

    if framework is Framework.REACT:
        hooks = count_react_hooks(content)
        if hooks > 10:
            issues.append(
                ComponentIssue(
                    IssueType.TOO_MANY_HOOKS,
                    1,
                    f"Component uses {hooks} hooks (>10 is too many)",
                    IssueSeverity.ERROR,
                )
            )
        props = count_props(content, framework)
        if props > 8:
            issues.append(
                ComponentIssue(
                    IssueType.TOO_MANY_PROPS,
                    1,
                    f"Component has {props} props (>8 suggests multiple concerns)",
                    IssueSeverity.WARNING,
                )
            )

    max_indent = find_max_indentation(content)
    if max_indent > 6:
        issues.append(
            ComponentIssue(
                IssueType.DEEP_NESTING,
                1,
                f"Deep nesting detected ({max_indent} levels)",
                IssueSeverity.WARNING,
            )
        )
    return issues


def generate_refactor_suggestions(
    issues: list[ComponentIssue], framework: Framework, line_count: int
) -> list[str]:
    """Advice derived from the issues found and the framework."""
    suggestions = []
    for issue in issues:
        if issue.issue_type is IssueType.TOO_MANY_LINES:
            if line_count > 200:
                suggestions += [
                    "🚨 CRITICAL: Split this component into 3-4 smaller components",
                    "📦 Extract reusable UI components",
                    "🔧 Move business logic to custom hooks or utilities",
                ]
            else:
                suggestions += [
                    "⚠️ Consider splitting into 2-3 smaller components",
                    "🎯 Extract complex logic into separate functions",
                ]
        elif issue.issue_type is IssueType.TOO_MANY_HOOKS:
            suggestions += [
                "🪝 Extract related hooks into custom hooks",
                "📋 Group useState calls into useReducer if managing related state",
            ]
        elif issue.issue_type is IssueType.TOO_MANY_PROPS:
            suggestions += [
                "📦 Group related props into objects",
                "🎯 Consider if this component has too many responsibilities",
            ]
        elif issue.issue_type is IssueType.DEEP_NESTING:
            suggestions += [
                "📏 Extract nested logic into separate components",
                "🔄 Use early returns to reduce nesting",
            ]

    if framework is Framework.REACT:
        suggestions += [
            "⚛️ Consider using React.memo for performance optimization",
            "🪝 Extract business logic into custom hooks",
        ]
    elif framework is Framework.VUE:
        suggestions.append("🎯 Use Vue composition API for better logic organization")
    return suggestions


def find_extractable_parts(content: str, framework: Framework) -> list[ExtractablePart]:
    """Hooks and inline utilities that could move to their own files."""
    if framework is not Framework.REACT:
        return []
    lines = _lines(content)
    parts = [
        ExtractablePart(
            name="CustomHook",
            part_type=ExtractableType.CUSTOM_HOOK,
            start_line=number,
            end_line=number + 4,
            suggested_filename="useCustomHook.ts",
            description="Extract related hooks into a custom hook",
        )
        for number, line in enumerate(lines, start=1)
        if _HOOK_LINE.search(line)
    ]
    for number, line in enumerate(lines, start=1):
        match = _UTILITY_LINE.search(line)
        if match:
            name = match.group(1)
            parts.append(
                ExtractablePart(
                    name=name,
                    part_type=ExtractableType.UTILITY_FUNCTION,
                    start_line=number,
                    end_line=number + 9,
                    suggested_filename=f"{name}.utils.ts",
                    description=f"Extract {name} utility function",
                )
            )
    return parts


def create_component_summary(components: list[ComponentAnalysis]) -> ComponentSummary:
    """Aggregate counts over analysed components."""
    return ComponentSummary(
        total_components=len(components),
        large_components=sum(1 for c in components if c.line_count > 100),
        complex_components=sum(1 for c in components if c.complexity_score > 20),
        components_needing_refactor=sum(
            1
            for c in components
            if any(
                i.severity in (IssueSeverity.ERROR, IssueSeverity.CRITICAL)
                for i in c.issues
            )
        ),
        potential_extractions=sum(len(c.extractable_parts) for c in components),
    )


def generate_global_recommendations(components: list[ComponentAnalysis]) -> list[str]:
    """Project-wide advice based on all analysed components."""
    recommendations = []
    avg_lines = (
        sum(c.line_count for c in components) // len(components) if components else 0
    )
    if avg_lines > 150:
        recommendations.append(
            "📊 Your components average over 150 lines - "
            "consider adopting a component splitting strategy"
        )
    if any(c.framework is Framework.REACT for c in components):
        recommendations.append(
            "⚛️ For React components: Extract custom hooks for reusable logic"
        )
        recommendations.append(
            "🎯 Use component composition over large monolithic components"
        )
    if any(c.framework is Framework.VUE for c in components):
        recommendations.append(
            "🎯 For Vue components: Use composition API for better code organization"
        )
    recommendations.append(
        "📦 Consider creating a design system for reusable UI components"
    )
    recommendations.append("🔧 Use linting rules to enforce component size limits")
    return recommendations