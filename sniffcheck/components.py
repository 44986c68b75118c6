"""Component data model and complexity metrics for UI components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from pathlib import PurePath
from typing import Any


class ComponentType(Enum):
    FUNCTIONAL_COMPONENT = "FunctionalComponent"
    CLASS_COMPONENT = "ClassComponent"
    VUE_COMPONENT = "VueComponent"
    ANGULAR_COMPONENT = "AngularComponent"
    SVELTE_COMPONENT = "SvelteComponent"


class Framework(Enum):
    REACT = "React"
    VUE = "Vue"
    ANGULAR = "Angular"
    SVELTE = "Svelte"
    UNKNOWN = "Unknown"


class IssueType(Enum):
    TOO_MANY_LINES = "TooManyLines"
    TOO_MANY_HOOKS = "TooManyHooks"
    TOO_MANY_PROPS = "TooManyProps"
    COMPLEX_LOGIC = "ComplexLogic"
    MULTIPLE_CONCERNS = "MultipleConcerns"
    DEEP_NESTING = "DeepNesting"
    DUPLICATED_CODE = "DuplicatedCode"


class IssueSeverity(Enum):
    WARNING = "Warning"
    ERROR = "Error"
    CRITICAL = "Critical"


class ExtractableType(Enum):
    CUSTOM_HOOK = "CustomHook"
    UTILITY_FUNCTION = "UtilityFunction"
    SUB_COMPONENT = "SubComponent"
    CONSTANTS = "Constants"
    TYPE_DEFINITIONS = "TypeDefinitions"
    BUSINESS_LOGIC = "BusinessLogic"


@dataclass
class ComponentIssue:
    issue_type: IssueType
    line_number: int
    description: str
    severity: IssueSeverity


@dataclass
class ExtractablePart:
    name: str
    part_type: ExtractableType
    start_line: int
    end_line: int
    suggested_filename: str
    description: str


@dataclass
class ComponentAnalysis:
    file_path: str
    component_name: str
    component_type: ComponentType
    framework: Framework
    line_count: int
    complexity_score: int
    issues: list[ComponentIssue] = field(default_factory=list)
    refactor_suggestions: list[str] = field(default_factory=list)
    extractable_parts: list[ExtractablePart] = field(default_factory=list)


@dataclass
class ComponentSummary:
    total_components: int
    large_components: int
    complex_components: int
    components_needing_refactor: int
    potential_extractions: int


@dataclass
class ComponentReport:
    components: list[ComponentAnalysis]
    summary: ComponentSummary
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable view of the report."""
        return _plain(self)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def _compile_all(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p) for p in patterns)


_HOOK_PATTERNS = _compile_all(
    r"useState\s*\(",
    r"useEffect\s*\(",
    r"useContext\s*\(",
    r"useReducer\s*\(",
    r"useCallback\s*\(",
    r"useMemo\s*\(",
    r"useRef\s*\(",
    r"use[A-Z][a-zA-Z]*\s*\(",
)
_PROP_PATTERNS = _compile_all(
    r"\{\s*([^}]+)\s*\}\s*=\s*props",
    r"props\.([a-zA-Z_][a-zA-Z0-9_]*)",
)
_STATE_PATTERN = re.compile(r"useState\s*\(")
_CONDITIONAL_PATTERNS = _compile_all(r"if\s*\(", r"\?\s*[^:]+\s*:", r"&&\s*[^&]")
_LOOP_PATTERNS = _compile_all(
    r"for\s*\(",
    r"while\s*\(",
    r"\.map\s*\(",
    r"\.forEach\s*\(",
    r"\.filter\s*\(",
    r"\.reduce\s*\(",
)
_FUNCTION_PATTERNS = _compile_all(
    r"const\s+[a-zA-Z_][a-zA-Z0-9_]*\s*=\s*\(",
    r"function\s+[a-zA-Z_][a-zA-Z0-9_]*\s*\(",
    r"const\s+[a-zA-Z_][a-zA-Z0-9_]*\s*=\s*async",
)
_REACT_NAME_PATTERNS = _compile_all(
    r"function\s+([A-Z][a-zA-Z0-9]*)",
    r"const\s+([A-Z][a-zA-Z0-9]*)\s*=",
    r"class\s+([A-Z][a-zA-Z0-9]*)",
)
_VUE_NAME_PATTERN = re.compile(r"""name:\s*['"]([^'"]+)['"]""")


def _count_matches(patterns: tuple[re.Pattern[str], ...], content: str) -> int:
    return sum(1 for pattern in patterns for _ in pattern.finditer(content))


def _lines(content: str) -> list[str]:
    parts = content.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def detect_framework_from_content(content: str) -> Framework:
    """Guess the UI framework a component file is written for."""
    if (
        "import React" in content
        or "from 'react'" in content
        or 'from "react"' in content
    ):
        return Framework.REACT
    if "<template>" in content and "<script" in content:
        return Framework.VUE
    if "@Component" in content or "@angular/" in content:
        return Framework.ANGULAR
    if "<script>" in content and ("export default" in content or "let " in content):
        return Framework.SVELTE
    return Framework.UNKNOWN


def detect_component_type(content: str, framework: Framework) -> ComponentType:
    """Decide which kind of component the file defines."""
    if framework is Framework.REACT:
        if "class " in content and "extends" in content and "Component" in content:
            return ComponentType.CLASS_COMPONENT
        return ComponentType.FUNCTIONAL_COMPONENT
    return {
        Framework.VUE: ComponentType.VUE_COMPONENT,
        Framework.ANGULAR: ComponentType.ANGULAR_COMPONENT,
        Framework.SVELTE: ComponentType.SVELTE_COMPONENT,
    }.get(framework, ComponentType.FUNCTIONAL_COMPONENT)


def extract_component_name(file_path: str | PurePath, content: str, framework: Framework) -> str:
    """Name a component after its file, or its declaration for index files."""
    stem = PurePath(file_path).stem
    if stem and stem != "index":
        return stem

    if framework is Framework.REACT:
        for pattern in _REACT_NAME_PATTERNS:
            match = pattern.search(content)
            if match:
                return match.group(1)
    elif framework is Framework.VUE:
        match = _VUE_NAME_PATTERN.search(content)
        if match:
            return match.group(1)

    return stem or "Component"


def count_react_hooks(content: str) -> int:
    """Count hook calls; custom-hook matches overlap with built-in ones."""
    return _count_matches(_HOOK_PATTERNS, content)


def count_props(content: str, framework: Framework) -> int:
    """Count distinct props referenced by a React component."""
    if framework is not Framework.REACT:
        return 0
    props = {
        prop.strip()
        for pattern in _PROP_PATTERNS
        for match in pattern.finditer(content)
        for prop in match.group(1).split(",")
    }
    return len(props)


def count_state_variables(content: str, framework: Framework) -> int:
    """Count useState calls in React components."""
    if framework is not Framework.REACT:
        return 0
    return sum(1 for _ in _STATE_PATTERN.finditer(content))


def count_conditionals(content: str) -> int:
    return _count_matches(_CONDITIONAL_PATTERNS, content)


def count_loops(content: str) -> int:
    return _count_matches(_LOOP_PATTERNS, content)


def count_internal_functions(content: str) -> int:
    return _count_matches(_FUNCTION_PATTERNS, content)


def calculate_complexity_score(content: str, framework: Framework) -> int:
    """Weighted sum of hooks, props, state, branches, loops and functions."""
    return (
        count_react_hooks(content) * 2
        + count_props(content, framework)
        + count_state_variables(content, framework) * 2
        + count_conditionals(content)
        + count_loops(content) * 2
        + count_internal_functions(content)
    )


def find_max_indentation(content: str) -> int:
    """Deepest indentation level, assuming two-space indents."""
    return max(
        (
            (len(line) - len(line.lstrip())) // 2
            for line in _lines(content)
        ),
        default=0,
    )