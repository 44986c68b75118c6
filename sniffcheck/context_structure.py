"""Project layout discovery: framework, languages, directories and files."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator

_SOURCE_EXTENSIONS = ("ts", "tsx", "js", "jsx")
_SKIPPED_DIRS = ("node_modules", ".git")
_BUILTIN_HOOKS = (
    "useState",
    "useEffect",
    "useContext",
    "useReducer",
    "useMemo",
    "useCallback",
    "useRef",
)
_PAGE_DIRS = ("pages", "app", "src/pages", "src/app", "src/routes", "routes")
_API_DIRS = ("pages/api", "src/pages/api", "app/api", "src/app/api", "api", "src/api")
_UTIL_DIRS = (
    "utils",
    "src/utils",
    "lib",
    "src/lib",
    "helpers",
    "src/helpers",
    "common",
    "src/common",
)


class Framework(Enum):
    NEXT_JS = "NextJs"
    REACT = "React"
    VUE = "Vue"
    ANGULAR = "Angular"
    SVELTE = "Svelte"
    VANILLA = "Vanilla"
    UNKNOWN = "Unknown"


class Language(Enum):
    TYPESCRIPT = "TypeScript"
    JAVASCRIPT = "JavaScript"
    CSS = "CSS"
    SCSS = "SCSS"
    JSON = "JSON"
    MARKDOWN = "Markdown"


class DirectoryPurpose(Enum):
    COMPONENTS = "Components"
    PAGES = "Pages"
    API = "Api"
    UTILS = "Utils"
    SERVICES = "Services"
    STYLES = "Styles"
    PUBLIC = "Public"
    CONFIG = "Config"
    TESTS = "Tests"
    BUILD = "Build"
    OTHER = "Other"


class ComponentType(Enum):
    PAGE = "Page"
    LAYOUT = "Layout"
    FEATURE = "Feature"
    UI = "UI"
    HOOK = "Hook"
    CONTEXT = "Context"


class UtilityPurpose(Enum):
    DATA_FETCHING = "DataFetching"
    VALIDATION = "Validation"
    FORMATTING = "Formatting"
    CONSTANTS = "Constants"
    TYPES = "Types"
    HELPERS = "Helpers"
    OTHER = "Other"


_LANGUAGE_BY_EXTENSION = {
    "ts": Language.TYPESCRIPT,
    "tsx": Language.TYPESCRIPT,
    "js": Language.JAVASCRIPT,
    "jsx": Language.JAVASCRIPT,
    "css": Language.CSS,
    "scss": Language.SCSS,
    "json": Language.JSON,
    "md": Language.MARKDOWN,
}


@dataclass
class ProjectInfo:
    name: str
    version: str | None
    description: str | None
    framework: Framework
    languages: list[Language]
    total_files: int
    total_lines: int


@dataclass
class DirectoryInfo:
    path: str
    purpose: DirectoryPurpose
    file_count: int
    line_count: int
    main_file_types: list[str] = field(default_factory=list)


@dataclass
class ComponentInfo:
    name: str
    path: str
    component_type: ComponentType
    props_count: int
    hooks_used: list[str] = field(default_factory=list)
    children_components: list[str] = field(default_factory=list)


@dataclass
class PageInfo:
    name: str
    path: str
    route: str
    has_ssr: bool
    has_ssg: bool
    api_calls: list[str] = field(default_factory=list)


@dataclass
class ApiRouteInfo:
    path: str
    methods: list[str] = field(default_factory=list)
    middleware: list[str] = field(default_factory=list)
    database_operations: list[str] = field(default_factory=list)


@dataclass
class UtilityInfo:
    path: str
    functions: list[str]
    purpose: UtilityPurpose
    complexity: int


@dataclass
class ProjectStructure:
    directories: list[DirectoryInfo] = field(default_factory=list)
    components: list[ComponentInfo] = field(default_factory=list)
    pages: list[PageInfo] = field(default_factory=list)
    api_routes: list[ApiRouteInfo] = field(default_factory=list)
    utilities: list[UtilityInfo] = field(default_factory=list)


def _line_count(content: str) -> int:
    parts = content.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return len(parts)


def _read_text(path: Path) -> str | None:
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError):
        return None


def _extension(path: Path) -> str:
    return path.suffix[1:] if path.suffix else ""


def _is_plain_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def _is_plain_file(path: Path) -> bool:
    return path.is_file() and not path.is_symlink()


def _sorted_children(path: Path) -> list[Path]:
    try:
        return sorted(path.iterdir(), key=lambda p: p.name)
    except OSError:
        return []


def _walk_files(root: Path) -> Iterator[Path]:
    for child in _sorted_children(root):
        if _is_plain_dir(child):
            if child.name not in _SKIPPED_DIRS:
                yield from _walk_files(child)
        elif _is_plain_file(child):
            yield child


def find_source_files(root: str | Path, extensions: Iterable[str]) -> list[Path]:
    """Files below root with one of the extensions, skipping dependency dirs."""
    wanted = set(extensions)
    return [path for path in _walk_files(Path(root)) if _extension(path) in wanted]


def relative_path(path: str | Path, root: str | Path) -> str:
    """Path relative to root in forward-slash form, or the path itself."""
    path = Path(path)
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _has(value: Any, key: str) -> bool:
    return isinstance(value, dict) and key in value


def _string_field(value: Any, key: str) -> str | None:
    if isinstance(value, dict) and isinstance(value.get(key), str):
        return value[key]
    return None


def _load_package_json(project_dir: Path) -> Any | None:
    path = project_dir / "package.json"
    if not path.exists():
        return None
    text = path.read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except ValueError:
        return None


def analyze_project_info(project_dir: str | Path) -> ProjectInfo:
    """Name, version, framework, languages and size of a project."""
    project_dir = Path(project_dir)
    package = _load_package_json(project_dir)
    total_files, total_lines = count_files_and_lines(project_dir)
    return ProjectInfo(
        name=_string_field(package, "name") or "Unknown",
        version=_string_field(package, "version"),
        description=_string_field(package, "description"),
        framework=detect_framework(project_dir),
        languages=detect_languages(project_dir),
        total_files=total_files,
        total_lines=total_lines,
    )


def detect_framework(project_dir: str | Path) -> Framework:
    """Guess the framework from package.json dependencies and layout."""
    project_dir = Path(project_dir)
    package = _load_package_json(project_dir)
    if isinstance(package, dict):
        deps = package.get("dependencies")
        dev_deps = package.get("devDependencies")
        for key, framework in (
            ("next", Framework.NEXT_JS),
            ("react", Framework.REACT),
            ("vue", Framework.VUE),
            ("@angular/core", Framework.ANGULAR),
            ("svelte", Framework.SVELTE),
        ):
            if _has(deps, key) or _has(dev_deps, key):
                return framework

    if (project_dir / "next.config.js").exists() or (
        project_dir / "next.config.ts"
    ).exists():
        return Framework.NEXT_JS
    if (project_dir / "pages").exists() or (project_dir / "app").exists():
        return Framework.NEXT_JS
    return Framework.UNKNOWN


def detect_languages(project_dir: str | Path) -> list[Language]:
    """Languages present in the project, in a fixed order."""
    found = {
        _LANGUAGE_BY_EXTENSION[_extension(path)]
        for path in find_source_files(project_dir, _LANGUAGE_BY_EXTENSION)
    }
    return [language for language in Language if language in found]


def count_files_and_lines(project_dir: str | Path) -> tuple[int, int]:
    """Number of JS/TS source files and their total line count."""
    files = find_source_files(project_dir, _SOURCE_EXTENSIONS)
    total_lines = 0
    for path in files:
        content = _read_text(path)
        if content is not None:
            total_lines += _line_count(content)
    return len(files), total_lines


def _walk_dirs(root: Path, depth: int, max_depth: int) -> Iterator[Path]:
    for child in _sorted_children(root):
        if not _is_plain_dir(child) or child.name == "node_modules":
            continue
        yield child
        if depth + 1 < max_depth:
            yield from _walk_dirs(child, depth + 1, max_depth)


def analyze_directories(project_dir: str | Path) -> list[DirectoryInfo]:
    """Describe every directory up to three levels below the project root."""
    project_dir = Path(project_dir)
    directories = []
    for path in _walk_dirs(project_dir, 0, 3):
        rel = relative_path(path, project_dir)
        if not rel or rel == ".":
            continue
        file_count, line_count, main_types = count_directory_contents(path)
        directories.append(
            DirectoryInfo(
                path=rel,
                purpose=determine_directory_purpose(rel),
                file_count=file_count,
                line_count=line_count,
                main_file_types=main_types,
            )
        )
    return directories


def count_directory_contents(dir_path: str | Path) -> tuple[int, int, list[str]]:
    """Files directly in a directory, their code lines and top extensions."""
    file_count = 0
    line_count = 0
    extensions: Counter[str] = Counter()
    for path in _sorted_children(Path(dir_path)):
        if not _is_plain_file(path):
            continue
        file_count += 1
        ext = _extension(path)
        if not ext:
            continue
        extensions[ext] += 1
        if ext in ("ts", "tsx", "js", "jsx", "css", "scss"):
            content = _read_text(path)
            if content is not None:
                line_count += _line_count(content)
    ranked = sorted(extensions.items(), key=lambda item: (-item[1], item[0]))
    return file_count, line_count, [ext for ext, _ in ranked[:3]]


def determine_directory_purpose(path: str) -> DirectoryPurpose:
    """Classify a directory from the words in its path."""
    lower = path.lower()
    if "component" in lower:
        return DirectoryPurpose.COMPONENTS
    if "page" in lower or lower == "app":
        return DirectoryPurpose.PAGES
    if "api" in lower:
        return DirectoryPurpose.API
    if "util" in lower or "helper" in lower:
        return DirectoryPurpose.UTILS
    if "service" in lower or "lib" in lower:
        return DirectoryPurpose.SERVICES
    if "style" in lower or "css" in lower:
        return DirectoryPurpose.STYLES
    if "public" in lower or "static" in lower:
        return DirectoryPurpose.PUBLIC
    if "config" in lower:
        return DirectoryPurpose.CONFIG
    if "test" in lower or "spec" in lower:
        return DirectoryPurpose.TESTS
    if "build" in lower or "dist" in lower or ".next" in lower:
        return DirectoryPurpose.BUILD
    return DirectoryPurpose.OTHER


def analyze_project_structure(project_dir: str | Path) -> ProjectStructure:
    """Directories, components, pages, API routes and utilities."""
    return ProjectStructure(
        directories=analyze_directories(project_dir),
        components=analyze_components(project_dir),
        pages=analyze_pages(project_dir),
        api_routes=analyze_api_routes(project_dir),
        utilities=analyze_utilities(project_dir),
    )


def analyze_components(project_dir: str | Path) -> list[ComponentInfo]:
    """Describe each TSX/JSX file that looks like a component."""
    project_dir = Path(project_dir)
    components = []
    for path in find_source_files(project_dir, ("tsx", "jsx")):
        content = _read_text(path)
        if content is not None and is_component_file(content):
            components.append(analyze_component_file(path, content, project_dir))
    return components


def is_component_file(content: str) -> bool:
    """True if the content looks like an exported React component."""
    return (
        "export default" in content
        and (
            "function " in content
            or "const " in content
            or "export function" in content
        )
        and (
            "return (" in content
            or "return <" in content
            or "jsx" in content
            or "tsx" in content
        )
    )


def analyze_component_file(
    path: str | Path, content: str, project_dir: str | Path
) -> ComponentInfo:
    """Classify a component and collect its props, hooks and children."""
    path = Path(path)
    name = path.stem
    rel = relative_path(path, project_dir)
    lower_name = name.lower()

    if "/pages/" in rel:
        component_type = ComponentType.PAGE
    elif "layout" in lower_name:
        component_type = ComponentType.LAYOUT
    elif "/hooks/" in rel or name.startswith("use"):
        component_type = ComponentType.HOOK
    elif "context" in lower_name:
        component_type = ComponentType.CONTEXT
    elif "/components/ui/" in rel:
        component_type = ComponentType.UI
    else:
        component_type = ComponentType.FEATURE

    return ComponentInfo(
        name=name,
        path=rel,
        component_type=component_type,
        props_count=count_props_definitions(content),
        hooks_used=extract_hooks_used(content),
        children_components=extract_child_components(content),
    )


def count_props_definitions(content: str) -> int:
    """Lines that declare a Props interface or type."""
    return sum(
        1
        for line in content.splitlines()
        if "Props" in line and ("interface" in line or "type" in line)
    )


def extract_hooks_used(content: str) -> list[str]:
    """Sorted, distinct built-in and custom hooks used in the content."""
    hooks = {hook for hook in _BUILTIN_HOOKS if hook in content}
    for line in content.splitlines():
        start = line.find("use")
        if start < 0:
            continue
        rest = line[start:]
        end = rest.find("(")
        if end < 0:
            continue
        name = rest[:end]
        if len(name) > 3 and name[3].isupper():
            hooks.add(name)
    return sorted(hooks)


def extract_child_components(content: str) -> list[str]:
    """Up to ten distinct capitalised JSX tags, sorted."""
    found = set()
    for line in content.splitlines():
        if "<" not in line:
            continue
        for part in line.split("<")[1:]:
            end = next(
                (i for i, ch in enumerate(part) if ch.isspace() or ch in ">/"),
                None,
            )
            if end is None:
                continue
            name = part[:end]
            if name and name[0].isupper():
                found.add(name)
    return sorted(found)[:10]


def _files_in(project_dir: Path, dir_names: Iterable[str]) -> Iterator[tuple[Path, str]]:
    for dir_name in dir_names:
        dir_path = project_dir / dir_name
        if not dir_path.is_dir():
            continue
        for path in find_source_files(dir_path, _SOURCE_EXTENSIONS):
            content = _read_text(path)
            if content is not None:
                yield path, content


def analyze_pages(project_dir: str | Path) -> list[PageInfo]:
    """Pages and routes under the usual page directories."""
    project_dir = Path(project_dir)
    pages = []
    for path, content in _files_in(project_dir, _PAGE_DIRS):
        rel = relative_path(path, project_dir)
        route = (
            rel.replace(".tsx", "").replace(".ts", "").replace(".jsx", "").replace(".js", "")
        )
        pages.append(
            PageInfo(
                name=path.stem,
                path=rel,
                route=route,
                has_ssr="getServerSideProps" in content,
                has_ssg="getStaticProps" in content,
            )
        )
    return pages


def analyze_api_routes(project_dir: str | Path) -> list[ApiRouteInfo]:
    """API route files with the HTTP methods they appear to handle."""
    project_dir = Path(project_dir)
    routes = []
    for path, content in _files_in(project_dir, _API_DIRS):
        methods = [
            method
            for method in ("GET", "POST", "PUT", "DELETE")
            if f"req.method === '{method}'" in content
            or f"method: '{method}'" in content
        ]
        has_middleware = any(
            word in content for word in ("middleware", "cors", "auth")
        )
        has_validation = any(
            word in content for word in ("validate", "schema", "joi", "yup")
        )
        routes.append(
            ApiRouteInfo(
                path=relative_path(path, project_dir),
                methods=methods or ["GET"],
                middleware=["middleware"] if has_middleware else [],
                database_operations=["validation"] if has_validation else [],
            )
        )
    return routes


def _utility_purpose(content: str) -> UtilityPurpose:
    if any(word in content for word in ("fetch", "axios", "http")):
        return UtilityPurpose.DATA_FETCHING
    if any(word in content for word in ("format", "parse", "Date")):
        return UtilityPurpose.FORMATTING
    if any(word in content for word in ("validate", "regex", "test")):
        return UtilityPurpose.VALIDATION
    if "typeof" in content or "Array.isArray" in content:
        return UtilityPurpose.TYPES
    if "localStorage" in content or "sessionStorage" in content:
        return UtilityPurpose.HELPERS
    return UtilityPurpose.OTHER


def analyze_utilities(project_dir: str | Path) -> list[UtilityInfo]:
    """Utility modules with their purpose, export count and size."""
    project_dir = Path(project_dir)
    utilities = []
    for path, content in _files_in(project_dir, _UTIL_DIRS):
        export_count = (
            content.count("export ")
            + content.count("export{")
            + content.count("export {")
        )
        utilities.append(
            UtilityInfo(
                path=relative_path(path, project_dir),
                functions=[f"exports: {export_count}"],
                purpose=_utility_purpose(content),
                complexity=min(_line_count(content), 100),
            )
        )
    return utilities