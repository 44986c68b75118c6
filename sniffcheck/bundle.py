"""Bundle-size analysis of a project's build output."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator

LARGE_CHUNK_BYTES = 500_000
MAX_TOTAL_BYTES = 2_000_000


class BundleError(Exception):
    """Raised when no usable build output can be found."""


class ChunkType(Enum):
    MAIN = "Main"
    PAGE = "Page"
    COMPONENT = "Component"
    VENDOR = "Vendor"
    RUNTIME = "Runtime"
    STATIC = "Static"


class Framework(Enum):
    NEXT_JS = "NextJs"
    REACT = "React"
    VUE = "Vue"
    ANGULAR = "Angular"
    SVELTE = "Svelte"
    VITE = "Vite"
    WEBPACK = "Webpack"
    UNKNOWN = "Unknown"

    @property
    def display_name(self) -> str:
        """Human-readable framework name used in warnings."""
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Framework.NEXT_JS: "Next.js",
    Framework.REACT: "React",
    Framework.VUE: "Vue",
    Framework.ANGULAR: "Angular",
    Framework.SVELTE: "Svelte",
    Framework.VITE: "Vite",
    Framework.WEBPACK: "Webpack",
    Framework.UNKNOWN: "JavaScript",
}


@dataclass(frozen=True)
class FrameworkLimits:
    max_total_size_mb: float
    max_main_chunk_mb: float
    max_vendor_chunk_mb: float
    performance_budget_mb: float


@dataclass
class BundleChunk:
    name: str
    size_bytes: int
    size_compressed: int | None
    chunk_type: ChunkType
    path: str


@dataclass
class BundleSummary:
    total_size: int
    total_compressed: int
    chunk_count: int
    largest_chunk: str | None
    compression_ratio: float
    warnings: list[str] = field(default_factory=list)


@dataclass
class BundleReport:
    chunks: list[BundleChunk]
    summary: BundleSummary
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable view of the report."""
        return asdict(
            self,
            dict_factory=lambda items: {
                key: value.value if isinstance(value, Enum) else value
                for key, value in items
            },
        )


_LIMITS = {
    Framework.NEXT_JS: FrameworkLimits(3.0, 1.0, 1.5, 2.5),
    Framework.REACT: FrameworkLimits(2.0, 0.8, 1.2, 1.5),
    Framework.VUE: FrameworkLimits(2.0, 0.8, 1.2, 1.5),
    Framework.ANGULAR: FrameworkLimits(4.0, 1.5, 2.0, 3.0),
    Framework.SVELTE: FrameworkLimits(1.0, 0.4, 0.6, 0.8),
    Framework.VITE: FrameworkLimits(2.0, 0.8, 1.2, 1.5),
    Framework.WEBPACK: FrameworkLimits(2.5, 1.0, 1.5, 2.0),
    Framework.UNKNOWN: FrameworkLimits(2.0, 0.8, 1.2, 1.5),
}

_FRAMEWORK_TIPS: dict[Framework, tuple[tuple[str, ...], str | None]] = {
    Framework.NEXT_JS: (
        (
            "Use Next.js Image optimization for assets",
            "Enable compression in next.config.js",
            "Consider using Next.js dynamic imports for code splitting",
        ),
        "Use Next.js Bundle Analyzer: npm install @next/bundle-analyzer",
    ),
    Framework.REACT: (
        (
            "Use React.lazy() for component-level code splitting",
            "Consider using React.memo() for expensive components",
        ),
        "Use webpack-bundle-analyzer to identify large dependencies",
    ),
    Framework.VUE: (
        (
            "Use Vue's async components for code splitting",
            "Consider tree-shaking with ES modules",
        ),
        "Use Vue CLI Bundle Analyzer plugin",
    ),
    Framework.ANGULAR: (
        (
            "Use Angular's lazy loading for feature modules",
            "Enable Angular CLI's build optimizer",
            "Use OnPush change detection strategy",
        ),
        "Use Angular CLI bundle analyzer: ng build --stats-json",
    ),
    Framework.SVELTE: (
        (
            "Leverage Svelte's compile-time optimizations",
            "Use SvelteKit for automatic code splitting",
        ),
        "Check for unnecessary dependencies - Svelte apps should be very small",
    ),
    Framework.VITE: (
        (
            "Use Vite's dynamic imports for code splitting",
            "Enable Vite's build optimizations",
        ),
        "Use vite-bundle-analyzer plugin",
    ),
    Framework.WEBPACK: (
        (
            "Use webpack's SplitChunksPlugin for optimization",
            "Enable webpack's TerserPlugin for minification",
        ),
        "Use webpack-bundle-analyzer plugin",
    ),
    Framework.UNKNOWN: (
        (
            "Consider implementing code splitting",
            "Use tree-shaking to eliminate dead code",
        ),
        None,
    ),
}


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield regular files below root, depth first, in name order."""
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if entry.is_symlink():
            continue
        if entry.is_dir():
            yield from _walk_files(entry)
        elif entry.is_file():
            yield entry


def _extension(path: Path) -> str:
    return path.suffix[1:] if path.suffix else ""


def _largest_name(chunks: list[BundleChunk]) -> str | None:
    # On ties the last chunk wins.
    if not chunks:
        return None
    return max(reversed(chunks), key=lambda c: c.size_bytes).name


def analyze_bundle(root: str | Path) -> BundleReport:
    """Analyse the first build output found under the project root."""
    root = Path(root)
    next_dir = root / ".next"
    if next_dir.exists():
        return analyze_nextjs_bundle(next_dir)
    for dir_name in ("dist", "build", "out"):
        build_dir = root / dir_name
        if build_dir.exists():
            return analyze_generic_bundle(build_dir)
    raise BundleError(
        "No build output found. Please run 'npm run build' or equivalent first."
    )


def _static_chunks(static_dir: Path) -> list[BundleChunk]:
    chunks = []
    for path in _walk_files(static_dir):
        if _extension(path).lower() in ("js", "css"):
            size = path.stat().st_size
            chunks.append(
                BundleChunk(
                    name=path.name,
                    size_bytes=size,
                    size_compressed=estimate_compressed_size(size),
                    chunk_type=determine_chunk_type(path.name),
                    path=str(path),
                )
            )
    return chunks


def _page_chunks(pages_dir: Path) -> list[BundleChunk]:
    chunks = []
    for path in _walk_files(pages_dir):
        if _extension(path) == "js":
            size = path.stat().st_size
            chunks.append(
                BundleChunk(
                    name=path.name,
                    size_bytes=size,
                    size_compressed=estimate_compressed_size(size),
                    chunk_type=ChunkType.PAGE,
                    path=str(path),
                )
            )
    return chunks


def analyze_nextjs_bundle(next_dir: str | Path) -> BundleReport:
    """Analyse a Next.js `.next` directory."""
    next_dir = Path(next_dir)
    chunks: list[BundleChunk] = []
    static_dir = next_dir / "static"
    if static_dir.exists():
        chunks.extend(_static_chunks(static_dir))
    pages_dir = next_dir / "server" / "pages"
    if pages_dir.exists():
        chunks.extend(_page_chunks(pages_dir))

    if not chunks:
        raise BundleError(
            "No bundle chunks found in .next directory. "
            "Please run 'npm run build' first."
        )

    total_size = sum(c.size_bytes for c in chunks)
    total_compressed = sum(c.size_compressed or 0 for c in chunks)
    ratio = total_compressed / total_size if total_size > 0 else 1.0

    return BundleReport(
        chunks=chunks,
        summary=BundleSummary(
            total_size=total_size,
            total_compressed=total_compressed,
            chunk_count=len(chunks),
            largest_chunk=_largest_name(chunks),
            compression_ratio=ratio,
            warnings=generate_warnings(chunks, next_dir),
        ),
        recommendations=generate_recommendations(chunks, next_dir),
    )


def analyze_generic_bundle(build_dir: str | Path) -> BundleReport:
    """Analyse a generic build directory such as `dist` or `build`."""
    build_dir = Path(build_dir)
    chunks = [
        BundleChunk(
            name=path.name,
            size_bytes=path.stat().st_size,
            size_compressed=None,
            chunk_type=determine_chunk_type_from_path(path),
            path=str(path),
        )
        for path in _walk_files(build_dir)
        if _extension(path).lower() in ("js", "css", "html", "json")
    ]
    if not chunks:
        raise BundleError("No bundle files found in build directory.")

    return BundleReport(
        chunks=chunks,
        summary=BundleSummary(
            total_size=sum(c.size_bytes for c in chunks),
            total_compressed=0,
            chunk_count=len(chunks),
            largest_chunk=_largest_name(chunks),
            compression_ratio=1.0,
            warnings=generate_warnings(chunks, build_dir),
        ),
        recommendations=generate_recommendations(chunks, build_dir),
    )


def determine_chunk_type(filename: str) -> ChunkType:
    """Classify a chunk from its file name."""
    lower = filename.lower()
    if "main" in lower:
        return ChunkType.MAIN
    if "vendor" in lower or "node_modules" in lower:
        return ChunkType.VENDOR
    if "runtime" in lower:
        return ChunkType.RUNTIME
    if "page" in lower:
        return ChunkType.PAGE
    if lower.endswith(".css"):
        return ChunkType.STATIC
    return ChunkType.COMPONENT


def determine_chunk_type_from_path(path: str | Path) -> ChunkType:
    """Classify a chunk from its full path."""
    lower = str(path).lower()
    if "vendor" in lower or "node_modules" in lower:
        return ChunkType.VENDOR
    if "page" in lower:
        return ChunkType.PAGE
    if lower.endswith(".css"):
        return ChunkType.STATIC
    return ChunkType.COMPONENT


def estimate_compressed_size(original_size: int) -> int:
    """Rough gzip size estimate for JS/CSS."""
    return int(original_size * 0.35)


def detect_framework(build_dir: str | Path) -> Framework:
    """Guess the framework from package.json and the build layout."""
    build_dir = Path(build_dir)
    project_root = build_dir.parent
    try:
        package_json = (project_root / "package.json").read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        package_json = None

    if package_json is not None:
        if '"next"' in package_json or '"@next/' in package_json:
            return Framework.NEXT_JS
        if '"@angular/' in package_json:
            return Framework.ANGULAR
        if '"vue"' in package_json and '"@vue/' in package_json:
            return Framework.VUE
        if '"svelte"' in package_json or '"@sveltejs/' in package_json:
            return Framework.SVELTE
        if '"vite"' in package_json or '"@vitejs/' in package_json:
            return Framework.VITE
        if '"react"' in package_json:
            return Framework.REACT
        if '"webpack"' in package_json:
            return Framework.WEBPACK

    if (build_dir / "_next").exists() or (build_dir / "server").exists():
        return Framework.NEXT_JS
    if (build_dir / "dist" / "index.html").exists() and (
        project_root / "angular.json"
    ).exists():
        return Framework.ANGULAR
    if (build_dir / "assets").exists() and (
        (project_root / "vite.config.js").exists()
        or (project_root / "vite.config.ts").exists()
    ):
        return Framework.VITE
    return Framework.UNKNOWN


def get_framework_limits(framework: Framework) -> FrameworkLimits:
    """Recommended bundle size limits for a framework."""
    return _LIMITS[framework]


def _total_mb(chunks: list[BundleChunk]) -> float:
    return sum(c.size_bytes for c in chunks) / 1_000_000.0


def generate_warnings(chunks: list[BundleChunk], build_dir: str | Path) -> list[str]:
    """Warnings for oversized chunks and an oversized total."""
    warnings = [
        f"Large chunk detected: {c.name} ({c.size_bytes // 1024} KB)"
        for c in chunks
        if c.size_bytes > LARGE_CHUNK_BYTES
    ]
    framework = detect_framework(build_dir)
    limits = get_framework_limits(framework)
    total_mb = _total_mb(chunks)
    if total_mb > limits.max_total_size_mb:
        warnings.append(
            f"Total bundle size ({total_mb:.1f} MB) exceeds recommended "
            f"{framework.display_name} app limit ({limits.max_total_size_mb:.1f} MB)"
        )
        if total_mb > limits.performance_budget_mb:
            warnings.append(
                "Bundle size significantly exceeds performance budget "
                f"({limits.performance_budget_mb:.1f} MB) - consider aggressive optimization"
            )
    return warnings


def generate_recommendations(
    chunks: list[BundleChunk], build_dir: str | Path
) -> list[str]:
    """General and framework-specific optimisation advice."""
    sizes: dict[ChunkType, int] = defaultdict(int)
    for chunk in chunks:
        sizes[chunk.chunk_type] += chunk.size_bytes

    recommendations = []
    if sizes.get(ChunkType.VENDOR, 0) > 800_000:
        recommendations.append("Consider code splitting to reduce vendor bundle size")
        recommendations.append("Use dynamic imports for heavy libraries")
    if sizes.get(ChunkType.MAIN, 0) > 300_000:
        recommendations.append("Main bundle is large - consider lazy loading routes")

    recommendations.append("Enable gzip/brotli compression on your server")
    recommendations.append("Consider using a CDN for static assets")

    if len(chunks) > 20:
        recommendations.append(
            "High number of chunks - consider optimizing chunk splitting strategy"
        )

    framework = detect_framework(build_dir)
    recommendations.extend(
        generate_framework_recommendations(
            framework, chunks, get_framework_limits(framework)
        )
    )
    return recommendations


def generate_framework_recommendations(
    framework: Framework, chunks: list[BundleChunk], limits: FrameworkLimits
) -> list[str]:
    """Optimisation tips specific to a framework."""
    tips, over_budget_tip = _FRAMEWORK_TIPS[framework]
    recommendations = list(tips)
    if over_budget_tip is not None and _total_mb(chunks) > limits.performance_budget_mb:
        recommendations.append(over_budget_tip)
    return recommendations


def has_oversized_chunks(report: BundleReport) -> bool:
    """True if any chunk is larger than the per-chunk limit."""
    return any(c.size_bytes > LARGE_CHUNK_BYTES for c in report.chunks)