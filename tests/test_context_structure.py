import json
from pathlib import Path

import pytest

from sniffcheck.context_structure import (
    ComponentType,
    DirectoryPurpose,
    Framework,
    Language,
    UtilityPurpose,
    analyze_api_routes,
    analyze_component_file,
    analyze_components,
    analyze_directories,
    analyze_pages,
    analyze_project_info,
    analyze_project_structure,
    analyze_utilities,
    count_directory_contents,
    count_files_and_lines,
    count_props_definitions,
    detect_framework,
    detect_languages,
    determine_directory_purpose,
    extract_child_components,
    extract_hooks_used,
    find_source_files,
    is_component_file,
    relative_path,
)

COMPONENT = (
    "import React from 'react';\n"
    "interface CardProps { title: string }\n"
    "export default function Card() {\n"
    "  const [open, setOpen] = useState(false);\n"
    "  return (<div><Header title='x' /><Footer/></div>);\n"
    "}\n"
)


def write(root: Path, rel: str, text: str = "") -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "path, purpose",
    [
        ("src/components", DirectoryPurpose.COMPONENTS),
        ("app", DirectoryPurpose.PAGES),
        ("src/api", DirectoryPurpose.API),
        ("helpers", DirectoryPurpose.UTILS),
        ("lib", DirectoryPurpose.SERVICES),
        ("styles", DirectoryPurpose.STYLES),
        ("public", DirectoryPurpose.PUBLIC),
        ("config", DirectoryPurpose.CONFIG),
        ("tests", DirectoryPurpose.TESTS),
        (".next", DirectoryPurpose.BUILD),
        ("docs", DirectoryPurpose.OTHER),
    ],
)
def test_determine_directory_purpose(path, purpose):
    assert determine_directory_purpose(path) is purpose


def test_is_component_file():
    assert is_component_file(COMPONENT)
    assert not is_component_file("export const x = 1;")


def test_count_props_definitions_matches_declaring_lines():
    prop_lines = ["interface ButtonProps {", "type CardProps = {"]
    content = "\n".join(prop_lines + ["const value = 1;", "const props = {};"])
    assert count_props_definitions(content) == len(prop_lines)


def test_extract_hooks_used():
    content = (
        "const [a, setA] = useState(0);\n"
        "const data = useFetchData(url);\n"
        "useEffect(() => {});\n"
    )
    assert extract_hooks_used(content) == ["useEffect", "useFetchData", "useState"]


def test_extract_child_components():
    content = "<div><Header title='x' /><Footer/></div>"
    assert extract_child_components(content) == ["Footer", "Header"]


def test_extract_child_components_limited_and_sorted():
    names = [f"Widget{chr(ord('A') + i)}" for i in range(12)]
    content = "\n".join(f"<{name} />" for name in reversed(names))
    result = extract_child_components(content)
    assert result == sorted(names)[:10]


def test_find_source_files_skips_dependencies(tmp_path):
    write(tmp_path, "src/a.ts")
    write(tmp_path, "src/b.css")
    write(tmp_path, "node_modules/lib/index.js")
    found = find_source_files(tmp_path, ["ts", "js"])
    assert found == [tmp_path / "src" / "a.ts"]


def test_relative_path(tmp_path):
    assert relative_path(tmp_path / "src" / "a.ts", tmp_path) == "src/a.ts"
    assert relative_path("/elsewhere/x.ts", tmp_path) == str(Path("/elsewhere/x.ts"))


@pytest.mark.parametrize(
    "package, framework",
    [
        ({"dependencies": {"next": "14.0.0"}}, Framework.NEXT_JS),
        ({"devDependencies": {"react": "18.0.0"}}, Framework.REACT),
        ({"dependencies": {"vue": "3.0.0"}}, Framework.VUE),
        ({"dependencies": {"@angular/core": "17.0.0"}}, Framework.ANGULAR),
        ({"dependencies": {"svelte": "4.0.0"}}, Framework.SVELTE),
        ({"dependencies": {}}, Framework.UNKNOWN),
    ],
)
def test_detect_framework_from_package(tmp_path, package, framework):
    write(tmp_path, "package.json", json.dumps(package))
    assert detect_framework(tmp_path) is framework


def test_detect_framework_from_layout(tmp_path):
    assert detect_framework(tmp_path) is Framework.UNKNOWN
    (tmp_path / "pages").mkdir()
    assert detect_framework(tmp_path) is Framework.NEXT_JS


def test_detect_framework_invalid_json_falls_back(tmp_path):
    write(tmp_path, "package.json", "{not json")
    write(tmp_path, "next.config.js", "")
    assert detect_framework(tmp_path) is Framework.NEXT_JS


def test_detect_languages(tmp_path):
    write(tmp_path, "a.ts")
    write(tmp_path, "style/b.css")
    write(tmp_path, "README.md")
    write(tmp_path, "node_modules/x.js")
    assert set(detect_languages(tmp_path)) == {
        Language.TYPESCRIPT,
        Language.CSS,
        Language.MARKDOWN,
    }


def test_count_files_and_lines(tmp_path):
    first = ["const a = 1;", "const b = 2;"]
    second = ["export default 1;"]
    write(tmp_path, "src/a.ts", "\n".join(first) + "\n")
    write(tmp_path, "src/b.jsx", "\n".join(second))
    write(tmp_path, "src/c.css", "body {}\n")
    write(tmp_path, "node_modules/d.js", "x\ny\n")
    assert count_files_and_lines(tmp_path) == (2, len(first) + len(second))


def test_analyze_project_info(tmp_path):
    package = {"name": "demo-app", "version": "1.2.3", "description": "A demo"}
    write(tmp_path, "package.json", json.dumps(package))
    write(tmp_path, "src/a.ts", "x\n")
    info = analyze_project_info(tmp_path)
    assert info.name == "demo-app"
    assert info.version == "1.2.3"
    assert info.description == "A demo"
    assert info.total_files == 1
    assert Language.JSON in info.languages


def test_analyze_project_info_defaults(tmp_path):
    info = analyze_project_info(tmp_path)
    assert info.name == "Unknown"
    assert info.version is None
    assert info.framework is Framework.UNKNOWN


def test_count_directory_contents(tmp_path):
    for name in ("a.ts", "b.ts", "c.ts"):
        write(tmp_path, name, "line\n")
    write(tmp_path, "d.css", "x\ny\n")
    write(tmp_path, "e.css", "z\n")
    write(tmp_path, "f.md", "skip\nskip\n")
    write(tmp_path, "sub/g.ts", "nested\n")
    file_count, line_count, types = count_directory_contents(tmp_path)
    assert file_count == 6
    assert line_count == 3 + 2 + 1
    assert types == ["ts", "css", "md"]


def test_analyze_directories(tmp_path):
    (tmp_path / "src" / "components" / "ui" / "deep").mkdir(parents=True)
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    write(tmp_path, "src/components/Button.tsx", "x\n")
    paths = {d.path: d for d in analyze_directories(tmp_path)}
    assert set(paths) == {"src", "src/components", "src/components/ui"}
    assert paths["src/components"].purpose is DirectoryPurpose.COMPONENTS
    assert paths["src/components"].file_count == 1


def test_analyze_component_file_types(tmp_path):
    page = analyze_component_file(tmp_path / "src/pages/Home.tsx", COMPONENT, tmp_path)
    assert page.component_type is ComponentType.PAGE
    assert page.path == "src/pages/Home.tsx"
    hook = analyze_component_file(tmp_path / "src/useAuth.tsx", COMPONENT, tmp_path)
    assert hook.component_type is ComponentType.HOOK
    ui = analyze_component_file(
        tmp_path / "src/components/ui/Card.tsx", COMPONENT, tmp_path
    )
    assert ui.component_type is ComponentType.UI
    assert ui.name == "Card"
    assert ui.children_components == ["Footer", "Header"]
    assert "useState" in ui.hooks_used


def test_analyze_components(tmp_path):
    write(tmp_path, "src/Card.tsx", COMPONENT)
    write(tmp_path, "src/plain.tsx", "export const x = 1;")
    components = analyze_components(tmp_path)
    assert [c.name for c in components] == ["Card"]
    assert components[0].props_count == 1


def test_analyze_pages(tmp_path):
    write(tmp_path, "pages/index.tsx", "export async function getServerSideProps() {}")
    write(tmp_path, "pages/about.js", "export async function getStaticProps() {}")
    pages = {p.path: p for p in analyze_pages(tmp_path)}
    assert pages["pages/index.tsx"].route == "pages/index"
    assert pages["pages/index.tsx"].has_ssr
    assert not pages["pages/index.tsx"].has_ssg
    assert pages["pages/about.js"].route == "pages/about"
    assert pages["pages/about.js"].has_ssg


def test_analyze_api_routes(tmp_path):
    write(
        tmp_path,
        "api/users.ts",
        "if (req.method === 'POST') { validate(body); }\nif (req.method === 'DELETE') {}",
    )
    write(tmp_path, "api/health.ts", "export default () => 'ok';")
    routes = {r.path: r for r in analyze_api_routes(tmp_path)}
    assert routes["api/users.ts"].methods == ["POST", "DELETE"]
    assert routes["api/users.ts"].database_operations == ["validation"]
    assert routes["api/health.ts"].methods == ["GET"]
    assert routes["api/health.ts"].middleware == []


def test_analyze_utilities(tmp_path):
    write(tmp_path, "utils/api.ts", "export const get = () => fetch(url);\n")
    write(tmp_path, "utils/store.ts", "localStorage.setItem('k', 'v');\n")
    big = "\n".join(["const v = 1;"] * 150)
    write(tmp_path, "lib/big.js", big)
    utils = {u.path: u for u in analyze_utilities(tmp_path)}
    assert utils["utils/api.ts"].purpose is UtilityPurpose.DATA_FETCHING
    assert utils["utils/api.ts"].functions == ["exports: 1"]
    assert utils["utils/store.ts"].purpose is UtilityPurpose.HELPERS
    assert utils["lib/big.js"].complexity == 100


def test_analyze_project_structure(tmp_path):
    write(tmp_path, "src/components/Card.tsx", COMPONENT)
    write(tmp_path, "utils/format.ts", "export const f = (d) => d;\n")
    structure = analyze_project_structure(tmp_path)
    assert [c.name for c in structure.components] == ["Card"]
    assert [u.path for u in structure.utilities] == ["utils/format.ts"]
    assert structure.pages == []
    assert "src/components" in {d.path for d in structure.directories}