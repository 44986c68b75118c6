# sniffcheck

sniffcheck runs opinionated code-quality checks on TypeScript, React and
Next.js projects. It looks at a project's build output and component
sources and reports where they have grown too large or too complex.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Commands

Both commands inspect the current directory unless you pass `--root DIR`.
`--json` prints a machine-readable report. `-q`/`--quiet` suppresses
progress messages and report headers.

### `sniff-bundle`

This command looks for build output. It checks `.next/` first, then
`dist/`, `build/` and `out/`, and uses the first one it finds.

For a `.next/` directory it reads the `.js` and `.css` files under
`static/` and the `.js` files under `server/pages/`. For any other build
directory it reads all `.js`, `.css`, `.html` and `.json` files.

The report contains:

- the ten largest chunks, with an estimated compressed size for Next.js
  output
- warnings
- recommendations
- a summary

Warnings and recommendations take account of the framework. The framework
is detected from `package.json` and the build layout: Next.js, React, Vue,
Angular, Svelte, Vite or Webpack.

The command exits with status 1 in these cases:

- the bundle totals more than 2,000,000 bytes
- any single chunk is larger than 500,000 bytes
- no build output is found

```
sniff-bundle
sniff-bundle --json
```

### `sniff-components`

This command scans the following files:

- `.tsx`, `.jsx`, `.vue` and `.svelte` files
- `.ts` and `.js` files whose name starts with a capital letter or contains
  "component"

It skips entries whose parent directory name contains `node_modules`,
`.git`, `dist` or `build`.

Files with at least `--threshold` lines are analysed. The default is 100
lines. For each file it reports:

- the framework and component kind
- a complexity score
- issues: too many lines, hooks or props, and deep nesting
- refactoring suggestions
- parts that could be extracted into their own files

The command exits with status 1 when any component has an error-level or
critical issue.

```
sniff-components
sniff-components --threshold 150 --json
```

## Library use

The analyses are plain functions and can be called directly:

```python
from sniffcheck.bundle import analyze_bundle, has_oversized_chunks

report = analyze_bundle(".")          # raises BundleError if nothing is found
print(report.summary.total_size, has_oversized_chunks(report))
print(report.to_dict())
```

```python
from sniffcheck.components_analysis import analyze_components
from sniffcheck.components_report import format_component_report

report = analyze_components(".", threshold=100)
print(format_component_report(report, threshold=100))
```

`sniffcheck.components` holds the per-file metrics on their own:
`count_react_hooks`, `count_props`, `calculate_complexity_score`,
`find_max_indentation` and others.

`sniffcheck.context_structure` describes a project's layout:

- `analyze_project_info` gives the name, version, framework, languages, and
  file and line counts.
- `analyze_project_structure` gives directory purposes, components, pages,
  API routes and utilities.

```python
from sniffcheck.context_structure import analyze_project_info, analyze_project_structure

info = analyze_project_info(".")
structure = analyze_project_structure(".")
print(info.framework, [d.path for d in structure.directories])
```

## What it does not do

- There is no command for the project-layout overview. It is available only
  through the `sniffcheck.context_structure` functions.
- It does not build an import graph or detect circular imports.
- It does not break down `package.json` dependencies.
- It does not score architecture or organisation.
- It has no per-file TypeScript checks such as `any` usage, type coverage
  or import statistics.
- Output is plain text. There is no colour and no configuration file.