"""Generate API reference pages for MkDocs."""

from __future__ import annotations

from pathlib import Path

import mkdocs_gen_files

SRC = Path("src")
PKG = "simplan"

# Collect all modules
modules = []
for path in sorted((SRC / PKG).rglob("*.py")):
    if path.name == "__init__.py":
        continue
    mod = ".".join(path.relative_to(SRC).with_suffix("").parts)
    modules.append(mod)


def write_section(fd, title, mods):
    """Write one bullet list of module links under a heading."""
    if not mods:
        return
    print(f"## {title}", file=fd)
    print("", file=fd)
    for mod in mods:
        name = mod.split(".")[-1]
        doc_path = f"{mod.replace('.', '/')}.md"
        print(f"- [{name}]({doc_path})", file=fd)
    print("", file=fd)


# Generate the main reference index
with mkdocs_gen_files.open("reference/index.md", "w") as fd:
    print("# Reference", file=fd)
    print("", file=fd)
    print("Browse the API by module. Use the search for quick jumps.", file=fd)
    print("", file=fd)

    core_modules = [m for m in modules if m.startswith("simplan.core")]
    solver_modules = [m for m in modules if m.startswith("simplan.solvers")]
    util_modules = [m for m in modules if m not in core_modules and m not in solver_modules]

    write_section(fd, "Utilities", util_modules)
    write_section(fd, "Core Modules", core_modules)
    write_section(fd, "Solver Interface", solver_modules)

# Generate individual module pages
for mod in modules:
    doc_path = f"reference/{mod.replace('.', '/')}.md"

    with mkdocs_gen_files.open(doc_path, "w") as fd:
        print(f"# {mod}", file=fd)
        print("", file=fd)
        print(f"::: {mod}", file=fd)
