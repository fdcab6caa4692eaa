#!/usr/bin/env python3
"""Fail when package code reads the wall clock directly.

Status expiry, history timestamps and report ids all go through the
injected TimeAuthorityProtocol so tests can drive the clock. Only
SystemTimeAuthority may call ``datetime.now()`` / ``datetime.utcnow()``.

Usage:
    python scripts/check_no_datetime_now.py [package_directory]

Exit codes:
    0: No violations found
    1: Direct wall-clock reads found
"""

import ast
import sys
from pathlib import Path

WALL_CLOCK_CALLS = frozenset({"now", "utcnow", "today"})

# Relative to the package directory
ALLOWED_FILES = frozenset({"infrastructure/adapters/time/system_time_authority.py"})


def _is_wall_clock_call(node: ast.Call) -> bool:
    func = node.func
    if not isinstance(func, ast.Attribute) or func.attr not in WALL_CLOCK_CALLS:
        return False
    target = func.value
    # datetime.now() and datetime.datetime.now()
    if isinstance(target, ast.Name):
        return target.id == "datetime"
    return isinstance(target, ast.Attribute) and target.attr == "datetime"


def check_file(py_file: Path) -> list[tuple[int, str]]:
    """Return (line, source) for every wall-clock read in one file."""
    try:
        source = py_file.read_text(encoding="utf-8")
        tree = ast.parse(source, filename=str(py_file))
    except (SyntaxError, UnicodeDecodeError) as e:
        print(f"Warning: Could not parse {py_file}: {e}", file=sys.stderr)
        return []

    lines = source.splitlines()
    return [
        (node.lineno, lines[node.lineno - 1].strip())
        for node in ast.walk(tree)
        if isinstance(node, ast.Call) and _is_wall_clock_call(node)
    ]


def check_package(package_dir: Path) -> dict[str, list[tuple[int, str]]]:
    """Scan a package, skipping ALLOWED_FILES."""
    found: dict[str, list[tuple[int, str]]] = {}
    for py_file in sorted(package_dir.rglob("*.py")):
        if py_file.relative_to(package_dir).as_posix() in ALLOWED_FILES:
            continue
        violations = check_file(py_file)
        if violations:
            found[py_file.as_posix()] = violations
    return found


def main() -> int:
    if len(sys.argv) > 1:
        package_dir = Path(sys.argv[1])
    else:
        package_dir = Path(__file__).parent.parent / "whistlevault"

    if not package_dir.exists():
        print(f"Error: Package directory '{package_dir}' does not exist", file=sys.stderr)
        return 1

    found = check_package(package_dir)
    if not found:
        print(f"No direct wall-clock reads in {package_dir}/")
        return 0

    print("Direct wall-clock reads detected:\n")
    for file_path, violations in found.items():
        print(f"  {file_path}:")
        for line_no, line in violations:
            print(f"    Line {line_no}: {line}")
    print("\nInject TimeAuthorityProtocol and call self._time.now() instead.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
