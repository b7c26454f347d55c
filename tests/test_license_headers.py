# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Verify all package source files have the standard 2-line MIT license header."""

from pathlib import Path

SRC_ROOT = Path(__file__).resolve().parent.parent / "src" / "exofinder"
TESTS_ROOT = Path(__file__).resolve().parent

EXPECTED_HEADER_LINES = [
    "# Copyright (c) 2026 Jeroen Visser. All rights reserved.",
    "# Licensed under the MIT License — see LICENSE.",
]


def _header_violations(files, root):
    violations = []
    for py_file in files:
        lines = py_file.read_text(encoding="utf-8").splitlines()
        if len(lines) < len(EXPECTED_HEADER_LINES):
            violations.append((py_file, "File has fewer than 2 lines"))
            continue
        for i, expected in enumerate(EXPECTED_HEADER_LINES):
            if lines[i] != expected:
                violations.append((py_file, f"Line {i + 1}: expected {expected!r}, got {lines[i]!r}"))
                break
    return [f"  {path.relative_to(root)}: {reason}" for path, reason in violations]


def test_all_source_files_have_standard_mit_header():
    """Every .py file under src/exofinder must start with the 2-line header."""
    files = sorted(SRC_ROOT.rglob("*.py"))
    assert len(files) > 0, "No .py files found in src/exofinder"

    violations = _header_violations(files, SRC_ROOT)
    if violations:
        raise AssertionError(
            "\n".join([f"\n{len(violations)} file(s) with non-standard headers:"] + violations)
        )


def test_all_test_files_have_standard_mit_header():
    files = sorted(TESTS_ROOT.glob("test_*.py"))
    violations = _header_violations(files, TESTS_ROOT)
    assert not violations, "\n".join(violations)
