"""Tests that example scripts are valid Python, and that offline ones run."""

from __future__ import annotations

import ast
import runpy
from pathlib import Path

import pytest

EXAMPLES_DIR = Path(__file__).resolve().parent.parent.parent / "examples"


def _example_files():
    """Collect all .py files in the examples directory."""
    if not EXAMPLES_DIR.exists():
        return []
    return sorted(EXAMPLES_DIR.glob("*.py"))


@pytest.mark.parametrize("example_path", _example_files(), ids=lambda p: p.name)
def test_example_compiles(example_path):
    source = example_path.read_text()
    try:
        compile(source, str(example_path), "exec")
    except SyntaxError as exc:
        pytest.fail(f"Syntax error in {example_path.name}: {exc}")


@pytest.mark.parametrize("example_path", _example_files(), ids=lambda p: p.name)
def test_example_has_docstring_and_main(example_path):
    tree = ast.parse(example_path.read_text())
    assert ast.get_docstring(tree) is not None, f"{example_path.name} is missing a module docstring"
    functions = {node.name for node in tree.body if isinstance(node, ast.FunctionDef)}
    assert "main" in functions


def test_custom_codec_example_runs(capsys):
    """custom_codec.py needs no target process, so it can run here."""
    runpy.run_path(str(EXAMPLES_DIR / "custom_codec.py"), run_name="__main__")
    out = capsys.readouterr().out
    assert "u32 x3: [1, 2, 3]" in out
    assert "pstr x2: [b'hello', b'world']" in out
    assert "a string that does not fit inline" in out
