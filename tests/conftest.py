"""Shared test fixtures for funcsift tests."""

import logging

import pytest
from rich.logging import RichHandler

CALCULATOR_SOURCE = """package demo;

public class Calculator {
    public static int add(int a, int b) {
        return a + b;
    }

    public static String label(int value, String prefix) { // formats
        if (value > 0) {
\t\t\treturn prefix + value;
        }
        return prefix;
    }

    public float scale(int a) {
        return a * 1.5f;
    }

    public static float ratio(int a, int b) {
        return (float) a / b;
    }

    abstract int size();
}
"""

# What the header supplier hands over for CALCULATOR_SOURCE, in file order
CALCULATOR_HEADERS = [
    "public class Calculator {",
    "public static int add(int a, int b) {",
    "public static String label(int value, String prefix) { // formats",
    "public float scale(int a) {",
    "public static float ratio(int a, int b) {",
    "abstract int size();",
]


@pytest.fixture
def universe():
    """int and String desired, float known but undesired."""
    return {"int": True, "String": True, "float": False}


@pytest.fixture
def calculator_headers():
    return list(CALCULATOR_HEADERS)


@pytest.fixture
def calculator_file(tmp_path):
    """Calculator.java written to a temp directory; returns its path as str."""
    path = tmp_path / "Calculator.java"
    path.write_text(CALCULATOR_SOURCE, encoding="utf-8")
    return str(path)


@pytest.fixture
def diagnostics():
    """A list-backed diagnostics sink: pass ``diagnostics.append`` as the sink."""
    return []


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handlers and levels installed by setup_logging() (the CLI calls it)."""
    root = logging.getLogger()
    package = logging.getLogger("funcsift")
    before = list(root.handlers)
    levels = (root.level, package.level)
    yield
    for handler in list(root.handlers):
        if handler not in before and isinstance(handler, (RichHandler, logging.FileHandler)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(levels[0])
    package.setLevel(levels[1])
