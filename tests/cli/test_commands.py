"""Tests for the funcsift command line."""

import importlib
import json

import pytest
from typer.testing import CliRunner

from funcsift import __version__
from funcsift.cli import app
from funcsift.exceptions import HeaderSupplierError
from funcsift.extraction.suppliers import StaticHeaderSupplier

extract_module = importlib.import_module("funcsift.cli.extract")

runner = CliRunner()


class BrokenSupplier:
    def headers(self, path, language):
        raise HeaderSupplierError(path, "ctags exploded", returncode=2)


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def static_supplier(monkeypatch, calculator_file, calculator_headers):
    supplier = StaticHeaderSupplier({calculator_file: calculator_headers})
    monkeypatch.setattr(extract_module, "default_supplier", lambda settings: supplier)
    return supplier


class TestApp:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_languages(self):
        result = runner.invoke(app, ["languages"])
        assert result.exit_code == 0
        assert "java" in result.output
        assert ".erl" in result.output


class TestExtractCommand:
    def test_json_output(self, static_supplier, calculator_file):
        result = runner.invoke(
            app, ["extract", calculator_file, "-d", "int", "-d", "String", "-f", "json", "-q"]
        )
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["errors"] == []
        assert payload["unmatched"] == []
        (file,) = payload["files"]
        assert file["name"] == "Calculator.java"
        assert [fn["name"] for fn in file["functions"]] == ["add", "label"]

    def test_json_to_file(self, static_supplier, calculator_file, tmp_path):
        target = tmp_path / "out.json"
        result = runner.invoke(
            app, ["extract", calculator_file, "-d", "int", "-f", "json", "-o", str(target), "-q"]
        )
        assert result.exit_code == 0
        payload = json.loads(target.read_text())
        assert [fn["name"] for fn in payload["files"][0]["functions"]] == ["add"]

    def test_types_file(self, static_supplier, calculator_file, tmp_path):
        types = tmp_path / "types.toml"
        types.write_text("[types]\nint = true\nString = true\nfloat = false\n")
        result = runner.invoke(
            app, ["extract", calculator_file, "--types", str(types), "-f", "json", "-q"]
        )
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)["files"][0]["functions"]) == 2

    def test_rich_output(self, static_supplier, calculator_file):
        result = runner.invoke(app, ["extract", calculator_file, "-d", "int", "-d", "String"])
        assert result.exit_code == 0
        assert "add" in result.output
        assert "label" in result.output

    def test_unmatched_is_not_an_error(self, static_supplier, calculator_file):
        result = runner.invoke(app, ["extract", calculator_file, "-d", "boolean", "-f", "json", "-q"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["unmatched"] == [calculator_file]

    def test_no_desired_types(self, static_supplier, calculator_file):
        result = runner.invoke(app, ["extract", calculator_file, "-u", "int"])
        assert result.exit_code == 1
        assert "No desired types" in result.output

    def test_verbose_log_file_records_rejections(self, static_supplier, calculator_file, tmp_path):
        log_file = tmp_path / "run.log"
        result = runner.invoke(
            app,
            ["extract", calculator_file, "-d", "int", "-v", "--log-file", str(log_file)],
        )
        assert result.exit_code == 0
        assert "Rejected header 'public class Calculator {'" in log_file.read_text()

    def test_verbosity_from_environment(
        self, static_supplier, calculator_file, tmp_path, monkeypatch
    ):
        monkeypatch.setenv("FUNCSIFT_VERBOSITY", "verbose")
        log_file = tmp_path / "env.log"
        result = runner.invoke(
            app, ["extract", calculator_file, "-d", "int", "--log-file", str(log_file)]
        )
        assert result.exit_code == 0
        assert "malformed_header" in log_file.read_text()

    def test_supplier_failure_exits_nonzero(self, monkeypatch, calculator_file, tmp_path):
        monkeypatch.setattr(extract_module, "default_supplier", lambda settings: BrokenSupplier())
        # errors are still logged at --quiet, so read the JSON from a file
        target = tmp_path / "out.json"
        result = runner.invoke(
            app, ["extract", calculator_file, "-d", "int", "-f", "json", "-o", str(target), "-q"]
        )
        assert result.exit_code == 1
        payload = json.loads(target.read_text())
        assert payload["files"] == []
        assert payload["errors"][0]["error"] == "HeaderSupplierError"
        assert payload["errors"][0]["details"]["returncode"] == "2"


class TestHeaderCommand:
    def test_accepted(self):
        result = runner.invoke(app, ["header", "public static int add(int a, int b) {", "-d", "int"])
        assert result.exit_code == 0
        assert "add" in result.output
        assert "accepted" in result.output

    def test_rejected_with_reason(self):
        result = runner.invoke(
            app, ["header", "public static Widget make(int a) {", "-d", "int"]
        )
        assert result.exit_code == 0
        assert "invalid_type" in result.output

    def test_empty_header_errors(self):
        result = runner.invoke(app, ["header", "// nothing here", "-d", "int"])
        assert result.exit_code == 1
        assert "empty" in result.output

    def test_unknown_language(self):
        result = runner.invoke(app, ["header", "int f(int a) {", "-d", "int", "-l", "cobol"])
        assert result.exit_code == 1
        assert "Unsupported language" in result.output
