import os
import subprocess
import sys
import pytest

import json_parser as jp

SCRIPT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "json_parser.py"))

def _run(*args):
    return subprocess.run([sys.executable, SCRIPT, *args], capture_output=True, text=True)

@pytest.fixture
def json_file(tmp_path):
    def write(data, name="doc.json", encoding="utf-8"):
        path = tmp_path / name
        path.write_text(data, encoding=encoding)
        return str(path)
    return write

def test_cli_prints_ok(json_file):
    cp = _run(json_file("[1,2,3]"))
    assert cp.returncode == 0
    assert cp.stdout.strip() == "OK"

def test_cli_reports_syntax_error(json_file):
    cp = _run(json_file("[1,]"))
    assert cp.returncode == 1
    assert "SyntaxError: Unexpected token ']' at position '3'" in cp.stderr

def test_cli_time_prints_seconds(json_file):
    cp = _run(json_file('{"a": [1, 2]}'), "--time")
    assert cp.returncode == 0
    assert float(cp.stdout.strip()) >= 0.0

def test_cli_debug_dumps_tree(json_file):
    cp = _run(json_file('{"a": [1, null, true]}'), "--debug")
    assert cp.returncode == 0
    assert cp.stdout.strip() == "{'a': [1.0, None, True]}"

def test_cli_missing_file(tmp_path):
    cp = _run(str(tmp_path / "nope.json"))
    assert cp.returncode == 1
    assert cp.stderr.startswith("Error:")

def test_cli_encoding_option(json_file):
    path = json_file('"café"', encoding="latin-1")
    assert _run(path).returncode == 1
    cp = _run(path, "--encoding", "latin-1", "--debug")
    assert cp.returncode == 0
    assert "caf" in cp.stdout

def test_cli_verbose_logs_to_stderr(json_file):
    cp = _run(json_file("null"), "-v")
    assert cp.returncode == 0
    assert "DEBUG json_parser" in cp.stderr or "DEBUG __main__" in cp.stderr

def test_cli_deep_nesting_fails_cleanly(json_file):
    cp = _run(json_file("[" * 100000))
    assert cp.returncode == 1
    assert "nesting too deep" in cp.stderr

def test_cli_usage_error():
    cp = _run()
    assert cp.returncode == 2

def test_cli_in_process(json_file, capsys):
    assert jp._cli([json_file("true")]) == 0
    assert capsys.readouterr().out.strip() == "OK"

def test_load_reads_and_parses(json_file):
    path = json_file('{"x": "y"}')
    assert jp.load(path) == jp.JsonObject((("x", jp.JsonString("y")),))
