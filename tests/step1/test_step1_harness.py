import os
import subprocess
import sys

TEST_DIR = os.path.dirname(__file__)
SCRIPT = os.path.abspath(os.path.join(TEST_DIR, "..", "..", "json_parser.py"))
VALID = os.path.join(TEST_DIR, "valid.json")
INVALID = os.path.join(TEST_DIR, "invalid.json")

def test_valid_json_returns_0():
    result = subprocess.run([sys.executable, SCRIPT, VALID])
    assert result.returncode == 0

def test_invalid_json_returns_1():
    """An empty file is not a document"""
    result = subprocess.run([sys.executable, SCRIPT, INVALID])
    assert result.returncode == 1
