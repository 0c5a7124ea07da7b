"""Shared pytest fixtures for quell tests."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def sample_document_data():
    """Directives and problems for one small linted file."""
    return {
        "directives": [
            {"type": "disable-next-line", "ruleId": "no-undef", "line": 2, "column": 1},
            {"type": "disable", "ruleId": "no-console", "line": 10, "column": 1},
        ],
        "problems": [
            {"ruleId": "semi", "line": 1, "column": 10, "severity": 1,
             "message": "Missing semicolon."},
            {"ruleId": "no-undef", "line": 3, "column": 5, "severity": 2,
             "message": "'foo' is not defined.", "nodeType": "Identifier"},
            {"ruleId": "no-undef", "line": 4, "column": 5, "severity": 2,
             "message": "'bar' is not defined.", "nodeType": "Identifier"},
        ],
    }


@pytest.fixture
def sample_document(tmp_path, sample_document_data):
    """Sample document written to a .json file."""
    f = tmp_path / "report.json"
    f.write_text(json.dumps(sample_document_data))
    return f


@pytest.fixture
def clean_document(tmp_path):
    """Document whose only problem is suppressed."""
    f = tmp_path / "clean.json"
    f.write_text(json.dumps({
        "directives": [
            {"type": "disable-line", "ruleId": "eqeqeq", "line": 7, "column": 20},
        ],
        "problems": [
            {"ruleId": "eqeqeq", "line": 7, "column": 8, "severity": 2,
             "message": "Expected '===' and instead saw '=='."},
        ],
    }))
    return f


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Keep config discovery away from the real home and repository."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("QUELL_GIT_ROOT", str(tmp_path / "no-git-root"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


# Pytest markers
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def example_report(project_root):
    """Example document shipped in examples/."""
    return project_root / "examples/report.json"
