"""
Pytest configuration and fixtures for fieldcheck tests

This module provides shared fixtures for unit and integration tests.
"""
import pytest

from fieldcheck.core.rules import RuleEngine


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for single predicates and components"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run whole validation flows and the CLI"
    )


# =======================
# ENGINE FIXTURES
# =======================

@pytest.fixture(scope="function")
def engine() -> RuleEngine:
    """
    Fresh rule engine with the built-in predicates

    Returns:
        RuleEngine with an empty error store
    """
    return RuleEngine()


@pytest.fixture(scope="function")
def sample_form() -> dict:
    """
    Submitted form values used across tests

    Returns:
        Mapping of field names to raw values
    """
    return {
        "id": "100",
        "name": "",
        "datum": "1980-06-15 00:00",
        "alter": "15",
    }


# =======================
# FILE FIXTURES
# =======================

SAMPLE_RULES_YAML = """
fields:
  id:
    rules:
      - rule: required
        message: Please enter an ID.
      - rule: "match||^[1-9]\\\\d{3}$"
        message: Please enter a valid ID.

  name:
    alias: name-2
    rules:
      - rule: required
        message: Please enter a name.

  datum:
    rules:
      - rule: required
        message: Please enter a date.
      - rule: "date||Y-m-d"
        message: Please enter a valid date.

  alter:
    rules:
      - rule: required
        message: Please enter an age.
      - rule: "min||16"
        message: You must be 16 or older.
"""


@pytest.fixture(scope="function")
def rules_file(tmp_path) -> str:
    """
    Write the sample rule configuration to a temporary file

    Returns:
        Path to the YAML rule file
    """
    path = tmp_path / "validation_rules.yaml"
    path.write_text(SAMPLE_RULES_YAML, encoding="utf-8")
    return str(path)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep FIELDCHECK_* variables from the outer environment out of tests"""
    for name in ("FIELDCHECK_SEPARATOR", "FIELDCHECK_LOG_LEVEL", "FIELDCHECK_LOG_FORMAT",
                 "FIELDCHECK_RULES_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
