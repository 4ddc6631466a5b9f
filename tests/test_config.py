"""Tests for configuration defaults and override files."""
import json

import pytest

from roster_audit.extractors.header_resolver import HeaderResolver
from roster_audit.utilities import config
from roster_audit.utilities.exceptions import ConfigurationError


def test_default_settings(settings):
    assert settings.header_scan_rows == 50
    assert settings.summary_sheet_name == "Table 1"
    assert settings.month_map["MARCH"] == 3
    assert "REMARKS" in settings.column_synonyms["comments"]


def test_settings_are_immutable(settings):
    with pytest.raises(AttributeError):
        settings.contract_total = 1


def test_override_file(tmp_path):
    path = tmp_path / "synonyms.json"
    path.write_text(json.dumps({
        "contract_total": 600,
        "column_synonyms": {"comments": ["NOTES"]},
        "month_map": {"janvier": 1},
    }), encoding="utf-8")

    settings = config.load_settings(path)
    assert settings.contract_total == 600
    assert settings.column_synonyms["comments"] == ("NOTES",)
    assert settings.column_synonyms["name"] == tuple(config.COLUMN_SYNONYMS["name"])
    assert settings.month_map["JANVIER"] == 1

    header = HeaderResolver(settings).resolve([["Name", "Notes", "Remarks"]])
    assert header.get("comments") == 1


def test_invalid_override_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        config.load_settings(path)


def test_override_file_must_be_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        config.load_settings(path)


def test_missing_override_file(tmp_path):
    with pytest.raises(ConfigurationError):
        config.load_settings(tmp_path / "missing.json")


def test_contract_total_from_environment(monkeypatch):
    monkeypatch.setenv("ROSTER_AUDIT_CONTRACT_TOTAL", "600")
    assert config.load_settings().contract_total == 600


def test_non_numeric_contract_total_from_environment(monkeypatch):
    monkeypatch.setenv("ROSTER_AUDIT_CONTRACT_TOTAL", "lots")
    with pytest.raises(ConfigurationError, match="ROSTER_AUDIT_CONTRACT_TOTAL"):
        config.load_settings()


def test_non_numeric_contract_total_in_file(tmp_path):
    path = tmp_path / "synonyms.json"
    path.write_text(json.dumps({"contract_total": "many"}), encoding="utf-8")
    with pytest.raises(ConfigurationError):
        config.load_settings(path)
