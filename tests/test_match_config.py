"""Tests for resolving raw settings into a MatchConfig (no DB needed)."""

import pytest
from pydantic import ValidationError

from app.services.match_config import MatchConfig


def test_defaults_when_empty():
    config = MatchConfig.from_settings({})
    assert config.email_enabled is True
    assert config.email_template == "{firstName}.{lastName}"
    assert config.name_exact_enabled is True
    assert config.name_fuzzy_enabled is True
    assert config.name_fuzzy_threshold == 0.7
    assert config.suggestion_threshold == 50


def test_reads_all_keys():
    config = MatchConfig.from_settings(
        {
            "matching.email.enabled": "false",
            "matching.email.template": "{lastName}_{firstName}",
            "matching.nameExact.enabled": "False",
            "matching.nameFuzzy.enabled": "0",
            "matching.nameFuzzy.threshold": "0.85",
            "matching.suggestionThreshold": "75",
        }
    )
    assert config.email_enabled is False
    assert config.email_template == "{lastName}_{firstName}"
    assert config.name_exact_enabled is False
    assert config.name_fuzzy_enabled is False
    assert config.name_fuzzy_threshold == 0.85
    assert config.suggestion_threshold == 75


@pytest.mark.parametrize("value", ["abc", "", "1.5", "-0.1", "nan"])
def test_malformed_fuzzy_threshold_falls_back(value):
    config = MatchConfig.from_settings({"matching.nameFuzzy.threshold": value})
    assert config.name_fuzzy_threshold == 0.7


@pytest.mark.parametrize("value", ["fifty", "101", "-1"])
def test_malformed_suggestion_threshold_falls_back(value):
    config = MatchConfig.from_settings({"matching.suggestionThreshold": value})
    assert config.suggestion_threshold == 50


def test_malformed_bool_falls_back_to_enabled():
    config = MatchConfig.from_settings({"matching.email.enabled": "maybe"})
    assert config.email_enabled is True


def test_one_bad_field_does_not_affect_others():
    config = MatchConfig.from_settings(
        {
            "matching.nameFuzzy.threshold": "not-a-number",
            "matching.suggestionThreshold": "80",
            "matching.nameExact.enabled": "off",
        }
    )
    assert config.name_fuzzy_threshold == 0.7
    assert config.suggestion_threshold == 80
    assert config.name_exact_enabled is False


def test_config_is_immutable():
    config = MatchConfig.from_settings({})
    with pytest.raises(ValidationError):
        config.suggestion_threshold = 10
