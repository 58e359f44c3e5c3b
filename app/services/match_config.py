"""Resolved matching configuration.

The settings store holds flat string values. ``MatchConfig.from_settings``
turns them into a typed snapshot once per request; every field falls back to
its documented default on its own, so one bad value never disables the rest.
"""

from collections.abc import Mapping

import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger()

EMAIL_ENABLED_KEY = "matching.email.enabled"
EMAIL_TEMPLATE_KEY = "matching.email.template"
NAME_EXACT_ENABLED_KEY = "matching.nameExact.enabled"
NAME_FUZZY_ENABLED_KEY = "matching.nameFuzzy.enabled"
NAME_FUZZY_THRESHOLD_KEY = "matching.nameFuzzy.threshold"
SUGGESTION_THRESHOLD_KEY = "matching.suggestionThreshold"

DEFAULT_EMAIL_TEMPLATE = "{firstName}.{lastName}"
DEFAULT_NAME_FUZZY_THRESHOLD = 0.7
DEFAULT_SUGGESTION_THRESHOLD = 50.0

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


class MatchConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    email_enabled: bool = True
    email_template: str = DEFAULT_EMAIL_TEMPLATE
    name_exact_enabled: bool = True
    name_fuzzy_enabled: bool = True
    name_fuzzy_threshold: float = Field(DEFAULT_NAME_FUZZY_THRESHOLD, ge=0, le=1)
    suggestion_threshold: float = Field(DEFAULT_SUGGESTION_THRESHOLD, ge=0, le=100)

    @classmethod
    def from_settings(cls, raw: Mapping[str, str]) -> "MatchConfig":
        template = raw.get(EMAIL_TEMPLATE_KEY)
        return cls(
            email_enabled=_parse_bool(raw, EMAIL_ENABLED_KEY, True),
            email_template=template if template is not None else DEFAULT_EMAIL_TEMPLATE,
            name_exact_enabled=_parse_bool(raw, NAME_EXACT_ENABLED_KEY, True),
            name_fuzzy_enabled=_parse_bool(raw, NAME_FUZZY_ENABLED_KEY, True),
            name_fuzzy_threshold=_parse_float(
                raw, NAME_FUZZY_THRESHOLD_KEY, DEFAULT_NAME_FUZZY_THRESHOLD, 0.0, 1.0
            ),
            suggestion_threshold=_parse_float(
                raw, SUGGESTION_THRESHOLD_KEY, DEFAULT_SUGGESTION_THRESHOLD, 0.0, 100.0
            ),
        )


def _parse_bool(raw: Mapping[str, str], key: str, default: bool) -> bool:
    value = raw.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    logger.warning("match_setting_invalid", key=key, value=value, fallback=default)
    return default


def _parse_float(
    raw: Mapping[str, str], key: str, default: float, minimum: float, maximum: float
) -> float:
    value = raw.get(key)
    if value is None:
        return default
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        logger.warning("match_setting_invalid", key=key, value=value, fallback=default)
        return default
    # float() accepts "nan", which fails every range comparison
    if not minimum <= parsed <= maximum:
        logger.warning("match_setting_out_of_range", key=key, value=value, fallback=default)
        return default
    return parsed
