"""Key/value settings store for the matching engine.

Defaults come from the ``USER_MATCH_*`` environment settings and are written
once; values an admin has changed are never overwritten by a default.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings as get_app_config
from app.models.app_setting import AppSetting
from app.services.audit import log_action
from app.services.match_config import (
    EMAIL_ENABLED_KEY,
    EMAIL_TEMPLATE_KEY,
    NAME_EXACT_ENABLED_KEY,
    NAME_FUZZY_ENABLED_KEY,
    NAME_FUZZY_THRESHOLD_KEY,
    SUGGESTION_THRESHOLD_KEY,
)
from app.services.match_strategies import EmailTemplate

logger = structlog.get_logger()

# (key, Settings attribute holding the seed value, description)
MATCHING_SETTING_DEFAULTS = [
    (
        EMAIL_ENABLED_KEY,
        "USER_MATCH_EMAIL_ENABLED",
        "Enable email-based user-employee matching",
    ),
    (
        EMAIL_TEMPLATE_KEY,
        "USER_MATCH_EMAIL_TEMPLATE",
        "Email local-part template. Use {firstName} and {lastName} tokens.",
    ),
    (
        NAME_EXACT_ENABLED_KEY,
        "USER_MATCH_NAME_EXACT_ENABLED",
        "Enable exact name matching between user name and employee full name",
    ),
    (
        NAME_FUZZY_ENABLED_KEY,
        "USER_MATCH_NAME_FUZZY_ENABLED",
        "Enable fuzzy name matching using Levenshtein similarity",
    ),
    (
        NAME_FUZZY_THRESHOLD_KEY,
        "USER_MATCH_NAME_FUZZY_THRESHOLD",
        "Minimum Levenshtein similarity (0-1) to consider a fuzzy match",
    ),
    (
        SUGGESTION_THRESHOLD_KEY,
        "USER_MATCH_SUGGESTION_THRESHOLD",
        "Minimum combined score (0-100) for a suggestion to appear",
    ),
]


def default_setting_values() -> dict[str, str]:
    config = get_app_config()
    return {key: getattr(config, attr) for key, attr, _ in MATCHING_SETTING_DEFAULTS}


async def ensure_defaults(db: AsyncSession) -> None:
    values = default_setting_values()
    rows = [
        {"key": key, "value": values[key], "description": description}
        for key, _, description in MATCHING_SETTING_DEFAULTS
    ]
    stmt = insert(AppSetting).values(rows)
    stmt = stmt.on_conflict_do_update(
        index_elements=[AppSetting.key],
        set_={"description": stmt.excluded.description},
    )
    await db.execute(stmt)


async def get_settings(db: AsyncSession) -> dict[str, str]:
    await ensure_defaults(db)
    result = await db.execute(select(AppSetting.key, AppSetting.value))
    return {key: value for key, value in result.all()}


async def update_setting(db: AsyncSession, key: str, value: str, user_id: str | None) -> None:
    existing = await db.get(AppSetting, key)
    old_value = existing.value if existing else None

    if existing:
        existing.value = value
        existing.updated_by = user_id
    else:
        db.add(AppSetting(key=key, value=value, updated_by=user_id))

    log_action(
        db,
        user_id=user_id,
        action="update",
        entity_type="app_setting",
        entity_id=key,
        details={
            "changed_fields": ["value"],
            "old_values": {"value": old_value} if existing else None,
            "new_values": {"value": value},
        },
    )
    await db.flush()


async def bulk_update_settings(
    db: AsyncSession, updates: list[tuple[str, str]], user_id: str | None
) -> None:
    for key, value in updates:
        await update_setting(db, key, value, user_id)
    logger.info("settings_updated", keys=[key for key, _ in updates], user_id=user_id)


def preview_email_template(template: str, local_part: str) -> tuple[str, str] | None:
    """Names the template would extract from ``local_part``, or None."""
    return EmailTemplate(template).extract(local_part)
