"""User <-> employee link suggestions.

Scores every (user, employee) pair with the enabled strategies, keeps the
pairs whose best strategy score reaches the suggestion threshold and returns
the top few per subject. All I/O happens up front through the store; the
scoring itself is pure.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

import structlog

from app.schemas.matching import (
    EmployeeRecord,
    MatchBreakdown,
    MatchCandidate,
    MatchSuggestion,
    UserCandidateForEmployee,
    UserRecord,
)
from app.services.match_config import MatchConfig
from app.services.match_strategies import (
    EmailTemplateStrategy,
    ExactNameStrategy,
    FuzzyNameStrategy,
    MatchStrategy,
)

logger = structlog.get_logger()

BULK_SUGGESTION_LIMIT = 3
EMPLOYEE_SUGGESTION_LIMIT = 5


@runtime_checkable
class MatchSource(Protocol):
    """Read interface the service needs; implemented by ``MatchStore``."""

    async def get_settings(self) -> dict[str, str]: ...

    async def list_unlinked_users(self) -> list[UserRecord]: ...

    async def list_unlinked_employees(self) -> list[EmployeeRecord]: ...

    async def get_employee(self, employee_id: int) -> EmployeeRecord | None: ...

    async def is_employee_linked(self, employee_id: int) -> bool: ...


def build_strategies(config: MatchConfig) -> list[MatchStrategy]:
    strategies: list[MatchStrategy] = []
    if config.email_enabled:
        strategies.append(EmailTemplateStrategy(config.email_template))
    if config.name_exact_enabled:
        strategies.append(ExactNameStrategy())
    if config.name_fuzzy_enabled:
        strategies.append(FuzzyNameStrategy(config.name_fuzzy_threshold))
    return strategies


def score_pair(
    user: UserRecord,
    employee: EmployeeRecord,
    strategies: list[MatchStrategy],
) -> tuple[float, MatchBreakdown] | None:
    """Combined score (max over strategies) and breakdown, or None if nothing ran."""
    if not strategies:
        return None

    details = {strategy.name: strategy.score(user, employee) for strategy in strategies}
    combined = max(detail.score for detail in details.values())
    return combined, MatchBreakdown(**details)


def _top_matches(scored: Iterable[tuple[float, object]], threshold: float, limit: int) -> list:
    kept = [(score, item) for score, item in scored if score >= threshold]
    # sort() is stable, so equal scores keep enumeration order
    kept.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in kept[:limit]]


def rank_employees_for_user(
    user: UserRecord,
    employees: list[EmployeeRecord],
    strategies: list[MatchStrategy],
    threshold: float,
    limit: int = BULK_SUGGESTION_LIMIT,
) -> list[MatchCandidate]:
    scored = []
    for employee in employees:
        result = score_pair(user, employee, strategies)
        if result is None:
            continue
        score, breakdown = result
        scored.append((score, MatchCandidate(employee=employee, score=score, breakdown=breakdown)))
    return _top_matches(scored, threshold, limit)


def rank_users_for_employee(
    employee: EmployeeRecord,
    users: list[UserRecord],
    strategies: list[MatchStrategy],
    threshold: float,
    limit: int = EMPLOYEE_SUGGESTION_LIMIT,
) -> list[UserCandidateForEmployee]:
    scored = []
    for user in users:
        result = score_pair(user, employee, strategies)
        if result is None:
            continue
        score, breakdown = result
        scored.append((score, UserCandidateForEmployee(user=user, score=score, breakdown=breakdown)))
    return _top_matches(scored, threshold, limit)


class MatchingService:
    def __init__(self, store: MatchSource):
        self.store = store

    async def _load_config(self) -> MatchConfig:
        return MatchConfig.from_settings(await self.store.get_settings())

    async def get_suggestions(self) -> list[MatchSuggestion]:
        """Top employee candidates for every unlinked user that has any."""
        config = await self._load_config()
        users = await self.store.list_unlinked_users()
        employees = await self.store.list_unlinked_employees()
        strategies = build_strategies(config)

        suggestions = []
        for user in users:
            candidates = rank_employees_for_user(
                user, employees, strategies, config.suggestion_threshold
            )
            if candidates:
                suggestions.append(MatchSuggestion(user=user, candidates=candidates))

        logger.info(
            "match_suggestions_computed",
            users=len(users),
            employees=len(employees),
            strategies=[strategy.name for strategy in strategies],
            suggestions=len(suggestions),
        )
        return suggestions

    async def get_suggestions_for_employee(self, employee_id: int) -> list[UserCandidateForEmployee]:
        """Unlinked users that look like ``employee_id``.

        Empty when the employee does not exist or is already linked to a user.
        """
        employee = await self.store.get_employee(employee_id)
        if employee is None:
            logger.info("employee_suggestions_skipped", employee_id=employee_id, reason="not_found")
            return []
        if await self.store.is_employee_linked(employee_id):
            logger.info("employee_suggestions_skipped", employee_id=employee_id, reason="linked")
            return []

        config = await self._load_config()
        users = await self.store.list_unlinked_users()
        candidates = rank_users_for_employee(
            employee, users, build_strategies(config), config.suggestion_threshold
        )

        logger.info(
            "employee_suggestions_computed",
            employee_id=employee_id,
            users=len(users),
            candidates=len(candidates),
        )
        return candidates
