"""Scoring strategies that compare one user with one employee.

Each strategy exposes a ``name`` (its key in the match breakdown) and a
``score(user, employee)`` method returning a breakdown detail whose ``score``
is in [0, 100].
"""

import re
from abc import ABC, abstractmethod

from app.schemas.matching import EmployeeRecord, FuzzyStrategyScore, StrategyScore, UserRecord
from app.services.name_matching import (
    employee_name_variants,
    levenshtein_similarity,
    normalize_name,
)

FIRST_NAME_TOKEN = "{firstName}"
LAST_NAME_TOKEN = "{lastName}"

_TOKEN_SPLIT_RE = re.compile(r"(\{firstName\}|\{lastName\})")
_NAME_GROUP = "([a-z]+)"


class EmailTemplate:
    """A compiled email local-part template such as ``{firstName}.{lastName}``.

    A template missing either token is inert: ``extract`` never matches.
    """

    def __init__(self, template: str):
        self.template = template
        self._pattern: re.Pattern | None = None
        self._first_group = 1
        self._last_group = 2

        first_pos = template.find(FIRST_NAME_TOKEN)
        last_pos = template.find(LAST_NAME_TOKEN)
        if first_pos == -1 or last_pos == -1:
            return

        # Group numbers follow token order in the template text
        if first_pos > last_pos:
            self._first_group, self._last_group = 2, 1

        parts = []
        for part in _TOKEN_SPLIT_RE.split(template):
            if part in (FIRST_NAME_TOKEN, LAST_NAME_TOKEN):
                parts.append(_NAME_GROUP)
            else:
                parts.append(re.escape(part))
        self._pattern = re.compile("".join(parts), re.IGNORECASE | re.ASCII)

    @property
    def is_inert(self) -> bool:
        return self._pattern is None

    def extract(self, local_part: str) -> tuple[str, str] | None:
        """Return ``(first_name, last_name)`` parsed from a local part, or None."""
        if self._pattern is None:
            return None
        match = self._pattern.fullmatch(local_part)
        if not match:
            return None
        return match.group(self._first_group), match.group(self._last_group)


class MatchStrategy(ABC):
    name: str

    @abstractmethod
    def score(
        self, user: UserRecord, employee: EmployeeRecord
    ) -> StrategyScore | FuzzyStrategyScore: ...


class EmailTemplateStrategy(MatchStrategy):
    """Compare the names encoded in a user's email with the employee's name."""

    name = "email"

    def __init__(self, template: EmailTemplate | str):
        self.template = template if isinstance(template, EmailTemplate) else EmailTemplate(template)

    def score(self, user: UserRecord, employee: EmployeeRecord) -> StrategyScore:
        if not user.email:
            return StrategyScore(score=0)

        local_part = user.email.split("@")[0]
        if not local_part:
            return StrategyScore(score=0)

        extracted = self.template.extract(local_part)
        if extracted is None:
            return StrategyScore(score=0)

        captured_first, captured_last = extracted
        first_matches = captured_first.lower() == employee.first_name.lower()
        last_matches = captured_last.lower() == employee.last_name.lower()

        if first_matches and last_matches:
            return StrategyScore(score=100)
        if first_matches or last_matches:
            return StrategyScore(score=50)
        return StrategyScore(score=0)


class ExactNameStrategy(MatchStrategy):
    name = "name_exact"

    def score(self, user: UserRecord, employee: EmployeeRecord) -> StrategyScore:
        if not user.name:
            return StrategyScore(score=0)
        normalized_user = normalize_name(user.name)
        if normalized_user in employee_name_variants(employee.first_name, employee.last_name):
            return StrategyScore(score=100)
        return StrategyScore(score=0)


class FuzzyNameStrategy(MatchStrategy):
    """Levenshtein similarity against both name orders, gated by a threshold.

    The raw similarity is reported even when it is below the threshold.
    """

    name = "name_fuzzy"

    def __init__(self, threshold: float):
        self.threshold = threshold

    def score(self, user: UserRecord, employee: EmployeeRecord) -> FuzzyStrategyScore:
        if not user.name:
            return FuzzyStrategyScore(score=0, similarity=0)

        normalized_user = normalize_name(user.name)
        forward, reversed_ = employee_name_variants(employee.first_name, employee.last_name)
        similarity = max(
            levenshtein_similarity(normalized_user, forward),
            levenshtein_similarity(normalized_user, reversed_),
        )
        if similarity >= self.threshold:
            return FuzzyStrategyScore(score=similarity * 100, similarity=similarity)
        return FuzzyStrategyScore(score=0, similarity=similarity)
