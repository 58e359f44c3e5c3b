from pydantic import BaseModel, ConfigDict, model_serializer


class UserRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    email: str | None = None
    role: str | None = None


class EmployeeRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    first_name: str
    last_name: str
    title: str = ""
    department: str = ""
    location: str = ""


class StrategyScore(BaseModel):
    score: float


class FuzzyStrategyScore(BaseModel):
    score: float
    similarity: float


class MatchBreakdown(BaseModel):
    """Per-strategy detail for one scored pair.

    A strategy that was disabled stays ``None`` and is left out of the
    serialized output, so clients can tell "not considered" from "scored 0".
    """

    email: StrategyScore | None = None
    name_exact: StrategyScore | None = None
    name_fuzzy: FuzzyStrategyScore | None = None

    @model_serializer(mode="wrap")
    def _omit_disabled(self, handler):
        return {key: value for key, value in handler(self).items() if value is not None}


class MatchCandidate(BaseModel):
    employee: EmployeeRecord
    score: float
    breakdown: MatchBreakdown


class MatchSuggestion(BaseModel):
    user: UserRecord
    candidates: list[MatchCandidate]


class UserCandidateForEmployee(BaseModel):
    user: UserRecord
    score: float
    breakdown: MatchBreakdown
