import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from app.core.dependencies import get_matching_service
from app.schemas.matching import MatchSuggestion, UserCandidateForEmployee
from app.services.matching import MatchingService

logger = structlog.get_logger()
router = APIRouter(tags=["Matching"])


@router.get("/suggestions/user-employee", response_model=list[MatchSuggestion])
async def list_user_employee_suggestions(
    service: MatchingService = Depends(get_matching_service),
):
    """
    Suggest employee records for every user account that is not linked yet.
    """
    try:
        return await service.get_suggestions()
    except SQLAlchemyError as e:
        logger.error("match_suggestions_error", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to generate suggestions")


@router.get(
    "/employees/{employee_id}/user-suggestions",
    response_model=list[UserCandidateForEmployee],
)
async def list_user_suggestions_for_employee(
    employee_id: int,
    service: MatchingService = Depends(get_matching_service),
):
    """
    Suggest unlinked user accounts for one employee. Unknown or already linked
    employees yield an empty list.
    """
    try:
        return await service.get_suggestions_for_employee(employee_id)
    except SQLAlchemyError as e:
        logger.error("employee_suggestions_error", employee_id=employee_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to generate suggestions")
