"""Read access to users, employees and settings for the matching service."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.employee import Employee
from app.models.user import User
from app.schemas.matching import EmployeeRecord, UserRecord
from app.services import app_settings


def _to_user_record(user: User) -> UserRecord:
    return UserRecord(id=user.id, name=user.name, email=user.email, role=user.role)


def _to_employee_record(employee: Employee) -> EmployeeRecord:
    return EmployeeRecord(
        id=employee.id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        title=employee.title or "",
        department=employee.department.name if employee.department else "",
        location=employee.location.name if employee.location else "",
    )


def _employee_query():
    return select(Employee).options(
        selectinload(Employee.department),
        selectinload(Employee.location),
    )


class MatchStore:
    """SQLAlchemy-backed store. Results are ordered by id."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_settings(self) -> dict[str, str]:
        return await app_settings.get_settings(self.db)

    async def list_unlinked_users(self) -> list[UserRecord]:
        """Users without an employee link, excluding banned accounts."""
        result = await self.db.execute(
            select(User)
            .where(
                User.employee_id.is_(None),
                or_(User.banned.is_(None), User.banned.is_(False)),
            )
            .order_by(User.id)
        )
        return [_to_user_record(user) for user in result.scalars().all()]

    async def list_unlinked_employees(self) -> list[EmployeeRecord]:
        """Active employees that no user is linked to."""
        linked_ids = select(User.employee_id).where(User.employee_id.isnot(None))
        result = await self.db.execute(
            _employee_query()
            .where(Employee.is_active.is_(True), Employee.id.not_in(linked_ids))
            .order_by(Employee.id)
        )
        return [_to_employee_record(employee) for employee in result.scalars().all()]

    async def get_employee(self, employee_id: int) -> EmployeeRecord | None:
        result = await self.db.execute(_employee_query().where(Employee.id == employee_id))
        employee = result.scalar_one_or_none()
        return _to_employee_record(employee) if employee else None

    async def is_employee_linked(self, employee_id: int) -> bool:
        result = await self.db.execute(
            select(User.id).where(User.employee_id == employee_id).limit(1)
        )
        return result.scalar_one_or_none() is not None
