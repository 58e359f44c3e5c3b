from app.models.app_setting import AppSetting
from app.models.audit_log import AuditLog
from app.models.department import Department
from app.models.employee import Employee
from app.models.location import Location
from app.models.user import User

__all__ = [
    "User",
    "Employee",
    "Department",
    "Location",
    "AppSetting",
    "AuditLog",
]
