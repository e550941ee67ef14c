"""SQLAlchemy models only; no business logic."""
from bizdesk.models.account import Account
from bizdesk.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from bizdesk.models.department import Department
from bizdesk.models.employee import Employee
from bizdesk.models.profile import Profile
from bizdesk.models.user_role import UserRole
from bizdesk.models.vendor import Vendor

__all__ = [
    "Account",
    "Department",
    "Employee",
    "Profile",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "UserRole",
    "Vendor",
]
