from bizdesk.services.account_service import AccountService
from bizdesk.services.auth_service import AuthResult, AuthService
from bizdesk.services.base import MutationResult
from bizdesk.services.directory import RoleDirectory, UserDirectory
from bizdesk.services.hr_service import DepartmentService, EmployeeService
from bizdesk.services.session_registry import SessionRegistry
from bizdesk.services.session_store import AUTH_STORAGE_KEY, SessionStore
from bizdesk.services.user_service import UserService
from bizdesk.services.vendor_service import VendorService

__all__ = [
    "AUTH_STORAGE_KEY",
    "AccountService",
    "AuthResult",
    "AuthService",
    "DepartmentService",
    "EmployeeService",
    "MutationResult",
    "RoleDirectory",
    "SessionRegistry",
    "SessionStore",
    "UserDirectory",
    "UserService",
    "VendorService",
]
