from bizdesk.repositories.account_repo import check_parent, list_accounts
from bizdesk.repositories.hr_repo import list_departments, list_employees
from bizdesk.repositories.user_repo import list_users, update_profile, upsert_user_role
from bizdesk.repositories.vendor_repo import list_vendors

__all__ = [
    "check_parent",
    "list_accounts",
    "list_departments",
    "list_employees",
    "list_users",
    "list_vendors",
    "update_profile",
    "upsert_user_role",
]
