"""Form dialogs: shape raw field input into drafts for a save callback."""
from bizdesk.forms.account_form import AccountFormDialog
from bizdesk.forms.employee_form import CREATE_NEW_DEPARTMENT, EmployeeFormDialog
from bizdesk.forms.vendor_form import VendorFormDialog

__all__ = [
    "AccountFormDialog",
    "CREATE_NEW_DEPARTMENT",
    "EmployeeFormDialog",
    "VendorFormDialog",
]
