from .user_management import UserManagementService, escape_csv_field

__all__ = ["UserManagementService", "escape_csv_field"]
