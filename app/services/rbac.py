"""Role-Based Access Control (RBAC) service."""

from enum import Enum

from app.models.user import UserRole


class Permission(str, Enum):
    """Available permissions in the system."""

    # Own appointments
    APPOINTMENTS_BOOK = "appointments:book"
    APPOINTMENTS_READ = "appointments:read"
    APPOINTMENTS_UPDATE = "appointments:update"

    # Availability administration
    AVAILABILITY_READ = "availability:read"
    AVAILABILITY_WRITE = "availability:write"

    # System administration
    ADMIN_ALL = "admin:all"


# Role to permissions mapping
ROLE_PERMISSIONS: dict[UserRole, set[Permission]] = {
    UserRole.ADMIN: {
        Permission.APPOINTMENTS_BOOK,
        Permission.APPOINTMENTS_READ,
        Permission.APPOINTMENTS_UPDATE,
        Permission.AVAILABILITY_READ,
        Permission.AVAILABILITY_WRITE,
        Permission.ADMIN_ALL,
    },
    UserRole.CUSTOMER: {
        Permission.APPOINTMENTS_BOOK,
        Permission.APPOINTMENTS_READ,
        Permission.APPOINTMENTS_UPDATE,
    },
}


class RBACService:
    """Service for checking role-based permissions."""

    @staticmethod
    def get_permissions(role: UserRole | str) -> set[Permission]:
        """Get all permissions for a role (empty for unknown roles)."""
        try:
            return ROLE_PERMISSIONS.get(UserRole(role), set())
        except ValueError:
            return set()

    @staticmethod
    def has_permission(role: UserRole | str, permission: Permission) -> bool:
        """Check if a role has a specific permission."""
        return permission in RBACService.get_permissions(role)

    @staticmethod
    def has_all_permissions(
        role: UserRole | str,
        permissions: list[Permission],
    ) -> bool:
        """Check if a role has all of the specified permissions."""
        granted = RBACService.get_permissions(role)
        return all(p in granted for p in permissions)
