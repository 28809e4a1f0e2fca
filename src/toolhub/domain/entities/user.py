"""User role enumeration.

Every place that assigns or checks a role goes through ``UserRole`` so a
role value outside the enumeration can never be written.
"""

from enum import Enum


class UserRole(str, Enum):
    """Roles a user can hold, from highest to lowest privilege."""

    OWNER = "owner"
    MANAGER = "manager"
    VIEWER = "viewer"

    @property
    def is_owner(self) -> bool:
        return self is UserRole.OWNER
