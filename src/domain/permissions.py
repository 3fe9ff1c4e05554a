"""
Role Permissions

Static permission sets granted to each portal role.
"""

from typing import Dict, FrozenSet, Union

from .entities.enums import UserRole

ROLE_PERMISSIONS: Dict[UserRole, FrozenSet[str]] = {
    UserRole.admin: frozenset(
        {
            # User management
            "users:create",
            "users:read",
            "users:update",
            "users:delete",
            "users:suspend",
            "users:unsuspend",
            # Teacher group management
            "teacher_groups:create",
            "teacher_groups:read",
            "teacher_groups:update",
            "teacher_groups:delete",
            "teacher_groups:add_member",
            "teacher_groups:remove_member",
            # View all data
            "classes:read_all",
            "assignments:read_all",
            "grades:read_all",
        }
    ),
    UserRole.teacher: frozenset(
        {
            "classes:create",
            "classes:read_own",
            "classes:update_own",
            "classes:delete_own",
            "classes:add_student",
            "classes:remove_student",
            "assignments:create",
            "assignments:read_own",
            "assignments:update_own",
            "assignments:delete_own",
            "submissions:read_class",
            "grades:create",
            "grades:update_own",
            "grades:read_class",
        }
    ),
    UserRole.student: frozenset(
        {
            "classes:read_enrolled",
            "assignments:read_class",
            "grades:read_own",
            "submissions:create_own",
            "submissions:update_own",
            "submissions:read_own",
        }
    ),
}


def get_permissions(role: Union[UserRole, str]) -> FrozenSet[str]:
    return ROLE_PERMISSIONS[UserRole(role)]


def has_permission(role: Union[UserRole, str], permission: str) -> bool:
    return permission in get_permissions(role)
