"""
Portal Auth Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Portal-wide user role"""

    admin = "admin"
    teacher = "teacher"
    student = "student"
