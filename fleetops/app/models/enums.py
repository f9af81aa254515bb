"""
User roles enumeration.

Defines the role types carried in identity provider tokens.
"""

import enum


class UserRole(str, enum.Enum):
    """
    User role enumeration.

    Roles:
        MANAGER: Full control of the fleet registry
        DISPATCHER: Creates and dispatches trips
        SAFETY_OFFICER: Manages driver records and duty status
        ANALYST: Records expenses and reads cost analytics
    """
    MANAGER = "manager"
    DISPATCHER = "dispatcher"
    SAFETY_OFFICER = "safety_officer"
    ANALYST = "analyst"
