from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class UserRole:
    """Domain entity: a staff member as registered in user_roles.

    Note: ``email`` is the stable key; ``display_name`` is cosmetic.
    """

    email: str
    display_name: str
    role: Role = Role.UNKNOWN
