from __future__ import annotations

from typing import Dict, Protocol, Sequence

from .model import UserRole


class UserRoleRepository(Protocol):
    """Repository interface for user_roles.

    Services depend on this interface, not on a concrete database.
    """

    def list_all(self) -> Sequence[UserRole]:
        raise NotImplementedError

    def get_display_names(self, emails: Sequence[str]) -> Dict[str, str]:
        """Map of lower-cased email -> display name for the known emails."""

        raise NotImplementedError
