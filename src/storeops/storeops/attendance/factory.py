from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from .strategies.base import DurationPolicy
from .strategies.driver_policy import DriverDurationPolicy
from .strategies.standard_policy import StandardDurationPolicy


@dataclass
class DurationPolicyFactory:
    """Factory Pattern: choose the duration policy for a role."""

    def for_role(self, role: Optional[Role | str]) -> DurationPolicy:
        if Role.parse(role) == Role.DRIVER:
            return DriverDurationPolicy()
        return StandardDurationPolicy()
