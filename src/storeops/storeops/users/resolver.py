from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..core.constants import NAME_LOOKUP_CHUNK_SIZE
from .name_cache import NameCache
from .repository import UserRoleRepository

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def display_or_email(email: str, display: Optional[str] = None) -> str:
    return display if display and display.strip() else email


class NameResolver:
    """Resolve staff emails to display names, falling back to the email."""

    def __init__(self, user_roles: UserRoleRepository, cache: NameCache, *, chunk_size: int = NAME_LOOKUP_CHUNK_SIZE):
        self._user_roles = user_roles
        self._cache = cache
        self._chunk_size = int(chunk_size)

    def name_for_email(self, email: str) -> str:
        key = normalize_email(email)
        if not key:
            return ""

        cached = self._cache.get(key)
        if cached:
            return cached

        try:
            found = self._user_roles.get_display_names([key])
        except Exception:
            logger.warning("Display name lookup failed for %s", key, exc_info=True)
            return email

        name = (found.get(key) or "").strip()
        if name:
            self._cache.update({key: name})
            return name
        return email

    def prefetch(self, emails: Iterable[Optional[str]]) -> None:
        keys = sorted({normalize_email(e) for e in emails if normalize_email(e)})
        missing: List[str] = [k for k in keys if not self._cache.contains(k)]

        for i in range(0, len(missing), self._chunk_size):
            chunk = missing[i : i + self._chunk_size]
            try:
                found = self._user_roles.get_display_names(chunk)
            except Exception:
                logger.warning("Display name prefetch failed for %d emails", len(chunk), exc_info=True)
                continue
            self._cache.update({normalize_email(k): v.strip() for k, v in found.items() if v and v.strip()})
