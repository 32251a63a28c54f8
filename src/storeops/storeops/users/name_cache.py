from __future__ import annotations

import time
from typing import Callable, Dict, Optional

from ..core.constants import DEFAULT_NAME_CACHE_TTL_SECONDS


class NameCache:
    """Email -> display name cache that expires as a whole after ``ttl_seconds``.

    Owned by whoever builds it (see ``container.build_container``); tests pass
    their own ``clock``.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_NAME_CACHE_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self._ttl = float(ttl_seconds)
        self._clock = clock or time.monotonic
        self._data: Dict[str, str] = {}
        self._stamp = self._clock()

    def _expire_if_stale(self) -> None:
        now = self._clock()
        if now - self._stamp >= self._ttl:
            self._data = {}
            self._stamp = now

    def get(self, email: str) -> Optional[str]:
        self._expire_if_stale()
        return self._data.get(email)

    def contains(self, email: str) -> bool:
        return self.get(email) is not None

    def update(self, names: Dict[str, str]) -> None:
        self._expire_if_stale()
        self._data.update({k: v for k, v in names.items() if v})
        self._stamp = self._clock()

