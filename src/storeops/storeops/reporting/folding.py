"""Grouping/summation machinery shared by the attendance and sales reports.

Both reports bucket records by a key (calendar date, user, payment method) and
fold each bucket into a leaf value; only the leaf accumulator differs.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, TypeVar

from ..common.validators import require_collection

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
A = TypeVar("A")


def group_by(
    items: Iterable[T],
    key: Callable[[T], K],
    *,
    sort_key: Optional[Callable[[T], Any]] = None,
) -> Dict[K, List[T]]:
    """Bucket ``items`` by ``key``; each bucket optionally sorted by ``sort_key``.

    Keys with no items are absent from the result.
    """
    require_collection(items, "items")

    grouped: Dict[K, List[T]] = {}
    for item in items:
        grouped.setdefault(key(item), []).append(item)

    if sort_key is not None:
        for bucket in grouped.values():
            bucket.sort(key=sort_key)
    return grouped


def fold_by(
    items: Iterable[T],
    key: Callable[[T], K],
    *,
    initial: Callable[[K], A],
    step: Callable[[A, T], A],
    seed_keys: Iterable[K] = (),
) -> Dict[K, A]:
    """Fold ``items`` per key: ``acc = step(acc, item)`` starting from ``initial(key)``.

    ``seed_keys`` are created up front so they appear even without items.
    """
    require_collection(items, "items")

    folded: Dict[K, A] = {k: initial(k) for k in seed_keys}
    for item in items:
        k = key(item)
        if k not in folded:
            folded[k] = initial(k)
        folded[k] = step(folded[k], item)
    return folded
