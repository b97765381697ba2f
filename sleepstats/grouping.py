from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from sleepstats.schema import SleepRecord, field_getter


T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def group_records(
    records: Iterable[T],
    key: Callable[[T], K] | str,
) -> Dict[K, List[T]]:
    """Group records by key, iterating groups in order of first occurrence.

    ``key`` is either a callable or a record field name. Every record lands in
    exactly one group, so member counts always add up to the input length.
    """
    get_key = field_getter(key) if isinstance(key, str) else key
    groups: Dict[K, List[T]] = {}
    for record in records:
        groups.setdefault(get_key(record), []).append(record)
    return groups


def order_groups(
    groups: Dict[K, List[T]],
    order: Optional[Sequence[K]] = None,
) -> List[Tuple[K, List[T]]]:
    """Emit groups in a canonical category order.

    Listed categories with no members are skipped, not zero-filled. Categories
    missing from ``order`` follow the listed ones in first-occurrence order.
    """
    if not order:
        return list(groups.items())
    ordered = [(label, groups[label]) for label in order if label in groups]
    listed = set(order)
    ordered.extend((label, members) for label, members in groups.items() if label not in listed)
    return ordered


def category_counts(
    records: Iterable[SleepRecord],
    key: Callable[[SleepRecord], K] | str,
    order: Optional[Sequence[K]] = None,
    *,
    fill_order: bool = False,
) -> Dict[K, int]:
    """Count records per category.

    With ``fill_order`` every label in ``order`` is present, zero when unseen.
    Without it only observed labels appear.
    """
    get_key = field_getter(key) if isinstance(key, str) else key
    counts: Dict[K, int] = {label: 0 for label in order} if (order and fill_order) else {}
    for record in records:
        label = get_key(record)
        counts[label] = counts.get(label, 0) + 1
    if order and not fill_order:
        counts = dict(order_groups(counts, order))  # type: ignore[arg-type]
    return counts
