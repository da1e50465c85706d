from typing import Iterable, List, Sequence, TypeVar

T = TypeVar("T")


def _order_key(item):
    order = item.order
    if isinstance(order, (int, float)) and not isinstance(order, bool):
        return (0, order)
    # imported data may carry junk orders; keep it last, in arrival sequence
    return (1, 0)


def by_order(items: Iterable[T]) -> List[T]:
    """Stable sort on the ``order`` attribute."""
    return sorted(items, key=_order_key)


def next_order(items: Sequence, start: int = 1) -> int:
    orders = [item.order for item in items if isinstance(item.order, int)]
    return max(orders) + 1 if orders else start


def compact_order(items: Iterable[T], start: int = 1) -> List[T]:
    """
    Re-assigns sequential order values (start..N) in current display order.
    """
    ordered = by_order(items)
    for index, item in enumerate(ordered, start=start):
        item.order = index
    return ordered


def reorder_by_ids(items: Sequence[T], ordered_ids: Sequence[str], start: int = 1) -> List[T]:
    """
    Listed items take positions start.. in the listed sequence; items not
    listed follow in their previous display order. Ids must already be
    checked against ``items``.
    """
    by_id = {item.id: item for item in items}
    listed = [by_id[item_id] for item_id in ordered_ids]
    listed_ids = set(ordered_ids)
    rest = [item for item in by_order(items) if item.id not in listed_ids]

    result = listed + rest
    for index, item in enumerate(result, start=start):
        item.order = index
    return result


def find_duplicates(values: Iterable[str]) -> List[str]:
    seen, dupes = set(), []
    for value in values:
        if value in seen and value not in dupes:
            dupes.append(value)
        seen.add(value)
    return dupes
