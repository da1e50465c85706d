"""
Structural equality between two component collections.

Collections are compared in display order on their wire shape, so every
nested payload field participates. Rich-text metadata timestamps can be
left out because they drift on every content write even when the content
itself ends up identical.
"""
from typing import Any, Iterable

from pagebuilder.utils.order import by_order

METADATA_TIMESTAMP_KEYS = ("createdAt", "lastModifiedAt")


def _strip_metadata_timestamps(value: Any) -> Any:
    if isinstance(value, dict):
        stripped = {}
        for key, item in value.items():
            if key == "metadata" and isinstance(item, dict):
                item = {k: v for k, v in item.items() if k not in METADATA_TIMESTAMP_KEYS}
            stripped[key] = _strip_metadata_timestamps(item)
        return stripped
    if isinstance(value, list):
        return [_strip_metadata_timestamps(item) for item in value]
    return value


def fingerprint(components: Iterable, *, ignore_metadata_timestamps: bool = True):
    shape = [c.to_dict() for c in by_order(components)]
    if ignore_metadata_timestamps:
        shape = _strip_metadata_timestamps(shape)
    return shape


def components_equal(left: Iterable, right: Iterable, *, ignore_metadata_timestamps: bool = True) -> bool:
    return fingerprint(left, ignore_metadata_timestamps=ignore_metadata_timestamps) == fingerprint(
        right, ignore_metadata_timestamps=ignore_metadata_timestamps
    )
