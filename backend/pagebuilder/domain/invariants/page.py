from typing import Iterable, List, Sequence

from .exceptions import ValidationFailed


def _check_seen(errors, label, value, seen) -> None:
    try:
        duplicate = value in seen
    except TypeError:
        # unhashable keys are reported by Component.validate
        return
    if duplicate:
        errors.append(f"Duplicate component {label} found: {value!r}")
    seen.add(value)


def collect_key_errors(components: Sequence) -> List[str]:
    errors = []
    seen_ids, seen_orders = set(), set()
    for component in components:
        _check_seen(errors, "ID", component.id, seen_ids)
        _check_seen(errors, "order", component.order, seen_orders)
    return errors


def collect_component_errors(components: Iterable) -> List[str]:
    errors = []
    for index, component in enumerate(components):
        result = component.validate()
        errors.extend(f"Component at index {index}: {err}" for err in result.errors)
    return errors


def assert_components(components: Sequence):
    """
    Every component must be individually valid and the collection must
    carry unique ids and unique orders.
    """
    errors = collect_component_errors(components) + collect_key_errors(components)
    if errors:
        raise ValidationFailed(errors)


def assert_unique_keys(components: Sequence):
    errors = collect_key_errors(components)
    if errors:
        raise ValidationFailed(errors)
