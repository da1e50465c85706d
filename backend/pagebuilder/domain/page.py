"""
Page aggregate.

A page exclusively owns an ordered collection of components. Every
mutation builds a candidate collection, checks it, and only then swaps it
in, so a rejected mutation leaves the page exactly as it was.
"""
import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence

from pagebuilder.domain.components import Component, ComponentKind, ValidationResult
from pagebuilder.domain.invariants.exceptions import (
    ComponentNotFound,
    DuplicateKey,
    ValidationFailed,
)
from pagebuilder.domain.invariants.page import (
    assert_components,
    assert_unique_keys,
    collect_component_errors,
    collect_key_errors,
)
from pagebuilder.domain.template import map_template_type
from pagebuilder.utils.order import by_order, find_duplicates, next_order, reorder_by_ids
from pagebuilder.utils.timestamps import coerce_ts, to_iso, utcnow


@dataclass
class Page:
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    template_id: Optional[str] = None
    components: List[Component] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    # -------------------------------------------------
    # Queries
    # -------------------------------------------------

    def get_ordered_components(self) -> List[Component]:
        return by_order(self.components)

    def get_component_by_id(self, component_id: str) -> Component:
        for component in self.components:
            if component.id == component_id:
                return component
        raise ComponentNotFound(component_id)

    def get_component_by_order(self, order: int) -> Optional[Component]:
        for component in self.components:
            if component.order == order:
                return component
        return None

    def get_components_by_kind(self, kind: Any) -> List[Component]:
        kind = ComponentKind.parse(kind)
        return [c for c in self.get_ordered_components() if c.kind is kind]

    def has_component(self, component_id: str) -> bool:
        return any(c.id == component_id for c in self.components)

    def next_order(self) -> int:
        return next_order(self.components)

    def component_stats(self):
        ordered = self.get_ordered_components()
        return {
            "totalComponents": len(ordered),
            "componentsByType": dict(Counter(c.kind.value for c in ordered)),
            "componentOrder": [
                {"id": c.id, "type": c.kind.value, "order": c.order}
                for c in ordered
            ],
        }

    def validate(self) -> ValidationResult:
        components = self.components
        return ValidationResult(collect_component_errors(components) + collect_key_errors(components))

    # -------------------------------------------------
    # Mutations
    # -------------------------------------------------

    def add_component(self, component: Component) -> Component:
        if self.has_component(component.id):
            raise DuplicateKey("id", component.id)
        if self.get_component_by_order(component.order) is not None:
            raise DuplicateKey("order", component.order)

        added = component.clone()
        self._commit(self.components + [added])
        return added

    def update_component(self, component_id: str, changes: Mapping[str, Any]) -> Component:
        current = self.get_component_by_id(component_id)

        if "id" in changes and changes["id"] != component_id:
            raise ValidationFailed(["id cannot be changed"])
        if "type" in changes and ComponentKind.parse(changes["type"]) is not current.kind:
            raise ValidationFailed(["type cannot be changed"])

        updated = current.with_changes(changes)
        if updated.order != current.order:
            other = self.get_component_by_order(updated.order)
            if other is not None and other.id != component_id:
                raise DuplicateKey("order", updated.order)

        self._commit([updated if c.id == component_id else c for c in self.components])
        return updated

    def remove_component(self, component_id: str) -> Component:
        removed = self.get_component_by_id(component_id)
        self._commit([c for c in self.components if c.id != component_id])
        return removed

    def reorder_components(self, ordered_ids: Sequence[str]) -> List[Component]:
        """
        Listed components take orders 1..k in the listed sequence; the rest
        follow in their previous relative order.
        """
        dupes = find_duplicates(ordered_ids)
        if dupes:
            raise ValidationFailed([f"component IDs listed more than once: {', '.join(dupes)}"])
        for component_id in ordered_ids:
            self.get_component_by_id(component_id)

        candidate = reorder_by_ids([c.clone() for c in self.components], ordered_ids)
        self._commit(candidate)
        return self.get_ordered_components()

    def initialize_from_template(self, template: Mapping[str, Any]) -> List[Component]:
        """
        Replace every component with the template's blocks, ordered from 1.

        A template is ``{"id": ..., "components": [{"type": ..., "defaultValues": {...}}]}``.
        """
        blocks = template.get("components") or []
        if not isinstance(blocks, list):
            raise ValidationFailed(["template components must be an array"])

        candidate = []
        for order, block in enumerate(blocks, start=1):
            if not isinstance(block, Mapping):
                raise ValidationFailed([f"template component at index {order - 1} must be an object"])
            component = Component.create_default(map_template_type(block.get("type")), order=order)
            defaults = block.get("defaultValues")
            if defaults:
                component = component.with_changes({"data": defaults})
            candidate.append(component)

        self._commit(candidate)
        if template.get("id"):
            self.template_id = template["id"]
        return self.get_ordered_components()

    def replace_components(self, components: Iterable[Component]) -> List[Component]:
        """Overwrite the whole collection with copies of ``components``."""
        candidate = [c.clone() for c in components]
        assert_unique_keys(candidate)
        self.components = candidate
        self.touch()
        return self.get_ordered_components()

    # -------------------------------------------------
    # Nested accordion / link-group edits
    # -------------------------------------------------

    def edit_payload(self, component_id: str, kind: ComponentKind, edit: Callable):
        """
        Run ``edit(payload)`` against a copy of one component's payload and
        commit the copy if the edited component still validates. Returns
        whatever ``edit`` returns.
        """
        current = self.get_component_by_id(component_id)
        if current.kind is not kind:
            raise ValidationFailed([f"component '{component_id}' is not a {kind.value}"])

        updated = current.clone()
        result = edit(updated.payload)
        self._commit([updated if c.id == component_id else c for c in self.components])
        return result

    def add_accordion_item(self, component_id, data=None):
        return self.edit_payload(component_id, ComponentKind.ACCORDION, lambda p: p.add_item(data))

    def update_accordion_item(self, component_id, item_id, changes):
        return self.edit_payload(component_id, ComponentKind.ACCORDION, lambda p: p.update_item(item_id, changes))

    def remove_accordion_item(self, component_id, item_id):
        return self.edit_payload(component_id, ComponentKind.ACCORDION, lambda p: p.remove_item(item_id))

    def toggle_accordion_item(self, component_id, item_id):
        return self.edit_payload(component_id, ComponentKind.ACCORDION, lambda p: p.toggle_item(item_id))

    def reorder_accordion_items(self, component_id, item_ids):
        return self.edit_payload(component_id, ComponentKind.ACCORDION, lambda p: p.reorder_items(item_ids))

    def add_link(self, component_id, data=None):
        return self.edit_payload(component_id, ComponentKind.LINK_GROUP, lambda p: p.add_link(data))

    def update_link(self, component_id, link_id, changes):
        return self.edit_payload(component_id, ComponentKind.LINK_GROUP, lambda p: p.update_link(link_id, changes))

    def remove_link(self, component_id, link_id):
        return self.edit_payload(component_id, ComponentKind.LINK_GROUP, lambda p: p.remove_link(link_id))

    def reorder_links(self, component_id, link_ids):
        return self.edit_payload(component_id, ComponentKind.LINK_GROUP, lambda p: p.reorder_links(link_ids))

    # -------------------------------------------------
    # Internals / wire shape
    # -------------------------------------------------

    def touch(self) -> None:
        now = utcnow()
        # updated_at only moves forward, even within one clock tick
        if isinstance(self.updated_at, datetime) and now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def _commit(self, candidate: List[Component]) -> None:
        assert_components(candidate)
        self.components = candidate
        self.touch()

    def clone(self) -> "Page":
        return Page(
            id=self.id,
            template_id=self.template_id,
            components=[c.clone() for c in self.components],
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "templateId": self.template_id,
            "components": [c.to_dict() for c in self.get_ordered_components()],
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Page":
        now = utcnow()
        created_at = coerce_ts(data.get("createdAt"), now)
        updated_at = coerce_ts(data.get("updatedAt"), now)
        errors = [
            f"{label} must be an ISO-8601 timestamp"
            for label, value in (("createdAt", created_at), ("updatedAt", updated_at))
            if not isinstance(value, datetime)
        ]
        if errors:
            raise ValidationFailed(errors)

        return cls(
            id=data.get("id") or str(uuid.uuid4()),
            template_id=data.get("templateId"),
            components=[Component.from_dict(c) for c in data.get("components") or []],
            created_at=created_at,
            updated_at=updated_at,
        )
