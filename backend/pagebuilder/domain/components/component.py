import uuid
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pagebuilder.domain.invariants.exceptions import ValidationFailed
from .base import ComponentKind, Payload, ValidationResult
from .fields import check_order
from .registry import default_payload, payload_from_dict


@dataclass
class Component:
    """
    One typed content block inside a page.

    ``kind`` and ``id`` never change after creation; ``order`` and the
    payload are replaced through :meth:`with_changes`, which always
    returns a new component.
    """

    id: str
    kind: ComponentKind
    order: int
    payload: Payload

    @classmethod
    def create_default(
        cls,
        kind: Any,
        order: int = 1,
        component_id: Optional[str] = None,
    ) -> "Component":
        kind = ComponentKind.parse(kind)
        return cls(
            id=component_id or str(uuid.uuid4()),
            kind=kind,
            order=order,
            payload=default_payload(kind),
        )

    def validate(self) -> ValidationResult:
        errors = []
        if not isinstance(self.id, str) or not self.id:
            errors.append("id must be a non-empty string")
        check_order(errors, "order", self.order)
        if self.payload.kind is not self.kind:
            errors.append(f"payload does not match component type {self.kind.value}")
        else:
            errors.extend(self.payload.validate())
        return ValidationResult(errors)

    def clone(self) -> "Component":
        return Component(id=self.id, kind=self.kind, order=self.order, payload=self.payload.clone())

    def with_changes(self, changes: Mapping[str, Any]) -> "Component":
        """Merge ``order`` and/or wire-shaped ``data`` into a copy."""
        data = changes.get("data")
        if data is not None and not isinstance(data, Mapping):
            raise ValidationFailed(["data must be an object"])
        return Component(
            id=self.id,
            kind=self.kind,
            order=changes.get("order", self.order),
            payload=self.payload.merged(data) if data else self.payload.clone(),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.kind.value,
            "order": self.order,
            "data": self.payload.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "Component":
        if not isinstance(data, Mapping):
            raise ValidationFailed(["component must be an object"])
        kind = ComponentKind.parse(data.get("type"))
        return cls(
            id=data.get("id") or str(uuid.uuid4()),
            kind=kind,
            order=data.get("order", 1),
            payload=payload_from_dict(kind, data.get("data")),
        )
