from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping

from pagebuilder.domain.invariants.exceptions import ValidationFailed


class ComponentKind(str, Enum):
    TEXT = "TextComponent"
    BANNER = "BannerComponent"
    CARD = "CardComponent"
    ACCORDION = "AccordionComponent"
    LINK_GROUP = "LinkGroupComponent"
    # Recognized so forward data round-trips; no payload rules yet.
    IMAGE = "ImageComponent"
    BUTTON = "ButtonComponent"
    CONTAINER = "ContainerComponent"

    @classmethod
    def parse(cls, value: Any) -> "ComponentKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationFailed([f"unsupported component type {value!r}"]) from None

    @property
    def is_reserved(self) -> bool:
        return self in RESERVED_KINDS


RESERVED_KINDS = frozenset({ComponentKind.IMAGE, ComponentKind.BUTTON, ComponentKind.CONTAINER})


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def raise_if_invalid(self, message: str = "Validation failed") -> None:
        if self.errors:
            raise ValidationFailed(self.errors, message)

    def to_dict(self):
        return {"valid": self.valid, "errors": list(self.errors)}


class Payload:
    """
    Variant-specific component data.

    Subclasses are dataclasses; every one of them knows how to validate
    itself, copy itself without sharing nested state, and convert to and
    from the camelCase wire shape.
    """

    kind: ClassVar[ComponentKind]

    def validate(self) -> List[str]:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError

    @classmethod
    def from_dict(cls, data: Mapping) -> "Payload":
        raise NotImplementedError

    @classmethod
    def default(cls) -> "Payload":
        return cls.from_dict({})

    def clone(self) -> "Payload":
        raise NotImplementedError

    def merged(self, changes: Mapping) -> "Payload":
        """Shallow-merge wire-shaped ``changes`` into a new payload."""
        data = self.to_dict()
        data.update(changes)
        return type(self).from_dict(data)
