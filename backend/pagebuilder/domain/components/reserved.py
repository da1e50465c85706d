import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .base import ComponentKind, Payload


@dataclass
class ReservedPayload(Payload):
    """
    Data for kinds that are recognized but have no rules yet (image,
    button, container). Stored and returned untouched.
    """

    kind: ComponentKind = ComponentKind.IMAGE
    data: Dict[str, Any] = field(default_factory=dict)

    def validate(self):
        if not isinstance(self.data, dict):
            return ["data must be an object"]
        return []

    def to_dict(self):
        return copy.deepcopy(self.data)

    @classmethod
    def from_dict(cls, data: Mapping, kind: ComponentKind = ComponentKind.IMAGE) -> "ReservedPayload":
        return cls(kind=kind, data=copy.deepcopy(dict(data)))

    def clone(self) -> "ReservedPayload":
        return ReservedPayload(kind=self.kind, data=copy.deepcopy(self.data))

    def merged(self, changes: Mapping) -> "ReservedPayload":
        data = self.to_dict()
        data.update(copy.deepcopy(dict(changes)))
        return ReservedPayload(kind=self.kind, data=data)
