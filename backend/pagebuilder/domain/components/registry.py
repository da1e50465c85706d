from typing import Any, Dict, Mapping, Type

from pagebuilder.domain.invariants.exceptions import ValidationFailed
from .accordion import AccordionPayload
from .banner import BannerPayload
from .base import ComponentKind, Payload, ValidationResult
from .card import CardPayload
from .link_group import LinkGroupPayload
from .reserved import ReservedPayload
from .text import TextPayload

PAYLOAD_TYPES: Dict[ComponentKind, Type[Payload]] = {
    ComponentKind.TEXT: TextPayload,
    ComponentKind.BANNER: BannerPayload,
    ComponentKind.CARD: CardPayload,
    ComponentKind.ACCORDION: AccordionPayload,
    ComponentKind.LINK_GROUP: LinkGroupPayload,
}


def payload_from_dict(kind: Any, data: Any) -> Payload:
    kind = ComponentKind.parse(kind)
    if data is None:
        data = {}
    if kind.is_reserved and isinstance(data, Mapping):
        return ReservedPayload.from_dict(data, kind=kind)
    if not isinstance(data, Mapping):
        raise ValidationFailed(["data must be an object"])
    return PAYLOAD_TYPES[kind].from_dict(data)


def default_payload(kind: Any) -> Payload:
    kind = ComponentKind.parse(kind)
    if kind.is_reserved:
        return ReservedPayload(kind=kind)
    return PAYLOAD_TYPES[kind].default()


def validate_payload(kind: Any, payload: Any) -> ValidationResult:
    """
    Validate ``payload`` (a Payload or its wire dict) as data for ``kind``.
    """
    kind = ComponentKind.parse(kind)
    if isinstance(payload, Payload):
        if payload.kind is not kind:
            return ValidationResult([f"payload of kind {payload.kind.value} does not match {kind.value}"])
        return ValidationResult(payload.validate())
    if not isinstance(payload, Mapping):
        return ValidationResult(["data must be an object"])
    return ValidationResult(payload_from_dict(kind, payload).validate())
