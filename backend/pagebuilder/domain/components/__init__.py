from .accordion import AccordionItem, AccordionPayload
from .banner import BannerPayload, CallToAction
from .base import RESERVED_KINDS, ComponentKind, Payload, ValidationResult
from .card import CardPayload
from .component import Component
from .link_group import Link, LinkGroupPayload
from .registry import PAYLOAD_TYPES, default_payload, payload_from_dict, validate_payload
from .reserved import ReservedPayload
from .text import TextPayload

__all__ = [
    "AccordionItem",
    "AccordionPayload",
    "BannerPayload",
    "CallToAction",
    "CardPayload",
    "Component",
    "ComponentKind",
    "Link",
    "LinkGroupPayload",
    "PAYLOAD_TYPES",
    "Payload",
    "RESERVED_KINDS",
    "ReservedPayload",
    "TextPayload",
    "ValidationResult",
    "default_payload",
    "payload_from_dict",
    "validate_payload",
]
