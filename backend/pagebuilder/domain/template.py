from typing import Any

from pagebuilder.domain.components import ComponentKind

TEMPLATE_TYPE_MAP = {
    "banner": ComponentKind.BANNER,
    "text": ComponentKind.TEXT,
    "image": ComponentKind.IMAGE,
    "button": ComponentKind.BUTTON,
    "container": ComponentKind.CONTAINER,
    "card": ComponentKind.CARD,
    "accordion": ComponentKind.ACCORDION,
    "linkgroup": ComponentKind.LINK_GROUP,
}


def map_template_type(declared: Any) -> ComponentKind:
    """Template block type -> component kind; anything unknown becomes text."""
    if isinstance(declared, str):
        return TEMPLATE_TYPE_MAP.get(declared.strip().lower(), ComponentKind.TEXT)
    return ComponentKind.TEXT
