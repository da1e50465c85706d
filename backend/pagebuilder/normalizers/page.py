from pagebuilder.utils.timestamps import to_iso
from .component import normalize_component


def normalize_page(page, include_components=True):
    base = {
        "id": page.id,
        "templateId": page.template_id,
        "componentCount": len(page.components),
        "createdAt": to_iso(page.created_at),
        "updatedAt": to_iso(page.updated_at),
    }

    if include_components:
        base["components"] = [
            normalize_component(c) for c in page.get_ordered_components()
        ]

    return base


def normalize_page_summary(page):
    return {
        "id": page.id,
        "componentCount": len(page.components),
        "updatedAt": to_iso(page.updated_at),
    }
