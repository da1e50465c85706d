import uuid
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from pagebuilder.domain.invariants.exceptions import (
    DuplicateKey,
    ItemNotFound,
    MinimumCardinalityViolation,
    ValidationFailed,
)
from pagebuilder.domain.richtext import RichText
from pagebuilder.utils.order import by_order, find_duplicates, next_order, reorder_by_ids
from .base import ComponentKind, Payload
from .fields import check_order, check_text, check_unique

DEFAULT_ITEM_HEADER = "New Accordion Item"
DEFAULT_ITEM_CONTENT = "<p>Click to edit content</p>"
ITEM_FIELDS = ("header", "content", "isOpen", "order")


@dataclass
class AccordionItem:
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    header: str = DEFAULT_ITEM_HEADER
    content: RichText = field(default_factory=lambda: RichText.create(DEFAULT_ITEM_CONTENT))
    is_open: bool = False
    order: int = 1

    def validate(self) -> List[str]:
        errors = []
        if not isinstance(self.id, str) or not self.id:
            errors.append("id must be a non-empty string")
        check_text(errors, "header", self.header, required=True)
        if isinstance(self.content, RichText):
            errors.extend(f"content: {err}" for err in self.content.validate())
        else:
            errors.append("content must be a rich-text object")
        if not isinstance(self.is_open, bool):
            errors.append("isOpen must be a boolean")
        check_order(errors, "order", self.order)
        return errors

    def to_dict(self):
        return {
            "id": self.id,
            "header": self.header,
            "content": self.content.to_dict(),
            "isOpen": self.is_open,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Mapping, order: int = 1) -> "AccordionItem":
        header = data.get("header", DEFAULT_ITEM_HEADER)
        return cls(
            id=data.get("id") or str(uuid.uuid4()),
            header=header.strip() if isinstance(header, str) else header,
            content=RichText.from_value(data.get("content"), DEFAULT_ITEM_CONTENT),
            is_open=data.get("isOpen", False),
            order=data.get("order", order),
        )

    def clone(self) -> "AccordionItem":
        return AccordionItem(
            id=self.id,
            header=self.header,
            content=self.content.clone(),
            is_open=self.is_open,
            order=self.order,
        )


@dataclass
class AccordionPayload(Payload):
    kind = ComponentKind.ACCORDION

    items: List[AccordionItem] = field(default_factory=lambda: [AccordionItem()])
    allow_multiple_open: bool = True
    style: str = "default"

    # -------------------------------------------------
    # Validation / wire shape
    # -------------------------------------------------

    def validate(self):
        errors = []
        if not isinstance(self.items, list):
            errors.append("items must be an array")
        elif not self.items:
            errors.append("items must contain at least one item")
        else:
            for index, item in enumerate(self.items):
                errors.extend(f"Item at index {index}: {err}" for err in item.validate())
            check_unique(errors, "item ID", (item.id for item in self.items))
            check_unique(errors, "item order", (item.order for item in self.items))
        if not isinstance(self.allow_multiple_open, bool):
            errors.append("allowMultipleOpen must be a boolean")
        if not isinstance(self.style, str):
            errors.append("style must be a string")
        return errors

    def to_dict(self):
        return {
            "items": [item.to_dict() for item in self.items],
            "allowMultipleOpen": self.allow_multiple_open,
            "style": self.style,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "AccordionPayload":
        raw_items = data.get("items")
        if raw_items is None:
            items = [AccordionItem()]
        elif isinstance(raw_items, list):
            errors = [
                f"Item at index {index} must be an object"
                for index, item in enumerate(raw_items)
                if not isinstance(item, Mapping)
            ]
            if errors:
                raise ValidationFailed(errors)
            items = [AccordionItem.from_dict(item, order=index + 1) for index, item in enumerate(raw_items)]
        else:
            raise ValidationFailed(["items must be an array"])
        return cls(
            items=items,
            allow_multiple_open=data.get("allowMultipleOpen", True),
            style=data.get("style", "default"),
        )

    @classmethod
    def with_items(cls, count: int = 2) -> "AccordionPayload":
        items = [
            AccordionItem(
                header=f"Accordion Item {index}",
                content=RichText.create(f"<p>Content for item {index}</p>"),
                is_open=index == 1,
                order=index,
            )
            for index in range(1, count + 1)
        ]
        return cls(items=items)

    def clone(self) -> "AccordionPayload":
        return AccordionPayload(
            items=[item.clone() for item in self.items],
            allow_multiple_open=self.allow_multiple_open,
            style=self.style,
        )

    def merged(self, changes: Mapping) -> "AccordionPayload":
        merged = super().merged(changes)
        if "items" in changes and isinstance(merged.items, list):
            previous = {item.id: item for item in self.items}
            for item in merged.items:
                old = previous.get(item.id) if isinstance(item.id, str) else None
                if old is not None and isinstance(item.content, RichText) and not old.content.same_content(item.content):
                    item.content = old.content.rewritten(item.content)
        return merged

    # -------------------------------------------------
    # Item operations (mutate in place; callers work on a clone)
    # -------------------------------------------------

    def get_item(self, item_id: str) -> AccordionItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise ItemNotFound(item_id, label="Accordion item")

    def get_ordered_items(self) -> List[AccordionItem]:
        return by_order(self.items)

    def open_items(self) -> List[AccordionItem]:
        return [item for item in self.items if item.is_open is True]

    def add_item(self, data: Optional[Mapping] = None) -> AccordionItem:
        data = dict(data or {})
        data.pop("id", None)
        item = AccordionItem.from_dict(data, order=next_order(self.items))
        if "order" in data and any(existing.order == item.order for existing in self.items):
            raise DuplicateKey("order", item.order, scope="Item")
        self.items.append(item)
        if item.is_open is True and self.allow_multiple_open is False:
            self._close_others(item.id)
        return item

    def remove_item(self, item_id: str) -> AccordionItem:
        item = self.get_item(item_id)
        if len(self.items) <= 1:
            raise MinimumCardinalityViolation("Cannot remove the last accordion item")
        self.items.remove(item)
        return item

    def update_item(self, item_id: str, changes: Mapping[str, Any]) -> AccordionItem:
        item = self.get_item(item_id)
        unknown = [key for key in changes if key not in ITEM_FIELDS]
        if unknown:
            raise ValidationFailed([f"unknown item field(s): {', '.join(unknown)}"])

        if "order" in changes and changes["order"] != item.order:
            if any(other.order == changes["order"] and other.id != item_id for other in self.items):
                raise DuplicateKey("order", changes["order"], scope="Item")

        if "header" in changes:
            header = changes["header"]
            item.header = header.strip() if isinstance(header, str) else header
        if "content" in changes:
            item.content = item.content.rewritten(changes["content"])
        if "isOpen" in changes:
            item.is_open = changes["isOpen"]
            if item.is_open is True and self.allow_multiple_open is False:
                self._close_others(item_id)
        if "order" in changes:
            item.order = changes["order"]
        return item

    def toggle_item(self, item_id: str) -> bool:
        item = self.get_item(item_id)
        item.is_open = not item.is_open
        if item.is_open and not self.allow_multiple_open:
            self._close_others(item_id)
        return item.is_open

    def reorder_items(self, item_ids: Sequence[str]) -> List[AccordionItem]:
        dupes = find_duplicates(item_ids)
        if dupes:
            raise ValidationFailed([f"item IDs listed more than once: {', '.join(dupes)}"])
        for item_id in item_ids:
            self.get_item(item_id)
        self.items = reorder_by_ids(self.items, item_ids)
        return self.items

    def _close_others(self, item_id: str) -> None:
        for other in self.items:
            if other.id != item_id:
                other.is_open = False
