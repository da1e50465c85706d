import uuid
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from pagebuilder.domain.invariants.exceptions import (
    DuplicateKey,
    ItemNotFound,
    MinimumCardinalityViolation,
    ValidationFailed,
)
from pagebuilder.utils.order import by_order, compact_order, find_duplicates, next_order
from .base import ComponentKind, Payload
from .fields import check_order, check_target, check_text, check_unique, check_url

LINK_FIELDS = ("linkText", "linkUrl", "linkTarget", "order")


@dataclass
class Link:
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    link_text: str = "New Link"
    link_url: str = "https://example.com"
    link_target: str = "_self"
    order: int = 0

    def validate(self) -> List[str]:
        errors = []
        if not isinstance(self.id, str) or not self.id:
            errors.append("id must be a non-empty string")
        check_text(errors, "linkText", self.link_text, required=True)
        check_url(errors, "linkUrl", self.link_url, required=True)
        check_target(errors, "linkTarget", self.link_target)
        check_order(errors, "order", self.order)
        return errors

    def to_dict(self):
        return {
            "id": self.id,
            "linkText": self.link_text,
            "linkUrl": self.link_url,
            "linkTarget": self.link_target,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Mapping, order: int = 0) -> "Link":
        text = data.get("linkText", "New Link")
        url = data.get("linkUrl", "https://example.com")
        return cls(
            id=data.get("id") or str(uuid.uuid4()),
            link_text=text.strip() if isinstance(text, str) else text,
            link_url=url.strip() if isinstance(url, str) else url,
            link_target=data.get("linkTarget", "_self"),
            order=data.get("order", order),
        )

    def clone(self) -> "Link":
        return Link(
            id=self.id,
            link_text=self.link_text,
            link_url=self.link_url,
            link_target=self.link_target,
            order=self.order,
        )


@dataclass
class LinkGroupPayload(Payload):
    kind = ComponentKind.LINK_GROUP

    links: List[Link] = field(default_factory=lambda: [Link()])
    title: str = "Link Group"
    style: str = "default"

    def validate(self):
        errors = []
        if not isinstance(self.links, list):
            errors.append("links must be an array")
        elif not self.links:
            errors.append("links must contain at least one link")
        else:
            for index, link in enumerate(self.links):
                errors.extend(f"Link at index {index}: {err}" for err in link.validate())
            check_unique(errors, "link ID", (link.id for link in self.links))
            check_unique(errors, "link text", (link.link_text for link in self.links))
        check_text(errors, "title", self.title)
        if not isinstance(self.style, str):
            errors.append("style must be a string")
        return errors

    def to_dict(self):
        return {
            "links": [link.to_dict() for link in self.links],
            "title": self.title,
            "style": self.style,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "LinkGroupPayload":
        raw_links = data.get("links")
        if raw_links is None:
            links = [Link()]
        elif isinstance(raw_links, list):
            errors = [
                f"Link at index {index} must be an object"
                for index, link in enumerate(raw_links)
                if not isinstance(link, Mapping)
            ]
            if errors:
                raise ValidationFailed(errors)
            links = [Link.from_dict(link, order=index) for index, link in enumerate(raw_links)]
        else:
            raise ValidationFailed(["links must be an array"])
        return cls(
            links=links,
            title=data.get("title", "Link Group"),
            style=data.get("style", "default"),
        )

    def clone(self) -> "LinkGroupPayload":
        return LinkGroupPayload(
            links=[link.clone() for link in self.links],
            title=self.title,
            style=self.style,
        )

    # -------------------------------------------------
    # Link operations (mutate in place; callers work on a clone)
    # -------------------------------------------------

    def get_link(self, link_id: str) -> Link:
        for link in self.links:
            if link.id == link_id:
                return link
        raise ItemNotFound(link_id, label="Link")

    def get_ordered_links(self) -> List[Link]:
        return by_order(self.links)

    def add_link(self, data: Optional[Mapping] = None) -> Link:
        data = dict(data or {})
        data.pop("id", None)
        link = Link.from_dict(data, order=next_order(self.links, start=0))
        if any(existing.link_text == link.link_text for existing in self.links):
            raise DuplicateKey("linkText", link.link_text, scope="Link")
        self.links.append(link)
        return link

    def remove_link(self, link_id: str) -> Link:
        link = self.get_link(link_id)
        if len(self.links) <= 1:
            raise MinimumCardinalityViolation("Cannot remove the last link from a link group")
        self.links.remove(link)
        compact_order(self.links, start=0)
        return link

    def update_link(self, link_id: str, changes: Mapping[str, Any]) -> Link:
        link = self.get_link(link_id)
        unknown = [key for key in changes if key not in LINK_FIELDS]
        if unknown:
            raise ValidationFailed([f"unknown link field(s): {', '.join(unknown)}"])

        if "linkText" in changes:
            text = changes["linkText"]
            text = text.strip() if isinstance(text, str) else text
            if any(other.link_text == text and other.id != link_id for other in self.links):
                raise DuplicateKey("linkText", text, scope="Link")
            link.link_text = text
        if "linkUrl" in changes:
            url = changes["linkUrl"]
            link.link_url = url.strip() if isinstance(url, str) else url
        if "linkTarget" in changes:
            link.link_target = changes["linkTarget"]
        if "order" in changes:
            link.order = changes["order"]
        return link

    def reorder_links(self, link_ids: Sequence[str]) -> List[Link]:
        """Every link must be listed exactly once; orders become 0..N-1."""
        dupes = find_duplicates(link_ids)
        if dupes:
            raise ValidationFailed([f"link IDs listed more than once: {', '.join(dupes)}"])
        for link_id in link_ids:
            self.get_link(link_id)
        if len(link_ids) != len(self.links):
            raise ValidationFailed(["all link IDs must be included in reorder"])

        by_id = {link.id: link for link in self.links}
        self.links = [by_id[link_id] for link_id in link_ids]
        for index, link in enumerate(self.links):
            link.order = index
        return self.links
