from dataclasses import dataclass, field
from typing import Mapping

from pagebuilder.domain.richtext import RichText
from .base import ComponentKind, Payload
from .fields import check_target, check_text, check_url

DEFAULT_DESCRIPTION = "<p>Card description goes here...</p>"


@dataclass
class CardPayload(Payload):
    kind = ComponentKind.CARD

    title: str = "Card Title"
    description: RichText = field(default_factory=lambda: RichText.create(DEFAULT_DESCRIPTION))
    image_url: str = ""
    alt_text: str = ""
    link_url: str = ""
    link_text: str = ""
    link_target: str = "_self"
    style: str = "default"

    def validate(self):
        errors = []
        check_text(errors, "title", self.title, required=True)
        if isinstance(self.description, RichText):
            errors.extend(f"description: {err}" for err in self.description.validate())
        else:
            errors.append("description must be a rich-text object")
        check_url(errors, "imageUrl", self.image_url)
        check_text(errors, "altText", self.alt_text)
        check_url(errors, "linkUrl", self.link_url)
        check_text(errors, "linkText", self.link_text)
        check_target(errors, "linkTarget", self.link_target)
        if not isinstance(self.style, str):
            errors.append("style must be a string")
        return errors

    @property
    def has_image(self) -> bool:
        return bool(self.image_url)

    @property
    def has_link(self) -> bool:
        return bool(self.link_url)

    def to_dict(self):
        return {
            "title": self.title,
            "description": self.description.to_dict(),
            "imageUrl": self.image_url,
            "altText": self.alt_text,
            "linkUrl": self.link_url,
            "linkText": self.link_text,
            "linkTarget": self.link_target,
            "style": self.style,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "CardPayload":
        return cls(
            title=data.get("title", "Card Title"),
            description=RichText.from_value(data.get("description"), DEFAULT_DESCRIPTION),
            image_url=data.get("imageUrl", ""),
            alt_text=data.get("altText", ""),
            link_url=data.get("linkUrl", ""),
            link_text=data.get("linkText", ""),
            link_target=data.get("linkTarget", "_self"),
            style=data.get("style", "default"),
        )

    def clone(self) -> "CardPayload":
        return CardPayload(
            title=self.title,
            description=self.description.clone(),
            image_url=self.image_url,
            alt_text=self.alt_text,
            link_url=self.link_url,
            link_text=self.link_text,
            link_target=self.link_target,
            style=self.style,
        )

    def merged(self, changes: Mapping) -> "CardPayload":
        rest = {key: value for key, value in changes.items() if key != "description"}
        merged = super().merged(rest)
        if "description" in changes:
            merged.description = self.description.rewritten(changes["description"])
        return merged
