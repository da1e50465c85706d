from dataclasses import dataclass
from typing import Mapping

from pagebuilder.domain.richtext import RichText
from .base import ComponentKind, Payload

DEFAULT_TEXT = "<p>Click to edit text</p>"


@dataclass
class TextPayload(Payload):
    kind = ComponentKind.TEXT

    content: RichText

    def validate(self):
        if not isinstance(self.content, RichText):
            return ["content must be a rich-text object"]
        return [f"content: {err}" for err in self.content.validate()]

    def to_dict(self):
        return {"content": self.content.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping) -> "TextPayload":
        return cls(content=RichText.from_value(data.get("content"), DEFAULT_TEXT))

    def clone(self) -> "TextPayload":
        return TextPayload(content=self.content.clone())

    def merged(self, changes: Mapping) -> "TextPayload":
        if "content" not in changes:
            return self.clone()
        return TextPayload(content=self.content.rewritten(changes["content"]))
