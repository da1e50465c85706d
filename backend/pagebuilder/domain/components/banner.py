from dataclasses import dataclass, field
from typing import Mapping

from .base import ComponentKind, Payload
from .fields import check_target, check_text, check_url

MAX_HEADLINE_LENGTH = 500


@dataclass
class CallToAction:
    button_text: str = "Learn More"
    link_url: str = ""
    link_target: str = "_self"

    def validate(self):
        errors = []
        check_text(errors, "buttonText", self.button_text)
        check_url(errors, "linkUrl", self.link_url)
        check_target(errors, "linkTarget", self.link_target)
        return errors

    def to_dict(self):
        return {
            "buttonText": self.button_text,
            "linkUrl": self.link_url,
            "linkTarget": self.link_target,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "CallToAction":
        return cls(
            button_text=data.get("buttonText", "Learn More"),
            link_url=data.get("linkUrl", ""),
            link_target=data.get("linkTarget", "_self"),
        )

    def clone(self) -> "CallToAction":
        return CallToAction(self.button_text, self.link_url, self.link_target)


@dataclass
class BannerPayload(Payload):
    kind = ComponentKind.BANNER

    headline_text: str = "Banner Headline"
    background_image_url: str = ""
    background_image_alt_text: str = ""
    call_to_action: CallToAction = field(default_factory=CallToAction)
    style: str = "default"

    def validate(self):
        errors = []
        check_text(errors, "headlineText", self.headline_text, max_length=MAX_HEADLINE_LENGTH, required=True)
        check_url(errors, "backgroundImageUrl", self.background_image_url)
        check_text(errors, "backgroundImageAltText", self.background_image_alt_text)
        if isinstance(self.call_to_action, CallToAction):
            errors.extend(f"callToAction: {err}" for err in self.call_to_action.validate())
        else:
            errors.append("callToAction must be an object")
        if not isinstance(self.style, str):
            errors.append("style must be a string")
        return errors

    def to_dict(self):
        return {
            "headlineText": self.headline_text,
            "backgroundImageUrl": self.background_image_url,
            "backgroundImageAltText": self.background_image_alt_text,
            "callToAction": (
                self.call_to_action.to_dict()
                if isinstance(self.call_to_action, CallToAction)
                else self.call_to_action
            ),
            "style": self.style,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "BannerPayload":
        cta = data.get("callToAction")
        return cls(
            headline_text=data.get("headlineText", "Banner Headline"),
            background_image_url=data.get("backgroundImageUrl", ""),
            background_image_alt_text=data.get("backgroundImageAltText", ""),
            call_to_action=CallToAction.from_dict(cta) if isinstance(cta, Mapping) else (cta or CallToAction()),
            style=data.get("style", "default"),
        )

    def clone(self) -> "BannerPayload":
        cta = self.call_to_action
        return BannerPayload(
            headline_text=self.headline_text,
            background_image_url=self.background_image_url,
            background_image_alt_text=self.background_image_alt_text,
            call_to_action=cta.clone() if isinstance(cta, CallToAction) else cta,
            style=self.style,
        )

    def merged(self, changes: Mapping) -> "BannerPayload":
        # callToAction is merged one level deeper so partial CTA edits keep the rest.
        cta = changes.get("callToAction")
        if isinstance(cta, Mapping) and isinstance(self.call_to_action, CallToAction):
            changes = dict(changes, callToAction={**self.call_to_action.to_dict(), **cta})
        return super().merged(changes)
