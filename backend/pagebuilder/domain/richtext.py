"""
Rich-text payload shared by Text, Card descriptions and Accordion items.

Validation is structural only: HTML is checked against a tag allow-list and
structured JSON must carry a ``type`` plus ``content`` or ``children``.
Nothing here renders or sanitizes markup.
"""
import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from pagebuilder.domain.invariants.exceptions import ValidationFailed
from pagebuilder.utils.timestamps import coerce_ts, to_iso, utcnow


class RichTextFormat(str, Enum):
    HTML = "html"
    MARKDOWN = "markdown"
    JSON = "json"
    PLAIN = "plain"


ALLOWED_HTML_TAGS = frozenset({
    "p", "br", "strong", "em", "u", "a", "ul", "ol", "li",
    "h1", "h2", "h3", "h4", "h5", "h6", "div", "span",
})
FORBIDDEN_HTML_TAGS = ("script", "style")

DEFAULT_METADATA_VERSION = "1.0"

_TAG_RE = re.compile(r"</?([a-zA-Z][a-zA-Z0-9]*)\b[^<>]*>")


def _coerce_format(value: Any) -> Union[RichTextFormat, Any]:
    try:
        return RichTextFormat(value)
    except ValueError:
        return value


@dataclass
class RichTextMetadata:
    version: str = DEFAULT_METADATA_VERSION
    created_at: datetime = field(default_factory=utcnow)
    last_modified_at: datetime = field(default_factory=utcnow)

    def clone(self) -> "RichTextMetadata":
        return RichTextMetadata(
            version=self.version,
            created_at=self.created_at,
            last_modified_at=self.last_modified_at,
        )

    def validate(self) -> List[str]:
        errors = []
        if not isinstance(self.version, str) or not self.version:
            errors.append("metadata.version must be a non-empty string")
        if not isinstance(self.created_at, datetime):
            errors.append("metadata.createdAt must be an ISO-8601 timestamp")
        if not isinstance(self.last_modified_at, datetime):
            errors.append("metadata.lastModifiedAt must be an ISO-8601 timestamp")
        return errors

    def to_dict(self):
        return {
            "version": self.version,
            "createdAt": to_iso(self.created_at) if isinstance(self.created_at, datetime) else self.created_at,
            "lastModifiedAt": (
                to_iso(self.last_modified_at)
                if isinstance(self.last_modified_at, datetime)
                else self.last_modified_at
            ),
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> "RichTextMetadata":
        if data is not None and not isinstance(data, Mapping):
            raise ValidationFailed(["metadata must be an object"])
        data = data or {}
        now = utcnow()
        # "created" / "lastModified" are accepted from older stored payloads.
        return cls(
            version=data.get("version", DEFAULT_METADATA_VERSION),
            created_at=coerce_ts(data.get("createdAt", data.get("created")), now),
            last_modified_at=coerce_ts(data.get("lastModifiedAt", data.get("lastModified")), now),
        )


@dataclass
class RichText:
    format: RichTextFormat
    data: str
    metadata: RichTextMetadata = field(default_factory=RichTextMetadata)

    @classmethod
    def create(cls, data: str, format: RichTextFormat = RichTextFormat.HTML) -> "RichText":
        return cls(format=_coerce_format(format), data=data)

    @classmethod
    def from_value(cls, value: Any, default_data: str) -> "RichText":
        """
        Build rich text from whatever a client or template supplied.

        ``None`` yields the default HTML content, a bare string is taken as
        HTML data, and a mapping is read field by field.
        """
        if value is None:
            return cls.create(default_data)
        if isinstance(value, RichText):
            return value.clone()
        if isinstance(value, str):
            return cls.create(value)
        if isinstance(value, Mapping):
            return cls(
                format=_coerce_format(value.get("format", RichTextFormat.HTML.value)),
                data=value.get("data", default_data),
                metadata=RichTextMetadata.from_dict(value.get("metadata")),
            )
        # Unsupported shapes are kept as data so validation can reject them.
        return cls(format=RichTextFormat.HTML, data=value)

    @property
    def format_name(self) -> str:
        return self.format.value if isinstance(self.format, RichTextFormat) else self.format

    def clone(self) -> "RichText":
        return RichText(format=self.format, data=self.data, metadata=self.metadata.clone())

    def same_content(self, other: "RichText") -> bool:
        return self.format_name == other.format_name and self.data == other.data

    def rewritten(self, value: Any) -> "RichText":
        """
        Return a copy carrying the written content with ``lastModifiedAt``
        refreshed. ``createdAt`` and the metadata version are preserved.
        """
        if isinstance(value, RichText):
            fmt, data = value.format, value.data
        elif isinstance(value, Mapping):
            fmt = _coerce_format(value.get("format", self.format_name))
            data = value.get("data", self.data)
        else:
            fmt, data = self.format, value
        return RichText(
            format=fmt,
            data=data,
            metadata=RichTextMetadata(
                version=self.metadata.version,
                created_at=self.metadata.created_at,
                last_modified_at=utcnow(),
            ),
        )

    def validate(self) -> List[str]:
        errors = []
        if not isinstance(self.format, RichTextFormat):
            allowed = ", ".join(f.value for f in RichTextFormat)
            errors.append(f"format must be one of: {allowed}")

        if not isinstance(self.data, str) or not self.data:
            errors.append("data must be a non-empty string")
            return errors + self.metadata.validate()

        errors.extend(self.metadata.validate())

        if self.format is RichTextFormat.HTML:
            errors.extend(validate_html(self.data))
        elif self.format is RichTextFormat.JSON:
            errors.extend(validate_structured_json(self.data))
        return errors

    def to_dict(self):
        return {
            "format": self.format_name,
            "data": self.data,
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "RichText":
        return cls.from_value(data, "")


def validate_html(html: str) -> List[str]:
    errors = []
    found = [match.group(1).lower() for match in _TAG_RE.finditer(html)]

    forbidden = sorted({tag for tag in found if tag in FORBIDDEN_HTML_TAGS})
    if forbidden:
        errors.append(f"{', '.join(forbidden)} tags are not allowed")

    invalid = [tag for tag in found if tag not in ALLOWED_HTML_TAGS and tag not in FORBIDDEN_HTML_TAGS]
    if invalid:
        errors.append(f"Invalid HTML tags found: {', '.join(dict.fromkeys(invalid))}")
    return errors


def validate_structured_json(raw: str) -> List[str]:
    try:
        parsed = json.loads(raw)
    except ValueError:
        return ["Invalid JSON format"]

    if not isinstance(parsed, dict):
        return ["Structured JSON content must be an object"]

    errors = []
    if not parsed.get("type"):
        errors.append("Structured JSON must have a type field")
    if not parsed.get("content") and not parsed.get("children"):
        errors.append("Structured JSON must have content or children field")
    return errors
