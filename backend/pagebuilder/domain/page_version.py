import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from pagebuilder.domain.components import Component
from pagebuilder.domain.invariants.exceptions import ValidationFailed
from pagebuilder.utils.order import by_order
from pagebuilder.utils.timestamps import coerce_ts, to_iso, utcnow

DEFAULT_AUTHOR_ID = "system"


@dataclass(frozen=True)
class PageVersion:
    """
    Immutable, numbered snapshot of a page's components.

    The snapshot is held as a tuple of private copies; ``copy_components``
    hands out fresh copies so nothing outside can reach the stored ones.
    """

    page_id: str
    version_number: int
    components: Tuple[Component, ...] = ()
    author_id: str = DEFAULT_AUTHOR_ID
    version_name: Optional[str] = None
    change_description: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        errors = []
        if not isinstance(self.page_id, str) or not self.page_id:
            errors.append("pageId must be a non-empty string")
        number = self.version_number
        if not isinstance(number, int) or isinstance(number, bool) or number < 1:
            errors.append("versionNumber must be a positive integer")
        if not isinstance(self.timestamp, datetime):
            errors.append("timestamp must be an ISO-8601 timestamp")
        if errors:
            raise ValidationFailed(errors, "Invalid page version")

        object.__setattr__(self, "components", tuple(c.clone() for c in self.components))

    @classmethod
    def snapshot(
        cls,
        page,
        *,
        version_number: int,
        author_id: Optional[str] = None,
        version_name: Optional[str] = None,
        change_description: Optional[str] = None,
    ) -> "PageVersion":
        return cls(
            page_id=page.id,
            version_number=version_number,
            components=tuple(page.get_ordered_components()),
            author_id=author_id or DEFAULT_AUTHOR_ID,
            version_name=version_name,
            change_description=change_description,
        )

    def copy_components(self) -> List[Component]:
        return [c.clone() for c in by_order(self.components)]

    @property
    def component_count(self) -> int:
        return len(self.components)

    @property
    def display_name(self) -> str:
        return self.version_name or f"Version {self.version_number}"

    def metadata(self):
        """Everything but the components themselves."""
        return {
            "id": self.id,
            "pageId": self.page_id,
            "versionNumber": self.version_number,
            "timestamp": to_iso(self.timestamp),
            "authorId": self.author_id,
            "versionName": self.version_name,
            "changeDescription": self.change_description,
            "componentCount": self.component_count,
        }

    def summary(self):
        return {
            "id": self.id,
            "versionNumber": self.version_number,
            "versionName": self.display_name,
            "timestamp": to_iso(self.timestamp),
            "authorId": self.author_id,
            "componentCount": self.component_count,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "pageId": self.page_id,
            "versionNumber": self.version_number,
            "timestamp": to_iso(self.timestamp),
            "authorId": self.author_id,
            "versionName": self.version_name,
            "changeDescription": self.change_description,
            "components": [c.to_dict() for c in by_order(self.components)],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PageVersion":
        return cls(
            id=data.get("id") or str(uuid.uuid4()),
            page_id=data.get("pageId"),
            version_number=data.get("versionNumber"),
            timestamp=coerce_ts(data.get("timestamp")),
            author_id=data.get("authorId") or DEFAULT_AUTHOR_ID,
            version_name=data.get("versionName"),
            change_description=data.get("changeDescription"),
            components=tuple(Component.from_dict(c) for c in data.get("components") or []),
        )


def newest_first(versions: Iterable[PageVersion]) -> List[PageVersion]:
    return sorted(versions, key=lambda v: v.version_number, reverse=True)


def version_stats(versions: Iterable[PageVersion]):
    ordered = newest_first(versions)
    return {
        "totalVersions": len(ordered),
        "latestVersion": ordered[0].version_number if ordered else None,
        "oldestVersion": ordered[-1].version_number if ordered else None,
        "versionHistory": [v.summary() for v in ordered],
    }
