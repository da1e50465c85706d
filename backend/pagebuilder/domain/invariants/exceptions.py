from typing import Iterable, List, Optional


class InvariantViolation(Exception):
    """Base class for every failure the page-building core reports."""

    code = "INVARIANT_VIOLATION"

    def __init__(self, message: str, errors: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors: List[str] = list(errors) if errors else [message]

    def to_dict(self):
        return {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "errors": list(self.errors),
        }


class NotFound(InvariantViolation):
    code = "NOT_FOUND"


class PageNotFound(NotFound):
    code = "PAGE_NOT_FOUND"

    def __init__(self, page_id: str):
        super().__init__(f"Page '{page_id}' not found")
        self.page_id = page_id


class VersionNotFound(NotFound):
    code = "VERSION_NOT_FOUND"

    def __init__(self, version_id: str, page_id: Optional[str] = None):
        message = f"Version '{version_id}' not found"
        if page_id:
            message += f" for page '{page_id}'"
        super().__init__(message)
        self.version_id = version_id
        self.page_id = page_id


class ComponentNotFound(NotFound):
    code = "COMPONENT_NOT_FOUND"

    def __init__(self, component_id: str):
        super().__init__(f"Component with ID '{component_id}' not found")
        self.component_id = component_id


class ItemNotFound(NotFound):
    """An accordion item or a link-group link is absent."""

    code = "ITEM_NOT_FOUND"

    def __init__(self, item_id: str, label: str = "Item"):
        super().__init__(f"{label} with ID '{item_id}' not found")
        self.item_id = item_id


class ValidationFailed(InvariantViolation):
    """Payload or invariant violation. Carries every violated rule."""

    code = "VALIDATION_FAILED"

    def __init__(self, errors: Iterable[str], message: str = "Validation failed"):
        errors = list(errors)
        super().__init__(f"{message}: {', '.join(errors)}" if errors else message, errors)


class DuplicateKey(InvariantViolation):
    code = "DUPLICATE_KEY"

    def __init__(self, field: str, value, scope: str = "Component"):
        super().__init__(f"{scope} with {field} {value!r} already exists")
        self.field = field
        self.value = value


class MinimumCardinalityViolation(InvariantViolation):
    code = "MINIMUM_CARDINALITY"


class ConcurrentModification(InvariantViolation):
    code = "CONCURRENT_MODIFICATION"
