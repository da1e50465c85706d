from typing import Any, List
from urllib.parse import urlparse

MAX_TEXT_LENGTH = 255
MAX_URL_LENGTH = 2048
LINK_TARGETS = ("_self", "_blank")


def is_valid_url(value: str) -> bool:
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def check_text(
    errors: List[str],
    label: str,
    value: Any,
    *,
    max_length: int = MAX_TEXT_LENGTH,
    required: bool = False,
) -> None:
    if not isinstance(value, str):
        errors.append(f"{label} must be a string")
        return
    if required and not value.strip():
        errors.append(f"{label} cannot be empty")
    if len(value) > max_length:
        errors.append(f"{label} must not exceed {max_length} characters")


def check_url(errors: List[str], label: str, value: Any, *, required: bool = False) -> None:
    if not isinstance(value, str):
        errors.append(f"{label} must be a string")
        return
    if not value:
        if required:
            errors.append(f"{label} cannot be empty")
        return
    if len(value) > MAX_URL_LENGTH:
        errors.append(f"{label} must not exceed {MAX_URL_LENGTH} characters")
    elif not is_valid_url(value):
        errors.append(f"{label} must be a valid URL")


def check_target(errors: List[str], label: str, value: Any) -> None:
    if value not in LINK_TARGETS:
        errors.append(f'{label} must be either "_self" or "_blank"')


def check_order(errors: List[str], label: str, value: Any) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        errors.append(f"{label} must be a non-negative integer")


def check_unique(errors: List[str], label: str, values) -> None:
    seen = set()
    for value in values:
        try:
            duplicate = value in seen
        except TypeError:
            # unhashable values are already reported by the type checks
            continue
        if duplicate:
            errors.append(f"Duplicate {label} found: {value!r}")
        else:
            seen.add(value)
