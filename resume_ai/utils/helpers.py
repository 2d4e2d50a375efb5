"""Helper utilities shared by the pipeline stages."""

import re
from typing import Iterable, List

from pydantic import AnyUrl, TypeAdapter, ValidationError

_URL_ADAPTER = TypeAdapter(AnyUrl)

_SENSITIVE_PATTERNS = (
    (re.compile(r"\b\d{3}-\d{2}-\d{4}\b"), "[SSN]"),
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[EMAIL]"),
    (re.compile(r"\b\d{16}\b"), "[CARD]"),
    (re.compile(r"(?<!\d)(?:\+\d{1,3}[\s-]?)?\(?\d{3}\)?[\s-]?\d{3}[\s-]?\d{2}[\s-]?\d{2}\b"), "[PHONE]"),
)

_LIST_SEPARATORS = re.compile(r"[,;|]")
_LEADING_BULLET = re.compile(r"^[\s\-*•·–—]+")


def sanitize_for_log(text: str, max_length: int = 200) -> str:
    """Mask e-mails, phones and ID/card-like numbers, then truncate for log output."""
    if not text:
        return ""
    sanitized = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    sanitized = " ".join(sanitized.split())
    if len(sanitized) > max_length:
        return sanitized[:max_length] + "..."
    return sanitized


def unique_preserving_order(items: Iterable[str]) -> List[str]:
    """Drop empty strings and case-insensitive duplicates, keeping first occurrence."""
    seen: set[str] = set()
    result: List[str] = []
    for item in items:
        value = (item or "").strip()
        key = value.lower()
        if value and key not in seen:
            seen.add(key)
            result.append(value)
    return result


def split_list_items(text: str, separators: "re.Pattern[str]" = _LIST_SEPARATORS) -> List[str]:
    """Split a captured span into trimmed items, stripping bullets and trailing dots."""
    if not text:
        return []
    items = []
    for part in separators.split(text):
        part = _LEADING_BULLET.sub("", part).strip().rstrip(".").strip()
        if part:
            items.append(part)
    return items


def is_valid_url(url: str) -> bool:
    """True if url parses as an absolute URL with a scheme."""
    if not url or not url.strip():
        return False
    try:
        _URL_ADAPTER.validate_python(url.strip())
    except ValidationError:
        return False
    return True
