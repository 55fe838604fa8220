"""Input validation utilities."""
import re
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

# type "/" subtype ["+" suffix] [";" parameters]
MIME_TYPE = re.compile(
    r"^\s*(?P<type>[a-z0-9!#$&^_.-]+)/(?P<subtype>[a-z0-9!#$&^_.+-]+?)"
    r"(?:\+(?P<suffix>[a-z0-9!#$&^_.-]+))?\s*(?:;.*)?$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class MimeType:
    type: str
    subtype: str
    suffix: Optional[str] = None


def parse_mime_type(value: str) -> Optional[MimeType]:
    """Parse a Content-Type header value, ignoring its parameters."""
    match = MIME_TYPE.match(value)
    if not match:
        return None
    suffix = match.group("suffix")
    return MimeType(
        type=match.group("type").lower(),
        subtype=match.group("subtype").lower(),
        suffix=suffix.lower() if suffix else None,
    )


def is_json_content_type(value: Optional[str]) -> bool:
    """Check for ``application/json`` or an ``application/*+json`` type."""
    if not value:
        return False
    mime = parse_mime_type(value)
    if mime is None or mime.type != "application":
        return False
    return mime.subtype == "json" or mime.suffix == "json"


def describe_validation_error(exc: ValidationError) -> str:
    """Render a pydantic validation error as a single line."""
    parts = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"]
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or str(exc)
