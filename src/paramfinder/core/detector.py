"""
Body format detection.

The declared Content-Type wins when it names a known format. Otherwise the
body itself is sniffed, JSON first, then URL-encoded, then XML. The order
matters: an empty body is both valid form data and not valid JSON, and
``a=1`` would never be mistaken for JSON.
"""

from __future__ import annotations

import json
import re
from typing import Any

import structlog

from paramfinder.core.errors import UnsupportedFormatError
from paramfinder.core.models import BodyFormat

logger = structlog.get_logger(__name__)

# Substring -> format, checked in order against the lowercased Content-Type
CONTENT_TYPE_FORMATS: tuple[tuple[str, BodyFormat], ...] = (
    ("application/json", BodyFormat.JSON),
    ("application/x-www-form-urlencoded", BodyFormat.URLENCODED),
    ("multipart/form-data", BodyFormat.MULTIPART),
    ("application/xml", BodyFormat.XML),
    ("text/xml", BodyFormat.XML),
)

URLENCODED_PATTERN = re.compile(r"(?:[^=&]*=[^=&]*&?)*")
XML_ROOT_PATTERN = re.compile(r"<[^?!]")


def _reject_constant(token: str) -> None:
    raise ValueError(f"Non-standard JSON constant: {token}")


def loads_strict(text: str) -> Any:
    """Parse JSON, rejecting the non-standard NaN and Infinity constants."""
    return json.loads(text, parse_constant=_reject_constant)


def is_json_body(body: str) -> bool:
    """Strict JSON check (NaN and Infinity are rejected)."""
    try:
        loads_strict(body)
    except ValueError:
        return False
    return True


def is_urlencoded_body(body: str) -> bool:
    """Check for ``key=value&key2=value2`` shape. Empty matches."""
    return URLENCODED_PATTERN.fullmatch(body) is not None


def is_xml_body(body: str) -> bool:
    """Check for an XML declaration or a root element."""
    trimmed = body.strip()
    starts_like_xml = trimmed.startswith("<?xml") or XML_ROOT_PATTERN.match(trimmed) is not None
    return starts_like_xml and ">" in trimmed


def format_from_content_type(content_type: str | None) -> BodyFormat | None:
    """Map a declared Content-Type to a body format, if it names one."""
    if not content_type:
        return None
    lowered = content_type.lower()
    for needle, body_format in CONTENT_TYPE_FORMATS:
        if needle in lowered:
            return body_format
    return None


def detect_body_format(body: str, content_type: str | None = None) -> BodyFormat:
    """
    Classify a request body.

    Args:
        body: Raw body text.
        content_type: Declared Content-Type header value, if any.

    Returns:
        The detected BodyFormat.

    Raises:
        UnsupportedFormatError: If neither the header nor the body match.
    """
    declared = format_from_content_type(content_type)
    if declared is not None:
        logger.debug("body_format_from_content_type", body_format=declared.value)
        return declared

    if is_json_body(body):
        detected = BodyFormat.JSON
    elif is_urlencoded_body(body):
        detected = BodyFormat.URLENCODED
    elif is_xml_body(body):
        detected = BodyFormat.XML
    else:
        raise UnsupportedFormatError(
            "Unsupported body type detected",
            metadata={"content_type": content_type, "body_length": len(body)},
        )

    logger.debug("body_format_sniffed", body_format=detected.value)
    return detected
