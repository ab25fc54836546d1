"""
URL-encoded body encoder, plus the percent-encoding shared with query
string injection.
"""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import quote

from paramfinder.core.models import BodyFormat, Parameter
from paramfinder.encoders.base import BodyEncoder, EncodedBody

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Same unreserved set as JavaScript's encodeURIComponent
_COMPONENT_SAFE = "!*'()"


def encode_component(value: str) -> str:
    """Percent-encode a single name or value."""
    return quote(value, safe=_COMPONENT_SAFE)


def encode_pairs(parameters: Sequence[Parameter]) -> str:
    """Encode parameters as ``name=value`` pairs joined with ``&``."""
    return "&".join(
        f"{encode_component(p.name)}={encode_component(p.value)}" for p in parameters
    )


def append_pairs(existing: str, parameters: Sequence[Parameter]) -> str:
    """Append encoded pairs to an existing ``&``-separated string."""
    encoded = encode_pairs(parameters)
    if not existing:
        return encoded
    return f"{existing}&{encoded}"


class URLEncodedBodyEncoder(BodyEncoder):
    """Append parameters to an application/x-www-form-urlencoded body."""

    body_format = BodyFormat.URLENCODED

    def encode(
        self,
        body: str,
        parameters: Sequence[Parameter],
        *,
        content_type: str | None = None,
        json_path: str | None = None,
    ) -> EncodedBody:
        return EncodedBody(
            body=append_pairs(body, parameters),
            content_type=FORM_CONTENT_TYPE,
        )
