"""
Body encoders, one per supported body format.
"""

from paramfinder.encoders.base import BodyEncoder, EncodedBody
from paramfinder.encoders.json_body import JSON_CONTENT_TYPE, JSONBodyEncoder
from paramfinder.encoders.multipart import MultipartBodyEncoder, extract_boundary
from paramfinder.encoders.registry import ENCODERS, get_encoder
from paramfinder.encoders.urlencoded import (
    FORM_CONTENT_TYPE,
    URLEncodedBodyEncoder,
    append_pairs,
    encode_component,
    encode_pairs,
)

__all__ = [
    "BodyEncoder",
    "EncodedBody",
    "ENCODERS",
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "JSONBodyEncoder",
    "MultipartBodyEncoder",
    "URLEncodedBodyEncoder",
    "append_pairs",
    "encode_component",
    "encode_pairs",
    "extract_boundary",
    "get_encoder",
]
