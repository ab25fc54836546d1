"""
Unit tests for body format detection (core/detector.py).
"""

import pytest

from paramfinder.core.detector import (
    detect_body_format,
    format_from_content_type,
    is_json_body,
    is_urlencoded_body,
    is_xml_body,
)
from paramfinder.core.errors import UnsupportedFormatError
from paramfinder.core.models import BodyFormat


class TestDeclaredContentType:
    """The Content-Type header takes priority over the body."""

    @pytest.mark.parametrize("content_type,expected", [
        ("application/json", BodyFormat.JSON),
        ("application/json; charset=utf-8", BodyFormat.JSON),
        ("APPLICATION/JSON", BodyFormat.JSON),
        ("application/x-www-form-urlencoded", BodyFormat.URLENCODED),
        ("multipart/form-data; boundary=abc", BodyFormat.MULTIPART),
        ("application/xml", BodyFormat.XML),
        ("text/xml; charset=utf-8", BodyFormat.XML),
    ])
    def test_known_content_types(self, content_type, expected):
        assert format_from_content_type(content_type) == expected

    def test_header_wins_over_body_shape(self):
        """A JSON-looking body declared as form data is form data."""
        assert detect_body_format('{"a":1}', "application/x-www-form-urlencoded") == BodyFormat.URLENCODED

    def test_unknown_content_type_falls_back_to_sniffing(self):
        assert detect_body_format('{"a":1}', "text/plain") == BodyFormat.JSON

    def test_missing_content_type(self):
        assert format_from_content_type(None) is None
        assert format_from_content_type("") is None


class TestSniffing:
    """Structural detection when no header matches."""

    def test_json_object(self):
        assert detect_body_format('{"user": "alice"}') == BodyFormat.JSON

    def test_json_scalar(self):
        """Any strict JSON value counts, not just objects."""
        assert detect_body_format("123") == BodyFormat.JSON

    def test_empty_body_is_urlencoded(self):
        """Empty is not valid JSON but matches the form grammar."""
        assert detect_body_format("") == BodyFormat.URLENCODED

    def test_form_body(self):
        assert detect_body_format("a=1&b=2") == BodyFormat.URLENCODED

    def test_xml_declaration(self):
        body = '<?xml version="1.0"?><note>salt &amp; pepper</note>'
        assert detect_body_format(body) == BodyFormat.XML

    def test_xml_with_single_attribute_reads_as_form(self):
        """Any `=` with no `&` fits the form grammar, which is checked before XML."""
        assert detect_body_format('<?xml version="1.0"?><root/>') == BodyFormat.URLENCODED

    def test_bare_root_element(self):
        assert detect_body_format("<root/>") == BodyFormat.XML

    def test_xml_root_element(self):
        assert detect_body_format("  <user><id>1</id></user>  ") == BodyFormat.XML

    def test_unrecognised_body_raises(self):
        with pytest.raises(UnsupportedFormatError):
            detect_body_format("just some text")

    def test_doctype_only_is_not_xml(self):
        with pytest.raises(UnsupportedFormatError):
            detect_body_format("<!DOCTYPE html")


class TestPredicates:
    """Individual shape checks."""

    def test_json_rejects_nan(self):
        assert not is_json_body("NaN")
        assert not is_json_body('{"a": Infinity}')

    def test_json_rejects_empty(self):
        assert not is_json_body("")

    def test_urlencoded_accepts_trailing_ampersand(self):
        assert is_urlencoded_body("a=1&")

    def test_urlencoded_rejects_bare_word(self):
        assert not is_urlencoded_body("hello")

    def test_xml_needs_closing_bracket(self):
        assert not is_xml_body("<root")

    def test_xml_processing_instruction_without_declaration(self):
        assert not is_xml_body("<?php echo 1; ?>")
