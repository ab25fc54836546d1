"""
Unit tests for the multipart/form-data body encoder.
"""

import pytest

from paramfinder.core.errors import (
    MalformedMultipartBodyError,
    MissingBoundaryError,
    MissingContentTypeError,
)
from paramfinder.core.models import Parameter
from paramfinder.encoders.multipart import MultipartBodyEncoder, extract_boundary


@pytest.fixture
def encoder():
    return MultipartBodyEncoder()


class TestMultipartEncoding:

    def test_part_inserted_before_closing_boundary(self, encoder):
        body = '--X\r\nContent-Disposition: form-data; name="a"\r\n\r\n1\r\n--X--'
        result = encoder.encode(body, [Parameter("p", "v")], content_type="multipart/form-data; boundary=X")

        assert result.body == (
            '--X\r\nContent-Disposition: form-data; name="a"\r\n\r\n1\r\n'
            '--X\r\nContent-Disposition: form-data; name="p"\r\n\r\nv\r\n'
            "--X--"
        )
        assert result.body.endswith("--X--")
        assert result.boundary == "X"

    def test_content_type_preserved_verbatim(self, encoder):
        content_type = "multipart/form-data; boundary=X"
        result = encoder.encode("--X--", [Parameter("p", "v")], content_type=content_type)

        assert result.content_type == content_type

    def test_crlf_added_when_missing(self, encoder):
        result = encoder.encode("--X--", [Parameter("p", "v")], content_type="multipart/form-data; boundary=X")

        assert result.body == '\r\n--X\r\nContent-Disposition: form-data; name="p"\r\n\r\nv\r\n--X--'

    def test_trailing_data_after_closing_boundary_dropped(self, encoder, multipart_request):
        content_type = multipart_request.get_header("Content-Type")
        result = encoder.encode(multipart_request.body, [Parameter("debug", "1")], content_type=content_type)

        boundary = extract_boundary(content_type)
        assert result.body.endswith(f"--{boundary}--")
        assert result.body.count(f"--{boundary}\r\n") == 3
        assert 'name="debug"\r\n\r\n1\r\n' in result.body

    def test_parts_in_parameter_order(self, encoder):
        params = [Parameter("first", "1"), Parameter("second", "2")]
        result = encoder.encode("--X--", params, content_type="multipart/form-data; boundary=X")

        assert result.body.index('name="first"') < result.body.index('name="second"')

    def test_missing_content_type(self, encoder):
        with pytest.raises(MissingContentTypeError):
            encoder.encode("--X--", [Parameter("p", "v")])

    def test_missing_boundary(self, encoder):
        with pytest.raises(MissingBoundaryError):
            encoder.encode("--X--", [Parameter("p", "v")], content_type="multipart/form-data")

    def test_missing_closing_boundary(self, encoder):
        with pytest.raises(MalformedMultipartBodyError):
            encoder.encode("--X\r\n", [Parameter("p", "v")], content_type="multipart/form-data; boundary=X")


class TestBoundaryExtraction:

    def test_plain(self):
        assert extract_boundary("multipart/form-data; boundary=abc123") == "abc123"

    def test_quoted(self):
        assert extract_boundary('multipart/form-data; boundary="a b"') == "a b"

    def test_followed_by_other_directive(self):
        assert extract_boundary("multipart/form-data; boundary=abc; charset=utf-8") == "abc"

    def test_case_insensitive_directive(self):
        assert extract_boundary("multipart/form-data; Boundary=abc") == "abc"
