"""Unit tests for MimeType parsing and compatibility"""

import pytest

from stream_codec.core.mime import (
    ALL,
    APPLICATION_JSON,
    APPLICATION_JSON_SUFFIX,
    APPLICATION_STREAM_JSON,
    InvalidMimeTypeError,
    MimeType,
    parse_mime_types,
)


class TestParse:
    """Test MimeType.parse"""

    def test_parse_simple(self):
        """Test parsing type and subtype"""
        mime = MimeType.parse("application/json")

        assert mime.type == "application"
        assert mime.subtype == "json"
        assert mime.parameters == ()

    def test_parse_is_case_insensitive(self):
        """Test type and subtype are lower-cased"""
        assert MimeType.parse("Application/JSON") == APPLICATION_JSON

    def test_parse_parameters(self):
        """Test parameters are parsed and quotes stripped"""
        mime = MimeType.parse('application/json; charset="UTF-8"')

        assert mime.get_parameter("charset") == "UTF-8"
        assert str(mime) == "application/json;charset=UTF-8"

    def test_parse_bare_wildcard(self):
        """Test a bare '*' means all mime types"""
        assert MimeType.parse("*") == ALL

    @pytest.mark.parametrize("value", ["", "   ", "json", "application/", "a/b/c", "*/json", "text/plain; q"])
    def test_parse_invalid(self, value):
        """Test malformed mime types are rejected"""
        with pytest.raises(InvalidMimeTypeError):
            MimeType.parse(value)

    def test_invalid_mime_type_is_value_error(self):
        """Test InvalidMimeTypeError can be caught as ValueError"""
        with pytest.raises(ValueError):
            MimeType.parse("nonsense")

    def test_of_passes_mime_types_through(self):
        """Test MimeType.of returns MimeType instances unchanged"""
        assert MimeType.of(APPLICATION_JSON) is APPLICATION_JSON

    def test_parse_mime_types_from_comma_list(self):
        """Test parsing a comma separated list"""
        result = parse_mime_types("application/json, application/*+json,")

        assert result == (APPLICATION_JSON, APPLICATION_JSON_SUFFIX)

    def test_parse_mime_types_none(self):
        """Test parsing None yields no mime types"""
        assert parse_mime_types(None) == ()


class TestWildcards:
    """Test wildcard and suffix properties"""

    def test_wildcard_subtype_with_suffix(self):
        """Test '*+json' counts as a wildcard subtype"""
        assert APPLICATION_JSON_SUFFIX.is_wildcard_subtype
        assert not APPLICATION_JSON_SUFFIX.is_concrete

    def test_subtype_suffix(self):
        """Test the suffix after '+'"""
        assert APPLICATION_STREAM_JSON.subtype_suffix == "json"
        assert APPLICATION_JSON.subtype_suffix is None

    def test_concrete(self):
        """Test concrete mime types"""
        assert APPLICATION_JSON.is_concrete
        assert not ALL.is_concrete


class TestCompatibility:
    """Test is_compatible_with and includes"""

    @pytest.mark.parametrize(
        "left, right, expected",
        [
            ("application/json", "application/json", True),
            ("application/json", "application/json;charset=utf-8", True),
            ("*/*", "text/plain", True),
            ("application/*", "application/stream+json", True),
            ("application/*+json", "application/json", True),
            ("application/*+json", "application/stream+json", True),
            ("application/stream+json", "application/*+json", True),
            ("application/json", "application/stream+json", False),
            ("application/stream+json", "application/json", False),
            ("application/*+json", "application/xml", False),
            ("text/plain", "application/json", False),
        ],
    )
    def test_is_compatible_with(self, left, right, expected):
        """Test symmetric compatibility rules"""
        assert MimeType.parse(left).is_compatible_with(MimeType.parse(right)) is expected
        assert MimeType.parse(right).is_compatible_with(MimeType.parse(left)) is expected

    def test_never_compatible_with_none(self):
        """Test None is never compatible"""
        assert not APPLICATION_JSON.is_compatible_with(None)
        assert not ALL.is_compatible_with(None)

    def test_includes_is_directional(self):
        """Test includes only goes from wider to narrower"""
        text_any = MimeType.parse("text/*")
        text_plain = MimeType.parse("text/plain")

        assert text_any.includes(text_plain)
        assert not text_plain.includes(text_any)

    def test_suffix_wildcard_includes_suffixed_subtype_only(self):
        """Test 'application/*+json' includes 'stream+json' but not plain 'json'"""
        assert APPLICATION_JSON_SUFFIX.includes(APPLICATION_STREAM_JSON)
        assert not APPLICATION_JSON_SUFFIX.includes(APPLICATION_JSON)

    def test_hashable_for_lookup(self):
        """Test equal mime types hash equally"""
        table = {APPLICATION_STREAM_JSON: b"\n"}

        assert table[MimeType.parse("application/stream+json")] == b"\n"
