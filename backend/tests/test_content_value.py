"""
Tests of content value classification, validation and formatting.
"""
import json

import pytest

from wedding_cms.domain.content_value import (
    PlainText,
    Structured,
    format_json_text,
    parse_content_value,
    serialize_content_value,
    validate_json_text,
)
from wedding_cms.domain.exceptions import ValidationError


class TestValidateJsonText:
    def test_free_text_is_always_valid(self):
        assert validate_json_text("We're getting married!") == (True, None)
        assert validate_json_text("") == (True, None)
        assert validate_json_text("a { not json") == (True, None)

    def test_valid_structured_text(self):
        assert validate_json_text('[{"question": "Q", "answer": "A"}]') == (True, None)
        assert validate_json_text('  {"a": 1}  ') == (True, None)

    def test_invalid_structured_text(self):
        is_valid, message = validate_json_text("{invalid")
        assert is_valid is False
        assert message.startswith("Invalid JSON")

        is_valid, _ = validate_json_text("   [1, 2,")
        assert is_valid is False

    @pytest.mark.parametrize("raw", ["[NaN]", "{\"a\": Infinity}", "[-Infinity]"])
    def test_non_standard_numbers_are_invalid(self, raw):
        is_valid, message = validate_json_text(raw)
        assert is_valid is False
        assert "not a valid JSON value" in message


class TestParseContentValue:
    def test_plain_text(self):
        value = parse_content_value("Eddie & Yasmine")
        assert value == PlainText("Eddie & Yasmine")
        assert value.serialize() == "Eddie & Yasmine"

    def test_structured_text_keeps_original_form(self):
        raw = '[ {"name": "Ana"} ]'
        value = parse_content_value(raw)
        assert isinstance(value, Structured)
        assert value.data == [{"name": "Ana"}]
        assert value.serialize() == raw

    def test_non_string_values_are_structured(self):
        value = parse_content_value([{"question": "Q"}])
        assert isinstance(value, Structured)
        assert value.serialize() == '[{"question":"Q"}]'

    def test_invalid_structured_text_raises(self):
        with pytest.raises(ValidationError) as excinfo:
            parse_content_value("{invalid", key="faq_items")
        assert excinfo.value.key == "faq_items"
        assert "faq_items" in str(excinfo.value)

    def test_non_standard_numbers_raise(self):
        with pytest.raises(ValidationError):
            parse_content_value("[NaN]", key="faq_items")
        with pytest.raises(ValidationError) as excinfo:
            parse_content_value({"ratio": float("inf")}, key="faq_items")
        assert excinfo.value.key == "faq_items"


class TestSerializeContentValue:
    def test_strings_pass_through(self):
        assert serialize_content_value("[]") == "[]"
        assert serialize_content_value("hello") == "hello"

    def test_objects_become_json(self):
        assert json.loads(serialize_content_value({"a": [1, 2]})) == {"a": [1, 2]}
        assert serialize_content_value(None) == "null"
        assert serialize_content_value(3) == "3"

    def test_nan_is_never_written(self):
        with pytest.raises(ValidationError):
            serialize_content_value([float("nan")])


class TestFormatJsonText:
    @pytest.mark.parametrize("raw", [
        '[{"question":"Q","answer":"A"}]',
        '{"b": 1, "a": {"nested": [true, null, 1.5]}}',
        "[]",
    ])
    def test_round_trip(self, raw):
        formatted = format_json_text(raw)
        assert json.loads(formatted) == json.loads(raw)
        assert format_json_text(formatted) == formatted

    def test_plain_text_untouched(self):
        assert format_json_text("just words") == "just words"

    def test_invalid_json_raises(self):
        with pytest.raises(ValidationError):
            format_json_text("[1,")
        with pytest.raises(ValidationError):
            format_json_text("[Infinity]")
