"""
Tests of the editable page registry and repeatable item helpers.
"""
import json

import pytest

from wedding_cms.domain.exceptions import ValidationError
from wedding_cms.domain.pages import (
    EDITABLE_PAGES,
    assert_known_page,
    get_page_config,
    get_page_content_keys,
    get_section_config,
)
from wedding_cms.domain import repeatable_items as items


class TestPageRegistry:
    def test_known_pages(self):
        assert [p.key for p in EDITABLE_PAGES] == [
            "home", "our-story", "wedding-party", "faq", "registry", "travel",
        ]

    def test_content_keys(self):
        assert get_page_content_keys("faq") == ["faq_title", "faq_subtitle", "faq_items"]
        assert get_page_content_keys("nowhere") == []

    def test_content_keys_are_unique_across_pages(self):
        keys = [key for page in EDITABLE_PAGES for key in page.content_keys]
        assert len(keys) == len(set(keys))

    def test_section_lookup(self):
        section = get_section_config("wedding-party", "bridesmaids")
        assert section.content_keys == ("bridesmaids_data",)
        assert section.repeatable_key == "bridesmaids_data"
        assert get_section_config("wedding-party", "nope") is None
        assert get_section_config("nowhere", "hero") is None

    def test_assert_known_page(self):
        assert assert_known_page("home") is get_page_config("home")
        with pytest.raises(ValidationError):
            assert_known_page("honeymoon")

    def test_array_sections_have_item_schemas(self):
        for page in EDITABLE_PAGES:
            for section in page.sections:
                if section.repeatable_key:
                    assert items.get_repeatable_config(section.repeatable_key) is not None


class TestRepeatableItems:
    def test_parse_array_content_is_lenient(self):
        assert items.parse_array_content("") == []
        assert items.parse_array_content("{not json") == []
        assert items.parse_array_content('{"a": 1}') == []
        assert items.parse_array_content('[1, 2]') == [1, 2]

    def test_stringify(self):
        text = items.stringify_array_content([{"name": "Ana"}])
        assert json.loads(text) == [{"name": "Ana"}]

    def test_add_item(self):
        base = [{"n": 1}, {"n": 2}]
        assert items.add_item(base, {"n": 0}, position=0) == [{"n": 0}, {"n": 1}, {"n": 2}]
        assert items.add_item(base, {"n": 3}) == [{"n": 1}, {"n": 2}, {"n": 3}]
        assert items.add_item(base, {"n": 9}, position=10)[-1] == {"n": 9}
        assert base == [{"n": 1}, {"n": 2}]

    def test_remove_and_duplicate(self):
        base = [{"n": 1}, {"n": 2}]
        assert items.remove_item(base, 0) == [{"n": 2}]

        duplicated = items.duplicate_item(base, 0)
        assert duplicated == [{"n": 1}, {"n": 1}, {"n": 2}]
        assert duplicated[1] is not base[0]
        assert items.duplicate_item(base, 5) == base

    def test_update_and_reorder(self):
        base = [{"n": 1, "x": "a"}, {"n": 2}]
        assert items.update_item(base, 0, {"x": "b"}) == [{"n": 1, "x": "b"}, {"n": 2}]
        assert items.reorder_items(["a", "b", "c"], 0, 2) == ["b", "c", "a"]

    def test_reorder_out_of_range_is_a_no_op(self):
        base = ["a", "b"]
        assert items.reorder_items(base, 5, 0) == base
        assert items.reorder_items(base, -1, 0) == base
        assert items.reorder_items(base, 0, -3) == base
        assert items.reorder_items(base, 0, 9) == ["b", "a"]

    def test_parse_array_content_rejects_non_standard_numbers(self):
        assert items.parse_array_content("[NaN]") == []

    def test_validate_item(self):
        config = items.get_repeatable_config("faq_items")
        assert items.validate_item(config.new_item(), config.fields) == {}
        assert items.validate_item({"question": "  ", "answer": "A"}, config.fields) == {
            "question": "Question is required",
        }

    def test_new_item_is_a_copy(self):
        config = items.get_repeatable_config("travel_hotels")
        item = config.new_item()
        item["name"] = "Changed"
        assert config.default_item["name"] == "New Hotel"
