"""
Editable pages of the wedding site and the content keys each one owns.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .exceptions import ValidationError

FIELD_TYPES = {"text", "textarea", "json", "image", "array"}


@dataclass(frozen=True)
class FieldConfig:
    key: str
    label: str
    type: str = "text"
    placeholder: Optional[str] = None
    repeatable_key: Optional[str] = None


@dataclass(frozen=True)
class SectionConfig:
    id: str
    label: str
    content_keys: Tuple[str, ...]
    fields: Tuple[FieldConfig, ...] = ()
    repeatable_key: Optional[str] = None


@dataclass(frozen=True)
class PageConfig:
    key: str
    label: str
    path: str
    sections: Tuple[SectionConfig, ...] = field(default_factory=tuple)

    @property
    def content_keys(self) -> List[str]:
        return [key for section in self.sections for key in section.content_keys]


def _text(key, label, placeholder=None):
    return FieldConfig(key=key, label=label, type="text", placeholder=placeholder)


def _textarea(key, label, placeholder=None):
    return FieldConfig(key=key, label=label, type="textarea", placeholder=placeholder)


def _array_section(section_id, label, key):
    return SectionConfig(
        id=section_id,
        label=label,
        content_keys=(key,),
        fields=(FieldConfig(key=key, label=label, type="array", repeatable_key=key),),
        repeatable_key=key,
    )


EDITABLE_PAGES: Tuple[PageConfig, ...] = (
    PageConfig(
        key="home",
        label="Home",
        path="/",
        sections=(
            SectionConfig(
                id="hero",
                label="Hero Section",
                content_keys=("home_announcement", "home_names", "home_date", "home_location"),
                fields=(
                    _text("home_announcement", "Announcement", "We're Getting Married"),
                    _text("home_names", "Names"),
                    _text("home_date", "Wedding Date"),
                    _text("home_location", "Location"),
                ),
            ),
            SectionConfig(
                id="quick-info",
                label="Quick Info",
                content_keys=("home_quick_title", "home_quick_subtitle"),
                fields=(
                    _text("home_quick_title", "Title", "Join Us for Our Celebration"),
                    _textarea("home_quick_subtitle", "Subtitle"),
                ),
            ),
        ),
    ),
    PageConfig(
        key="our-story",
        label="Our Story",
        path="/our-story",
        sections=(
            SectionConfig(
                id="story-header",
                label="Story Header",
                content_keys=("story_title", "story_subtitle"),
                fields=(
                    _text("story_title", "Title", "Our Story"),
                    _textarea("story_subtitle", "Subtitle", "How we met..."),
                ),
            ),
            SectionConfig(
                id="story-content",
                label="Story Content",
                content_keys=("story_quote",),
                fields=(_textarea("story_quote", "Quote"),),
            ),
        ),
    ),
    PageConfig(
        key="wedding-party",
        label="Wedding Party",
        path="/wedding-party",
        sections=(
            SectionConfig(
                id="party-header",
                label="Page Header",
                content_keys=("party_title", "party_subtitle"),
                fields=(
                    _text("party_title", "Title", "Wedding Party"),
                    _textarea("party_subtitle", "Subtitle"),
                ),
            ),
            _array_section("bridesmaids", "Bridesmaids", "bridesmaids_data"),
            _array_section("groomsmen", "Groomsmen", "groomsmen_data"),
        ),
    ),
    PageConfig(
        key="faq",
        label="FAQ",
        path="/faq",
        sections=(
            SectionConfig(
                id="faq-header",
                label="FAQ Header",
                content_keys=("faq_title", "faq_subtitle"),
                fields=(
                    _text("faq_title", "Title", "Frequently Asked Questions"),
                    _textarea("faq_subtitle", "Subtitle"),
                ),
            ),
            _array_section("faq-items", "FAQ Items", "faq_items"),
        ),
    ),
    PageConfig(
        key="registry",
        label="Registry",
        path="/registry",
        sections=(
            SectionConfig(
                id="registry-header",
                label="Registry Header",
                content_keys=("registry_title", "registry_subtitle", "registry_message"),
                fields=(
                    _text("registry_title", "Title", "Registry"),
                    _textarea("registry_subtitle", "Subtitle"),
                    _textarea("registry_message", "Message"),
                ),
            ),
            _array_section("registry-items", "Registry Items", "registry_items"),
        ),
    ),
    PageConfig(
        key="travel",
        label="Travel",
        path="/travel",
        sections=(
            SectionConfig(
                id="travel-header",
                label="Travel Header",
                content_keys=("travel_title", "travel_subtitle"),
                fields=(
                    _text("travel_title", "Title", "Travel & Accommodations"),
                    _textarea("travel_subtitle", "Subtitle"),
                ),
            ),
            _array_section("travel-hotels", "Hotels", "travel_hotels"),
            _array_section("travel-tips", "Travel Tips", "travel_tips"),
        ),
    ),
)

_PAGES_BY_KEY = {page.key: page for page in EDITABLE_PAGES}


def get_page_config(page_key: str) -> Optional[PageConfig]:
    return _PAGES_BY_KEY.get(page_key)


def get_page_content_keys(page_key: str) -> List[str]:
    page = get_page_config(page_key)
    if not page:
        return []
    return page.content_keys


def get_section_config(page_key: str, section_id: str) -> Optional[SectionConfig]:
    page = get_page_config(page_key)
    if not page:
        return None
    return next((s for s in page.sections if s.id == section_id), None)


def assert_known_page(page_key: str) -> PageConfig:
    page = get_page_config(page_key)
    if page is None:
        raise ValidationError(f"Unknown editable page: {page_key!r}")
    return page
