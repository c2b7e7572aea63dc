"""
Schemas and list helpers for content keys that hold a JSON array of items
(FAQ entries, wedding party members, hotels, ...).

All helpers return new lists and leave their input untouched.
"""
import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .content_value import dumps_json, loads_json


@dataclass(frozen=True)
class ItemFieldSchema:
    key: str
    label: str
    type: str = "text"  # text | textarea | image | date | select | boolean
    required: bool = False
    placeholder: Optional[str] = None
    options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RepeatableItemConfig:
    id: str
    label: str
    singular_label: str
    fields: Tuple[ItemFieldSchema, ...]
    default_item: Dict[str, Any]

    def new_item(self) -> Dict[str, Any]:
        return copy.deepcopy(self.default_item)


def _field(key, label, type="text", required=False, placeholder=None):
    return ItemFieldSchema(key=key, label=label, type=type, required=required, placeholder=placeholder)


_PERSON_FIELDS = (
    _field("name", "Name", required=True),
    _field("role", "Role"),
    _field("image", "Photo", type="image"),
    _field("description", "Description", type="textarea"),
)

REPEATABLE_CONFIGS: Dict[str, RepeatableItemConfig] = {
    "faq_items": RepeatableItemConfig(
        id="faq_items",
        label="FAQ Items",
        singular_label="FAQ Item",
        fields=(
            _field("question", "Question", required=True, placeholder="Enter the question..."),
            _field("answer", "Answer", type="textarea", required=True, placeholder="Enter the answer..."),
        ),
        default_item={"question": "New Question", "answer": "Answer goes here..."},
    ),
    "bridesmaids_data": RepeatableItemConfig(
        id="bridesmaids_data",
        label="Bridesmaids",
        singular_label="Bridesmaid",
        fields=_PERSON_FIELDS,
        default_item={"name": "New Bridesmaid", "role": "Bridesmaid", "image": "", "description": ""},
    ),
    "groomsmen_data": RepeatableItemConfig(
        id="groomsmen_data",
        label="Groomsmen",
        singular_label="Groomsman",
        fields=_PERSON_FIELDS,
        default_item={"name": "New Groomsman", "role": "Groomsman", "image": "", "description": ""},
    ),
    "registry_items": RepeatableItemConfig(
        id="registry_items",
        label="Registry Items",
        singular_label="Registry Item",
        fields=(
            _field("name", "Store Name", required=True),
            _field("url", "Link URL", placeholder="https://..."),
            _field("description", "Description", type="textarea"),
            _field("image", "Logo", type="image"),
        ),
        default_item={"name": "New Registry", "url": "", "description": "", "image": ""},
    ),
    "travel_hotels": RepeatableItemConfig(
        id="travel_hotels",
        label="Hotels",
        singular_label="Hotel",
        fields=(
            _field("name", "Hotel Name", required=True),
            _field("address", "Address"),
            _field("phone", "Phone"),
            _field("url", "Website", placeholder="https://..."),
            _field("notes", "Notes", type="textarea"),
            _field("image", "Image", type="image"),
        ),
        default_item={"name": "New Hotel", "address": "", "phone": "", "url": "", "notes": "", "image": ""},
    ),
    "travel_tips": RepeatableItemConfig(
        id="travel_tips",
        label="Travel Tips",
        singular_label="Tip",
        fields=(
            _field("title", "Title", required=True),
            _field("content", "Content", type="textarea", required=True),
            _field("icon", "Icon"),
        ),
        default_item={"title": "New Tip", "content": "", "icon": ""},
    ),
    "timeline_items": RepeatableItemConfig(
        id="timeline_items",
        label="Timeline Events",
        singular_label="Timeline Event",
        fields=(
            _field("date", "Date", required=True),
            _field("title", "Title", required=True),
            _field("description", "Description", type="textarea"),
            _field("image", "Image", type="image"),
        ),
        default_item={"date": "", "title": "New Event", "description": "", "image": ""},
    ),
    "gallery_items": RepeatableItemConfig(
        id="gallery_items",
        label="Gallery Images",
        singular_label="Image",
        fields=(
            _field("src", "Image URL", type="image", required=True),
            _field("alt", "Alt Text"),
            _field("caption", "Caption"),
        ),
        default_item={"src": "", "alt": "", "caption": ""},
    ),
}


def get_repeatable_config(content_key: str) -> Optional[RepeatableItemConfig]:
    return REPEATABLE_CONFIGS.get(content_key)


def parse_array_content(content: str) -> List[Any]:
    """Lenient parse: anything that is not a JSON array yields an empty list."""
    if not content:
        return []
    try:
        parsed = loads_json(content)
    except ValueError:
        return []
    return parsed if isinstance(parsed, list) else []


def stringify_array_content(items: List[Any]) -> str:
    return dumps_json(items, indent=2)


def add_item(items: List[Any], new_item: Dict[str, Any], position: Optional[int] = None) -> List[Any]:
    result = list(items)
    if position is not None and 0 <= position <= len(items):
        result.insert(position, new_item)
    else:
        result.append(new_item)
    return result


def remove_item(items: List[Any], index: int) -> List[Any]:
    return [item for i, item in enumerate(items) if i != index]


def duplicate_item(items: List[Any], index: int) -> List[Any]:
    if index < 0 or index >= len(items):
        return list(items)
    result = list(items)
    result.insert(index + 1, copy.deepcopy(items[index]))
    return result


def update_item(items: List[Any], index: int, updates: Dict[str, Any]) -> List[Any]:
    return [
        {**item, **updates} if i == index else item
        for i, item in enumerate(items)
    ]


def reorder_items(items: List[Any], from_index: int, to_index: int) -> List[Any]:
    if not (0 <= from_index < len(items)) or to_index < 0:
        return list(items)
    result = list(items)
    moved = result.pop(from_index)
    result.insert(to_index, moved)
    return result


def validate_item(item: Dict[str, Any], schema: Tuple[ItemFieldSchema, ...]) -> Dict[str, str]:
    """Return a mapping of field key -> error message; empty when valid."""
    errors: Dict[str, str] = {}
    for field in schema:
        value = item.get(field.key)
        if field.required and (not value or (isinstance(value, str) and not value.strip())):
            errors[field.key] = f"{field.label} is required"
    return errors
