# wedding_cms/application/editor/controller.py
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from flask import current_app

from wedding_cms.domain.content_value import format_json_text, serialize_content_value, validate_json_text
from wedding_cms.domain.exceptions import CmsError, PublishFanoutError
from wedding_cms.domain.pages import assert_known_page, get_page_content_keys, get_section_config
from wedding_cms.domain.repeatable_items import (
    get_repeatable_config,
    parse_array_content,
    stringify_array_content,
    validate_item,
)
from wedding_cms.application.content.store import ContentStore
from wedding_cms.application.drafts.manager import DraftManager
from wedding_cms.application.session import AdminSession, actor_id


DESTRUCTIVE = "destructive"


@dataclass
class ContentEdit:
    key: str
    value: str
    is_valid: bool = True
    error_message: Optional[str] = None

    @classmethod
    def of(cls, key: str, value: str) -> "ContentEdit":
        is_valid, error_message = validate_json_text(value)
        return cls(key=key, value=value, is_valid=is_valid, error_message=error_message)


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "default"


Notifier = Callable[[Notification], None]


class VisualEditorController:
    """
    Admin-side editing session for one page.

    Holds a buffer of unsaved field edits and drives save / publish /
    restore through the DraftManager. A failed backend call never clears
    the buffer.
    """

    def __init__(
        self,
        page_key: str,
        *,
        draft_manager: DraftManager,
        content_store: ContentStore,
        session: Optional[AdminSession] = None,
        notify: Optional[Notifier] = None,
    ):
        assert_known_page(page_key)
        self.page_key = page_key
        self.draft_manager = draft_manager
        self.content_store = content_store
        self.session = session
        self._notify_fn = notify

        self.edits: Dict[str, ContentEdit] = {}
        self.live: Dict[str, str] = {}
        self.notifications: List[Notification] = []
        self.is_saving = False

    # ------------------------
    # Loading
    # ------------------------
    @property
    def content_keys(self) -> List[str]:
        return get_page_content_keys(self.page_key)

    def load(self) -> bool:
        """Fill the buffer with the live values of the page's content keys."""
        if not self._refresh_live():
            return False
        self.edits = {key: ContentEdit.of(key, self.live.get(key, "")) for key in self.content_keys}
        return True

    def select_page(self, page_key: str) -> bool:
        assert_known_page(page_key)
        self.page_key = page_key
        self.edits = {}
        return self.load()

    def _refresh_live(self) -> bool:
        keys = set(self.content_keys) | set(self.edits)
        try:
            items = self.content_store.get_many(sorted(keys))
        except CmsError as exc:
            self._fail("Error loading content", exc)
            return False
        self.live = {key: item.value or "" for key, item in items.items()}
        return True

    # ------------------------
    # Buffer
    # ------------------------
    def on_edit_change(self, key: str, value: str) -> ContentEdit:
        edit = ContentEdit.of(key, value)
        self.edits[key] = edit
        return edit

    def has_unsaved_changes(self) -> bool:
        return any(edit.value != self.live.get(key, "") for key, edit in self.edits.items())

    def all_edits_valid(self) -> bool:
        return all(edit.is_valid for edit in self.edits.values())

    def invalid_fields(self) -> Dict[str, str]:
        return {
            key: edit.error_message or "Invalid value"
            for key, edit in self.edits.items()
            if not edit.is_valid
        }

    def content_map(self) -> Dict[str, str]:
        return {key: edit.value for key, edit in self.edits.items()}

    def format_field(self, key: str) -> bool:
        """Pretty-print a structured field in place. Returns False if it is invalid."""
        edit = self.edits.get(key)
        if edit is None or not edit.is_valid:
            return False
        self.on_edit_change(key, format_json_text(edit.value))
        return True

    def reset_section(self, section_id: str) -> List[str]:
        """Discard local edits for one section, restoring the live values."""
        section = get_section_config(self.page_key, section_id)
        if section is None:
            return []

        reset = []
        for key in section.content_keys:
            if key in self.live:
                self.edits[key] = ContentEdit.of(key, self.live[key])
                reset.append(key)

        self._notify("Section reset", "Content restored to published version.")
        return reset

    # ------------------------
    # Repeatable items
    # ------------------------
    def items(self, key: str) -> List[Any]:
        edit = self.edits.get(key)
        return parse_array_content(edit.value if edit else "")

    def set_items(self, key: str, items: List[Any]) -> ContentEdit:
        return self.on_edit_change(key, stringify_array_content(items))

    def item_errors(self, key: str) -> Dict[int, Dict[str, str]]:
        config = get_repeatable_config(key)
        if config is None:
            return {}

        errors = {}
        for index, item in enumerate(self.items(key)):
            if not isinstance(item, dict):
                errors[index] = {"": f"{config.singular_label} must be an object"}
                continue
            item_errors = validate_item(item, config.fields)
            if item_errors:
                errors[index] = item_errors
        return errors

    # ------------------------
    # Actions
    # ------------------------
    def save_draft(self):
        if not self.all_edits_valid():
            self._notify("Invalid content", "Please fix JSON errors before saving.", DESTRUCTIVE)
            return None

        self.is_saving = True
        try:
            draft = self.draft_manager.create_draft(
                self.page_key,
                self.content_map(),
                notes="Draft saved from visual editor",
                created_by=actor_id(self.session),
            )
        except CmsError as exc:
            self._fail("Error saving draft", exc)
            return None
        finally:
            self.is_saving = False

        self._notify("Draft saved!", f"Version {draft.version} created.")
        return draft

    def publish(self):
        """Publishing always goes through a fresh draft of the current buffer."""
        if not self.all_edits_valid():
            self._notify("Invalid content", "Please fix JSON errors before publishing.", DESTRUCTIVE)
            return None

        self.is_saving = True
        try:
            draft = self.draft_manager.create_draft(
                self.page_key,
                self.content_map(),
                notes="Published from visual editor",
                created_by=actor_id(self.session),
            )
            draft = self.draft_manager.publish_draft(draft.id, self.page_key)
        except PublishFanoutError as exc:
            self._refresh_live()
            self._fail("Publish incomplete", exc, f"Not applied: {', '.join(exc.failed)}. Please publish again.")
            return None
        except CmsError as exc:
            self._fail("Error publishing", exc)
            return None
        finally:
            self.is_saving = False

        self._refresh_live()
        self._notify("Published!", f"Version {draft.version} is now live on the website.")
        return draft

    def restore(self, draft_id: str, version: int):
        try:
            restored = self.draft_manager.restore_version(
                draft_id,
                self.page_key,
                created_by=actor_id(self.session),
            )
        except CmsError as exc:
            self._fail("Error restoring version", exc)
            return None

        self.edits = {
            key: ContentEdit.of(key, serialize_content_value(value))
            for key, value in (restored.content or {}).items()
        }
        self._notify(
            "Version restored!",
            f"Content restored from version {version} as version {restored.version}.",
        )
        return restored

    def revert(self) -> bool:
        if not self.load():
            return False
        self._notify("Changes reverted", "Content reset to last published version.")
        return True

    # ------------------------
    # Notifications
    # ------------------------
    def _notify(self, title: str, description: str, variant: str = "default") -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.notifications.append(notification)
        if self._notify_fn:
            self._notify_fn(notification)
        return notification

    def _fail(self, title: str, exc: Exception, description: Optional[str] = None):
        current_app.logger.warning("%s for page %s: %s", title, self.page_key, exc)
        self._notify(title, description or "Please try again.", DESTRUCTIVE)
