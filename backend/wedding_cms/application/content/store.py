# wedding_cms/application/content/store.py
from typing import Any, Dict, Iterable, List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from wedding_cms.extensions import db
from wedding_cms.models.content_item import ContentItem
from wedding_cms.domain.content_value import serialize_content_value
from wedding_cms.domain.exceptions import ConflictError, NotFoundError, ValidationError
from wedding_cms.application.session import AdminSession, actor_id
from wedding_cms.utils.transaction import backend_errors, transactional
from wedding_cms.utils.audit import log_action


def _require_key(key: str) -> str:
    if not isinstance(key, str) or not key.strip():
        raise ValidationError("Content key is required")
    return key


class ContentStore:
    """
    Accessor for the live ``content`` table.

    Writes are visible to the next read immediately; there is no caching
    at this level.
    """

    def __init__(self, session: Optional[AdminSession] = None):
        self.session = session

    # ------------------------
    # Reads
    # ------------------------
    def get_all(self) -> List[ContentItem]:
        with backend_errors():
            return ContentItem.query.order_by(ContentItem.key.asc()).all()

    def get_by_key(self, key: str) -> ContentItem:
        with backend_errors():
            item = ContentItem.query.filter_by(key=key).first()

        if item is None:
            raise NotFoundError(f"Content key '{key}' not found")
        return item

    def get_many(self, keys: Iterable[str]) -> Dict[str, ContentItem]:
        keys = list(keys)
        if not keys:
            return {}

        with backend_errors():
            items = ContentItem.query.filter(ContentItem.key.in_(keys)).all()
        return {item.key: item for item in items}

    # ------------------------
    # Writes
    # ------------------------
    def upsert(self, key: str, value: Any) -> ContentItem:
        """
        Update the row for ``key`` or insert it. Non-string values are
        serialized to JSON text.
        """
        _require_key(key)
        text = serialize_content_value(value)

        try:
            with transactional():
                item = ContentItem.query.filter_by(key=key).first()
                created = item is None

                if created:
                    item = ContentItem()
                    item.key = key
                    db.session.add(item)

                item.value = text
                db.session.flush()

                log_action(
                    actor_id=actor_id(self.session),
                    action="content.create" if created else "content.update",
                    entity_type="content",
                    entity_id=key,
                    payload={"length": len(text)},
                )
        except IntegrityError as exc:
            # a concurrent writer inserted the same key first
            raise ConflictError(f"Content key '{key}' was written concurrently") from exc

        current_app.logger.debug("content %s %s", "inserted" if created else "updated", key)
        return item

    def create(self, key: str, value: Any) -> ContentItem:
        _require_key(key)
        text = serialize_content_value(value)

        with backend_errors():
            exists = ContentItem.query.filter_by(key=key).first() is not None
        if exists:
            raise ConflictError(f"Content key '{key}' already exists")

        item = ContentItem()
        item.key = key
        item.value = text
        try:
            with transactional():
                db.session.add(item)
                db.session.flush()

                log_action(
                    actor_id=actor_id(self.session),
                    action="content.create",
                    entity_type="content",
                    entity_id=key,
                    payload={"length": len(text)},
                )
        except IntegrityError as exc:
            raise ConflictError(f"Content key '{key}' already exists") from exc

        return item

    def update(self, key: str, value: Any) -> ContentItem:
        text = serialize_content_value(value)

        with transactional():
            item = ContentItem.query.filter_by(key=key).first()
            if item is None:
                raise NotFoundError(f"Content key '{key}' not found")

            item.value = text

            log_action(
                actor_id=actor_id(self.session),
                action="content.update",
                entity_type="content",
                entity_id=key,
                payload={"length": len(text)},
            )

        return item

    def delete(self, key: str) -> bool:
        """
        Remove the row for ``key``. Deleting a missing key is a no-op.

        Returns whether a row was removed.
        """
        with transactional():
            removed = ContentItem.query.filter_by(key=key).delete(synchronize_session=False)

            if removed:
                log_action(
                    actor_id=actor_id(self.session),
                    action="content.delete",
                    entity_type="content",
                    entity_id=key,
                )

        if not removed:
            current_app.logger.info("content delete: key %s not present", key)
        return bool(removed)
