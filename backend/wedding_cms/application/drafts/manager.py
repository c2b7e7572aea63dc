# wedding_cms/application/drafts/manager.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from wedding_cms.extensions import db
from wedding_cms.models.page_draft import PageDraft
from wedding_cms.domain.content_value import parse_content_value
from wedding_cms.domain.exceptions import (
    CmsError,
    ConflictError,
    NotFoundError,
    PublishFanoutError,
    VersionConflictError,
)
from wedding_cms.domain.invariants.page_draft import assert_draft_content, assert_single_published
from wedding_cms.domain.lifecycle.page_draft import assert_draft_transition
from wedding_cms.domain.pages import assert_known_page
from wedding_cms.application.content.store import ContentStore
from wedding_cms.application.session import AdminSession, actor_id
from wedding_cms.utils.audit import log_action
from wedding_cms.utils.optimistic_lock import enforce_expected_version
from wedding_cms.utils.transaction import backend_errors, transactional
from wedding_cms.utils.versioning import current_version, snapshot_content


class DraftManager:
    """
    Versioned drafts of page content.

    Every page_key owns an append-only history of PageDraft rows. One of
    them may be published; publishing copies its content map into the
    live content table.
    """

    def __init__(
        self,
        session: Optional[AdminSession] = None,
        content_store: Optional[ContentStore] = None,
    ):
        self.session = session
        self.content_store = content_store or ContentStore(session)

    # ------------------------
    # Queries
    # ------------------------
    def list_drafts(self, page_key: str) -> List[PageDraft]:
        with backend_errors():
            return (
                PageDraft.query
                .filter_by(page_key=page_key)
                .order_by(PageDraft.version.desc())
                .all()
            )

    def list_all_drafts(self) -> List[PageDraft]:
        with backend_errors():
            return (
                PageDraft.query
                .order_by(PageDraft.page_key.asc(), PageDraft.version.desc())
                .all()
            )

    def get_latest_draft(self, page_key: str) -> Optional[PageDraft]:
        with backend_errors():
            return (
                PageDraft.query
                .filter_by(page_key=page_key)
                .order_by(PageDraft.version.desc())
                .first()
            )

    def get_published_draft(self, page_key: str) -> Optional[PageDraft]:
        with backend_errors():
            return (
                PageDraft.query
                .filter_by(page_key=page_key, is_published=True)
                .order_by(PageDraft.published_at.desc())
                .first()
            )

    def get_draft(self, draft_id: str) -> PageDraft:
        with backend_errors():
            draft = db.session.get(PageDraft, draft_id)

        if draft is None:
            raise NotFoundError(f"Draft {draft_id} not found")
        return draft

    def _get_page_draft(self, draft_id: str, page_key: str) -> PageDraft:
        draft = self.get_draft(draft_id)
        if draft.page_key != page_key:
            raise NotFoundError(f"Draft {draft_id} does not belong to page '{page_key}'")
        return draft

    # ------------------------
    # Commands
    # ------------------------
    def create_draft(
        self,
        page_key: str,
        content: Dict[str, Any],
        *,
        notes: Optional[str] = None,
        created_by: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> PageDraft:
        """
        Append a new, unpublished version of a page's content.

        The new version is ``max(version) + 1`` for the page. When
        ``expected_version`` is given it must match the current maximum.
        """
        return self._insert_draft(
            page_key,
            content,
            notes=notes,
            created_by=created_by,
            expected_version=expected_version,
            action="draft.create",
        )

    def restore_version(
        self,
        draft_id: str,
        page_key: str,
        created_by: Optional[str] = None,
    ) -> PageDraft:
        """
        Clone an old version forward as a new draft. The source row is not
        touched and the new draft is not published.
        """
        source = self._get_page_draft(draft_id, page_key)

        return self._insert_draft(
            page_key,
            snapshot_content(source.content),
            notes=f"Restored from version {source.version}",
            created_by=created_by,
            action="draft.restore",
            audit_payload={"from_version": source.version},
        )

    def publish_draft(self, draft_id: str, page_key: str) -> PageDraft:
        """
        Make a draft the live version of its page.

        Responsibilities:
        - unpublish the page's current live draft, then publish the target
          (one transaction)
        - copy every content key of the draft into the content table
        - record applied/failed keys when the copy is incomplete
        """
        draft = self._get_page_draft(draft_id, page_key)

        # 1️⃣ Flip the published flag
        try:
            with transactional():
                # lock the target and the page's live rows
                locked = (
                    db.session.execute(
                        select(PageDraft)
                        .where(
                            PageDraft.page_key == page_key,
                            or_(PageDraft.id == draft.id, PageDraft.is_published.is_(True)),
                        )
                        .with_for_update()
                        .execution_options(populate_existing=True)
                    )
                    .scalars()
                    .all()
                )
                previous = [other for other in locked if other.id != draft.id]

                for other in previous:
                    assert_draft_transition(from_status=other.publish_status, to_status="draft")
                    other.is_published = False
                    other.publish_status = "draft"

                # unpublish must reach the database before the target is set
                db.session.flush()

                assert_draft_transition(from_status=draft.publish_status, to_status="publishing")
                draft.is_published = True
                draft.publish_status = "publishing"
                draft.published_at = datetime.now(timezone.utc)
                db.session.flush()

                assert_single_published(
                    page_key,
                    PageDraft.query.filter_by(page_key=page_key, is_published=True).all(),
                )

                log_action(
                    actor_id=actor_id(self.session),
                    action="draft.publish",
                    entity_type="page_draft",
                    entity_id=draft.id,
                    payload={
                        "page_key": page_key,
                        "version": draft.version,
                        "unpublished_versions": [p.version for p in previous],
                    },
                )
        except IntegrityError as exc:
            # another publish of this page won the published slot
            raise ConflictError(f"Page '{page_key}' is being published concurrently") from exc

        # 2️⃣ Fan content out to the live table
        content = snapshot_content(draft.content)
        applied, failed = self._apply_content(draft.id, content)

        # 3️⃣ Record the outcome
        status = "publish_failed" if failed else "published"
        with transactional():
            assert_draft_transition(from_status=draft.publish_status, to_status=status)
            draft.publish_status = status

        if failed:
            current_app.logger.error(
                "publish of %s v%s incomplete: applied=%s failed=%s",
                page_key, draft.version, applied, failed,
            )
            raise PublishFanoutError(draft.id, applied, failed)

        current_app.logger.info(
            "published %s v%s (%d keys)", page_key, draft.version, len(applied)
        )
        return draft

    # ------------------------
    # Internals
    # ------------------------
    def _insert_draft(
        self,
        page_key: str,
        content: Dict[str, Any],
        *,
        notes: Optional[str],
        created_by: Optional[str],
        action: str,
        expected_version: Optional[int] = None,
        audit_payload: Optional[Dict[str, Any]] = None,
    ) -> PageDraft:
        assert_known_page(page_key)
        assert_draft_content(content)

        for key, value in content.items():
            parse_content_value(value, key=key)

        draft = PageDraft()
        draft.page_key = page_key
        draft.content = snapshot_content(content)
        draft.notes = notes or None
        draft.created_by = created_by or actor_id(self.session)
        draft.is_published = False
        draft.publish_status = "draft"
        draft.published_at = None

        try:
            with transactional():
                latest = current_version(page_key)
                enforce_expected_version(page_key, expected_version, latest)

                draft.version = latest + 1
                db.session.add(draft)
                db.session.flush()

                log_action(
                    actor_id=actor_id(self.session),
                    action=action,
                    entity_type="page_draft",
                    entity_id=draft.id,
                    payload={
                        "page_key": page_key,
                        "version": draft.version,
                        **(audit_payload or {}),
                    },
                )
        except IntegrityError as exc:
            # another writer took this version number first
            raise VersionConflictError(page_key, expected_version, current_version(page_key)) from exc

        current_app.logger.info("%s %s v%s", action, page_key, draft.version)
        return draft

    def _apply_content(self, draft_id: str, content: Dict[str, Any]):
        applied: List[str] = []
        failed: List[str] = []

        for key, value in content.items():
            try:
                self.content_store.upsert(key, value)
            except (CmsError, SQLAlchemyError) as exc:
                current_app.logger.warning(
                    "draft %s: could not apply key %s: %s", draft_id, key, exc
                )
                failed.append(key)
            else:
                applied.append(key)

        return applied, failed
