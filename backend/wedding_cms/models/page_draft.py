from wedding_cms.extensions import db
from .base import BaseModel

PUBLISH_STATUSES = ("draft", "publishing", "published", "publish_failed")


class PageDraft(BaseModel):
    __tablename__ = "page_drafts"

    page_key = db.Column(db.String(100), nullable=False)
    content = db.Column(db.JSON, nullable=False, default=dict)
    version = db.Column(db.Integer, nullable=False)

    is_published = db.Column(db.Boolean, nullable=False, default=False)
    publish_status = db.Column(db.String(20), nullable=False, default="draft")
    # draft | publishing | published | publish_failed

    created_by = db.Column(db.String(255), nullable=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("page_key", "version", name="uq_page_draft_version"),
        db.Index("idx_page_draft_page", "page_key", "version"),
        # at most one live draft per page
        db.Index(
            "uq_page_draft_published",
            "page_key",
            unique=True,
            postgresql_where=db.text("is_published"),
            sqlite_where=db.text("is_published"),
        ),
    )

    def __repr__(self):
        return f"<PageDraft {self.page_key} v{self.version}>"
