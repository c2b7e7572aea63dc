from wedding_cms.extensions import db
from .base import BaseModel, TimestampMixin


class ContentItem(BaseModel, TimestampMixin):
    """Live key/value content read by the public pages."""
    __tablename__ = "content"

    key = db.Column(db.String(200), nullable=False, unique=True, index=True)
    value = db.Column(db.Text, nullable=False, default="")

    def __repr__(self):
        return f"<ContentItem {self.key}>"
