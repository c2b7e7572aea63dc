from .content_item import ContentItem
from .page_draft import PageDraft
from .admin_user import AdminUser
from .audit_log import AuditLog

__all__ = ["ContentItem", "PageDraft", "AdminUser", "AuditLog"]
