import copy

from wedding_cms.extensions import db


def snapshot_content(content):
    """Deep copy of a draft content map, detached from any ORM row."""
    return copy.deepcopy(dict(content or {}))


def current_version(page_key):
    from wedding_cms.models.page_draft import PageDraft

    last = (
        db.session.query(db.func.max(PageDraft.version))
        .filter(PageDraft.page_key == page_key)
        .scalar()
    )
    return last or 0


def next_version(page_key):
    return current_version(page_key) + 1
