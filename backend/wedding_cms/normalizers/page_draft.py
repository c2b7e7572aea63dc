from .content import _iso


def normalize_page_draft(draft, include_content=True):
    data = {
        "id": draft.id,
        "page_key": draft.page_key,
        "version": draft.version,
        "is_published": draft.is_published,
        "publish_status": draft.publish_status,
        "created_by": draft.created_by,
        "created_at": _iso(draft.created_at),
        "published_at": _iso(draft.published_at),
        "notes": draft.notes,
    }

    if include_content:
        data["content"] = draft.content or {}

    return data
