def _iso(ts):
    return ts.isoformat() if ts else None


def normalize_content_item(item, admin=False):
    data = {
        "key": item.key,
        "value": item.value,
    }

    if admin:
        data["id"] = item.id
        data["created_at"] = _iso(item.created_at)
        data["updated_at"] = _iso(item.updated_at)

    return data
