from ..exceptions import InvariantViolation


def assert_single_published(page_key, published_drafts):
    """At most one draft per page may be live."""
    if len(published_drafts) > 1:
        versions = sorted(d.version for d in published_drafts)
        raise InvariantViolation(
            f"Page '{page_key}' has {len(published_drafts)} published drafts: {versions}"
        )


def assert_draft_content(content):
    if not isinstance(content, dict):
        raise InvariantViolation("Draft content must be a mapping of content key to value.")

    for key in content:
        if not isinstance(key, str) or not key.strip():
            raise InvariantViolation(f"Invalid content key: {key!r}")
