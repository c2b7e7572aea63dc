from flask import request

from wedding_cms.domain.exceptions import ValidationError, VersionConflictError


def expected_version_from_request(data):
    """
    Reads the caller's view of the latest draft version.

    Accepted from the JSON body (``expected_version``) or the ``If-Match``
    header. Returns None when no check was requested.
    """
    raw = data.get("expected_version") if data else None
    if raw is None:
        raw = request.headers.get("If-Match")
    if raw is None or raw == "":
        return None

    try:
        expected = int(str(raw).strip('"'))
    except (TypeError, ValueError):
        raise ValidationError("expected_version must be an integer")

    if expected < 0:
        raise ValidationError("expected_version must not be negative")
    return expected


def enforce_expected_version(page_key, expected, actual):
    """Compare-and-swap guard for draft creation."""
    if expected is None:
        return
    if expected != actual:
        raise VersionConflictError(page_key, expected, actual)
