from typing import Iterable, Optional


class CmsError(Exception):
    """Base class for content/draft workflow failures."""
    status_code = 500


class ValidationError(CmsError):
    """Malformed input, typically structured content that is not valid JSON."""
    status_code = 400

    def __init__(self, message: str, *, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class NotFoundError(CmsError):
    status_code = 404


class ConflictError(CmsError):
    status_code = 409


class VersionConflictError(ConflictError):
    def __init__(self, page_key: str, expected: Optional[int], actual: int):
        super().__init__(
            f"Draft version conflict for page '{page_key}': "
            f"expected {expected}, current is {actual}"
        )
        self.page_key = page_key
        self.expected = expected
        self.actual = actual


class BackendError(CmsError):
    """A read or write against the content/draft tables failed."""
    status_code = 503


class PublishFanoutError(BackendError):
    """
    Raised when a draft was marked published but some of its keys could
    not be written to the content table.
    """
    status_code = 502

    def __init__(self, draft_id: str, applied: Iterable[str], failed: Iterable[str]):
        self.draft_id = draft_id
        self.applied = list(applied)
        self.failed = list(failed)
        super().__init__(
            f"Draft {draft_id} published with {len(self.failed)} unapplied "
            f"key(s): {', '.join(self.failed)}"
        )


class InvariantViolation(CmsError):
    status_code = 400


class IllegalTransition(ConflictError):
    pass
