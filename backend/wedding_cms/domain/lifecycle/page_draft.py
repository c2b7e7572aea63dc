from typing import Set

from ..exceptions import IllegalTransition

# Explicit allowed publish_status transitions
ALLOWED_DRAFT_TRANSITIONS: dict[str, Set[str]] = {
    "draft": {"publishing"},
    "publishing": {"published", "publish_failed", "publishing", "draft"},
    "published": {"publishing", "draft"},  # re-apply, or superseded by another publish
    "publish_failed": {"publishing", "draft"},
}

def assert_draft_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards draft lifecycle transitions.
    Single source of truth for publish_status changes.
    """
    allowed = ALLOWED_DRAFT_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise IllegalTransition(
            f"Illegal draft transition: {from_status} → {to_status}"
        )
