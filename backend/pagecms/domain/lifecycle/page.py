from typing import Set

from pagecms.models.page import (
    PAGE_STATUS_DRAFT,
    PAGE_STATUS_PUBLISHED,
    PAGE_STATUS_UNPUBLISHED,
)
from ..exceptions import ValidationError

# Explicit allowed state transitions
ALLOWED_PAGE_TRANSITIONS: dict[str, Set[str]] = {
    PAGE_STATUS_DRAFT: {PAGE_STATUS_PUBLISHED, PAGE_STATUS_UNPUBLISHED},
    PAGE_STATUS_UNPUBLISHED: {PAGE_STATUS_PUBLISHED},
    PAGE_STATUS_PUBLISHED: {PAGE_STATUS_UNPUBLISHED},
}

def assert_page_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards page lifecycle transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_PAGE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise ValidationError(
            "illegal_page_transition",
            f"Illegal page transition: {from_status} → {to_status}",
        )
