"""
Authorization policies keyed on page kind.

Master pages are layouts for other pages, so changing them needs the
administration role on top of the content roles, and they never carry a
publication status or indexing flags of their own.
"""
from typing import Tuple

from .roles import ADMINISTRATION, EDIT_CONTENT, PUBLISH_CONTENT

PAGE_KIND_ORDINARY = "ordinary"
PAGE_KIND_MASTER = "master"


def page_kind(page) -> str:
    return PAGE_KIND_MASTER if page.acts_as_master else PAGE_KIND_ORDINARY


_SAVE_ROLES = {
    PAGE_KIND_ORDINARY: (EDIT_CONTENT, PUBLISH_CONTENT),
    PAGE_KIND_MASTER: (EDIT_CONTENT, PUBLISH_CONTENT, ADMINISTRATION),
}

_EDIT_ROLES = {
    PAGE_KIND_ORDINARY: (EDIT_CONTENT,),
    PAGE_KIND_MASTER: (EDIT_CONTENT, ADMINISTRATION),
}


def save_roles(page) -> Tuple[str, ...]:
    """Roles accepted to save page properties at all."""
    return _SAVE_ROLES[page_kind(page)]


def edit_roles(page) -> Tuple[str, ...]:
    """Roles accepted to change url, layout, SEO, images, options, rules and tags."""
    return _EDIT_ROLES[page_kind(page)]


def publish_roles(page) -> Tuple[str, ...]:
    return (PUBLISH_CONTENT,)


def can_change_publication(page) -> bool:
    return page_kind(page) == PAGE_KIND_ORDINARY


def applies_indexing_flags(page) -> bool:
    return page_kind(page) == PAGE_KIND_ORDINARY
