from sqlalchemy.orm import selectinload

from pagecms.domain.exceptions import EntityNotFound, ValidationError
from pagecms.models.layout import Layout
from pagecms.models.page import Page
from .urls import url_hash


def load_page_properties(page_id, *, include_access_rules=False):
    """
    Load a page with everything the properties editor touches: options,
    layout with its options, master page lineage and, optionally, access rules.
    """
    options = [
        selectinload(Page.options),
        selectinload(Page.layout).selectinload(Layout.layout_options),
        selectinload(Page.master_pages),
        selectinload(Page.page_tags),
    ]
    if include_access_rules:
        options.append(selectinload(Page.access_rules))

    page = Page.query.options(*options).filter_by(id=page_id).first()

    if not page:
        raise EntityNotFound("Page", page_id)

    return page


def validate_page_url(url, *, excluding_page_id=None):
    query = Page.query.filter(Page.page_url_hash == url_hash(url))
    if excluding_page_id:
        query = query.filter(Page.id != excluding_page_id)

    if query.first() is not None:
        raise ValidationError(
            "page_url_exists",
            f"Page with url {url} already exists.",
            page_id=excluding_page_id,
        )
