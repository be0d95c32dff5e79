from datetime import datetime, timezone

from pagecms.models.page_content import (
    CONTENT_STATUS_DRAFT,
    CONTENT_STATUS_PUBLISHED,
    PageContent,
)


def publish_draft_content(page_id) -> int:
    """Promote every draft content of the page to published."""
    drafts = PageContent.query.filter_by(
        page_id=page_id,
        status=CONTENT_STATUS_DRAFT,
    ).all()

    now = datetime.now(timezone.utc)
    for content in drafts:
        content.status = CONTENT_STATUS_PUBLISHED
        content.published_on = now

    return len(drafts)


def get_page_contents(page, *, region=None, include_unpublished=False):
    """
    Contents of the page ordered by region. Only published contents unless
    ``include_unpublished`` is set.
    """
    query = PageContent.query.filter_by(page_id=page.id)
    if region:
        query = query.filter(PageContent.region == region)
    if not include_unpublished:
        query = query.filter(PageContent.status == CONTENT_STATUS_PUBLISHED)

    return query.order_by(PageContent.region, PageContent.created_at).all()
