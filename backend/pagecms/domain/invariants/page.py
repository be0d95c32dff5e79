from pagecms.extensions import db
from pagecms.models.master_page import MasterPage
from ..exceptions import ValidationError


def assert_layout_or_master(*, page_id, template_id, master_page_id):
    if not master_page_id and not template_id:
        raise ValidationError(
            "no_layout_or_master_selected",
            f"Template or master page should be selected for page {page_id}.",
            page_id=page_id,
        )

    if master_page_id and template_id:
        raise ValidationError(
            "layout_and_master_selected",
            f"Only one of master page and layout can be selected for page {page_id}.",
            page_id=page_id,
        )


def assert_master_page_allowed(*, page_id, master_page_id):
    """
    A page can neither be its own master nor use one of its descendants as
    master. Lineage rows hold the full ancestor chain, so a single lookup
    covers every depth.
    """
    if page_id == master_page_id:
        raise ValidationError(
            "selected_master_is_current_page",
            f"Selected master page is the current page {page_id}.",
            page_id=page_id,
        )

    is_child = db.session.query(
        MasterPage.query
        .filter_by(page_id=master_page_id, master_id=page_id)
        .exists()
    ).scalar()

    if is_child:
        raise ValidationError(
            "selected_master_is_child_page",
            f"Selected master page {master_page_id} is a child of the current page {page_id}.",
            page_id=page_id,
        )


def assert_page_title(*, page_id, title):
    if not title or not title.strip():
        raise ValidationError(
            "page_title_required",
            f"Title is required for page {page_id}.",
            page_id=page_id,
        )
