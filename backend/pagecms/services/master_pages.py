from typing import Iterable, List, Sequence, Tuple

from sqlalchemy import or_, select

from pagecms.domain.exceptions import ValidationError
from pagecms.extensions import db
from pagecms.models.master_page import MasterPage
from pagecms.models.page import Page


def get_page_master_page_ids(master_page_id) -> List[str]:
    """
    Ancestor chain of a page used as master: the master itself first, then
    its master, and so on up to the root.
    """
    chain = []
    current_id = master_page_id

    while current_id:
        if current_id in chain:
            raise ValidationError(
                "master_page_cycle",
                f"Master page chain of {master_page_id} loops at {current_id}.",
            )

        current = db.session.get(Page, current_id)
        if current is None:
            raise ValidationError(
                "master_page_not_found",
                f"Master page {current_id} does not exist.",
            )

        chain.append(current_id)
        current_id = current.master_page_id

    return chain


def get_children_master_pages_to_update(
    page, updating_ids: Sequence[str]
) -> Tuple[List[MasterPage], List[str]]:
    """
    Find every page whose lineage follows ``page``: the page itself and all
    pages that have it as one of their masters.

    Returns the existing lineage rows of those pages that reference any of
    ``updating_ids``, and the distinct ids of the affected pages.
    """
    children = select(MasterPage.page_id).where(MasterPage.master_id == page.id)

    query = MasterPage.query.filter(
        or_(MasterPage.page_id.in_(children), MasterPage.page_id == page.id)
    )

    children_page_ids = []
    for (page_id,) in query.with_entities(MasterPage.page_id).distinct():
        children_page_ids.append(page_id)
    if page.id not in children_page_ids:
        children_page_ids.append(page.id)

    if not updating_ids:
        return [], children_page_ids

    existing = query.filter(MasterPage.master_id.in_(list(updating_ids))).all()
    return existing, children_page_ids


def update_children_master_pages(
    existing_master_pages: Iterable[MasterPage],
    old_master_ids: Iterable[str],
    new_master_ids: Iterable[str],
    children_page_ids: Iterable[str],
) -> None:
    """
    Swap the old ancestors for the new ones in every affected page's lineage.
    """
    if children_page_ids is None:
        return

    existing_master_pages = list(existing_master_pages)
    old_master_ids = set(old_master_ids)
    new_master_ids = list(new_master_ids)

    for page_id in children_page_ids:
        for master_page in existing_master_pages:
            if master_page.page_id == page_id and master_page.master_id in old_master_ids:
                db.session.delete(master_page)

        present = {
            master_page.master_id
            for master_page in existing_master_pages
            if master_page.page_id == page_id
        }
        for master_id in new_master_ids:
            if master_id in present:
                continue
            master_page = MasterPage()
            master_page.page_id = page_id
            master_page.master_id = master_id
            db.session.add(master_page)
