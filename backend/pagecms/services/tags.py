from typing import Iterable, List, Optional

from sqlalchemy import func

from pagecms.extensions import db
from pagecms.models.tag import PageTag, Tag


def _normalize_tag_names(tag_names):
    names = {}
    for name in tag_names or []:
        name = (name or "").strip()
        if name:
            names.setdefault(name.lower(), name)
    return names


def save_page_tags(page, tag_names: Optional[Iterable[str]]) -> List[Tag]:
    """
    Replace the page's tags with ``tag_names``.

    Names are matched case-insensitively; unknown names become new tags,
    which are returned so callers can announce them.
    """
    wanted = _normalize_tag_names(tag_names)

    for page_tag in list(page.page_tags):
        if page_tag.tag.name.lower() not in wanted:
            page.page_tags.remove(page_tag)

    assigned = {page_tag.tag.name.lower() for page_tag in page.page_tags}
    missing = {key: name for key, name in wanted.items() if key not in assigned}
    if not missing:
        return []

    existing = {
        tag.name.lower(): tag
        for tag in Tag.query.filter(func.lower(Tag.name).in_(list(missing))).all()
    }

    new_tags = []
    for key, name in missing.items():
        tag = existing.get(key)
        if tag is None:
            tag = Tag()
            tag.name = name
            db.session.add(tag)
            new_tags.append(tag)

        page_tag = PageTag()
        page_tag.tag = tag
        page.page_tags.append(page_tag)

    return new_tags
