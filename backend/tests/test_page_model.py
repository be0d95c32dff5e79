"""Tests for Page model helpers."""

from pagecms.models import Page


def test_duplicate_copies_presentation_properties(db, make_page):
    page = make_page("/about/", title="About")
    page.meta_title = "About us"
    page.meta_keywords = "about"
    page.meta_description = "Who we are"
    page.description = "Company page"
    page.custom_css = "body { margin: 0; }"
    page.custom_js = "init();"
    page.use_canonical_url = True
    page.use_no_follow = True
    page.use_no_index = True
    page.is_archived = True
    db.session.commit()

    duplicate = page.duplicate()

    assert duplicate.id is None
    assert duplicate.meta_title == "About us"
    assert duplicate.meta_keywords == "about"
    assert duplicate.meta_description == "Who we are"
    assert duplicate.description == "Company page"
    assert duplicate.custom_css == "body { margin: 0; }"
    assert duplicate.custom_js == "init();"
    assert duplicate.use_canonical_url is True
    assert duplicate.use_no_follow is True
    assert duplicate.use_no_index is True
    assert duplicate.layout_id == page.layout_id

    # Identity, state and collections stay with the original
    assert duplicate.page_url is None
    assert duplicate.title is None
    assert not duplicate.is_archived
    assert duplicate.options == []
    assert duplicate.page_tags == []


def test_duplicate_can_be_saved_as_new_page(db, make_page):
    page = make_page("/about/")
    page.meta_title = "About us"
    db.session.commit()

    duplicate = page.duplicate()
    duplicate.page_url = "/about-copy/"
    duplicate.page_url_hash = "0" * 32
    duplicate.title = "About (copy)"
    db.session.add(duplicate)
    db.session.commit()

    assert Page.query.count() == 2
    assert db.session.get(Page, duplicate.id).meta_title == "About us"
