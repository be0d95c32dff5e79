import pytest

from pagecms import create_app
from pagecms.application.cms.page_properties_input import PagePropertiesInput
from pagecms.events import PageEvents
from pagecms.extensions import db as _db
from pagecms.models import Layout, MasterPage, Page
from pagecms.models.page import PAGE_STATUS_DRAFT
from pagecms.security.principal import Principal
from pagecms.security.roles import ADMINISTRATION, EDIT_CONTENT, PUBLISH_CONTENT
from pagecms.services.urls import url_hash

SIGNAL_NAMES = (
    "page_properties_changing",
    "page_properties_changed",
    "redirect_created",
    "page_seo_status_changed",
    "tag_created",
    "sitemap_node_updated",
    "sitemap_updated",
)


@pytest.fixture()
def app():
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app):
    return _db


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def events():
    return PageEvents()


class EventRecorder:
    """Collects every signal sent through a ``PageEvents`` instance."""

    def __init__(self, events):
        self.calls = []
        for name in SIGNAL_NAMES:
            getattr(events, name).connect(self._receiver(name), weak=False)

    def _receiver(self, name):
        def receive(sender, **kwargs):
            self.calls.append((name, sender, kwargs))
        return receive

    def of(self, name):
        return [(sender, kwargs) for call_name, sender, kwargs in self.calls if call_name == name]

    def names(self):
        return [name for name, _, _ in self.calls]


@pytest.fixture()
def recorder(events):
    return EventRecorder(events)


# ============================================================
# Principals
# ============================================================


@pytest.fixture()
def editor():
    return Principal(
        user_id="user-editor",
        user_name="editor",
        roles=frozenset({EDIT_CONTENT, PUBLISH_CONTENT}),
    )


@pytest.fixture()
def edit_only():
    return Principal(user_id="user-writer", user_name="writer", roles=frozenset({EDIT_CONTENT}))


@pytest.fixture()
def publisher():
    return Principal(user_id="user-publisher", user_name="publisher", roles=frozenset({PUBLISH_CONTENT}))


@pytest.fixture()
def administrator():
    return Principal(
        user_id="user-admin",
        user_name="admin",
        roles=frozenset({EDIT_CONTENT, PUBLISH_CONTENT, ADMINISTRATION}),
    )


# ============================================================
# Model factories
# ============================================================


@pytest.fixture()
def layout(db):
    layout = Layout()
    layout.name = "Default"
    layout.layout_path = "~/layouts/default.html"
    db.session.add(layout)
    db.session.commit()
    return layout


@pytest.fixture()
def make_page(db, layout):
    """
    Create and commit a page. With ``master`` the page gets a lineage row for
    the master and for each of the master's own ancestors.
    """

    def _make_page(url, *, title=None, master=None, is_master_page=False, status=PAGE_STATUS_DRAFT):
        page = Page()
        page.page_url = url
        page.page_url_hash = url_hash(url)
        page.title = title or url.strip("/") or "home"
        page.status = status
        page.is_master_page = is_master_page

        if master is None:
            page.layout_id = layout.id
        else:
            page.master_page_id = master.id

        db.session.add(page)
        db.session.flush()

        if master is not None:
            ancestor_ids = [master.id] + [mp.master_id for mp in master.master_pages]
            for ancestor_id in ancestor_ids:
                row = MasterPage()
                row.page_id = page.id
                row.master_id = ancestor_id
                db.session.add(row)

        db.session.commit()
        return page

    return _make_page


@pytest.fixture()
def make_input():
    """Submission mirroring the page's current state, with overrides."""

    def _make_input(page, **overrides):
        values = dict(
            id=page.id,
            version=page.version,
            page_url=page.page_url,
            page_name=page.title,
            template_id=page.layout_id,
            master_page_id=page.master_page_id,
            category_id=page.category_id,
            page_css=page.custom_css,
            page_javascript=page.custom_js,
            use_no_follow=page.use_no_follow,
            use_no_index=page.use_no_index,
            is_archived=page.is_archived,
            use_canonical_url=page.use_canonical_url,
            image_id=page.image_id,
            secondary_image_id=page.secondary_image_id,
            featured_image_id=page.featured_image_id,
            option_values=[
                {"key": o.key, "type": o.type, "value": o.value} for o in page.options
            ],
            user_access_list=[rule.to_dict() for rule in page.access_rules],
            tags=page.tag_names,
        )
        values.update(overrides)
        return PagePropertiesInput(**values)

    return _make_input


@pytest.fixture()
def lineage(db):
    """Ancestor ids recorded for a page."""

    def _lineage(page_id):
        return {
            row.master_id
            for row in db.session.query(MasterPage).filter_by(page_id=page_id).all()
        }

    return _lineage
