"""HTTP tests for the page properties endpoints."""

import pytest

from pagecms.models import AccessRule, Page, PageContent, Redirect, User
from pagecms.models.page_content import CONTENT_STATUS_DRAFT, CONTENT_STATUS_PUBLISHED
from pagecms.security.roles import ADMINISTRATION, EDIT_CONTENT, PUBLISH_CONTENT


@pytest.fixture()
def make_user(db):
    def _make_user(user_name, roles, *, is_active=True):
        user = User()
        user.user_name = user_name
        user.email = f"{user_name}@example.com"
        user.roles = list(roles)
        user.is_active = is_active
        user.set_password("secret-password")
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture()
def login(client, make_user):
    def _login(user_name, roles):
        make_user(user_name, roles)
        response = client.post(
            "/api/v1/auth/login",
            json={"user_name": user_name, "password": "secret-password"},
        )
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.get_json()['access_token']}"}

    return _login


@pytest.fixture()
def editor_headers(login):
    return login("editor", [EDIT_CONTENT, PUBLISH_CONTENT])


def _properties(client, page_id, headers):
    response = client.get(f"/api/v1/pages/{page_id}/properties", headers=headers)
    assert response.status_code == 200
    return response.get_json()


# ============================================================
# Health and auth
# ============================================================


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


class TestLogin:
    def test_wrong_password(self, client, make_user):
        make_user("editor", [EDIT_CONTENT])
        response = client.post(
            "/api/v1/auth/login", json={"user_name": "editor", "password": "nope"}
        )
        assert response.status_code == 401

    def test_disabled_account(self, client, make_user):
        make_user("former", [EDIT_CONTENT], is_active=False)
        response = client.post(
            "/api/v1/auth/login",
            json={"user_name": "former", "password": "secret-password"},
        )
        assert response.status_code == 403

    def test_missing_body(self, client):
        response = client.post("/api/v1/auth/login")
        assert response.status_code == 400


# ============================================================
# Page properties
# ============================================================


class TestGetProperties:
    def test_requires_token(self, client, make_page):
        page_id = make_page("/about/").id
        response = client.get(f"/api/v1/pages/{page_id}/properties")
        assert response.status_code == 401

    def test_requires_cms_role(self, client, make_page, login):
        page_id = make_page("/about/").id
        headers = login("visitor", [])
        response = client.get(f"/api/v1/pages/{page_id}/properties", headers=headers)
        assert response.status_code == 403

    def test_editor_view(self, client, make_page, editor_headers):
        page = make_page("/about/", title="About us")
        data = _properties(client, page.id, editor_headers)

        assert data["page_url"] == "/about/"
        assert data["page_name"] == "About us"
        assert data["template_id"] == page.layout_id
        assert "user_access_list" not in data

    def test_administrator_view(self, client, make_page, login):
        page_id = make_page("/about/").id
        headers = login("admin", [ADMINISTRATION])
        data = _properties(client, page_id, headers)
        assert data["user_access_list"] == []
        assert data["master_page_ids"] == []

    def test_unknown_page(self, client, editor_headers):
        response = client.get("/api/v1/pages/missing/properties", headers=editor_headers)
        assert response.status_code == 404


class TestSaveProperties:
    def test_save_with_redirect(self, client, db, make_page, editor_headers):
        page_id = make_page("/about/").id
        payload = _properties(client, page_id, editor_headers)
        payload.update(page_url="about-us", redirect_from_old_url=True, tags=["team"])

        response = client.put(
            f"/api/v1/pages/{page_id}/properties", json=payload, headers=editor_headers
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["page"]["page_url"] == "/about-us/"
        assert body["page"]["version"] == payload["version"] + 1
        assert body["redirect"]["page_url"] == "/about/"
        assert body["redirect"]["redirect_url"] == "/about-us/"
        assert body["new_tags"] == ["team"]

        db.session.expire_all()
        assert db.session.get(Page, page_id).page_url == "/about-us/"
        assert Redirect.query.count() == 1

    def test_missing_fields(self, client, make_page, editor_headers):
        page_id = make_page("/about/").id
        payload = _properties(client, page_id, editor_headers)
        payload["page_name"] = ""

        response = client.put(
            f"/api/v1/pages/{page_id}/properties", json=payload, headers=editor_headers
        )

        assert response.status_code == 400
        assert response.get_json()["message_key"] == "required_fields_missing"

    def test_domain_rule_violation(self, client, make_page, editor_headers):
        page_id = make_page("/about/").id
        payload = _properties(client, page_id, editor_headers)
        payload["template_id"] = None

        response = client.put(
            f"/api/v1/pages/{page_id}/properties", json=payload, headers=editor_headers
        )

        assert response.status_code == 400
        assert response.get_json()["message_key"] == "no_layout_or_master_selected"

    def test_forbidden_without_roles(self, client, make_page, editor_headers, login):
        page_id = make_page("/about/").id
        payload = _properties(client, page_id, editor_headers)
        headers = login("visitor", [])

        response = client.put(
            f"/api/v1/pages/{page_id}/properties", json=payload, headers=headers
        )

        assert response.status_code == 403
        assert response.get_json()["error"] == "AuthorizationError"

    def test_stale_version(self, client, make_page, editor_headers):
        page_id = make_page("/about/").id
        payload = _properties(client, page_id, editor_headers)

        first = client.put(
            f"/api/v1/pages/{page_id}/properties", json=payload, headers=editor_headers
        )
        assert first.status_code == 200

        second = client.put(
            f"/api/v1/pages/{page_id}/properties", json=payload, headers=editor_headers
        )
        assert second.status_code == 409
        assert second.get_json()["error"] == "ConcurrencyConflict"

    def test_cancelled_by_receiver(self, app, client, make_page, editor_headers):
        page_id = make_page("/about/").id
        payload = _properties(client, page_id, editor_headers)
        payload["page_url"] = "/elsewhere/"
        payload["redirect_from_old_url"] = True

        def veto(sender, args):
            args.cancel("Page is locked for review")

        app.extensions["page_events"].page_properties_changing.connect(veto, weak=False)

        response = client.put(
            f"/api/v1/pages/{page_id}/properties", json=payload, headers=editor_headers
        )

        assert response.status_code == 422
        assert response.get_json()["messages"] == ["Page is locked for review"]
        assert Redirect.query.count() == 0

    def test_malformed_tags(self, client, make_page, editor_headers):
        page_id = make_page("/about/").id
        payload = _properties(client, page_id, editor_headers)
        payload["tags"] = [{"name": "news"}]

        response = client.put(
            f"/api/v1/pages/{page_id}/properties", json=payload, headers=editor_headers
        )

        assert response.status_code == 400
        assert response.get_json()["message_key"] == "invalid_tag"


# ============================================================
# Page contents
# ============================================================


@pytest.fixture()
def page_with_contents(db, make_page):
    page = make_page("/about/")
    for region, status in (
        ("sidebar", CONTENT_STATUS_PUBLISHED),
        ("main", CONTENT_STATUS_PUBLISHED),
        ("main", CONTENT_STATUS_DRAFT),
    ):
        content = PageContent()
        content.page = page
        content.region = region
        content.html = f"<p>{region} {status}</p>"
        content.status = status
        db.session.add(content)
    db.session.commit()
    return page


class TestPageContents:
    def test_published_contents(self, client, page_with_contents, login):
        headers = login("reader", [])
        response = client.get(
            f"/api/v1/pages/{page_with_contents.id}/contents", headers=headers
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["total_count"] == 2
        assert [item["region"] for item in body["items"]] == ["main", "sidebar"]
        assert {item["status"] for item in body["items"]} == {CONTENT_STATUS_PUBLISHED}

    def test_region_filter_with_unpublished(self, client, page_with_contents, editor_headers):
        response = client.get(
            f"/api/v1/pages/{page_with_contents.id}/contents"
            "?region=main&include_unpublished=true",
            headers=editor_headers,
        )

        assert response.status_code == 200
        items = response.get_json()["items"]
        assert len(items) == 2
        assert {item["status"] for item in items} == {CONTENT_STATUS_DRAFT, CONTENT_STATUS_PUBLISHED}

    def test_unpublished_needs_cms_role(self, client, page_with_contents, login):
        headers = login("reader", [])
        response = client.get(
            f"/api/v1/pages/{page_with_contents.id}/contents?include_unpublished=1",
            headers=headers,
        )
        assert response.status_code == 403

    def test_denied_by_access_rule(self, client, db, page_with_contents, login):
        rule = AccessRule()
        rule.identity = "reader"
        rule.is_for_role = False
        rule.access_level = "deny"
        page_with_contents.access_rules.append(rule)
        db.session.commit()

        headers = login("reader", [])
        response = client.get(
            f"/api/v1/pages/{page_with_contents.id}/contents", headers=headers
        )
        assert response.status_code == 403

    def test_unknown_page(self, client, editor_headers):
        response = client.get("/api/v1/pages/missing/contents", headers=editor_headers)
        assert response.status_code == 404


def test_openapi_document_served(client):
    response = client.get("/openapi/pages.yaml")
    assert response.status_code == 200
    assert b"/pages/{page_id}/contents" in response.data
    response.close()
