# pagecms/application/cms/save_page_properties.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from flask import current_app
from sqlalchemy.orm.exc import StaleDataError

from pagecms.application.cms.page_properties_input import PagePropertiesInput
from pagecms.domain.exceptions import ConcurrencyConflict, ValidationError
from pagecms.domain.invariants.page import (
    assert_layout_or_master,
    assert_master_page_allowed,
    assert_page_title,
)
from pagecms.domain.lifecycle.page import assert_page_transition
from pagecms.events import PageEvents
from pagecms.extensions import db
from pagecms.models.layout import Layout
from pagecms.models.page import (
    PAGE_STATUS_PUBLISHED,
    PAGE_STATUS_UNPUBLISHED,
    Page,
)
from pagecms.models.page_option import PageOption
from pagecms.models.redirect import Redirect
from pagecms.models.sitemap import SitemapNode
from pagecms.models.tag import Tag
from pagecms.security import policies
from pagecms.security.access_control import (
    AccessLevel,
    demand_access,
    demand_roles,
    is_authorized,
    remove_duplicate_rules,
    update_access_control,
)
from pagecms.security.principal import Principal
from pagecms.services.contents import publish_draft_content
from pagecms.services.master_pages import (
    get_children_master_pages_to_update,
    get_page_master_page_ids,
    update_children_master_pages,
)
from pagecms.services.options import save_option_values, validate_option_values
from pagecms.services.pages import load_page_properties, validate_page_url
from pagecms.services.redirects import create_redirect_entity
from pagecms.services.sitemaps import change_urls_in_all_sitemap_nodes
from pagecms.services.tags import save_page_tags
from pagecms.services.urls import fix_url, url_hash, validate_url
from pagecms.utils.audit import log_action
from pagecms.utils.transaction import transactional
from pagecms.utils.versioning import snapshot_page_properties


@dataclass
class SavePagePropertiesResult:
    """
    Outcome of a save. ``page`` is ``None`` when a ``page_properties_changing``
    receiver vetoed the save; ``messages`` then holds the reasons.
    """

    page: Optional[Page]
    messages: List[str] = field(default_factory=list)
    redirect: Optional[Redirect] = None
    new_tags: List[Tag] = field(default_factory=list)
    updated_sitemap_nodes: List[SitemapNode] = field(default_factory=list)

    @property
    def cancelled(self) -> bool:
        return self.page is None


@dataclass
class _MasterLineageChange:
    new_master_ids: List[str]
    old_master_ids: List[str]
    existing_master_pages: list
    children_page_ids: List[str]


@dataclass
class _SavePlan:
    page: Page
    can_edit: bool
    page_url: str
    url_changed: bool
    target_status: Optional[str]
    lineage: Optional[_MasterLineageChange]
    access_control_enabled: bool


class _PropertiesChangeCancelled(Exception):
    def __init__(self, messages):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


def _master_lineage_change(page, data) -> Optional[_MasterLineageChange]:
    """
    Lineage deltas for a master page reassignment, or ``None`` when the
    master page stays the same.
    """
    changing = (
        (page.master_page_id is not None and page.master_page_id != data.master_page_id)
        or (page.master_page_id is None and data.master_page_id)
    )
    if not changing:
        return None

    new_master_ids = (
        get_page_master_page_ids(data.master_page_id) if data.master_page_id else []
    )
    old_master_ids = (
        list(dict.fromkeys(mp.master_id for mp in page.master_pages))
        if page.master_page_id is not None
        else []
    )

    # Ancestors shared by the old and the new chain stay untouched
    shared = set(new_master_ids) & set(old_master_ids)
    new_master_ids = [i for i in new_master_ids if i not in shared]
    old_master_ids = [i for i in old_master_ids if i not in shared]

    updating_ids = list(dict.fromkeys(new_master_ids + old_master_ids))
    existing, children_page_ids = get_children_master_pages_to_update(page, updating_ids)

    return _MasterLineageChange(
        new_master_ids=new_master_ids,
        old_master_ids=old_master_ids,
        existing_master_pages=existing,
        children_page_ids=children_page_ids,
    )


def _plan_save(data: PagePropertiesInput, principal: Principal) -> _SavePlan:
    # 1️⃣ Layout / master page selection
    assert_layout_or_master(
        page_id=data.id,
        template_id=data.template_id,
        master_page_id=data.master_page_id,
    )
    if data.master_page_id:
        assert_master_page_allowed(page_id=data.id, master_page_id=data.master_page_id)

    # 2️⃣ Load page graph
    access_control_enabled = current_app.config.get("ACCESS_CONTROL_ENABLED", False)
    page = load_page_properties(data.id, include_access_rules=access_control_enabled)

    # 3️⃣ Authorization, before anything is touched
    roles = policies.save_roles(page)
    if access_control_enabled:
        demand_access(principal, roles, page, AccessLevel.READ_WRITE)
    else:
        demand_roles(principal, roles)

    changes_publication = data.can_publish_page and policies.can_change_publication(page)
    if changes_publication:
        demand_roles(principal, policies.publish_roles(page))

    if page.version != data.version:
        raise ConcurrencyConflict(
            page.id,
            f"Page {page.id} is at version {page.version}, version {data.version} was submitted.",
        )

    can_edit = is_authorized(principal, policies.edit_roles(page))

    # 4️⃣ Remaining validation
    page_url = fix_url(data.page_url)
    url_changed = can_edit and page.page_url != page_url
    if url_changed:
        validate_url(page_url)
        validate_page_url(page_url, excluding_page_id=page.id)

    if can_edit:
        assert_page_title(page_id=page.id, title=data.page_name)
        validate_option_values(data.option_values)

        if (
            data.template_id
            and data.template_id != page.layout_id
            and db.session.get(Layout, data.template_id) is None
        ):
            raise ValidationError(
                "layout_not_found",
                f"Layout {data.template_id} selected for page {page.id} does not exist.",
                page_id=page.id,
            )

    target_status = None
    if changes_publication:
        target_status = PAGE_STATUS_PUBLISHED if data.is_page_published else PAGE_STATUS_UNPUBLISHED
        if target_status == page.status:
            target_status = None
        else:
            assert_page_transition(from_status=page.status, to_status=target_status)

    return _SavePlan(
        page=page,
        can_edit=can_edit,
        page_url=page_url,
        url_changed=url_changed,
        target_status=target_status,
        lineage=_master_lineage_change(page, data),
        access_control_enabled=access_control_enabled,
    )


def _apply_page_changes(plan: _SavePlan, data: PagePropertiesInput) -> bool:
    """
    Copy submitted values onto the page. Returns True if the page gets
    published by this save.
    """
    page = plan.page

    if plan.url_changed:
        page.page_url = plan.page_url

    if plan.can_edit:
        page.page_url_hash = url_hash(page.page_url)
        page.category_id = data.category_id or None
        page.title = data.page_name
        page.custom_css = data.page_css
        page.custom_js = data.page_javascript

        # Layout and master page are mutually exclusive
        if data.master_page_id:
            page.master_page_id = data.master_page_id
            page.layout_id = None
        else:
            page.layout_id = data.template_id
            page.master_page_id = None

    publishing = False
    if plan.target_status is not None:
        page.status = plan.target_status
        if plan.target_status == PAGE_STATUS_PUBLISHED:
            page.published_on = datetime.now(timezone.utc)
            publishing = True

    if plan.can_edit:
        if policies.applies_indexing_flags(page):
            page.use_no_follow = data.use_no_follow
            page.use_no_index = data.use_no_index
            page.is_archived = data.is_archived

        page.use_canonical_url = data.use_canonical_url

        page.image_id = data.image_id or None
        page.secondary_image_id = data.secondary_image_id or None
        page.featured_image_id = data.featured_image_id or None

    return publishing


def _layout_option_defaults(page):
    if not page.layout_id:
        return {}
    layout = db.session.get(Layout, page.layout_id)
    if layout is None:
        return {}
    return {option.key: option.default_value for option in layout.layout_options}


def save_page_properties(
    *,
    data: PagePropertiesInput,
    principal: Principal,
    events: PageEvents,
) -> SavePagePropertiesResult:
    """
    Save the properties of an existing page.

    Responsibilities:
    - layout / master page validation and master lineage maintenance
    - authorization (edit and publish tiers)
    - url change with optional redirect and sitemap update
    - publication, SEO flags, images, options, access rules and tags
    - cancellable change notification, then post-commit notifications

    Everything is validated and loaded before the transaction opens. Inside
    it, the ``page_properties_changing`` veto runs before any write.
    """
    try:
        plan = _plan_save(data, principal)
    except (ValidationError, ConcurrencyConflict) as exc:
        current_app.logger.warning("Page properties of %s rejected: %s", data.id, exc)
        raise

    page = plan.page
    before = snapshot_page_properties(page)
    initial_seo_status = page.has_seo
    old_url = page.page_url

    redirect = None
    updated_nodes: List[SitemapNode] = []
    new_tags: List[Tag] = []

    try:
        with transactional():
            # 1️⃣ In-memory changes, announced before anything is flushed
            with db.session.no_autoflush:
                publishing = _apply_page_changes(plan, data)
                after = snapshot_page_properties(
                    page, tags=data.tags if plan.can_edit else None
                )
                changing = events.on_page_properties_changing(before, after)

            if changing.cancel_requested:
                raise _PropertiesChangeCancelled(changing.messages)

            # 2️⃣ Url side effects
            if plan.url_changed:
                if data.redirect_from_old_url:
                    redirect = create_redirect_entity(old_url, plan.page_url)
                    if redirect is not None:
                        db.session.add(redirect)

                if data.update_sitemap:
                    updated_nodes = change_urls_in_all_sitemap_nodes(old_url, plan.page_url)

            # 3️⃣ Options and access rules
            if plan.can_edit:
                save_option_values(
                    data.option_values,
                    page.options,
                    PageOption,
                    default_values=_layout_option_defaults(page),
                )

                if plan.access_control_enabled:
                    remove_duplicate_rules(page)
                    update_access_control(page, data.user_access_list)

            # 4️⃣ Persist page, version is checked here
            db.session.flush()

            # 5️⃣ Lineage and tags
            if plan.can_edit:
                if plan.lineage is not None:
                    update_children_master_pages(
                        plan.lineage.existing_master_pages,
                        plan.lineage.old_master_ids,
                        plan.lineage.new_master_ids,
                        plan.lineage.children_page_ids,
                    )
                new_tags = save_page_tags(page, data.tags)

            if publishing:
                publish_draft_content(page.id)

            log_action(
                action="page.properties.save",
                entity_type="page",
                entity_id=page.id,
                actor_id=principal.user_id,
                payload={
                    "fields": sorted(
                        key for key, value in after.items()
                        if key != "version" and before.get(key) != value
                    ),
                    "redirect": redirect is not None,
                    "sitemap_nodes": len(updated_nodes),
                },
            )

    except _PropertiesChangeCancelled as cancelled:
        current_app.logger.info(
            "Saving properties of page %s was cancelled: %s", data.id, cancelled
        )
        return SavePagePropertiesResult(page=None, messages=cancelled.messages)

    except StaleDataError as exc:
        current_app.logger.warning("Page %s was saved concurrently", data.id)
        raise ConcurrencyConflict(data.id) from exc

    current_app.logger.info("Saved properties of page %s", page.id)

    # 6️⃣ Post-commit notifications
    events.on_page_properties_changed(page)

    if redirect is not None:
        events.on_redirect_created(redirect)

    # Expired by the commit; the sitemap node count is reloaded for the new url
    if initial_seo_status != page.has_seo:
        events.on_page_seo_status_changed(page)

    events.on_tag_created(new_tags)

    updated_sitemaps = []
    for node in updated_nodes:
        events.on_sitemap_node_updated(node)
        if node.sitemap not in updated_sitemaps:
            updated_sitemaps.append(node.sitemap)

    for sitemap in updated_sitemaps:
        events.on_sitemap_updated(sitemap)

    return SavePagePropertiesResult(
        page=page,
        redirect=redirect,
        new_tags=new_tags,
        updated_sitemap_nodes=updated_nodes,
    )
