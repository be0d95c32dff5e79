# pagecms/api/v1/pages.py
from flask import current_app, request, jsonify
from flask_jwt_extended import jwt_required

from pagecms.application.cms.page_properties_input import PagePropertiesInput
from pagecms.application.cms.save_page_properties import save_page_properties
from pagecms.normalizers.content import normalize_page_content
from pagecms.normalizers.page import normalize_page_properties
from pagecms.security.access_control import (
    AccessLevel,
    demand_access_level,
    demand_roles,
    is_authorized,
)
from pagecms.security.roles import ADMINISTRATION, EDIT_CONTENT, PUBLISH_CONTENT
from pagecms.services.contents import get_page_contents
from pagecms.services.pages import load_page_properties
from pagecms.utils.decorators import current_principal, roles_required
from . import v1_bp


def _as_flag(value):
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@v1_bp.route("/pages/<page_id>/properties", methods=["GET"])
@jwt_required()
@roles_required(EDIT_CONTENT, PUBLISH_CONTENT, ADMINISTRATION)
def get_page_properties(page_id):
    page = load_page_properties(
        page_id,
        include_access_rules=current_app.config.get("ACCESS_CONTROL_ENABLED", False),
    )

    admin = is_authorized(current_principal(), (ADMINISTRATION,))
    return jsonify(normalize_page_properties(page, admin=admin))


@v1_bp.route("/pages/<page_id>/contents", methods=["GET"])
@jwt_required()
def get_page_contents_view(page_id):
    principal = current_principal()
    access_control_enabled = current_app.config.get("ACCESS_CONTROL_ENABLED", False)

    include_unpublished = _as_flag(request.args.get("include_unpublished"))
    if include_unpublished:
        demand_roles(principal, (EDIT_CONTENT, PUBLISH_CONTENT, ADMINISTRATION))

    page = load_page_properties(page_id, include_access_rules=access_control_enabled)
    if access_control_enabled:
        demand_access_level(principal, page, AccessLevel.READ)

    contents = get_page_contents(
        page,
        region=request.args.get("region") or None,
        include_unpublished=include_unpublished,
    )

    return jsonify({
        "items": [normalize_page_content(content) for content in contents],
        "total_count": len(contents),
    })


@v1_bp.route("/pages/<page_id>/properties", methods=["PUT"])
@jwt_required()
def save_page_properties_view(page_id):
    data = PagePropertiesInput.from_payload(page_id, request.get_json(silent=True) or {})

    result = save_page_properties(
        data=data,
        principal=current_principal(),
        events=current_app.extensions["page_events"],
    )

    if result.cancelled:
        return jsonify({
            "error": "SaveCancelled",
            "messages": result.messages,
        }), 422

    return jsonify({
        "message": "Page properties saved",
        "page": normalize_page_properties(result.page),
        "redirect": result.redirect.to_dict() if result.redirect else None,
        "new_tags": [tag.name for tag in result.new_tags],
    }), 200
