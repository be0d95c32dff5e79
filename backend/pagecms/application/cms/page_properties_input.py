from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pagecms.domain.exceptions import ValidationError


def _image_id(value):
    if isinstance(value, dict):
        return value.get("image_id")
    return value


def _as_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _as_list(value, message_key, page_id):
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(
            message_key,
            f"Expected a list for page {page_id}, got {type(value).__name__}.",
            page_id=page_id,
        )
    return list(value)


@dataclass
class PagePropertiesInput:
    """Submitted state of the page properties editor."""

    id: str
    version: int
    page_url: str
    page_name: str
    template_id: Optional[str] = None
    master_page_id: Optional[str] = None
    category_id: Optional[str] = None
    page_css: Optional[str] = None
    page_javascript: Optional[str] = None

    redirect_from_old_url: bool = False
    update_sitemap: bool = False

    can_publish_page: bool = False
    is_page_published: bool = False

    use_no_follow: bool = False
    use_no_index: bool = False
    is_archived: bool = False
    use_canonical_url: bool = False

    image_id: Optional[str] = None
    secondary_image_id: Optional[str] = None
    featured_image_id: Optional[str] = None

    option_values: List[Dict[str, Any]] = field(default_factory=list)
    user_access_list: Optional[List[Dict[str, Any]]] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, page_id, data: Dict[str, Any]) -> "PagePropertiesInput":
        """
        Build the input from a JSON payload.

        Edge cases handled:
        - Missing required fields
        - Non-integer version
        - Images given either as ids or as ``{"image_id": ...}`` objects
        - Option values, tags and access rules of the wrong shape
        """
        missing = [name for name in ("page_url", "page_name", "version") if data.get(name) in (None, "")]
        if missing:
            raise ValidationError(
                "required_fields_missing",
                f"Fields {', '.join(missing)} are required for page {page_id}.",
                page_id=page_id,
            )

        try:
            version = int(data["version"])
        except (TypeError, ValueError):
            raise ValidationError(
                "invalid_version",
                f"Version {data['version']!r} of page {page_id} is not a number.",
                page_id=page_id,
            ) from None

        user_access_list = data.get("user_access_list")
        if user_access_list is not None:
            for rule in _as_list(user_access_list, "invalid_access_rule", page_id):
                if (
                    not isinstance(rule, dict)
                    or not isinstance(rule.get("identity"), str)
                    or not rule["identity"].strip()
                    or not rule.get("access_level")
                ):
                    raise ValidationError(
                        "invalid_access_rule",
                        f"Access rule {rule!r} of page {page_id} needs identity and access_level.",
                        page_id=page_id,
                    )

        option_values = _as_list(data.get("option_values"), "invalid_option", page_id)
        for option in option_values:
            if not isinstance(option, dict) or not isinstance(option.get("key"), str):
                raise ValidationError(
                    "invalid_option",
                    f"Option {option!r} of page {page_id} needs a string key.",
                    page_id=page_id,
                )

        tags = _as_list(data.get("tags"), "invalid_tag", page_id)
        for tag in tags:
            if not isinstance(tag, str):
                raise ValidationError(
                    "invalid_tag",
                    f"Tag {tag!r} of page {page_id} is not a name.",
                    page_id=page_id,
                )

        return cls(
            id=page_id,
            version=version,
            page_url=data["page_url"],
            page_name=data["page_name"],
            template_id=data.get("template_id"),
            master_page_id=data.get("master_page_id"),
            category_id=data.get("category_id"),
            page_css=data.get("page_css"),
            page_javascript=data.get("page_javascript"),
            redirect_from_old_url=_as_bool(data.get("redirect_from_old_url", False)),
            update_sitemap=_as_bool(data.get("update_sitemap", False)),
            can_publish_page=_as_bool(data.get("can_publish_page", False)),
            is_page_published=_as_bool(data.get("is_page_published", False)),
            use_no_follow=_as_bool(data.get("use_no_follow", False)),
            use_no_index=_as_bool(data.get("use_no_index", False)),
            is_archived=_as_bool(data.get("is_archived", False)),
            use_canonical_url=_as_bool(data.get("use_canonical_url", False)),
            image_id=_image_id(data.get("image")),
            secondary_image_id=_image_id(data.get("secondary_image")),
            featured_image_id=_image_id(data.get("featured_image")),
            option_values=option_values,
            user_access_list=user_access_list,
            tags=tags,
        )
