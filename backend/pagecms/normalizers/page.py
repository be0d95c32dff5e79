def normalize_page_properties(page, admin=False):
    data = {
        "id": page.id,
        "version": page.version,
        "page_url": page.page_url,
        "page_name": page.title,
        "status": page.status,
        "published_on": page.published_on.isoformat() if page.published_on else None,
        "template_id": page.layout_id,
        "master_page_id": page.master_page_id,
        "is_master_page": page.acts_as_master,
        "category_id": page.category_id,
        "page_css": page.custom_css,
        "page_javascript": page.custom_js,
        "use_no_follow": page.use_no_follow,
        "use_no_index": page.use_no_index,
        "is_archived": page.is_archived,
        "use_canonical_url": page.use_canonical_url,
        "has_seo": page.has_seo,
        "image": {"image_id": page.image_id} if page.image_id else None,
        "secondary_image": {"image_id": page.secondary_image_id} if page.secondary_image_id else None,
        "featured_image": {"image_id": page.featured_image_id} if page.featured_image_id else None,
        "option_values": [
            {"key": option.key, "type": option.type, "value": option.value}
            for option in sorted(page.options, key=lambda o: o.key)
        ],
        "tags": page.tag_names,
    }

    if admin:
        data["user_access_list"] = [rule.to_dict() for rule in page.access_rules]
        data["master_page_ids"] = sorted(mp.master_id for mp in page.master_pages)

    return data
