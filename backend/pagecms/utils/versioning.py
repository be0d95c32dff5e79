def snapshot_page_properties(page, *, tags=None):
    """
    Plain-dict picture of the editable page properties, as handed to the
    ``page_properties_changing`` receivers.
    """
    return {
        "id": page.id,
        "page_url": page.page_url,
        "title": page.title,
        "status": page.status,
        "published_on": page.published_on.isoformat() if page.published_on else None,
        "layout_id": page.layout_id,
        "master_page_id": page.master_page_id,
        "is_master_page": page.acts_as_master,
        "category_id": page.category_id,
        "custom_css": page.custom_css,
        "custom_js": page.custom_js,
        "use_no_follow": page.use_no_follow,
        "use_no_index": page.use_no_index,
        "is_archived": page.is_archived,
        "use_canonical_url": page.use_canonical_url,
        "image_id": page.image_id,
        "secondary_image_id": page.secondary_image_id,
        "featured_image_id": page.featured_image_id,
        "version": page.version,
        "tags": list(tags) if tags is not None else page.tag_names,
    }
