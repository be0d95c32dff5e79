def normalize_page_content(content):
    return {
        "id": content.id,
        "page_id": content.page_id,
        "region": content.region,
        "html": content.html,
        "status": content.status,
        "published_on": content.published_on.isoformat() if content.published_on else None,
    }
