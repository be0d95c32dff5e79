from typing import List

from pagecms.models.sitemap import SitemapNode
from .urls import url_hash


def change_urls_in_all_sitemap_nodes(old_url, new_url) -> List[SitemapNode]:
    """
    Point every sitemap node that links to ``old_url`` at ``new_url``.

    Returns the changed nodes, across all sitemaps.
    """
    nodes = SitemapNode.query.filter_by(url_hash=url_hash(old_url)).all()

    new_hash = url_hash(new_url)
    for node in nodes:
        node.url = new_url
        node.url_hash = new_hash

    return nodes
