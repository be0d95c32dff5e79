from sqlalchemy import func, select
from sqlalchemy.orm import column_property

from pagecms.extensions import db
from .base import BaseModel
from .page import Page


class Sitemap(BaseModel):
    __tablename__ = "sitemaps"

    title = db.Column(db.String(200), nullable=False)

    nodes = db.relationship(
        "SitemapNode",
        back_populates="sitemap",
        cascade="all, delete-orphan",
    )


class SitemapNode(BaseModel):
    __tablename__ = "sitemap_nodes"

    sitemap_id = db.Column(db.String(36), db.ForeignKey("sitemaps.id"), nullable=False, index=True)
    parent_id = db.Column(db.String(36), db.ForeignKey("sitemap_nodes.id"), nullable=True)
    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=True)
    title = db.Column(db.String(200), nullable=False)
    url = db.Column(db.String(850), nullable=True)
    url_hash = db.Column(db.String(32), nullable=True, index=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)

    sitemap = db.relationship("Sitemap", back_populates="nodes")
    children = db.relationship("SitemapNode", order_by="SitemapNode.display_order")


# Sitemap nodes linking to the page's url
Page.node_count_in_sitemap = column_property(
    select(func.count(SitemapNode.id))
    .where(SitemapNode.url_hash == Page.page_url_hash)
    .correlate_except(SitemapNode)
    .scalar_subquery()
)
