from pagecms.extensions import db
from .base import BaseModel

PAGE_STATUS_DRAFT = "draft"
PAGE_STATUS_UNPUBLISHED = "unpublished"
PAGE_STATUS_PUBLISHED = "published"


class Page(BaseModel):
    __tablename__ = "pages"

    page_url = db.Column(db.String(850), nullable=False)
    page_url_hash = db.Column(db.String(32), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=PAGE_STATUS_DRAFT, index=True)
    published_on = db.Column(db.DateTime(timezone=True), nullable=True)

    # Exactly one of layout_id / master_page_id is set
    layout_id = db.Column(db.String(36), db.ForeignKey("layouts.id"), nullable=True)
    master_page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=True)
    # Created as a master page; see acts_as_master for pages merely used as one
    is_master_page = db.Column(db.Boolean, nullable=False, default=False)

    use_no_follow = db.Column(db.Boolean, nullable=False, default=False)
    use_no_index = db.Column(db.Boolean, nullable=False, default=False)
    is_archived = db.Column(db.Boolean, nullable=False, default=False)
    use_canonical_url = db.Column(db.Boolean, nullable=False, default=False)

    # Optimistic concurrency token, bumped by SQLAlchemy on every UPDATE
    version = db.Column(db.Integer, nullable=False, default=1)

    # Page properties
    meta_title = db.Column(db.String(1000), nullable=True)
    meta_keywords = db.Column(db.Text, nullable=True)
    meta_description = db.Column(db.Text, nullable=True)
    canonical_url = db.Column(db.String(850), nullable=True)
    description = db.Column(db.Text, nullable=True)
    custom_css = db.Column(db.Text, nullable=True)
    custom_js = db.Column(db.Text, nullable=True)

    category_id = db.Column(db.String(36), db.ForeignKey("categories.id"), nullable=True)
    image_id = db.Column(db.String(36), db.ForeignKey("media_images.id"), nullable=True)
    secondary_image_id = db.Column(db.String(36), db.ForeignKey("media_images.id"), nullable=True)
    featured_image_id = db.Column(db.String(36), db.ForeignKey("media_images.id"), nullable=True)

    __mapper_args__ = {"version_id_col": version}

    layout = db.relationship("Layout", lazy="select")

    options = db.relationship(
        "PageOption",
        back_populates="page",
        cascade="all, delete-orphan",
    )

    # Full lineage: one row per ancestor master page
    master_pages = db.relationship(
        "MasterPage",
        foreign_keys="MasterPage.page_id",
        back_populates="page",
        cascade="all",
    )

    page_tags = db.relationship(
        "PageTag",
        back_populates="page",
        order_by="PageTag.created_at",
        cascade="all, delete-orphan",
    )

    access_rules = db.relationship(
        "AccessRule",
        back_populates="page",
        cascade="all, delete-orphan",
    )

    contents = db.relationship(
        "PageContent",
        back_populates="page",
        cascade="all, delete-orphan",
    )

    # Derived columns, mapped next to the models they count:
    #   is_used_as_master      models/master_page.py
    #   node_count_in_sitemap  models/sitemap.py

    @property
    def acts_as_master(self):
        return bool(self.is_master_page or self.is_used_as_master)

    @property
    def has_seo(self):
        base_seo = all(
            value and value.strip()
            for value in (self.meta_title, self.meta_keywords, self.meta_description)
        )
        return bool(base_seo) and (self.node_count_in_sitemap or 0) > 0

    @property
    def tag_names(self):
        return [page_tag.tag.name for page_tag in self.page_tags]

    def duplicate(self):
        """
        Unsaved copy of the page's SEO, styling, indexing, layout, image and
        category properties. Url, title, status, lineage, options, tags and
        access rules are not copied.
        """
        duplicate = Page()
        for name in (
            "meta_title",
            "meta_keywords",
            "meta_description",
            "use_canonical_url",
            "custom_css",
            "custom_js",
            "description",
            "use_no_follow",
            "use_no_index",
            "layout_id",
            "image_id",
            "category_id",
        ):
            setattr(duplicate, name, getattr(self, name))
        return duplicate
