from pagecms.extensions import db
from .base import BaseModel


class Tag(BaseModel):
    __tablename__ = "tags"

    name = db.Column(db.String(200), nullable=False, unique=True)


class PageTag(BaseModel):
    __tablename__ = "page_tags"

    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)
    tag_id = db.Column(db.String(36), db.ForeignKey("tags.id"), nullable=False, index=True)

    page = db.relationship("Page", back_populates="page_tags")
    tag = db.relationship("Tag", lazy="joined")

    __table_args__ = (
        db.UniqueConstraint("page_id", "tag_id", name="uq_page_tag"),
    )
