from pagecms.extensions import db
from .base import BaseModel

CONTENT_STATUS_DRAFT = "draft"
CONTENT_STATUS_PUBLISHED = "published"


class PageContent(BaseModel):
    __tablename__ = "page_contents"

    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)
    region = db.Column(db.String(200), nullable=False)
    html = db.Column(db.Text, nullable=False, default="")
    status = db.Column(db.String(20), nullable=False, default=CONTENT_STATUS_DRAFT, index=True)
    published_on = db.Column(db.DateTime(timezone=True), nullable=True)

    page = db.relationship("Page", back_populates="contents")
