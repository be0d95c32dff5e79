from pagecms.extensions import db
from .base import BaseModel


class PageOption(BaseModel):
    __tablename__ = "page_options"

    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)
    key = db.Column(db.String(200), nullable=False)
    type = db.Column(db.String(20), nullable=False, default="text")
    value = db.Column(db.Text, nullable=True)

    page = db.relationship("Page", back_populates="options")

    __table_args__ = (
        db.UniqueConstraint("page_id", "key", name="uq_page_option_key"),
    )
