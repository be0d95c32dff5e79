from sqlalchemy import exists
from sqlalchemy.orm import column_property

from pagecms.extensions import db
from .base import BaseModel
from .page import Page


class MasterPage(BaseModel):
    """A single (page, ancestor) row of a page's master page lineage."""

    __tablename__ = "master_pages"

    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)
    master_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)

    page = db.relationship("Page", foreign_keys=[page_id], back_populates="master_pages")
    master = db.relationship("Page", foreign_keys=[master_id])

    __table_args__ = (
        db.UniqueConstraint("page_id", "master_id", name="uq_master_page_lineage"),
    )


# A page is used as a master while any lineage row points at it
Page.is_used_as_master = column_property(
    exists().where(MasterPage.master_id == Page.id).correlate_except(MasterPage)
)
