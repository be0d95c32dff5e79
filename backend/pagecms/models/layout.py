from pagecms.extensions import db
from .base import BaseModel


class Layout(BaseModel):
    __tablename__ = "layouts"

    name = db.Column(db.String(200), nullable=False)
    layout_path = db.Column(db.String(850), nullable=False)

    layout_options = db.relationship(
        "LayoutOption",
        back_populates="layout",
        cascade="all, delete-orphan",
    )


class LayoutOption(BaseModel):
    __tablename__ = "layout_options"

    layout_id = db.Column(db.String(36), db.ForeignKey("layouts.id"), nullable=False)
    key = db.Column(db.String(200), nullable=False)
    type = db.Column(db.String(20), nullable=False, default="text")
    default_value = db.Column(db.Text, nullable=True)

    layout = db.relationship("Layout", back_populates="layout_options")

    __table_args__ = (
        db.UniqueConstraint("layout_id", "key", name="uq_layout_option_key"),
    )
