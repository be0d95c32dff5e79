from pagecms.extensions import db
from .base import BaseModel


class AccessRule(BaseModel):
    __tablename__ = "access_rules"

    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)
    identity = db.Column(db.String(200), nullable=False)
    is_for_role = db.Column(db.Boolean, nullable=False, default=False)
    access_level = db.Column(db.String(20), nullable=False)

    page = db.relationship("Page", back_populates="access_rules")

    @property
    def key(self):
        return (self.identity.lower(), bool(self.is_for_role))

    def to_dict(self):
        return {
            "identity": self.identity,
            "is_for_role": self.is_for_role,
            "access_level": self.access_level,
        }
