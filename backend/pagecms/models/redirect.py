from pagecms.extensions import db
from .base import BaseModel


class Redirect(BaseModel):
    __tablename__ = "redirects"

    page_url = db.Column(db.String(850), nullable=False, index=True)
    redirect_url = db.Column(db.String(850), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "page_url": self.page_url,
            "redirect_url": self.redirect_url,
        }
