from pagecms.extensions import db
from .base import BaseModel


class MediaImage(BaseModel):
    __tablename__ = "media_images"

    title = db.Column(db.String(200), nullable=False)
    public_url = db.Column(db.String(850), nullable=False)
