from sitecontent.extensions import db
from .base import BaseModel

class SiteContent(BaseModel):
    """
    The persisted site content.

    One row per content record (normally just ``main``). ``content`` is
    an opaque JSON blob in the interchange form.
    """
    __tablename__ = "site_content"

    content = db.Column(db.JSON, nullable=False)
