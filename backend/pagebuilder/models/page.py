from pagebuilder.extensions import db
from .base import BaseModel


class Page(BaseModel):
    __tablename__ = "pages"

    template_id = db.Column(db.String(100), nullable=True, index=True)

    # Serialized component collection, in display order
    components = db.Column(db.JSON, nullable=False, default=list)

    versions = db.relationship(
        "PageVersion",
        back_populates="page",
        order_by="PageVersion.version_number.desc()",
        cascade="all, delete-orphan",
    )
