from pagebuilder.extensions import db
from .base import BaseModel, utc_now


class PageVersion(BaseModel):
    __tablename__ = "page_versions"

    page_id = db.Column(
        db.String(36),
        db.ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=False
    )

    version_number = db.Column(db.Integer, nullable=False)
    timestamp = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)
    author_id = db.Column(db.String(100), nullable=False, default="system")
    version_name = db.Column(db.String(255), nullable=True)
    change_description = db.Column(db.Text, nullable=True)

    # Snapshot of the page's components at `timestamp`
    components = db.Column(db.JSON, nullable=False, default=list)

    page = db.relationship("Page", back_populates="versions")

    __table_args__ = (
        db.UniqueConstraint("page_id", "version_number", name="uq_page_version_number"),
        db.Index("idx_page_version_page", "page_id"),
    )
