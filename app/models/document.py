"""
Document store database model.

Every collection of the storefront (products, categories, settings, carts)
lives in one table keyed by (collection, key) with a JSON payload.
"""

from sqlalchemy import Column, String, JSON, text, TIMESTAMP

from app.database import Base


class Document(Base):
    """A JSON document addressed by collection name and key"""
    __tablename__ = "documents"

    collection = Column(String, primary_key=True)
    key = Column(String, primary_key=True)
    data = Column(JSON, nullable=False)

    created_at = Column(
        TIMESTAMP(timezone=False),
        server_default=text("timezone('utc', now())"),
        nullable=False
    )
    updated_at = Column(
        TIMESTAMP(timezone=False),
        server_default=text("timezone('utc', now())"),
        onupdate=text("timezone('utc', now())"),
        nullable=False
    )

    def __repr__(self):
        return f"<Document {self.collection}/{self.key}>"
