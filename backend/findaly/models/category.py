"""Category model"""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Category(Base, TimestampMixin):
    """Primary grouping for tools (one category per tool)"""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(200), unique=True, index=True, nullable=False)
    description = Column(Text)

    # Relationships
    tools = relationship("Tool", back_populates="primary_category")

    def __repr__(self):
        return f"<Category(id={self.id}, slug='{self.slug}')>"
