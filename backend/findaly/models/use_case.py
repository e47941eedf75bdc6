"""Use-case model"""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class UseCase(Base, TimestampMixin):
    """Buyer intent tag, many-to-many with tools"""

    __tablename__ = "use_cases"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(200), unique=True, index=True, nullable=False)
    description = Column(Text)

    # Relationships
    tools = relationship("Tool", secondary="tool_use_cases", back_populates="use_cases")

    def __repr__(self):
        return f"<UseCase(id={self.id}, slug='{self.slug}')>"
