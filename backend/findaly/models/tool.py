"""Tool model"""

from enum import Enum
from sqlalchemy import Column, Integer, String, Text, JSON, Boolean, ForeignKey, Table, Index
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class ToolStatus(str, Enum):
    """Lifecycle status of a catalog entry"""

    ACTIVE = "ACTIVE"
    DRAFT = "DRAFT"
    ARCHIVED = "ARCHIVED"


class PricingModel(str, Enum):
    FREE = "FREE"
    FREEMIUM = "FREEMIUM"
    PAID = "PAID"
    ENTERPRISE = "ENTERPRISE"


tool_use_cases = Table(
    "tool_use_cases",
    Base.metadata,
    Column("tool_id", Integer, ForeignKey("tools.id", ondelete="CASCADE"), primary_key=True),
    Column("use_case_id", Integer, ForeignKey("use_cases.id", ondelete="CASCADE"), primary_key=True),
)


class Tool(Base, TimestampMixin):
    """Directory entry that gets ranked and cross-linked"""

    __tablename__ = "tools"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    slug = Column(String(200), unique=True, index=True, nullable=False)
    status = Column(String(20), nullable=False, default=ToolStatus.DRAFT.value)
    is_featured = Column(Boolean, nullable=False, default=False)
    pricing_model = Column(String(20), nullable=False, default=PricingModel.FREEMIUM.value)
    short_description = Column(Text)

    # Scoring signals, free-text sets
    target_audience = Column(JSON, default=list)
    key_features = Column(JSON, default=list)
    integrations = Column(JSON, default=list)

    primary_category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)

    # Relationships
    primary_category = relationship("Category", back_populates="tools")
    use_cases = relationship(
        "UseCase", secondary=tool_use_cases, back_populates="tools", order_by="UseCase.slug"
    )
    curated_alternatives = relationship(
        "CuratedAlternative",
        foreign_keys="CuratedAlternative.tool_id",
        back_populates="tool",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_tool_category_status", "primary_category_id", "status"),
    )

    def __repr__(self):
        return f"<Tool(id={self.id}, slug='{self.slug}', status='{self.status}')>"
