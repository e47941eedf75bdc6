"""Curated alternative model"""

from sqlalchemy import Column, Integer, Float, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class CuratedAlternative(Base, TimestampMixin):
    """Administrator-asserted edge from one tool to another (directed)"""

    __tablename__ = "curated_alternatives"

    id = Column(Integer, primary_key=True, index=True)
    tool_id = Column(Integer, ForeignKey("tools.id", ondelete="CASCADE"), nullable=False, index=True)
    alternative_id = Column(Integer, ForeignKey("tools.id", ondelete="CASCADE"), nullable=False)
    manual_score = Column(Float, nullable=False, default=0.0)
    note = Column(Text)

    # Relationships
    tool = relationship("Tool", foreign_keys=[tool_id], back_populates="curated_alternatives")
    alternative = relationship("Tool", foreign_keys=[alternative_id])

    __table_args__ = (
        UniqueConstraint("tool_id", "alternative_id", name="uq_curated_edge"),
    )

    def __repr__(self):
        return f"<CuratedAlternative(tool_id={self.tool_id}, alternative_id={self.alternative_id}, score={self.manual_score})>"
