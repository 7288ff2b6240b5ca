"""
Monthly recognition records.
"""

from typing import Optional
from sqlalchemy import BigInteger, Integer, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.core.database import Base
from app.core.timeutils import now_ms


class Award(Base):
    __tablename__ = "awards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    designer_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    designer_name: Mapped[str] = mapped_column(String(120), nullable=False)
    month: Mapped[str] = mapped_column(String(50), nullable=False)  # free text, e.g. "Março 2025"
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)

    designer = relationship("User")

    __table_args__ = (
        Index("idx_award_designer", "designer_id"),
    )

    def __repr__(self) -> str:
        return f"<Award(id={self.id}, designer_id={self.designer_id}, month='{self.month}')>"
