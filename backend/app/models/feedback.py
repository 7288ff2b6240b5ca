"""
Feedback model: an admin's review of a designer's work, with the designer's reply.
"""

from typing import List, Optional
from sqlalchemy import BigInteger, Boolean, Integer, String, Text, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.core.database import Base
from app.core.timeutils import now_ms


class Feedback(Base):
    """
    Feedback sent by an admin to a designer.
    """
    __tablename__ = "feedbacks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    designer_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    designer_name: Mapped[str] = mapped_column(String(120), nullable=False)
    admin_name: Mapped[str] = mapped_column(String(120), nullable=False)

    # Opaque image references (URLs or data URIs) stored as given
    image_urls: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    comment: Mapped[str] = mapped_column(Text, default="", nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)

    viewed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    viewed_at: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    response_at: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    designer = relationship("User")

    __table_args__ = (
        Index("idx_feedback_designer_created", "designer_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Feedback(id={self.id}, designer_id={self.designer_id}, viewed={self.viewed})>"

    def mark_viewed(self) -> None:
        self.viewed = True
        self.viewed_at = now_ms()

    def respond(self, text: str) -> None:
        self.response = text
        self.response_at = now_ms()
