"""
Lesson models for Studio Tracker.

Defines Lesson (a training video) and LessonProgress, which tracks which
designers have watched which lessons.
"""

from typing import Optional
from sqlalchemy import BigInteger, Boolean, Integer, String, Text, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.core.database import Base
from app.core.timeutils import now_ms


class Lesson(Base):
    """
    Training video shown to designers, ordered by ``order_index``.
    """
    __tablename__ = "lessons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    video_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)

    progress = relationship("LessonProgress", back_populates="lesson", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_lesson_order", "order_index"),
    )

    def __repr__(self) -> str:
        return f"<Lesson(id={self.id}, title='{self.title}', order={self.order_index})>"


class LessonProgress(Base):
    """
    Tracks whether a designer has watched a lesson.
    """
    __tablename__ = "lesson_progress"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    lesson_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("lessons.id", ondelete="CASCADE"),
        nullable=False
    )
    designer_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)

    viewed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    viewed_at: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    lesson = relationship("Lesson", back_populates="progress")

    __table_args__ = (
        UniqueConstraint("lesson_id", "designer_id", name="uq_lesson_designer_progress"),
        Index("idx_lesson_progress_designer", "designer_id"),
    )

    def __repr__(self) -> str:
        return f"<LessonProgress(lesson_id={self.lesson_id}, designer_id={self.designer_id}, viewed={self.viewed})>"
