"""
Daily clock-in markers.
"""

from sqlalchemy import BigInteger, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.core.database import Base
from app.core.timeutils import now_ms


class WorkSession(Base):
    __tablename__ = "work_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)

    user = relationship("User", back_populates="work_sessions")

    __table_args__ = (
        Index("idx_work_session_user_timestamp", "user_id", "timestamp"),
    )

    def __repr__(self) -> str:
        return f"<WorkSession(id={self.id}, user_id={self.user_id}, timestamp={self.timestamp})>"
