"""
Art type catalogue: the categories of work a designer can log and their point values.
"""

from sqlalchemy import Integer, String, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class ArtType(Base):
    __tablename__ = "art_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    label: Mapped[str] = mapped_column(String(120), nullable=False)
    points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    order: Mapped[int] = mapped_column("sort_order", Integer, default=0, nullable=False)

    __table_args__ = (
        CheckConstraint("points >= 0", name="check_points_positive"),
        Index("idx_art_type_order", "sort_order"),
    )

    def __repr__(self) -> str:
        return f"<ArtType(id={self.id}, label='{self.label}', points={self.points})>"

    @property
    def is_variation(self) -> bool:
        """Variation entries add points but are not counted as new arts."""
        return "variação" in self.label.lower()
