"""
Demand models for Studio Tracker.

A Demand is one submission of finished work by a designer. Its items
snapshot the art type label and point value at the time of submission so
later catalogue edits never rewrite history.
"""

from typing import List, Optional
from sqlalchemy import BigInteger, Integer, String, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.core.database import Base
from app.core.timeutils import now_ms


class Demand(Base):
    """
    A logged unit of completed design work.
    """
    __tablename__ = "demands"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    user_name: Mapped[str] = mapped_column(String(120), nullable=False)

    # Totals, recomputed by the server whenever items change
    total_quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Epoch milliseconds
    timestamp: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)

    # Per designer, per local day sequence label, e.g. "S1", "QA3"
    execution_code: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)

    # Relationships
    user = relationship("User", back_populates="demands")
    items: Mapped[List["DemandItem"]] = relationship(
        "DemandItem",
        back_populates="demand",
        cascade="all, delete-orphan",
        order_by="DemandItem.id"
    )

    __table_args__ = (
        CheckConstraint("total_quantity >= 0", name="check_total_quantity_positive"),
        CheckConstraint("total_points >= 0", name="check_total_points_positive"),
        Index("idx_demand_user_timestamp", "user_id", "timestamp"),
        Index("idx_demand_timestamp", "timestamp"),
    )

    def __repr__(self) -> str:
        return f"<Demand(id={self.id}, user_id={self.user_id}, code='{self.execution_code}', points={self.total_points})>"


class DemandItem(Base):
    """
    One line of a demand: N units of an art type plus optional variations.
    """
    __tablename__ = "demand_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    demand_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("demands.id", ondelete="CASCADE"),
        nullable=False
    )
    art_type_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("art_types.id", ondelete="SET NULL"),
        nullable=True
    )

    art_type_label: Mapped[str] = mapped_column(String(120), nullable=False)
    points_per_unit: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    variation_quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    variation_points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False)

    demand = relationship("Demand", back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="check_item_quantity_positive"),
        CheckConstraint("variation_quantity >= 0", name="check_item_variation_positive"),
    )

    def __repr__(self) -> str:
        return f"<DemandItem(demand_id={self.demand_id}, label='{self.art_type_label}', qty={self.quantity})>"
