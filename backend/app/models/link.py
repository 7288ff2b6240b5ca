"""
Useful links and tags.

Links and tags are many-to-many through the ``link_tags`` association table.
"""

from typing import List, Optional
from sqlalchemy import BigInteger, Column, Integer, String, Text, ForeignKey, Table, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.core.database import Base
from app.core.timeutils import now_ms


link_tags = Table(
    "link_tags",
    Base.metadata,
    Column("link_id", Integer, ForeignKey("useful_links.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)
    color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    created_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)

    links: Mapped[List["UsefulLink"]] = relationship(
        "UsefulLink",
        secondary=link_tags,
        back_populates="tags"
    )

    __table_args__ = (
        Index("idx_tag_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"


class UsefulLink(Base):
    """
    Bookmark shared with designers (reference sites, brand kits, tools).
    """
    __tablename__ = "useful_links"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(String(2000), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)

    tags: Mapped[List[Tag]] = relationship(
        Tag,
        secondary=link_tags,
        back_populates="links",
        order_by=Tag.name
    )

    def __repr__(self) -> str:
        return f"<UsefulLink(id={self.id}, title='{self.title}')>"
