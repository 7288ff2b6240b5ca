"""
Useful links and tags router.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from app.core.database import get_db
from app.models.admin import AdminAction
from app.models.link import UsefulLink, Tag
from app.models.user import User
from app.routers.auth import get_current_user, get_current_admin_user
from app.schemas.base import MessageResponse
from app.schemas.link import (
    TagCreate,
    TagUpdate,
    TagResponse,
    UsefulLinkCreate,
    UsefulLinkUpdate,
    UsefulLinkResponse,
)
from app.services import audit


tags_router = APIRouter()
links_router = APIRouter()


def _clean_tag_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Tag name is required"
        )
    return name


def _ensure_unique_tag(db: Session, name: str, exclude_id: Optional[int] = None) -> None:
    query = select(Tag.id).where(func.lower(Tag.name) == name.lower())
    if exclude_id is not None:
        query = query.where(Tag.id != exclude_id)
    if db.scalar(query) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A tag with this name already exists"
        )


def _load_tags(db: Session, tag_ids: List[int]) -> List[Tag]:
    unique_ids = list(dict.fromkeys(tag_ids))
    tags = list(db.scalars(select(Tag).where(Tag.id.in_(unique_ids))))
    if len(tags) != len(unique_ids):
        found = {tag.id for tag in tags}
        missing = [tag_id for tag_id in unique_ids if tag_id not in found]
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown tag(s): {', '.join(map(str, missing))}"
        )
    return tags


def _get_or_404(db: Session, model, entity_id: int, label: str):
    entity = db.get(model, entity_id)
    if not entity:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found"
        )
    return entity


# Tags

@tags_router.get("/", response_model=List[TagResponse])
async def list_tags(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[Tag]:
    return list(db.scalars(select(Tag).order_by(Tag.name)))


@tags_router.post("/", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    tag_data: TagCreate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> Tag:
    name = _clean_tag_name(tag_data.name)
    _ensure_unique_tag(db, name)

    tag = Tag(name=name, color=tag_data.color)
    db.add(tag)
    db.flush()

    audit.record(db, request, current_admin.id, AdminAction.CREATE, "tag", tag.id, details={"name": name})
    db.commit()
    db.refresh(tag)
    return tag


@tags_router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: int,
    tag_update: TagUpdate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> Tag:
    tag = _get_or_404(db, Tag, tag_id, "Tag")
    update_data = tag_update.model_dump(exclude_unset=True)

    if "name" in update_data:
        name = _clean_tag_name(update_data["name"])
        _ensure_unique_tag(db, name, exclude_id=tag.id)
        tag.name = name
    if "color" in update_data:
        tag.color = update_data["color"]

    audit.record(db, request, current_admin.id, AdminAction.UPDATE, "tag", tag.id, details=update_data)
    db.commit()
    db.refresh(tag)
    return tag


@tags_router.delete("/{tag_id}", response_model=MessageResponse)
async def delete_tag(
    tag_id: int,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> dict:
    """
    Delete a tag and detach it from every link.
    """
    tag = _get_or_404(db, Tag, tag_id, "Tag")

    tag.links.clear()
    audit.record(db, request, current_admin.id, AdminAction.DELETE, "tag", tag.id, details={"name": tag.name})
    db.delete(tag)
    db.commit()
    return {"message": "Tag deleted"}


# Useful links

@links_router.get("/", response_model=List[UsefulLinkResponse])
async def list_links(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[UsefulLink]:
    return list(db.scalars(
        select(UsefulLink)
        .options(selectinload(UsefulLink.tags))
        .order_by(UsefulLink.created_at.desc(), UsefulLink.id.desc())
    ))


@links_router.post("/", response_model=UsefulLinkResponse, status_code=status.HTTP_201_CREATED)
async def create_link(
    link_data: UsefulLinkCreate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> UsefulLink:
    title, url = link_data.title.strip(), link_data.url.strip()
    if not title or not url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Title and URL are required"
        )

    link = UsefulLink(
        title=title,
        url=url,
        image_url=link_data.image_url,
        tags=_load_tags(db, link_data.tag_ids),
    )
    db.add(link)
    db.flush()

    audit.record(db, request, current_admin.id, AdminAction.CREATE, "useful_link", link.id, details={"url": url})
    db.commit()
    db.refresh(link)
    return link


@links_router.put("/{link_id}", response_model=UsefulLinkResponse)
async def update_link(
    link_id: int,
    link_update: UsefulLinkUpdate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> UsefulLink:
    """
    Partially update a link. ``tagIds``, when sent, replaces all of its tags.
    """
    link = _get_or_404(db, UsefulLink, link_id, "Link")
    update_data = link_update.model_dump(exclude_unset=True)

    for field in ("title", "url"):
        if field in update_data:
            value = (update_data[field] or "").strip()
            if not value:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Title and URL are required"
                )
            setattr(link, field, value)
    if "image_url" in update_data:
        link.image_url = update_data["image_url"]
    if update_data.get("tag_ids") is not None:
        link.tags = _load_tags(db, update_data["tag_ids"])

    audit.record(
        db, request, current_admin.id, AdminAction.UPDATE, "useful_link", link.id,
        details={"fields": sorted(update_data)},
    )
    db.commit()
    db.refresh(link)
    return link


@links_router.delete("/{link_id}", response_model=MessageResponse)
async def delete_link(
    link_id: int,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> dict:
    link = _get_or_404(db, UsefulLink, link_id, "Link")

    link.tags.clear()
    audit.record(db, request, current_admin.id, AdminAction.DELETE, "useful_link", link.id)
    db.delete(link)
    db.commit()
    return {"message": "Link deleted"}
