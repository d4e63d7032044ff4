import math
from typing import Annotated, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.config import get_settings
from app.core.deps import (
    get_database, get_current_admin_user, pagination_params, post_filter_params
)
from app.core.slug import base_slug
from app.core.summary import extract_summary
from app.crud.post import (
    get_post_by_id, get_post_by_slug, get_posts, get_posts_count,
    create_post, update_post, delete_post
)
from app.models.post import (
    Post, PostCreate, PostUpdate, PostList, SlugPreview, SummaryRequest, SummaryPreview
)

router = APIRouter()


@router.get("", response_model=PostList)
async def get_posts_route(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)],
    pagination: Annotated[dict, Depends(pagination_params)],
    filters: Annotated[dict, Depends(post_filter_params)],
    preview: Annotated[Optional[int], Query(ge=1, le=1000)] = None
):
    """Получение списка постов с пагинацией и поиском."""
    posts = await get_posts(db, pagination["limit"], pagination["offset"], filters)
    total = await get_posts_count(db, filters)

    # Короткое превью для карточек списка
    preview_length = preview or get_settings().PREVIEW_MAX_LENGTH
    for post in posts:
        post["preview"] = extract_summary(post.get("summary", ""), preview_length)

    return {
        "blogs": posts,
        "pagination": {
            "page": pagination["page"],
            "limit": pagination["limit"],
            "total": total,
            "pages": math.ceil(total / pagination["limit"])
        }
    }


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post_route(
    post_data: Annotated[PostCreate, Body(...)],
    current_user: Annotated[dict, Depends(get_current_admin_user)],
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
):
    """Создание нового поста. Только для администратора."""
    return await create_post(db, post_data)


@router.get("/slugify", response_model=SlugPreview)
async def slugify_route(
    title: Annotated[str, Query(min_length=1, max_length=200)]
):
    """Предпросмотр slug для формы редактирования."""
    return {"title": title, "slug": base_slug(title)}


@router.post("/summary", response_model=SummaryPreview)
async def summary_preview_route(
    request: Annotated[SummaryRequest, Body(...)]
):
    """Предпросмотр автоматического summary."""
    max_length = request.max_length or get_settings().SUMMARY_MAX_LENGTH
    return {"summary": extract_summary(request.text, max_length)}


@router.get("/slug/{slug}", response_model=Post)
async def get_post_by_slug_route(
    slug: Annotated[str, Path(...)],
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
):
    """Получение поста по URL-slug."""
    post = await get_post_by_slug(db, slug)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Post with slug '{slug}' not found"
        )
    return post


@router.get("/{post_id}", response_model=Post)
async def get_post_by_id_route(
    post_id: Annotated[int, Path(...)],
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
):
    """Получение поста по ID."""
    post = await get_post_by_id(db, post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Post with ID {post_id} not found"
        )
    return post


@router.put("/{post_id}", response_model=Post)
async def update_post_route(
    post_id: Annotated[int, Path(...)],
    post_data: Annotated[PostUpdate, Body(...)],
    current_user: Annotated[dict, Depends(get_current_admin_user)],
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
):
    """Обновление поста. Только для администратора."""
    updated_post = await update_post(db, post_id, post_data)
    if not updated_post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Post with ID {post_id} not found"
        )
    return updated_post


@router.delete("/{post_id}")
async def delete_post_route(
    post_id: Annotated[int, Path(...)],
    current_user: Annotated[dict, Depends(get_current_admin_user)],
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
):
    """Удаление поста. Только для администратора."""
    success = await delete_post(db, post_id)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Post with ID {post_id} not found"
        )
    return {"message": "Blog deleted successfully"}
