import logging
import re
from datetime import datetime, timezone
from functools import partial
from typing import Any, Awaitable, Callable, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from app.core.config import get_settings
from app.core.errors import EmptySlugError, PostIdConflictError, SlugConflictError
from app.core.slug import assign_slug, base_slug
from app.core.summary import extract_summary
from app.db.mongodb import next_sequence
from app.models.post import PostCreate, PostUpdate

logger = logging.getLogger(__name__)

POSTS_SEQUENCE = "posts"
SEARCH_FIELDS = ("title", "author", "summary")


def _to_public(post: Dict[str, Any]) -> Dict[str, Any]:
    post["id"] = post.pop("_id")
    return post


def _build_query(filters: Optional[Dict] = None) -> Dict[str, Any]:
    query = {}
    if filters and filters.get("search"):
        pattern = re.escape(filters["search"])
        query["$or"] = [
            {field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS
        ]
    return query


async def get_post_by_id(db: AsyncIOMotorDatabase, post_id: int) -> Optional[Dict[str, Any]]:
    """Получение поста по ID."""
    post = await db.posts.find_one({"_id": post_id})
    if not post:
        return None
    return _to_public(post)


async def get_post_by_slug(db: AsyncIOMotorDatabase, slug: str) -> Optional[Dict[str, Any]]:
    """Получение поста по URL-slug."""
    post = await db.posts.find_one({"slug": slug})
    if not post:
        return None
    return _to_public(post)


async def get_posts(
    db: AsyncIOMotorDatabase,
    limit: int = 10,
    offset: int = 0,
    filters: Dict = None
) -> List[Dict[str, Any]]:
    """Получение списка постов с пагинацией и поиском, сначала новые."""
    cursor = db.posts.find(_build_query(filters)).sort("created_at", -1).skip(offset).limit(limit)

    posts = []
    async for post in cursor:
        posts.append(_to_public(post))

    return posts


async def get_posts_count(db: AsyncIOMotorDatabase, filters: Dict = None) -> int:
    return await db.posts.count_documents(_build_query(filters))


async def slug_exists(
    db: AsyncIOMotorDatabase,
    slug: str,
    exclude_id: Optional[int] = None
) -> bool:
    """Проверка занятости slug, без учета редактируемого поста."""
    query: Dict[str, Any] = {"slug": slug}
    if exclude_id is not None:
        query["_id"] = {"$ne": exclude_id}
    return await db.posts.find_one(query, {"_id": 1}) is not None


def _is_slug_duplicate(exc: DuplicateKeyError) -> bool:
    # Сервер указывает индекс в keyPattern; без него считаем, что нарушен индекс slug
    key_pattern = (exc.details or {}).get("keyPattern")
    if key_pattern is None:
        return True
    return "slug" in key_pattern


def _ensure_slug_source(title: str) -> None:
    if get_settings().REJECT_EMPTY_SLUG and not base_slug(title):
        raise EmptySlugError(title)


async def _save_with_unique_slug(
    db: AsyncIOMotorDatabase,
    title: str,
    write: Callable[[str], Awaitable[None]],
    exclude_id: Optional[int] = None
) -> str:
    """
    Подбор свободного slug для заголовка и запись поста через `write`.

    Проверка и запись не атомарны: если другой запрос успел сохранить
    тот же slug, уникальный индекс отклоняет запись, и slug подбирается заново.
    """
    max_attempts = get_settings().SLUG_MAX_RETRIES
    exists_check = partial(slug_exists, db, exclude_id=exclude_id)

    slug = ""
    for attempt in range(1, max_attempts + 1):
        slug = await assign_slug(title, exists_check)
        try:
            await write(slug)
            return slug
        except DuplicateKeyError as exc:
            if not _is_slug_duplicate(exc):
                raise
            logger.warning(
                "Slug '%s' was taken concurrently (attempt %d/%d)", slug, attempt, max_attempts
            )

    raise SlugConflictError(slug, max_attempts)


async def create_post(db: AsyncIOMotorDatabase, post_data: PostCreate) -> Dict[str, Any]:
    """Создание нового поста."""
    settings = get_settings()
    post_dict = post_data.model_dump()
    now = datetime.now(timezone.utc)

    _ensure_slug_source(post_dict["title"])

    # Генерация summary из content, если он не указан
    summary = (post_dict.get("summary") or "").strip()
    post_dict["summary"] = summary or extract_summary(post_dict["content"], settings.SUMMARY_MAX_LENGTH)

    ads = post_dict.get("ads")
    post_dict["ads"] = ads.strip() if ads and ads.strip() else None

    post_id = await next_sequence(db, POSTS_SEQUENCE)
    post_dict["_id"] = post_id
    post_dict["created_at"] = now
    post_dict["updated_at"] = now

    async def insert(slug: str) -> None:
        # Отставший счетчик id дал бы DuplicateKeyError по _id, а не по slug
        if await db.posts.find_one({"_id": post_id}, {"_id": 1}) is not None:
            raise PostIdConflictError(post_id)
        await db.posts.insert_one({**post_dict, "slug": slug})

    slug = await _save_with_unique_slug(db, post_dict["title"], insert)
    logger.info("Created post %d with slug '%s'", post_id, slug)

    return await get_post_by_id(db, post_id)


async def update_post(
    db: AsyncIOMotorDatabase,
    post_id: int,
    post_data: PostUpdate
) -> Optional[Dict[str, Any]]:
    """Обновление поста. Slug пересчитывается только при смене заголовка."""
    post = await db.posts.find_one({"_id": post_id})
    if not post:
        return None

    settings = get_settings()
    data = post_data.model_dump(exclude_unset=True)
    update_data: Dict[str, Any] = {}

    summary = (data.get("summary") or "").strip()
    if summary:
        update_data["summary"] = summary
    elif data.get("regenerate_summary"):
        update_data["summary"] = extract_summary(post.get("content", ""), settings.SUMMARY_MAX_LENGTH)

    for field in ("date", "author", "image"):
        if data.get(field) is not None:
            update_data[field] = data[field]

    ads = data.get("ads")
    if ads and ads.strip():
        update_data["ads"] = ads.strip()

    update_data["updated_at"] = datetime.now(timezone.utc)

    title = data.get("title")
    if title and title != post.get("title"):
        _ensure_slug_source(title)
        update_data["title"] = title

        async def write(slug: str) -> None:
            await db.posts.update_one({"_id": post_id}, {"$set": {**update_data, "slug": slug}})

        slug = await _save_with_unique_slug(db, title, write, exclude_id=post_id)
        logger.info("Post %d retitled, slug '%s' -> '%s'", post_id, post.get("slug"), slug)
    else:
        await db.posts.update_one({"_id": post_id}, {"$set": update_data})

    return await get_post_by_id(db, post_id)


async def delete_post(db: AsyncIOMotorDatabase, post_id: int) -> bool:
    result = await db.posts.delete_one({"_id": post_id})
    if result.deleted_count:
        logger.info("Deleted post %d", post_id)
    return result.deleted_count > 0
