import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.errors import EmptySlugError, PostIdConflictError, SlugConflictError
from app.core.logging_utils import setup_logging
from app.db.mongodb import connect_to_mongo, close_mongo_connection
from app.routes import posts

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    yield
    await close_mongo_connection()


async def empty_slug_handler(request: Request, exc: EmptySlugError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Title must contain at least one letter or digit"}
    )


async def slug_conflict_handler(request: Request, exc: SlugConflictError):
    logger.error("Giving up on slug '%s' after %d attempts", exc.slug, exc.attempts)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Post with this slug already exists"}
    )


async def post_id_conflict_handler(request: Request, exc: PostIdConflictError):
    logger.error("%s; run scripts/init_db.py to resync the counter", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Could not allocate a post id"}
    )


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.add_exception_handler(EmptySlugError, empty_slug_handler)
    app.add_exception_handler(SlugConflictError, slug_conflict_handler)
    app.add_exception_handler(PostIdConflictError, post_id_conflict_handler)
    app.include_router(posts.router, prefix=f"{settings.API_PREFIX}/blog", tags=["blog"])

    return app


app = create_app()
