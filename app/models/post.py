from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class PostBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    author: str = Field(..., min_length=1, max_length=100)
    date: datetime
    image: str = ""
    ads: Optional[str] = None


class PostCreate(PostBase):
    content: str = ""
    summary: Optional[str] = None


class PostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    summary: Optional[str] = None
    date: Optional[datetime] = None
    author: Optional[str] = Field(None, min_length=1, max_length=100)
    image: Optional[str] = None
    ads: Optional[str] = None
    # Re-derive the summary from the stored content when no summary is sent
    regenerate_summary: bool = False


class Post(PostBase):
    id: int
    slug: str
    summary: str
    content: str
    created_at: datetime
    updated_at: datetime


class PostPreview(Post):
    preview: Optional[str] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class PostList(BaseModel):
    blogs: List[PostPreview]
    pagination: Pagination


class SlugPreview(BaseModel):
    title: str
    slug: str


class SummaryRequest(BaseModel):
    text: str
    max_length: Optional[int] = Field(None, ge=1, le=1000)


class SummaryPreview(BaseModel):
    summary: str
