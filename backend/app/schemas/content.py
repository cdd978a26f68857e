"""Content 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from app.models.content import ContentType, PublishStatus
from app.schemas.menu import MenuOut


class ContentBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    type: ContentType = ContentType.ARTICLE
    status: PublishStatus = PublishStatus.DRAFT
    category: Optional[str] = None
    featured_image: Optional[str] = None
    attachments: Optional[List[str]] = None
    youtube_id: Optional[str] = None
    youtube_urls: Optional[List[str]] = None
    metadata: Optional[Any] = None  # 스칼라, 배열, 객체 모두 허용
    sort_order: int = 1
    menu_id: Optional[int] = None
    author_name: Optional[str] = None


class ContentCreate(ContentBase):
    pass


class ContentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    type: Optional[ContentType] = None
    status: Optional[PublishStatus] = None
    category: Optional[str] = None
    featured_image: Optional[str] = None
    attachments: Optional[List[str]] = None
    youtube_id: Optional[str] = None
    youtube_urls: Optional[List[str]] = None
    metadata: Optional[Any] = None
    sort_order: Optional[int] = None
    menu_id: Optional[int] = None
    author_name: Optional[str] = None


class ContentOut(ContentBase):
    id: int
    view_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    menu: Optional[MenuOut] = None


class ContentPageOut(BaseModel):
    data: List[ContentOut]
    total: int
    page: int
    limit: int
