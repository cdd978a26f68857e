"""게시 콘텐츠(기사/공지/보도자료/학술자료/영상/사진) SQLAlchemy 모델 정의입니다."""

import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class ContentType(str, enum.Enum):
    ARTICLE = "article"
    ANNOUNCEMENT = "announcement"
    PRESS_RELEASE = "press_release"
    ACADEMIC_MATERIAL = "academic_material"
    VIDEO = "video"
    PHOTO_GALLERY = "photo_gallery"


class PublishStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    PRIVATE = "private"


class Content(Base):
    __tablename__ = "contents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    type = Column(String(30), nullable=False, default=ContentType.ARTICLE.value)
    status = Column(String(20), nullable=False, default=PublishStatus.DRAFT.value)
    category = Column(String(100))
    featured_image = Column(String(500))
    attachments = Column(JSON)  # list[str]
    youtube_id = Column(String(50))
    youtube_urls = Column(JSON)  # list[str]
    # declarative Base가 metadata 속성을 점유하므로 컬럼명만 metadata로 둔다.
    extra_metadata = Column("metadata", JSON)
    view_count = Column(Integer, nullable=False, default=0)
    sort_order = Column(Integer, nullable=False, default=1)
    menu_id = Column(Integer, ForeignKey("menus.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    published_at = Column(DateTime, nullable=True)
    author_name = Column(String(100))

    menu = relationship("Menu", back_populates="contents")

    __table_args__ = (
        Index("idx_content_menu_status", "menu_id", "status"),
        Index("idx_content_order", "sort_order", "created_at"),
    )
