"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from app.models.user import User
from app.models.menu import Menu
from app.models.content import Content, ContentType, PublishStatus
from app.models.file_upload import FileUpload

__all__ = [
    "User",
    "Menu",
    "Content", "ContentType", "PublishStatus",
    "FileUpload",
]
