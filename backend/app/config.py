"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./kimjongseo.db"
    SECRET_KEY: str = "kimjongseo-secret-key-change-in-production"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60

    # 최초 관리자 계정 (운영 환경에서는 반드시 .env로 교체)
    INITIAL_ADMIN_USERNAME: str = "admin"
    INITIAL_ADMIN_PASSWORD: str = "admin123!"
    SEED_ON_STARTUP: bool = True

    # File upload
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10 MB
    MAX_FILES_PER_UPLOAD: int = 10
    ALLOWED_EXTENSIONS: List[str] = [
        "jpg", "jpeg", "png", "gif", "webp",
        "mp4", "mov", "webm",
        "pdf", "ppt", "pptx", "xls", "xlsx", "csv",
        "doc", "docx", "hwp", "hwpx", "txt", "zip",
    ]
    UPLOAD_DIR: str = "uploads"

    # 정렬 순서 일괄 변경 등 독립 작업을 병렬 처리할 때의 최대 워커 수
    BATCH_MAX_WORKERS: int = 4

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
