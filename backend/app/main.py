"""FastAPI 애플리케이션 진입점. 미들웨어, API 라우터, 업로드 정적 파일 서빙을 등록합니다."""

import logging
import os
from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from app.config import settings
from app.database import Base, SessionLocal, engine
import app.models  # noqa: F401 - 모델 import로 metadata 등록
from app.routers import auth, menus, contents, uploads
from app.services import auth_service, menu_service

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Kim Jong-seo Memorial Foundation API"
SERVICE_VERSION = "1.0.0"

app = FastAPI(
    title=SERVICE_NAME,
    description="김종서장군기념사업회 홈페이지 백엔드 API",
    version=SERVICE_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register all routers
app.include_router(auth.router)
app.include_router(menus.router)
app.include_router(contents.router)
app.include_router(uploads.router)


@app.on_event("startup")
def initialize():
    Base.metadata.create_all(bind=engine)
    if not settings.SEED_ON_STARTUP:
        return
    db = SessionLocal()
    try:
        auth_service.ensure_initial_admin(db)
        menu_service.seed_default_menus(db)
    except Exception as exc:
        # 초기 데이터 생성 실패로 서버 기동이 막히지 않도록 기록만 남긴다.
        db.rollback()
        logger.error("[startup] initial data seeding failed: %s", exc)
    finally:
        db.close()


@app.get("/")
def root():
    return {"message": SERVICE_NAME, "version": SERVICE_VERSION, "status": "healthy"}


@app.get("/api/health")
def health_check():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


# Static file serving for uploads
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")
