"""Contents 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from app.database import get_db
from app.models.content import ContentType, PublishStatus
from app.models.user import User
from app.schemas.content import ContentCreate, ContentOut, ContentPageOut, ContentUpdate
from app.schemas.menu import SortOrderItem
from app.services import content_service, sample_content_service
from app.services.content_service import serialize_content
from app.middleware.auth_middleware import require_writer

router = APIRouter(prefix="/api/contents", tags=["contents"])


@router.get("", response_model=ContentPageOut)
def list_contents(
    type: ContentType | None = Query(None),
    status: PublishStatus | None = Query(None),
    menu_id: int | None = Query(None, ge=1),
    include_descendants: bool = Query(False),
    page: int = Query(content_service.DEFAULT_PAGE, ge=1),
    limit: int = Query(content_service.DEFAULT_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return content_service.find_all(
        db,
        type=type,
        status=status,
        menu_id=menu_id,
        page=page,
        limit=limit,
        include_descendants=include_descendants,
    )


@router.get("/by-menu/{menu_url}", response_model=List[ContentOut])
def list_by_menu_url(menu_url: str, db: Session = Depends(get_db)):
    return [serialize_content(row) for row in content_service.find_by_menu_url(db, menu_url)]


@router.get("/by-path/{path:path}", response_model=List[ContentOut])
def list_by_menu_path(path: str, db: Session = Depends(get_db)):
    return [serialize_content(row) for row in content_service.find_published_by_menu_path(db, path)]


@router.post("", response_model=ContentOut)
def create_content(
    data: ContentCreate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    return serialize_content(content_service.create_content(db, data))


@router.patch("/sort-order")
def update_sort_order(
    items: List[SortOrderItem],
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    content_service.update_sort_order(db, items)
    return {"message": "정렬 순서가 변경되었습니다.", "updated": len(items)}


@router.post("/seed-sample")
def seed_sample_content(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    return {"created": sample_content_service.seed_sample_content(db)}


@router.get("/{content_id:int}", response_model=ContentOut)
def get_content(content_id: int, db: Session = Depends(get_db)):
    return serialize_content(content_service.get_content(db, content_id))


@router.get("/{content_id:int}/view", response_model=ContentOut)
def view_content(content_id: int, db: Session = Depends(get_db)):
    content_service.get_content(db, content_id)
    content_service.increment_view_count(db, content_id)
    return serialize_content(content_service.get_content(db, content_id))


@router.patch("/{content_id:int}", response_model=ContentOut)
def update_content(
    content_id: int,
    data: ContentUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    return serialize_content(content_service.update_content(db, content_id, data))


@router.delete("/{content_id:int}")
def delete_content(
    content_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    content_service.delete_content(db, content_id)
    return {"message": "삭제되었습니다."}
