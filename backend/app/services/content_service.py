"""Content Service 도메인 서비스 레이어입니다. 콘텐츠 CRUD와 메뉴 기준 조회(하위 메뉴 포함), 페이지네이션을 담당합니다."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from app.models.content import Content, ContentType, PublishStatus
from app.models.menu import Menu
from app.schemas.content import ContentCreate, ContentOut, ContentUpdate
from app.schemas.menu import MenuOut, SortOrderItem
from app.services import menu_service, menu_tree
from app.utils.batch import run_independent

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _ordered(query):
    # sort_order 오름차순 -> 최신 생성순 -> id 내림차순으로 완전 정렬한다.
    return query.order_by(Content.sort_order.asc(), Content.created_at.desc(), Content.id.desc())


def _base_query(db: Session):
    return db.query(Content).options(joinedload(Content.menu))


def serialize_content(row: Content) -> ContentOut:
    return ContentOut(
        id=row.id,
        title=row.title,
        content=row.content,
        type=row.type,
        status=row.status,
        category=row.category,
        featured_image=row.featured_image,
        attachments=row.attachments,
        youtube_id=row.youtube_id,
        youtube_urls=row.youtube_urls,
        metadata=row.extra_metadata,
        sort_order=int(row.sort_order or 0),
        menu_id=row.menu_id,
        author_name=row.author_name,
        view_count=int(row.view_count or 0),
        created_at=row.created_at,
        updated_at=row.updated_at,
        published_at=row.published_at,
        menu=MenuOut.model_validate(row.menu) if row.menu is not None else None,
    )


def _ensure_menu_exists(db: Session, menu_id: int) -> None:
    if not db.query(Menu.id).filter(Menu.id == menu_id).first():
        raise HTTPException(status_code=400, detail=f"연결할 메뉴(ID {menu_id})를 찾을 수 없습니다.")


def _to_columns(payload: Dict[str, Any]) -> Dict[str, Any]:
    if "metadata" in payload:
        payload["extra_metadata"] = payload.pop("metadata")
    for key in ("type", "status"):
        value = payload.get(key)
        if isinstance(value, (ContentType, PublishStatus)):
            payload[key] = value.value
    return payload


def create_content(db: Session, data: ContentCreate) -> Content:
    if data.menu_id is not None:
        _ensure_menu_exists(db, data.menu_id)
    payload = _to_columns(data.model_dump())
    row = Content(
        **payload,
        published_at=datetime.utcnow() if payload["status"] == PublishStatus.PUBLISHED.value else None,
    )
    db.add(row)
    db.commit()
    return get_content(db, row.id)


def get_content(db: Session, content_id: int) -> Content:
    row = _base_query(db).filter(Content.id == content_id).first()
    if not row:
        raise HTTPException(status_code=404, detail=f"콘텐츠를 찾을 수 없습니다. (ID {content_id})")
    return row


def find_all(
    db: Session,
    type: Optional[ContentType] = None,
    status: Optional[PublishStatus] = None,
    menu_id: Optional[int] = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    include_descendants: bool = False,
) -> Dict[str, Any]:
    query = db.query(Content)
    if type is not None:
        query = query.filter(Content.type == ContentType(type).value)
    if status is not None:
        query = query.filter(Content.status == PublishStatus(status).value)
    if menu_id is not None:
        if include_descendants:
            query = query.filter(Content.menu_id.in_(menu_service.descendant_ids(db, menu_id)))
        else:
            query = query.filter(Content.menu_id == menu_id)

    total = query.count()
    rows = (
        _ordered(query.options(joinedload(Content.menu)))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return {"data": [serialize_content(row) for row in rows], "total": total, "page": page, "limit": limit}


def find_by_menu_url(db: Session, menu_url: str, content_id: Optional[int] = None) -> List[Content]:
    query = (
        _base_query(db)
        .join(Menu, Content.menu_id == Menu.id)
        .filter(Menu.url == menu_url, Content.status == PublishStatus.PUBLISHED.value)
    )
    if content_id is not None:
        query = query.filter(Content.id == content_id)
    return _ordered(query).all()


def find_published_by_menu_path(db: Session, path: str) -> List[Content]:
    """경로의 메뉴와 모든 하위 메뉴에 속한 게시 콘텐츠. 경로를 찾지 못하면 빈 목록이다."""
    try:
        menu = menu_service.resolve_menu_path(db, path)
    except menu_tree.MenuPathNotFound:
        return []
    menu_ids = menu_service.descendant_ids(db, menu.id)
    query = _base_query(db).filter(
        Content.status == PublishStatus.PUBLISHED.value,
        Content.menu_id.in_(menu_ids),
    )
    return _ordered(query).all()


def update_content(db: Session, content_id: int, data: ContentUpdate) -> Content:
    row = get_content(db, content_id)
    payload = _to_columns(data.model_dump(exclude_unset=True))

    if payload.get("menu_id") is not None:
        _ensure_menu_exists(db, payload["menu_id"])

    next_status = payload.get("status")
    if next_status == PublishStatus.PUBLISHED.value and row.status != PublishStatus.PUBLISHED.value:
        row.published_at = datetime.utcnow()

    for key, value in payload.items():
        if value is None and key in ("title", "content", "type", "status", "sort_order"):
            continue
        setattr(row, key, value)

    db.commit()
    return get_content(db, content_id)


def delete_content(db: Session, content_id: int) -> None:
    row = get_content(db, content_id)
    db.delete(row)
    db.commit()


def increment_view_count(db: Session, content_id: int) -> None:
    db.query(Content).filter(Content.id == content_id).update(
        {"view_count": Content.view_count + 1},
        synchronize_session=False,
    )
    db.commit()


def _apply_sort_order(content_id: int, sort_order: int):
    def job(session: Session) -> int:
        return session.query(Content).filter(Content.id == content_id).update(
            {"sort_order": sort_order},
            synchronize_session=False,
        )
    return job


def update_sort_order(db: Session, items: List[SortOrderItem]) -> None:
    """각 항목을 독립 트랜잭션으로 병렬 적용한다. 실패한 항목이 있어도 나머지는 그대로 반영된다."""
    results = run_independent(db, [_apply_sort_order(item.id, item.sort_order) for item in items])
    missing = [items[r.index].id for r in results if not r.ok or not r.value]
    if missing:
        logger.warning("[content] sort order partially applied, missing=%s", missing)
        raise HTTPException(status_code=404, detail=f"콘텐츠를 찾을 수 없습니다. (ID {', '.join(map(str, missing))})")
