"""Menus 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.database import get_db
from app.schemas.menu import (
    MenuCreate,
    MenuUpdate,
    MenuOut,
    MenuDetailOut,
    MenuTreeOut,
    MenuReorderItem,
    SortOrderItem,
)
from app.services import menu_service
from app.middleware.auth_middleware import require_writer
from app.models.user import User

router = APIRouter(prefix="/api/menus", tags=["menus"])


@router.get("", response_model=List[MenuDetailOut])
def list_menus(db: Session = Depends(get_db)):
    return menu_service.list_menus(db)


@router.get("/tree", response_model=List[MenuTreeOut])
def get_tree(db: Session = Depends(get_db)):
    return [MenuTreeOut.model_validate(node) for node in menu_service.get_menu_tree(db)]


@router.get("/by-url/{url}", response_model=MenuDetailOut)
def get_by_url(url: str, db: Session = Depends(get_db)):
    return menu_service.get_menu_by_url(db, url)


@router.get("/by-path/{path:path}", response_model=MenuDetailOut)
def get_by_path(path: str, db: Session = Depends(get_db)):
    return menu_service.get_menu_by_path(db, path)


@router.post("", response_model=MenuOut)
def create_menu(
    data: MenuCreate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    return menu_service.create_menu(db, data)


@router.patch("/sort-order")
def update_sort_order(
    items: List[SortOrderItem],
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    menu_service.update_sort_order(db, items)
    return {"message": "정렬 순서가 변경되었습니다.", "updated": len(items)}


@router.put("/reorder", response_model=List[MenuTreeOut])
def reorder_menus(
    items: List[MenuReorderItem],
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    return [MenuTreeOut.model_validate(node) for node in menu_service.update_menu_order(db, items)]


@router.post("/seed")
def seed_default_menus(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    created = menu_service.seed_default_menus(db)
    return {"created": created}


@router.get("/{menu_id:int}", response_model=MenuDetailOut)
def get_menu(menu_id: int, db: Session = Depends(get_db)):
    return menu_service.get_menu(db, menu_id)


@router.patch("/{menu_id:int}", response_model=MenuDetailOut)
def update_menu(
    menu_id: int,
    data: MenuUpdate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    return menu_service.update_menu(db, menu_id, data)


@router.delete("/{menu_id:int}")
def delete_menu(
    menu_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    menu_service.delete_menu(db, menu_id)
    return {"message": "삭제되었습니다."}
