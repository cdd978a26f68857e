"""Menu Service 도메인 서비스 레이어입니다. 메뉴 CRUD, 트리/경로 조회, 정렬 변경, 기본 메뉴 시드를 담당합니다."""

import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, selectinload

from app.models.content import Content
from app.models.menu import Menu
from app.schemas.menu import MenuCreate, MenuReorderItem, MenuUpdate, SortOrderItem
from app.services import menu_tree
from app.utils.batch import run_independent

logger = logging.getLogger(__name__)

DEFAULT_MENUS = (
    {
        "name": "절재 김종서 장군",
        "url": "about-general",
        "description": "조선 전기 명재상이자 무장인 김종서 장군의 생애와 업적을 살펴봅니다.",
        "sort_order": 1,
        "type": "section",
        "children": (
            {"name": "생애 및 업적", "url": "life", "description": "김종서 장군의 출생부터 역사적 업적까지 상세한 생애를 소개합니다."},
            {"name": "역사적 의의", "url": "significance", "description": "조선 전기 정치사에서 김종서 장군이 가지는 특별한 의미를 분석합니다."},
            {"name": "관련 사료 및 연구", "url": "sources", "description": "김종서 장군과 관련된 역사 사료와 최신 연구 성과를 모았습니다."},
            {"name": "사진·영상 자료", "url": "photos", "description": "김종서 장군 관련 유적지, 문화재 등의 사진과 영상 자료입니다."},
        ),
    },
    {
        "name": "기념사업회",
        "url": "organization",
        "description": "김종서 장군을 기리는 기념사업회의 설립목적과 주요 활동을 소개합니다.",
        "sort_order": 2,
        "type": "section",
        "children": (
            {"name": "사업회 소개", "url": "overview", "description": "김종서장군기념사업회의 설립 목적과 주요 사업을 소개합니다."},
            {"name": "회장 인사말", "url": "chairman", "description": "김종서장군기념사업회 회장의 인사말과 비전을 전해드립니다."},
            {"name": "연혁", "url": "history", "description": "기념사업회의 설립부터 현재까지의 주요 연혁을 정리했습니다."},
            {"name": "선양사업", "url": "projects", "description": "김종서 장군의 정신을 기리는 다양한 선양사업을 소개합니다."},
            {"name": "공지사항", "url": "announcements", "description": "기념사업회의 최신 소식과 중요한 공지사항을 확인하세요."},
        ),
    },
    {
        "name": "자료실",
        "url": "library",
        "description": "김종서 장군과 관련된 학술자료, 보도자료, 사진 등을 제공합니다.",
        "sort_order": 3,
        "type": "section",
        "children": (
            {"name": "보도자료", "url": "press", "description": "기념사업회 활동과 관련된 언론 보도자료를 모았습니다."},
            {"name": "학술 자료·연구 보고서", "url": "academic", "description": "김종서 장군 관련 학술 논문과 연구 보고서를 제공합니다."},
            {"name": "사진·영상 아카이브", "url": "archive", "description": "역사적 가치가 있는 사진과 영상 자료를 체계적으로 보관합니다."},
        ),
    },
    {
        "name": "연락처 & 오시는 길",
        "url": "contact",
        "description": "기념사업회 사무국 연락처와 찾아오시는 방법을 안내합니다.",
        "sort_order": 4,
        "type": "page",
        "children": (),
    },
)


def _ordered(query):
    return query.order_by(Menu.sort_order.asc(), Menu.name.asc(), Menu.id.asc())


def _ensure_parent_exists(db: Session, parent_id: int) -> Menu:
    parent = db.query(Menu).filter(Menu.id == parent_id).first()
    if not parent:
        raise HTTPException(status_code=400, detail=f"상위 메뉴(ID {parent_id})를 찾을 수 없습니다.")
    return parent


def _children_index(db: Session):
    return menu_tree.children_index(db.query(Menu.id, Menu.parent_id, Menu.sort_order, Menu.name).all())


def descendant_ids(db: Session, menu_id: int) -> set[int]:
    try:
        return menu_tree.collect_descendant_ids(menu_id, _children_index(db))
    except menu_tree.MenuCycleError as exc:
        raise HTTPException(status_code=400, detail=f"메뉴 계층에 순환 참조가 있습니다. (ID {exc.menu_id})")


def create_menu(db: Session, data: MenuCreate) -> Menu:
    if data.parent_id is not None:
        _ensure_parent_exists(db, data.parent_id)
    row = Menu(**data.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def list_menus(db: Session) -> List[Menu]:
    return _ordered(db.query(Menu).options(selectinload(Menu.parent), selectinload(Menu.children))).all()


def get_menu_tree(db: Session) -> List[menu_tree.MenuNode]:
    return menu_tree.build_tree(_ordered(db.query(Menu)).all())


def get_menu(db: Session, menu_id: int) -> Menu:
    row = (
        db.query(Menu)
        .options(selectinload(Menu.parent), selectinload(Menu.children))
        .filter(Menu.id == menu_id)
        .first()
    )
    if not row:
        raise HTTPException(status_code=404, detail=f"메뉴를 찾을 수 없습니다. (ID {menu_id})")
    return row


def get_menu_by_url(db: Session, url: str) -> Menu:
    row = (
        _ordered(db.query(Menu).options(selectinload(Menu.parent), selectinload(Menu.children)))
        .filter(Menu.url == url)
        .first()
    )
    if not row:
        raise HTTPException(status_code=404, detail=f"메뉴를 찾을 수 없습니다. (URL {url})")
    return row


def _lookup_child(db: Session):
    def lookup(parent_id: Optional[int], url: str) -> Optional[Menu]:
        query = db.query(Menu).filter(Menu.url == url)
        if parent_id is None:
            query = query.filter(Menu.parent_id.is_(None))
        else:
            query = query.filter(Menu.parent_id == parent_id)
        return _ordered(query).first()
    return lookup


def resolve_menu_path(db: Session, path: str) -> Menu:
    """경로를 해석하지 못하면 menu_tree.MenuPathNotFound를 그대로 올린다."""
    return menu_tree.resolve_path(path, _lookup_child(db))


def get_menu_by_path(db: Session, path: str) -> Menu:
    try:
        row = resolve_menu_path(db, path)
    except menu_tree.MenuPathNotFound:
        raise HTTPException(status_code=404, detail=f'메뉴 경로 "{path}"를 찾을 수 없습니다.')
    return get_menu(db, row.id)


def update_menu(db: Session, menu_id: int, data: MenuUpdate) -> Menu:
    row = get_menu(db, menu_id)
    payload = data.model_dump(exclude_unset=True)

    if "parent_id" in payload:
        parent_id = payload["parent_id"]
        if parent_id is not None:
            if parent_id == menu_id:
                raise HTTPException(status_code=400, detail="메뉴를 자기 자신의 하위로 지정할 수 없습니다.")
            _ensure_parent_exists(db, parent_id)
            if parent_id in descendant_ids(db, menu_id):
                raise HTTPException(status_code=400, detail="메뉴를 자신의 하위 메뉴 아래로 이동할 수 없습니다.")

    for key, value in payload.items():
        if value is None and key not in ("parent_id", "description", "icon_image", "css_class"):
            continue
        setattr(row, key, value)

    db.commit()
    return get_menu(db, menu_id)


def delete_menu(db: Session, menu_id: int) -> None:
    row = get_menu(db, menu_id)
    child_count = db.query(Menu.id).filter(Menu.parent_id == menu_id).count()
    if child_count > 0:
        raise HTTPException(status_code=400, detail="하위 메뉴가 있는 메뉴는 삭제할 수 없습니다.")
    # 연결된 콘텐츠는 삭제하지 않고 메뉴 연결만 해제한다.
    db.query(Content).filter(Content.menu_id == menu_id).update({"menu_id": None}, synchronize_session=False)
    db.delete(row)
    db.commit()


def _apply_sort_order(menu_id: int, sort_order: int):
    def job(session: Session) -> int:
        return session.query(Menu).filter(Menu.id == menu_id).update(
            {"sort_order": sort_order},
            synchronize_session=False,
        )
    return job


def update_sort_order(db: Session, items: List[SortOrderItem]) -> None:
    """각 항목을 독립 트랜잭션으로 병렬 적용한다. 실패한 항목이 있어도 나머지는 그대로 반영된다."""
    results = run_independent(db, [_apply_sort_order(item.id, item.sort_order) for item in items])
    missing = [items[r.index].id for r in results if not r.ok or not r.value]
    if missing:
        logger.warning("[menu] sort order partially applied, missing=%s", missing)
        raise HTTPException(status_code=404, detail=f"메뉴를 찾을 수 없습니다. (ID {', '.join(map(str, missing))})")


def update_menu_order(db: Session, items: List[MenuReorderItem]) -> List[menu_tree.MenuNode]:
    """드래그 앤 드롭 재배치. 한 트랜잭션으로 처리해 전부 반영되거나 전부 취소된다."""
    rows = {row.id: row for row in db.query(Menu).filter(Menu.id.in_([item.id for item in items])).all()}
    missing = [item.id for item in items if item.id not in rows]
    if missing:
        raise HTTPException(status_code=404, detail=f"메뉴를 찾을 수 없습니다. (ID {', '.join(map(str, missing))})")

    for item in items:
        if item.parent_id == item.id:
            raise HTTPException(status_code=400, detail="메뉴를 자기 자신의 하위로 지정할 수 없습니다.")
        if item.parent_id is not None:
            _ensure_parent_exists(db, item.parent_id)
        row = rows[item.id]
        row.sort_order = item.sort_order
        row.parent_id = item.parent_id
    db.flush()

    try:
        for item in items:
            menu_tree.collect_descendant_ids(item.id, _children_index(db))
    except menu_tree.MenuCycleError as exc:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"메뉴 계층에 순환 참조가 생깁니다. (ID {exc.menu_id})")

    db.commit()
    return get_menu_tree(db)


def seed_default_menus(db: Session) -> bool:
    if db.query(Menu.id).count() > 0:
        return False

    for section in DEFAULT_MENUS:
        root = Menu(
            name=section["name"],
            url=section["url"],
            description=section["description"],
            sort_order=section["sort_order"],
            type=section["type"],
        )
        db.add(root)
        db.flush()
        for order, child in enumerate(section["children"], start=1):
            db.add(Menu(parent_id=root.id, sort_order=order, **child))
    db.commit()
    logger.info("[seed] default menu structure created")
    return True
