"""메뉴 트리 구성/경로 해석/하위 메뉴 수집을 담당하는 순수 로직 모듈입니다.

DB나 FastAPI에 의존하지 않으며, 이미 조회된 메뉴 행(snapshot)을 입력으로 받아
불변 스냅샷을 돌려줍니다. 서비스 레이어가 예외를 HTTP 응답으로 변환합니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


class MenuPathNotFound(LookupError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f'Menu path "{path}" not found')


class MenuCycleError(ValueError):
    def __init__(self, menu_id: int):
        self.menu_id = menu_id
        super().__init__(f"Menu hierarchy contains a cycle at menu {menu_id}")


@dataclass(frozen=True)
class MenuNode:
    id: int
    name: str
    url: str
    parent_id: Optional[int] = None
    sort_order: int = 1
    is_active: bool = True
    description: Optional[str] = None
    type: str = "page"
    icon_image: Optional[str] = None
    css_class: Optional[str] = None
    children: Tuple["MenuNode", ...] = field(default_factory=tuple)


def _sort_key(row: Any) -> tuple:
    return (int(row.sort_order or 0), str(row.name or ""), int(row.id))


def children_index(rows: Iterable[Any]) -> Dict[Optional[int], List[int]]:
    """부모 id -> 정렬된 자식 id 목록. 부모가 입력에 없으면 루트(None)로 분류한다."""
    rows = list(rows)
    known_ids = {row.id for row in rows}
    grouped: Dict[Optional[int], List[Any]] = {}
    for row in rows:
        parent_id = row.parent_id if row.parent_id in known_ids else None
        grouped.setdefault(parent_id, []).append(row)
    return {
        parent_id: [row.id for row in sorted(items, key=_sort_key)]
        for parent_id, items in grouped.items()
    }


def build_tree(rows: Iterable[Any]) -> List[MenuNode]:
    """평면 메뉴 목록을 루트 목록(각 노드에 children 포함)으로 변환한다.

    정렬은 모든 레벨에서 sort_order 오름차순, name 오름차순이다.
    부모 id가 입력 집합에 없는 노드는 루트로 취급한다.
    """
    rows = list(rows)
    by_id = {row.id: row for row in rows}
    index = children_index(rows)
    visited: Set[int] = set()

    def _build(menu_id: int) -> MenuNode:
        visited.add(menu_id)
        row = by_id[menu_id]
        children = tuple(
            _build(child_id)
            for child_id in index.get(menu_id, [])
            if child_id not in visited
        )
        return MenuNode(
            id=row.id,
            name=row.name,
            url=row.url,
            parent_id=row.parent_id if row.parent_id in by_id else None,
            sort_order=int(row.sort_order or 0),
            is_active=bool(row.is_active) if row.is_active is not None else True,
            description=getattr(row, "description", None),
            type=getattr(row, "type", None) or "page",
            icon_image=getattr(row, "icon_image", None),
            css_class=getattr(row, "css_class", None),
            children=children,
        )

    roots = [_build(menu_id) for menu_id in index.get(None, [])]
    if len(visited) != len(by_id):
        # 루트에서 도달할 수 없는 노드는 순환 참조에 걸린 것뿐이다.
        unreachable = sorted(set(by_id) - visited)
        logger.warning("[menu] cyclic menus skipped from tree: %s", unreachable)
    return roots


def iter_tree(roots: Iterable[MenuNode], depth: int = 0):
    """(깊이, 노드)를 전위 순회 순서로 돌려준다."""
    for node in roots:
        yield depth, node
        yield from iter_tree(node.children, depth + 1)


def split_path(path: str) -> List[str]:
    return [segment for segment in (path or "").split("/") if segment]


def resolve_path(path: str, lookup: Callable[[Optional[int], str], Any]) -> Any:
    """슬래시 경로를 부모->자식 순으로 한 단계씩 해석해 마지막 메뉴를 돌려준다.

    lookup(parent_id, url)은 해당 부모 아래에서 url이 일치하는 메뉴(없으면 None)를
    반환해야 한다. 첫 세그먼트는 parent_id=None(루트)으로 조회한다.
    """
    segments = split_path(path)
    if not segments:
        raise MenuPathNotFound(path)

    current = None
    for segment in segments:
        parent_id = current.id if current is not None else None
        current = lookup(parent_id, segment)
        if current is None:
            raise MenuPathNotFound(path)
    return current


def collect_descendant_ids(root_id: int, index: Dict[Optional[int], List[int]]) -> Set[int]:
    """root_id 자신과 모든 하위 메뉴 id를 모은다. 이미 본 id를 다시 만나면 MenuCycleError."""
    collected: Set[int] = set()
    stack = [root_id]
    while stack:
        menu_id = stack.pop()
        if menu_id in collected:
            raise MenuCycleError(menu_id)
        collected.add(menu_id)
        stack.extend(index.get(menu_id, []))
    return collected
