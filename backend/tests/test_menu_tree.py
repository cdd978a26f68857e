"""메뉴 트리 순수 로직(트리 구성/경로 해석/하위 메뉴 수집) 단위 테스트입니다."""

from types import SimpleNamespace

import pytest

from app.services.menu_tree import (
    MenuCycleError,
    MenuPathNotFound,
    build_tree,
    children_index,
    collect_descendant_ids,
    iter_tree,
    resolve_path,
)


def _row(id, url, parent_id=None, sort_order=1, name=None):
    return SimpleNamespace(
        id=id,
        name=name or url,
        url=url,
        parent_id=parent_id,
        sort_order=sort_order,
        is_active=True,
    )


@pytest.fixture
def rows():
    return [
        _row(1, "about-general", sort_order=1),
        _row(2, "organization", sort_order=2),
        _row(3, "life", parent_id=1, sort_order=1),
        _row(4, "significance", parent_id=1, sort_order=2),
        _row(5, "history", parent_id=2, sort_order=1),
        _row(6, "early-years", parent_id=3, sort_order=1),
    ]


def _lookup(rows):
    def lookup(parent_id, url):
        for row in rows:
            if row.parent_id == parent_id and row.url == url:
                return row
        return None
    return lookup


def test_build_tree_preserves_count_and_parents(rows):
    roots = build_tree(rows)
    flattened = [node for _, node in iter_tree(roots)]

    assert len(flattened) == len(rows)
    original_parent = {row.id: row.parent_id for row in rows}
    for root in roots:
        assert original_parent[root.id] is None
    for _, node in iter_tree(roots):
        for child in node.children:
            assert original_parent[child.id] == node.id


def test_build_tree_orders_by_sort_order_then_name():
    rows = [
        _row(1, "b", sort_order=2),
        _row(2, "z", sort_order=1, name="zeta"),
        _row(3, "a", sort_order=1, name="alpha"),
        _row(4, "c2", parent_id=3, sort_order=5),
        _row(5, "c1", parent_id=3, sort_order=1),
    ]
    roots = build_tree(rows)
    assert [node.id for node in roots] == [3, 2, 1]
    assert [child.id for child in roots[0].children] == [5, 4]


def test_build_tree_is_deterministic_for_shuffled_input(rows):
    first = build_tree(rows)
    second = build_tree(list(reversed(rows)))
    assert first == second


def test_build_tree_treats_unknown_parent_as_root():
    rows = [_row(1, "root"), _row(2, "orphan", parent_id=99)]
    roots = build_tree(rows)
    assert sorted(node.id for node in roots) == [1, 2]
    orphan = next(node for node in roots if node.id == 2)
    assert orphan.parent_id is None


def test_build_tree_does_not_mutate_input(rows):
    build_tree(rows)
    assert all(not hasattr(row, "children") for row in rows)


def test_build_tree_skips_cyclic_nodes():
    rows = [_row(1, "root"), _row(2, "a", parent_id=3), _row(3, "b", parent_id=2)]
    roots = build_tree(rows)
    assert [node.id for node in roots] == [1]


def test_resolve_path_walks_parent_child_chain(rows):
    node = resolve_path("about-general/life/early-years", _lookup(rows))
    assert node.id == 6


def test_resolve_path_ignores_empty_segments(rows):
    node = resolve_path("/about-general//life/", _lookup(rows))
    assert node.id == 3


def test_resolve_path_first_segment_must_be_root(rows):
    with pytest.raises(MenuPathNotFound):
        resolve_path("life", _lookup(rows))


def test_resolve_path_failure_names_full_path(rows):
    with pytest.raises(MenuPathNotFound) as exc_info:
        resolve_path("about-general/missing", _lookup(rows))
    assert exc_info.value.path == "about-general/missing"
    assert "about-general/missing" in str(exc_info.value)


def test_resolve_path_rejects_child_under_wrong_parent(rows):
    with pytest.raises(MenuPathNotFound):
        resolve_path("organization/life", _lookup(rows))


def test_resolve_path_empty_path_fails(rows):
    with pytest.raises(MenuPathNotFound):
        resolve_path("///", _lookup(rows))


def test_collect_descendant_ids(rows):
    index = children_index(rows)
    assert collect_descendant_ids(1, index) == {1, 3, 4, 6}
    assert collect_descendant_ids(2, index) == {2, 5}


def test_collect_descendant_ids_for_leaf_is_singleton(rows):
    assert collect_descendant_ids(6, children_index(rows)) == {6}


def test_collect_descendant_ids_includes_direct_children(rows):
    index = children_index(rows)
    direct = set(index.get(1, []))
    assert direct <= collect_descendant_ids(1, index)


def test_collect_descendant_ids_detects_cycle():
    rows = [_row(1, "a", parent_id=2), _row(2, "b", parent_id=1)]
    with pytest.raises(MenuCycleError):
        collect_descendant_ids(1, children_index(rows))


def test_collect_descendant_ids_detects_self_parent():
    rows = [_row(1, "a", parent_id=1)]
    with pytest.raises(MenuCycleError):
        collect_descendant_ids(1, children_index(rows))
