import pytest

np = pytest.importorskip("numpy")

from src.hypotheses.union_find import UnionFind


def test_add_is_idempotent():
    uf = UnionFind()
    uf.add(5)
    uf.add(5)

    assert uf.total_elements == 1
    assert uf.count == 1
    assert len(uf) == 1
    assert 5 in uf


def test_find_registers_unknown_index():
    uf = UnionFind()

    assert uf.find(42) == 42
    assert uf.contains(42)
    assert uf.size(42) == 1


def test_unite_reports_new_merges_only():
    uf = UnionFind([1, 2, 3])

    assert uf.unite(1, 2) is True
    assert uf.unite(2, 1) is False
    assert uf.size(1) == 2
    assert uf.size(2) == 2
    assert uf.count == 2


def test_unite_registers_unknown_indices():
    uf = UnionFind()

    assert uf.unite(10, 20) is True
    assert uf.total_elements == 2
    assert uf.connected(10, 20)


def test_equal_rank_attaches_second_root_under_first():
    uf = UnionFind([1, 2, 3])
    uf.unite(1, 2)
    assert uf.find(2) == 1

    # rank(3) < rank(1): 3 goes under 1 even though it is the first argument
    uf.unite(3, 1)
    assert uf.find(3) == 1
    assert uf.size(3) == 3


def test_unknown_index_queries_are_empty():
    uf = UnionFind([1, 2])

    assert uf.size(99) == 0
    assert uf.component_members(99) == []
    assert uf.connected(1, 99) is False
    assert not uf.contains(99)


def test_sparse_and_negative_indices():
    uf = UnionFind([10**9, -7, 3])
    uf.unite(10**9, -7)

    assert uf.connected(-7, 10**9)
    assert sorted(uf.component_members(-7)) == [-7, 10**9]
    assert uf.component_members(3) == [3]


def test_roots_and_count():
    uf = UnionFind([1, 2, 3, 4])
    uf.unite(1, 2)
    uf.unite(3, 4)

    assert uf.roots() == [1, 3]
    assert uf.count == 2


def test_check_size_is_inclusive():
    uf = UnionFind([0, 1, 2])
    uf.unite(0, 1)

    assert uf.check_size(0, 2, 2)
    assert uf.check_size(0, 1, 3)
    assert not uf.check_size(2, 2, 5)
    assert not uf.check_size(7, 1, 5)


def test_clear_resets_state():
    uf = UnionFind([1, 2])
    uf.unite(1, 2)
    uf.clear()

    assert uf.total_elements == 0
    assert uf.count == 0
    assert uf.roots() == []


def test_many_unions_share_single_root():
    n = 5000
    uf = UnionFind(range(n))
    for i in range(1, n):
        uf.unite(0, i)

    root = uf.find(n - 1)
    assert all(uf.find(i) == root for i in range(n))
    assert uf.size(0) == n


def test_matches_naive_partition_after_random_unions():
    rng = np.random.default_rng(0)
    elements = [int(v) * 1000 + 7 for v in rng.permutation(60)]
    uf = UnionFind(elements)

    naive = {e: {e} for e in elements}
    for _ in range(45):
        a, b = (int(v) for v in rng.choice(elements, size=2))
        is_new = naive[a] is not naive[b]
        assert uf.unite(a, b) == is_new
        if is_new:
            union = naive[a] | naive[b]
            for e in union:
                naive[e] = union

    for x in elements:
        assert set(uf.component_members(x)) == naive[x]
        assert uf.size(x) == len(naive[x])
        assert uf.size(uf.find(x)) == sum(uf.find(y) == uf.find(x) for y in elements)
        for y in elements[:10]:
            assert uf.connected(x, y) == (y in naive[x])

    assert uf.count == len({id(s) for s in naive.values()})


def test_component_members_lists_each_index_once_in_registration_order():
    uf = UnionFind([30, 10, 20, 40])
    uf.unite(20, 30)
    uf.unite(10, 20)

    assert uf.component_members(20) == [30, 10, 20]
