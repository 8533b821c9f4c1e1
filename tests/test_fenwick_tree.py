import numpy as np
import pytest

from BITVolume.BIT.FenwickTree import FenwickTree, StrictFenwickTree


@pytest.fixture
def tree():
    t = FenwickTree(10)
    t.add(3, 5)
    t.add(7, 2)
    t.add(3, -1)
    return t


def brute_prefix(values, idx):
    return sum(values[:max(0, min(idx, len(values)))])


def test_scenario(tree):
    assert tree.prefix_sum(3) == 4
    assert tree.prefix_sum(6) == 4
    assert tree.prefix_sum(10) == 6
    assert tree.range_sum(4, 7) == 2
    assert tree.range_sum(1, 10) == 6


def test_construct_is_zero():
    t = FenwickTree(8)
    assert t.size() == 8
    assert len(t) == 8
    assert all(t.prefix_sum(i) == 0 for i in range(-2, 12))


def test_negative_size_clamped():
    t = FenwickTree(-4)
    assert t.size() == 0
    t.add(1, 5)
    assert t.prefix_sum(1) == 0


def test_empty_tree():
    t = FenwickTree(0)
    assert t.size() == 0
    t.add(0, 3)
    t.add(1, 3)
    assert t.prefix_sum(0) == 0
    assert t.prefix_sum(5) == 0
    assert t.range_sum(1, 5) == 0
    assert t.frequencies() == []


def test_out_of_range_add_is_noop(tree):
    before = tree._v.copy()
    tree.add(0, 100)
    tree.add(11, 100)
    tree.add(-5, 100)
    assert np.array_equal(before, tree._v)


def test_prefix_clamping(tree):
    assert tree.prefix_sum(0) == 0
    assert tree.prefix_sum(-3) == 0
    assert tree.prefix_sum(110) == tree.prefix_sum(10)


def test_range_sum_inverted():
    t = FenwickTree(5)
    for i in range(1, 6):
        t.add(i, i * i)
    assert t.range_sum(5, 1) == t.range_sum(1, 5) == 55
    assert t.range_sum(4, 2) == 4 + 9 + 16


def test_range_sum_outside(tree):
    assert tree.range_sum(-5, 0) == 0
    assert tree.range_sum(11, 20) == 0
    assert tree.range_sum(0, 3) == 4
    assert tree.range_sum(7, 50) == 2
    assert tree.range_sum(-100, 100) == 6


def test_reset(tree):
    storage = tree._v
    tree.reset()
    tree.reset()
    assert tree._v is storage
    assert tree.size() == 10
    assert all(tree.prefix_sum(i) == 0 for i in range(0, 11))
    tree.add(2, 7)
    assert tree.range_sum(2, 2) == 7


def test_point_difference():
    t = FenwickTree(16)
    for idx in range(1, 17):
        t.reset()
        t.add(idx, -9)
        assert t.prefix_sum(idx) - t.prefix_sum(idx - 1) == -9


def test_random_against_brute_force():
    np.random.seed(0)
    n = 37
    t = FenwickTree(n)
    values = [0] * n
    for _ in range(300):
        idx = int(np.random.randint(-3, n + 4))
        delta = int(np.random.randint(-1000, 1000))
        t.add(idx, delta)
        if 1 <= idx <= n:
            values[idx - 1] += delta
        i = int(np.random.randint(-2, n + 3))
        assert t.prefix_sum(i) == brute_prefix(values, i)
        a, b = (int(x) for x in np.random.randint(-2, n + 3, size=2))
        assert t.range_sum(a, b) == t.range_sum(b, a)
    assert t.prefix_sum(n) == t.range_sum(1, n) == sum(values)
    assert t.frequencies() == values
    for i in range(2, n + 1):
        for j in range(i, n + 1):
            assert t.range_sum(1, j) - t.range_sum(1, i - 1) == t.range_sum(i, j)


def test_values_and_set(tree):
    assert tree[3] == 4
    assert tree.value_at(7) == 2
    assert tree.value_at(0) == 0
    assert tree.value_at(11) == 0
    tree.set(3, 10)
    assert tree[3] == 10
    assert tree.prefix_sum(10) == 12
    tree.set(12, 1)
    assert tree.prefix_sum(10) == 12


def test_from_frequencies():
    values = [4, 0, -2, 7, 1, 1, 3]
    t = FenwickTree.from_frequencies(values)
    assert t.size() == 7
    assert t.frequencies() == values
    u = FenwickTree(7)
    for i, v in enumerate(values, start=1):
        u.add(i, v)
    assert t == u


def test_resized_replays_values(tree):
    bigger = tree.resized(20)
    assert bigger.size() == 20
    assert bigger.prefix_sum(20) == 6
    assert bigger[3] == 4 and bigger[7] == 2
    smaller = tree.resized(5)
    assert smaller.prefix_sum(5) == 4
    assert tree.size() == 10
    assert tree.resized(-1).size() == 0


def test_paths():
    t = FenwickTree(8)
    assert t.update_path(3) == [3, 4, 8]
    assert t.update_path(5) == [5, 6, 8]
    assert t.update_path(0) == []
    assert t.update_path(9) == []
    assert t.query_path(7) == [7, 6, 4]
    assert t.query_path(100) == [8]
    assert t.query_path(0) == []
    assert t.covered_range(6) == (5, 6)
    assert t.covered_range(8) == (1, 8)
    assert t.covered_range(9) is None


def test_large_values_stay_exact():
    t = FenwickTree(4)
    big = 2 ** 62
    t.add(1, big)
    t.add(2, -big)
    t.add(4, 1)
    assert t.prefix_sum(1) == big
    assert t.prefix_sum(4) == 1


def test_strict_tree():
    t = StrictFenwickTree(5)
    t.add(2, 3)
    assert t.prefix_sum(0) == 0
    assert t.prefix_sum(5) == 3
    assert t.range_sum(5, 1) == 3
    assert t[2] == 3
    with pytest.raises(IndexError):
        t.add(0, 1)
    with pytest.raises(IndexError):
        t.add(6, 1)
    with pytest.raises(IndexError):
        t.prefix_sum(6)
    with pytest.raises(IndexError):
        t.prefix_sum(-1)
    with pytest.raises(IndexError):
        t.range_sum(0, 3)
    with pytest.raises(IndexError):
        t.value_at(9)
    with pytest.raises(IndexError):
        t.set(0, 1)
    with pytest.raises(ValueError):
        StrictFenwickTree(-1)
    assert t.prefix_sum(5) == 3


def test_range_sum_ending_at_zero_swaps(tree):
    # (1, 0) is swapped to (0, 1), which is clamped to position 1
    t = FenwickTree(4)
    t.add(1, -418)
    t.add(2, 3)
    assert t.range_sum(1, 0) == t.range_sum(0, 1) == t.value_at(1) == -418
    assert tree.range_sum(4, 3) == tree.value_at(3) + tree.value_at(4)
