"""
Unit tests for disktop/topn.py
"""
import itertools
import random

import pytest

from disktop.models import FileObservation
from disktop.topn import TopNSet, outranks, select


def obs(path, size):
    return FileObservation(path, size)


def test_select_returns_largest_descending():
    """Selector keeps the N largest and orders them largest first."""
    data = [obs("/a", 5), obs("/b", 3000), obs("/c", 2_000_000), obs("/d", 10)]

    result = select(data, 2)

    assert [(o.size, o.path) for o in result] == [(2_000_000, "/c"), (3000, "/b")]


def test_select_fewer_than_n():
    """All observations come back, without padding, when fewer than N exist."""
    data = [obs("/x", 1), obs("/y", 7)]

    result = select(data, 10)

    assert [o.path for o in result] == ["/y", "/x"]


def test_select_zero_capacity():
    assert select([obs("/a", 1)], 0) == []
    assert select([], 5) == []


def test_equal_sizes_break_ties_by_path():
    """Equal sizes rank by path, lexicographically smaller first."""
    data = [obs("/c", 10), obs("/a", 10), obs("/b", 10), obs("/d", 1)]

    result = select(data, 2)

    assert [o.path for o in result] == ["/a", "/b"]


@pytest.mark.parametrize("n", [1, 2, 3, 5, 8])
def test_select_is_order_independent(n):
    """Any permutation of the input yields the same selection."""
    data = [obs("/e", 4), obs("/a", 9), obs("/d", 4), obs("/b", 9), obs("/c", 1)]
    expected = select(data, n)

    for perm in itertools.permutations(data):
        assert select(perm, n) == expected


def test_select_matches_full_sort():
    """Heap selection agrees with sorting the whole stream."""
    rng = random.Random(1234)
    data = [obs(f"/f{i:04d}", rng.randint(0, 200)) for i in range(1000)]

    result = select(data, 25)

    expected = sorted(data, key=lambda o: (-o.size, o.path))[:25]
    assert result == expected
    assert len(result) == min(25, len(data))


def test_topnset_evicts_minimum():
    """A larger candidate replaces the current minimum once the set is full."""
    top = TopNSet(2)
    assert top.push(obs("/a", 10))
    assert top.push(obs("/b", 20))
    assert top.minimum() == obs("/a", 10)

    assert not top.push(obs("/c", 5))
    assert top.push(obs("/d", 15))

    assert len(top) == 2
    assert top.minimum() == obs("/d", 15)


def test_topnset_ranked_does_not_consume():
    top = TopNSet(3)
    top.extend([obs("/a", 1), obs("/b", 3), obs("/c", 2)])

    assert [o.path for o in top.ranked()] == ["/b", "/c", "/a"]
    assert len(top) == 3
    assert [o.path for o in top.drain()] == ["/b", "/c", "/a"]
    assert len(top) == 0


def test_outranks():
    assert outranks(obs("/a", 2), obs("/b", 1))
    assert outranks(obs("/a", 1), obs("/b", 1))
    assert not outranks(obs("/b", 1), obs("/a", 1))
