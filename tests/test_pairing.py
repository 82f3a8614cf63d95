import random
from collections import Counter
from datetime import date

import pytest

from app.modules.buddies.pairing import (
    InsufficientMembersError,
    build_pairings,
    partition_members,
    shuffle_members,
)

WEEK = date(2024, 6, 3)


def _members(n):
    return [f"user-{i}" for i in range(n)]


def _pairing_members(p):
    return [m for m in (p.user_id_1, p.user_id_2, p.user_id_3) if m]


@pytest.mark.parametrize("n", range(2, 14))
def test_every_member_appears_exactly_once(n, rng):
    pairings = build_pairings("g1", _members(n), WEEK, rng=rng)
    seen = Counter(m for p in pairings for m in _pairing_members(p))
    assert set(seen) == set(_members(n))
    assert all(count == 1 for count in seen.values())


@pytest.mark.parametrize("n", range(2, 14))
def test_pairing_shape_by_group_size(n, rng):
    pairings = build_pairings("g1", _members(n), WEEK, rng=rng)
    triplets = [p for p in pairings if p.user_id_3 is not None]
    pairs = [p for p in pairings if p.user_id_3 is None]
    if n % 2 == 0:
        assert len(pairs) == n // 2
        assert triplets == []
    else:
        assert len(triplets) == 1
        assert len(pairs) == (n - 3) // 2
    for p in pairings:
        assert len(_pairing_members(p)) in (2, 3)


def test_two_members_make_one_pair(rng):
    pairings = build_pairings("g1", ["a", "b"], WEEK, rng=rng)
    assert len(pairings) == 1
    assert {pairings[0].user_id_1, pairings[0].user_id_2} == {"a", "b"}
    assert pairings[0].user_id_3 is None


def test_three_members_make_one_triplet(rng):
    pairings = build_pairings("g1", ["a", "b", "c"], WEEK, rng=rng)
    assert len(pairings) == 1
    assert set(_pairing_members(pairings[0])) == {"a", "b", "c"}


@pytest.mark.parametrize("members", [[], ["a"]])
def test_fewer_than_two_members_is_rejected(members):
    with pytest.raises(InsufficientMembersError):
        partition_members(members)


def test_partition_keeps_order_and_puts_triplet_first():
    assert partition_members(["a", "b", "c", "d", "e"]) == [["a", "b", "c"], ["d", "e"]]
    assert partition_members(["a", "b", "c", "d"]) == [["a", "b"], ["c", "d"]]


def test_shuffle_does_not_mutate_input():
    members = _members(6)
    shuffled = shuffle_members(members, random.Random(7))
    assert members == _members(6)
    assert sorted(shuffled) == sorted(members)


def test_rows_carry_group_and_week():
    pairings = build_pairings("g1", ["a", "b"], WEEK, rng=random.Random(0))
    row = pairings[0].to_row()
    assert row["group_id"] == "g1"
    assert row["week_start"] == "2024-06-03"
    assert row["user_id_3"] is None


def test_duplicate_member_ids_are_paired_once(rng):
    pairings = build_pairings("g1", ["a", "b", "a", "c", "d"], WEEK, rng=rng)
    members = [m for p in pairings for m in _pairing_members(p)]
    assert sorted(members) == ["a", "b", "c", "d"]
