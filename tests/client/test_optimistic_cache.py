"""
Tests for OptimisticCache.
"""

import pytest

from ecocycle.client import OptimisticCache


def credit(amount):
    def apply(profile):
        profile["eco_coins"] += amount
        return profile

    return apply


def test_values_are_copied():
    cache = OptimisticCache()
    original = {"eco_coins": 10}
    cache.set("profile", original)

    original["eco_coins"] = 99
    fetched = cache.get("profile")
    fetched["eco_coins"] = 50

    assert cache.get("profile") == {"eco_coins": 10}


def test_rollback_restores_previous_value():
    cache = OptimisticCache()
    cache.set("profile", {"eco_coins": 100})

    token = cache.apply_optimistic("profile", credit(45))
    assert cache.get("profile") == {"eco_coins": 145}

    assert cache.rollback(token) is True
    assert cache.get("profile") == {"eco_coins": 100}
    assert cache.rollback(token) is False


def test_commit_keeps_new_value():
    cache = OptimisticCache()
    cache.set("profile", {"eco_coins": 100})

    token = cache.apply_optimistic("profile", credit(-40))
    cache.commit(token)

    assert cache.rollback(token) is False
    assert cache.get("profile") == {"eco_coins": 60}


def test_nothing_cached_means_no_token():
    cache = OptimisticCache()

    assert cache.apply_optimistic("profile", credit(1)) is None
    assert "profile" not in cache
    assert cache.rollback(None) is False


def test_invalidate_by_prefix_discards_snapshots():
    cache = OptimisticCache()
    cache.set("detections:1:20", [1])
    cache.set("detections:2:20", [2])
    cache.set("profile", {"eco_coins": 1})
    token = cache.apply_optimistic("detections:1:20", lambda rows: rows + [3])

    assert cache.invalidate("detections") == 2
    assert "profile" in cache
    assert cache.rollback(token) is False
    assert cache.get("detections:1:20") is None


def test_invalidate_everything():
    cache = OptimisticCache()
    cache.set("a", 1)
    cache.set("b", 2)

    assert cache.invalidate() == 2
    assert cache.get("a", "gone") == "gone"


def test_optimistic_block_commits_on_clean_exit():
    cache = OptimisticCache()
    cache.set("profile", {"eco_coins": 100})

    with cache.optimistic("profile", credit(45)):
        assert cache.pending == 1

    assert cache.get("profile") == {"eco_coins": 145}
    assert cache.pending == 0


def test_optimistic_block_rolls_back_on_any_exception():
    cache = OptimisticCache()
    cache.set("profile", {"eco_coins": 100})

    with pytest.raises(KeyboardInterrupt):
        with cache.optimistic("profile", credit(45)):
            raise KeyboardInterrupt

    assert cache.get("profile") == {"eco_coins": 100}
    assert cache.pending == 0
