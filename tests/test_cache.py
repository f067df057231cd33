"""Tests for the versioned ranking result cache."""

import json
import logging
from unittest.mock import MagicMock, patch

import redis

from missionmatch.cache import Direction, NullCacheStore, RedisCacheStore, ResultCache
from missionmatch.schemas.match import MissionMatch
from missionmatch.utils import best_effort
from tests.test_utils import FailingCacheStore, InMemoryCacheStore, make_test_mission


def _matches(*ids: str) -> list[MissionMatch]:
    return [
        MissionMatch(mission=make_test_mission(mid), match_score=0.5, match_reasons=["1/1 required skills match"])
        for mid in ids
    ]


class Counter:
    """Compute callable that counts invocations."""

    def __init__(self, results):
        self.results = results
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.results


class TestBestEffort:
    def test_swallows_and_logs(self, caplog):
        with caplog.at_level(logging.WARNING), best_effort("cache write"):
            raise redis.ConnectionError("down")

        assert "Best-effort cache write failed" in caplog.text

    def test_no_error_passes_through(self):
        ran = []
        with best_effort("noop"):
            ran.append(True)

        assert ran == [True]


class TestCacheKeys:
    def test_key_format(self):
        cache = ResultCache(InMemoryCacheStore())

        key = cache.key(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, 0)

        assert key == "matching:missions-for-freelancer:f1:v0:10"

    def test_version_key_format(self):
        cache = ResultCache(InMemoryCacheStore())

        key = cache.version_key(Direction.FREELANCERS_FOR_MISSION, "m1")

        assert key == "matching:version:freelancers-for-mission:m1"


class TestGetOrCompute:
    def test_miss_computes_and_stores(self):
        store = InMemoryCacheStore()
        cache = ResultCache(store)
        compute = Counter(_matches("m1", "m2"))

        results = cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)

        assert [r.mission.id for r in results] == ["m1", "m2"]
        assert compute.calls == 1
        key = "matching:missions-for-freelancer:f1:v0:10"
        assert key in store.data
        assert store.ttls[key] == 180

    def test_hit_skips_compute(self):
        cache = ResultCache(InMemoryCacheStore())
        compute = Counter(_matches("m1"))

        first = cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)
        second = cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)

        assert compute.calls == 1
        assert second == first

    def test_limit_is_part_of_key(self):
        cache = ResultCache(InMemoryCacheStore())
        compute = Counter(_matches("m1"))

        cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)
        cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 5, MissionMatch, compute)

        assert compute.calls == 2

    def test_empty_results_are_cached(self):
        cache = ResultCache(InMemoryCacheStore())
        compute = Counter([])

        cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)
        results = cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)

        assert results == []
        assert compute.calls == 1

    def test_corrupt_payload_is_a_miss(self):
        store = InMemoryCacheStore()
        store.data["matching:missions-for-freelancer:f1:v0:10"] = "{not json"
        cache = ResultCache(store)
        compute = Counter(_matches("m1"))

        results = cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)

        assert compute.calls == 1
        assert [r.mission.id for r in results] == ["m1"]
        assert json.loads(store.data["matching:missions-for-freelancer:f1:v0:10"])[0]["mission"]["id"] == "m1"

    def test_compute_errors_propagate(self):
        cache = ResultCache(InMemoryCacheStore())

        def boom():
            raise RuntimeError("store unavailable")

        try:
            cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, boom)
        except RuntimeError as e:
            assert str(e) == "store unavailable"
        else:
            raise AssertionError("compute error was swallowed")


class TestInvalidation:
    def test_invalidate_orphans_all_limits(self):
        store = InMemoryCacheStore()
        cache = ResultCache(store)
        compute = Counter(_matches("m1"))

        for limit in (5, 10, 20):
            cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", limit, MissionMatch, compute)
        cache.invalidate(Direction.MISSIONS_FOR_FREELANCER, "f1")
        for limit in (5, 10, 20):
            cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", limit, MissionMatch, compute)

        assert compute.calls == 6
        assert store.data["matching:version:missions-for-freelancer:f1"] == "1"
        assert "matching:missions-for-freelancer:f1:v1:20" in store.data

    def test_invalidate_leaves_other_subjects(self):
        cache = ResultCache(InMemoryCacheStore())
        compute = Counter(_matches("m1"))

        cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)
        cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f2", 10, MissionMatch, compute)
        cache.invalidate(Direction.MISSIONS_FOR_FREELANCER, "f1")
        cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f2", 10, MissionMatch, compute)

        assert compute.calls == 2

    def test_invalidate_relationship_bumps_both_directions(self):
        store = InMemoryCacheStore()
        cache = ResultCache(store)

        cache.invalidate_relationship("f1", "m1")

        assert store.data["matching:version:missions-for-freelancer:f1"] == "1"
        assert store.data["matching:version:freelancers-for-mission:m1"] == "1"

    def test_purge_deletes_namespace(self):
        store = InMemoryCacheStore()
        store.data["other:key"] = "x"
        cache = ResultCache(store)
        cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, Counter([]))
        cache.invalidate(Direction.MISSIONS_FOR_FREELANCER, "f1")

        deleted = cache.purge()

        assert deleted == 2
        assert list(store.data) == ["other:key"]


class TestCacheFaults:
    def test_failing_store_still_returns_results(self, caplog):
        store = FailingCacheStore()
        cache = ResultCache(store)
        compute = Counter(_matches("m1"))

        with caplog.at_level(logging.WARNING):
            results = cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)

        assert [r.mission.id for r in results] == ["m1"]
        assert compute.calls == 1
        assert "Best-effort cache version read failed" in caplog.text

    def test_failing_read_then_write(self):
        store = InMemoryCacheStore()
        store.get = MagicMock(side_effect=[None, redis.TimeoutError("Timeout reading from socket")])
        store.set_with_ttl = MagicMock(side_effect=redis.ConnectionError("Connection reset by peer"))
        cache = ResultCache(store)
        compute = Counter(_matches("m1"))

        results = cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)

        assert [r.mission.id for r in results] == ["m1"]
        store.set_with_ttl.assert_called_once()

    def test_failing_invalidation_is_swallowed(self):
        store = FailingCacheStore()
        cache = ResultCache(store)

        cache.invalidate_relationship("f1", "m1")

        assert store.calls == 2

    def test_failing_purge_returns_zero(self):
        assert ResultCache(FailingCacheStore()).purge() == 0

    def test_null_store_always_misses(self):
        cache = ResultCache(NullCacheStore())
        compute = Counter(_matches("m1"))

        cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)
        cache.get_or_compute(Direction.MISSIONS_FOR_FREELANCER, "f1", 10, MissionMatch, compute)

        assert compute.calls == 2


class TestRedisCacheStore:
    def test_set_uses_expiry(self):
        client = MagicMock()
        store = RedisCacheStore(client)

        store.set_with_ttl("matching:k", "[]", 180)

        client.set.assert_called_once_with("matching:k", "[]", ex=180)

    def test_delete_by_prefix_scans_and_deletes(self):
        client = MagicMock()
        client.scan_iter.return_value = iter(["matching:a", "matching:b"])
        client.delete.return_value = 2
        store = RedisCacheStore(client)

        deleted = store.delete_by_prefix("matching:")

        assert deleted == 2
        client.scan_iter.assert_called_once()
        client.delete.assert_called_once_with("matching:a", "matching:b")

    def test_get_cache_store_without_url_is_null(self):
        with (
            patch("missionmatch.cache.redis_client.REDIS_URL", None),
            patch("missionmatch.cache.redis_client._store", None),
        ):
            from missionmatch.cache.redis_client import get_cache_store

            assert isinstance(get_cache_store(), NullCacheStore)
