"""Best-effort read-through cache for ranking results.

Keys have the form ``{namespace}:{direction}:{subject_id}:v{version}:{limit}``.
Each subject has its own version counter stored under
``{namespace}:version:{direction}:{subject_id}``. Invalidating a subject bumps
its counter, which orphans every limit variant at once; orphaned entries
expire with their TTL. No keyspace scan is needed on the request path.

Every cache operation goes through ``best_effort``: a cache failure degrades
to recomputation and is never surfaced to the caller.
"""

import json
import logging
from collections.abc import Callable
from enum import Enum
from typing import TypeVar

from pydantic import BaseModel

from missionmatch.cache.stores import CacheStore
from missionmatch.config import CACHE_NAMESPACE, CACHE_TTL_SECONDS
from missionmatch.utils import best_effort

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class Direction(str, Enum):
    MISSIONS_FOR_FREELANCER = "missions-for-freelancer"
    FREELANCERS_FOR_MISSION = "freelancers-for-mission"


class ResultCache:
    """Versioned result cache over a CacheStore."""

    def __init__(
        self,
        store: CacheStore,
        ttl: int = CACHE_TTL_SECONDS,
        namespace: str = CACHE_NAMESPACE,
    ):
        self.store = store
        self.ttl = ttl
        self.namespace = namespace

    def version_key(self, direction: Direction, subject_id: str) -> str:
        return f"{self.namespace}:version:{direction.value}:{subject_id}"

    def key(self, direction: Direction, subject_id: str, limit: int, version: int) -> str:
        return f"{self.namespace}:{direction.value}:{subject_id}:v{version}:{limit}"

    def _current_version(self, direction: Direction, subject_id: str) -> int:
        raw = self.store.get(self.version_key(direction, subject_id))
        return int(raw) if raw is not None else 0

    def get_or_compute(
        self,
        direction: Direction,
        subject_id: str,
        limit: int,
        model: type[M],
        compute: Callable[[], list[M]],
    ) -> list[M]:
        """Return cached results, or compute and store them.

        The subject version is read once and reused for the write, so a
        result computed while an invalidation happens is stored under the
        old version and never served.

        Args:
            direction: Which ranking is cached.
            subject_id: Freelancer or mission ID the ranking is for.
            limit: Requested result count (part of the key).
            model: Pydantic model of each result, used to deserialize.
            compute: Produces the results on a miss. Its errors propagate.

        Returns:
            The ranked results.
        """
        version = None
        with best_effort("cache version read"):
            version = self._current_version(direction, subject_id)

        if version is None:
            return compute()

        key = self.key(direction, subject_id, limit, version)

        cached = None
        with best_effort("cache read"):
            raw = self.store.get(key)
            if raw is not None:
                cached = [model.model_validate(item) for item in json.loads(raw)]

        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached

        logger.debug(f"Cache miss for {key}")
        results = compute()

        with best_effort("cache write"):
            payload = json.dumps([result.model_dump(mode="json") for result in results])
            self.store.set_with_ttl(key, payload, self.ttl)

        return results

    def invalidate(self, direction: Direction, subject_id: str) -> None:
        """Invalidate all cached limit variants of one subject's ranking."""
        with best_effort("cache invalidation"):
            self.store.incr(self.version_key(direction, subject_id))
            logger.debug(f"Invalidated {direction.value} cache for {subject_id}")

    def invalidate_relationship(self, freelancer_id: str, mission_id: str) -> None:
        """Invalidate both rankings affected by a freelancer-mission relationship change."""
        self.invalidate(Direction.MISSIONS_FOR_FREELANCER, freelancer_id)
        self.invalidate(Direction.FREELANCERS_FOR_MISSION, mission_id)

    def purge(self) -> int:
        """Delete every key in the namespace, including version counters.

        Returns:
            Number of keys deleted (0 if the store failed).
        """
        deleted = 0
        with best_effort("cache purge"):
            deleted = self.store.delete_by_prefix(f"{self.namespace}:")
        return deleted
