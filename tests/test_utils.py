"""Shared test utility functions."""

import redis

from missionmatch.schemas.freelancer import (
    Availability,
    AvailabilityStatus,
    Freelancer,
    Seniority,
    SkillDescriptor,
)
from missionmatch.schemas.mission import Mission, MissionStatus, Modality


def make_test_freelancer(
    id: str = "f1",
    skills: list[str] | None = None,
    daily_rate: float | None = None,
    seniority: Seniority | None = None,
    remote: bool = False,
    location: str | None = None,
    rating: float | None = None,
    completed_jobs: int | None = None,
    available: bool = True,
) -> Freelancer:
    """Create a dummy freelancer for testing."""
    status = AvailabilityStatus.AVAILABLE if available else AvailabilityStatus.BUSY
    return Freelancer(
        id=id,
        name=f"Freelancer {id}",
        skills=[SkillDescriptor(name=name) for name in skills or []],
        daily_rate=daily_rate,
        seniority=seniority,
        remote=remote,
        location=location,
        availability=Availability(status=status),
        rating=rating,
        completed_jobs=completed_jobs,
    )


def make_test_mission(
    id: str = "m1",
    required_skills: list[str] | None = None,
    budget_max: float | None = None,
    experience: Seniority | None = None,
    modality: Modality = Modality.REMOTE,
    status: MissionStatus = MissionStatus.PUBLISHED,
) -> Mission:
    """Create a dummy mission for testing."""
    return Mission(
        id=id,
        company_id="c1",
        title=f"Mission {id}",
        required_skills=required_skills or [],
        budget_max=budget_max,
        experience=experience,
        modality=modality,
        status=status,
    )


def make_freelancer_row(id: str, skills, created_at: str, **fields) -> dict:
    """Create a raw freelancer row as it would be loaded into the store."""
    row = {
        "id": id,
        "name": f"Freelancer {id}",
        "skills": skills,
        "availability": {"status": "available"},
        "createdAt": created_at,
    }
    row.update(fields)
    return row


def make_mission_row(id: str, required_skills, created_at: str, **fields) -> dict:
    """Create a raw mission row as it would be loaded into the store."""
    row = {
        "id": id,
        "companyId": "c1",
        "title": f"Mission {id}",
        "requiredSkills": required_skills,
        "status": "PUBLISHED",
        "modality": "remote",
        "createdAt": created_at,
    }
    row.update(fields)
    return row


class InMemoryCacheStore:
    """Dict-backed cache store that records writes. TTLs are not enforced."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set_with_ttl(self, key: str, value: str, seconds: int) -> None:
        self.data[key] = value
        self.ttls[key] = seconds

    def incr(self, key: str) -> int:
        value = int(self.data.get(key, "0")) + 1
        self.data[key] = str(value)
        return value

    def delete_by_prefix(self, prefix: str) -> int:
        keys = [key for key in self.data if key.startswith(prefix)]
        for key in keys:
            del self.data[key]
        return len(keys)


class FailingCacheStore:
    """Cache store whose every operation fails like an unreachable Redis."""

    def __init__(self):
        self.calls = 0

    def _fail(self):
        self.calls += 1
        raise redis.ConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    def get(self, key: str) -> str | None:
        self._fail()

    def set_with_ttl(self, key: str, value: str, seconds: int) -> None:
        self._fail()

    def incr(self, key: str) -> int:
        self._fail()

    def delete_by_prefix(self, prefix: str) -> int:
        self._fail()
