"""Normalization of inconsistently stored profile and mission fields.

Skills, availability and mission skill lists have been stored over time as
native arrays/objects, JSON-encoded strings, comma-separated strings or keyed
objects. Everything downstream of this module (filters, scorer, ranker) only
ever sees the canonical pydantic shapes, so none of these helpers may raise
on malformed data: they fall back to an empty or default value instead.
"""

import json
import logging
import math
from typing import Any

from missionmatch.schemas.freelancer import (
    Availability,
    AvailabilityStatus,
    Freelancer,
    Seniority,
    SkillDescriptor,
)
from missionmatch.schemas.mission import Mission, MissionStatus, Modality

logger = logging.getLogger(__name__)


def _parse_json_field(raw: Any) -> Any:
    """Decode a field that may hold JSON text.

    Non-JSON strings are returned as a list when comma-separated and as-is
    otherwise. Non-string values pass through untouched. Values that were
    JSON-encoded twice (a JSON string holding JSON) are decoded again.
    JSON nested too deeply to decode is discarded (None).
    """
    if not isinstance(raw, str):
        return raw

    text = raw.strip()
    if not text:
        return None

    try:
        decoded = json.loads(text)
    except RecursionError:
        logger.debug(f"Discarding JSON field nested too deeply to decode ({len(text)} chars)")
        return None
    except ValueError:
        if "," in text:
            return [part.strip() for part in text.split(",")]
        return text

    if isinstance(decoded, str):
        return _parse_json_field(decoded)
    return decoded


def _skill_from_item(item: Any) -> SkillDescriptor | None:
    if isinstance(item, str):
        name = item.strip()
        return SkillDescriptor(name=name) if name else None

    if isinstance(item, dict):
        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            return None
        level = item.get("level")
        return SkillDescriptor(
            name=name.strip(),
            level=str(level) if level is not None else None,
        )

    return None


def normalize_skills(raw: Any) -> list[SkillDescriptor]:
    """Coerce a stored freelancer skills value into skill descriptors.

    Accepted shapes:
        - list of ``{"name": ..., "level": ...}`` dicts or plain strings
        - JSON-encoded string of any of these shapes
        - keyed object, either ``{"React": "expert"}`` (name -> level) or an
          index-keyed object of descriptors (``{"0": {"name": ...}}``)
        - comma-separated or single bare string

    Args:
        raw: Value as read from the store.

    Returns:
        List of SkillDescriptor, empty when the value cannot be interpreted.
    """
    value = _parse_json_field(raw)

    if isinstance(value, str):
        value = [value]

    items: list[Any]
    if isinstance(value, list):
        items = value
    elif isinstance(value, dict):
        if all(isinstance(v, dict) for v in value.values()):
            items = list(value.values())
        else:
            items = [
                {"name": key, "level": level if isinstance(level, str) else None}
                for key, level in value.items()
            ]
    else:
        return []

    skills = []
    for item in items:
        skill = _skill_from_item(item)
        if skill is not None:
            skills.append(skill)
    return skills


def _coerce_float(value: Any) -> float | None:
    """Coerce a stored number; non-numeric and non-finite values become None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _coerce_int(value: Any) -> int | None:
    number = _coerce_float(value)
    return int(number) if number is not None else None


def normalize_availability(raw: Any) -> Availability:
    """Coerce a stored availability value into an Availability.

    Accepts a dict or JSON-encoded dict with ``status``, ``startDate`` /
    ``start_date`` and ``daysPerWeek`` / ``days_per_week`` keys, or a bare
    status string. Anything unrecognized is treated as unavailable.
    """
    value = _parse_json_field(raw)

    if isinstance(value, str):
        value = {"status": value}

    if not isinstance(value, dict):
        return Availability()

    raw_status = value.get("status")
    try:
        status = AvailabilityStatus(str(raw_status).strip().lower())
    except ValueError:
        status = AvailabilityStatus.UNAVAILABLE

    start_date = value.get("startDate", value.get("start_date"))
    days_per_week = value.get("daysPerWeek", value.get("days_per_week"))

    return Availability(
        status=status,
        start_date=str(start_date) if start_date is not None else None,
        days_per_week=_coerce_int(days_per_week),
    )


def normalize_mission_skills(raw: Any) -> list[str]:
    """Coerce a stored mission skill list into plain skill names.

    Descriptor dicts contribute their ``name``. Blank entries are dropped and
    duplicates are removed case-insensitively, keeping the first spelling.
    """
    value = _parse_json_field(raw)

    if isinstance(value, str):
        value = [value]
    elif isinstance(value, dict):
        value = list(value.values())

    if not isinstance(value, list):
        return []

    names = []
    seen = set()
    for item in value:
        if isinstance(item, dict):
            item = item.get("name")
        if not isinstance(item, str):
            continue
        name = item.strip()
        if name and name.lower() not in seen:
            names.append(name)
            seen.add(name.lower())
    return names


def first_value(row: dict, *keys: str) -> Any:
    """Return the first non-None value among camelCase/snake_case aliases."""
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def _coerce_seniority(value: Any) -> Seniority | None:
    if isinstance(value, Seniority):
        return value
    try:
        return Seniority(value)
    except ValueError:
        return None


def coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y")
    return bool(value)


def _coerce_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_freelancer(row: dict) -> Freelancer:
    """Build a canonical Freelancer from a raw store row.

    Args:
        row: Dict-like row with camelCase or snake_case keys.

    Returns:
        Freelancer with every field coerced; malformed fields fall back to
        their defaults.
    """
    rating = _coerce_float(row.get("rating"))
    if rating is not None and not 0.0 <= rating <= 5.0:
        logger.debug(f"Ignoring out-of-range rating {rating} for freelancer {row.get('id')}")
        rating = None

    return Freelancer(
        id=str(row["id"]),
        name=_coerce_str(row.get("name")),
        title=_coerce_str(row.get("title")),
        skills=normalize_skills(row.get("skills")),
        daily_rate=_coerce_float(first_value(row, "dailyRate", "daily_rate")),
        seniority=_coerce_seniority(row.get("seniority")),
        remote=coerce_bool(row.get("remote")),
        location=_coerce_str(row.get("location")),
        availability=normalize_availability(row.get("availability")),
        rating=rating,
        completed_jobs=_coerce_int(first_value(row, "completedJobs", "completed_jobs")),
    )


def normalize_mission(row: dict) -> Mission:
    """Build a canonical Mission from a raw store row.

    Args:
        row: Dict-like row with camelCase or snake_case keys.

    Returns:
        Mission with skill lists normalized and enums coerced. Unknown
        modality falls back to remote and unknown status to draft, so an
        unreadable status never makes a mission eligible.
    """
    try:
        modality = Modality(first_value(row, "modality") or Modality.REMOTE.value)
    except ValueError:
        modality = Modality.REMOTE

    try:
        status = MissionStatus(first_value(row, "status") or MissionStatus.DRAFT.value)
    except ValueError:
        status = MissionStatus.DRAFT

    created_at = first_value(row, "createdAt", "created_at")

    return Mission(
        id=str(row["id"]),
        company_id=_coerce_str(first_value(row, "companyId", "company_id")),
        title=_coerce_str(row.get("title")) or "",
        required_skills=normalize_mission_skills(first_value(row, "requiredSkills", "required_skills")),
        optional_skills=normalize_mission_skills(first_value(row, "optionalSkills", "optional_skills")),
        budget_min=_coerce_float(first_value(row, "budgetMin", "budget_min")),
        budget_max=_coerce_float(first_value(row, "budgetMax", "budget_max")),
        experience=_coerce_seniority(row.get("experience")),
        modality=modality,
        status=status,
        urgency=_coerce_str(row.get("urgency")),
        created_at=str(created_at) if created_at is not None else None,
    )
