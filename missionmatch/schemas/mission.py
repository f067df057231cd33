from enum import Enum

from pydantic import BaseModel, Field

from missionmatch.schemas.freelancer import Seniority


class Modality(str, Enum):
    REMOTE = "remote"
    ON_SITE = "on-site"
    HYBRID = "hybrid"

    @classmethod
    def _missing_(cls, value):
        """Accept the spellings found in stored data (ONSITE, on_site, ...)."""
        if isinstance(value, str):
            compact = value.strip().lower().replace("_", "").replace("-", "")
            for member in cls:
                if member.value.replace("-", "") == compact:
                    return member
        return None


class MissionStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            value_lower = value.strip().lower()
            for member in cls:
                if member.value == value_lower:
                    return member
        return None


class Mission(BaseModel):
    """A company-posted mission in canonical (normalized) shape."""

    id: str = Field(description="Unique identifier for the mission")
    company_id: str | None = Field(default=None, description="Owning company")
    title: str = Field(default="", description="Mission title")
    required_skills: list[str] = Field(
        default_factory=list, description="Skills a candidate must bring"
    )
    optional_skills: list[str] = Field(
        default_factory=list, description="Nice-to-have skills (not scored)"
    )
    budget_min: float | None = Field(default=None, description="Lower bound of the daily budget")
    budget_max: float | None = Field(default=None, description="Upper bound of the daily budget")
    experience: Seniority | None = Field(default=None, description="Expected seniority")
    modality: Modality = Field(default=Modality.REMOTE, description="remote, on-site or hybrid")
    status: MissionStatus = Field(default=MissionStatus.DRAFT, description="Publication status")
    urgency: str | None = Field(default=None, description="Urgency label (not scored)")
    created_at: str | None = Field(default=None, description="Creation timestamp")
