from enum import Enum, IntEnum

from pydantic import BaseModel, Field


class Seniority(IntEnum):
    """Seniority levels in ascending order.

    Missions use the same scale for their required experience, so the
    integer distance between two levels is their proximity.
    """

    JUNIOR = 0
    MID = 1
    SENIOR = 2

    @classmethod
    def _missing_(cls, value):
        """Allow case-insensitive string lookup for stored values."""
        if isinstance(value, str):
            value_lower = value.strip().lower()
            for member in cls:
                if member.name.lower() == value_lower:
                    return member
        return None


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    BUSY = "busy"
    UNAVAILABLE = "unavailable"


class SkillDescriptor(BaseModel):
    """A single freelancer skill. The level is informational and never scored."""

    name: str = Field(description="Skill name as entered by the freelancer")
    level: str | None = Field(default=None, description="Self-declared proficiency")


class Availability(BaseModel):
    status: AvailabilityStatus = Field(
        default=AvailabilityStatus.UNAVAILABLE,
        description="Current availability for new missions",
    )
    start_date: str | None = Field(default=None, description="Earliest start date")
    days_per_week: int | None = Field(default=None, description="Days available per week")


class Freelancer(BaseModel):
    """A freelancer profile in canonical (normalized) shape."""

    id: str = Field(description="Unique identifier for the freelancer profile")
    name: str | None = Field(default=None, description="Display name")
    title: str | None = Field(default=None, description="Professional headline")
    skills: list[SkillDescriptor] = Field(default_factory=list, description="Declared skills")
    daily_rate: float | None = Field(default=None, description="Daily rate")
    seniority: Seniority | None = Field(default=None, description="junior, mid or senior")
    remote: bool = Field(default=False, description="Open to remote work")
    location: str | None = Field(default=None, description="Home location")
    availability: Availability = Field(default_factory=Availability)
    rating: float | None = Field(default=None, ge=0, le=5, description="Average rating (0-5)")
    completed_jobs: int | None = Field(default=None, description="Number of completed missions")

    @property
    def skill_names(self) -> list[str]:
        """Lowercased skill names used for matching."""
        return [skill.name.lower() for skill in self.skills]
