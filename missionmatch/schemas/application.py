from enum import Enum

from pydantic import BaseModel, Field


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    INTERVIEW = "interview"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class Application(BaseModel):
    """A freelancer's application to a mission."""

    id: str = Field(description="Unique identifier for the application")
    freelancer_id: str = Field(description="Applying freelancer")
    mission_id: str = Field(description="Target mission")
    status: ApplicationStatus = Field(default=ApplicationStatus.PENDING)
    matching_score: float | None = Field(
        default=None, description="Stored application fit score (0-1)"
    )


class Shortlist(BaseModel):
    """A company's pre-application marking of a freelancer for a mission."""

    company_id: str = Field(description="Company that shortlisted the freelancer")
    mission_id: str = Field(description="Mission the freelancer is shortlisted for")
    freelancer_id: str = Field(description="Shortlisted freelancer")
