from pydantic import BaseModel, Field

from missionmatch.schemas.freelancer import Freelancer
from missionmatch.schemas.mission import Mission


class MatchScore(BaseModel):
    """Score and reasons for one (freelancer, mission) pair."""

    score: float = Field(ge=0.0, le=1.0, description="Weighted match score (0-1)")
    reasons: list[str] = Field(
        default_factory=list,
        description="Human-readable reasons, in the order the factors were evaluated",
    )


class MissionMatch(BaseModel):
    """A mission ranked for a freelancer."""

    mission: Mission = Field(description="The matched mission")
    match_score: float = Field(ge=0.0, le=1.0, description="Weighted match score (0-1)")
    match_reasons: list[str] = Field(description="Why this mission fits the freelancer")


class FreelancerMatch(BaseModel):
    """A freelancer ranked for a mission."""

    freelancer: Freelancer = Field(description="The matched freelancer")
    match_score: float = Field(ge=0.0, le=1.0, description="Weighted match score (0-1)")
    match_reasons: list[str] = Field(description="Why this freelancer fits the mission")
