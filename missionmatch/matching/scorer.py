"""Weighted match scoring between one freelancer and one mission.

Two independent strategies live here and are intentionally not merged:

- ``CandidateRankingScore`` ranks candidate pools in both directions
  (missions for a freelancer, freelancers for a mission).
- ``ApplicationFitScore`` scores a single submitted application.

Both expect already-normalized models (see ``matching.normalize``).
"""

from enum import Enum

from rapidfuzz import fuzz

from missionmatch.config import (
    APPLICATION_FIT_WEIGHTS,
    BUDGET_TOLERANCE,
    HIGH_RATING,
    RANKING_WEIGHTS,
    SKILL_MATCH_THRESHOLD,
)
from missionmatch.schemas.freelancer import Freelancer
from missionmatch.schemas.match import MatchScore
from missionmatch.schemas.mission import Mission, Modality

# Sums of float weights drift (0.1 + 0.2 > 0.3), which matters at the
# ranking threshold.
SCORE_PRECISION = 4


class Perspective(str, Enum):
    """Whose point of view the reasons are written from."""

    FREELANCER = "freelancer"  # Missions ranked for a freelancer
    COMPANY = "company"  # Freelancers ranked for a mission


_BUDGET_REASONS = {
    Perspective.FREELANCER: ("Budget fits your daily rate", "Budget close to your rate"),
    Perspective.COMPANY: ("Rate fits mission budget", "Rate close to budget"),
}


def clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def skill_matches(required: str, skill_name: str, threshold: int = SKILL_MATCH_THRESHOLD) -> bool:
    """Check whether a freelancer skill covers a required skill.

    The required name must fit inside the skill name ("react" matches
    "React Native"). At the default threshold of 100 this is exact
    case-insensitive substring containment.
    """
    required = required.lower()
    skill_name = skill_name.lower()
    if not required or len(required) > len(skill_name):
        return False
    return fuzz.partial_ratio(required, skill_name) >= threshold


def matched_required_skills(mission: Mission, freelancer: Freelancer) -> list[str]:
    """Return the mission's required skills covered by the freelancer."""
    skill_names = freelancer.skill_names
    return [
        required
        for required in mission.required_skills
        if any(skill_matches(required, name) for name in skill_names)
    ]


def _budget_ratio(budget_max: float, daily_rate: float) -> float:
    """min(budget / rate, 1), where a free (zero) rate always fits."""
    budget_max = max(budget_max, 0.0)
    if daily_rate <= budget_max:
        return 1.0
    return budget_max / daily_rate


def experience_distance(mission: Mission, freelancer: Freelancer) -> int | None:
    """Steps between required experience and freelancer seniority (None if unknown)."""
    if mission.experience is None or freelancer.seniority is None:
        return None
    return abs(mission.experience - freelancer.seniority)


class CandidateRankingScore:
    """Five-factor score used to rank candidate pools.

    Factors are evaluated in a fixed order (skills, budget, experience,
    modality, reputation) and each one that applies appends a reason.
    """

    def __init__(self, weights: dict[str, float] | None = None):
        self.weights = dict(RANKING_WEIGHTS)
        if weights:
            self.weights.update(weights)

    def score(
        self,
        freelancer: Freelancer,
        mission: Mission,
        perspective: Perspective = Perspective.FREELANCER,
    ) -> MatchScore:
        w = self.weights
        total = 0.0
        reasons: list[str] = []

        required = mission.required_skills
        matched = matched_required_skills(mission, freelancer)
        if required and matched:
            total += (len(matched) / len(required)) * w["skills"]
            reasons.append(f"{len(matched)}/{len(required)} required skills match")

        if mission.budget_max is not None and freelancer.daily_rate is not None:
            fits, close = _BUDGET_REASONS[perspective]
            if freelancer.daily_rate <= mission.budget_max:
                total += w["budget"]
                reasons.append(fits)
            elif freelancer.daily_rate <= mission.budget_max * BUDGET_TOLERANCE:
                total += w["budget_partial"]
                reasons.append(close)

        distance = experience_distance(mission, freelancer)
        if distance == 0:
            total += w["experience"]
            reasons.append("Experience level matches")
        elif distance == 1:
            total += w["experience_adjacent"]
            reasons.append("Experience level close match")

        if mission.modality == Modality.REMOTE:
            if freelancer.remote:
                total += w["remote"]
                reasons.append("Remote work preference matches")
        elif freelancer.location:
            total += w["location"]
            reasons.append("Location preference considered")

        if freelancer.rating is not None and freelancer.rating >= HIGH_RATING:
            total += w["rating"]
            reasons.append(
                "High rating freelancer"
                if perspective == Perspective.FREELANCER
                else "High-rated freelancer"
            )

        return MatchScore(score=round(clamp01(total), SCORE_PRECISION), reasons=reasons)


class ApplicationFitScore:
    """Four-factor fit score computed once per application.

    Unlike the ranking score it has no modality factor, gives a neutral
    budget score when budget or rate is missing, and scales budget and
    reputation continuously.
    """

    def __init__(self, weights: dict[str, float] | None = None):
        self.weights = dict(APPLICATION_FIT_WEIGHTS)
        if weights:
            self.weights.update(weights)

    def score(self, freelancer: Freelancer, mission: Mission) -> float:
        w = self.weights
        total = 0.0

        required = mission.required_skills
        if required:
            matched = matched_required_skills(mission, freelancer)
            total += (len(matched) / len(required)) * w["skills"]

        if mission.budget_max is not None and freelancer.daily_rate is not None:
            total += _budget_ratio(mission.budget_max, freelancer.daily_rate) * w["budget"]
        else:
            total += w["budget_neutral"]

        if experience_distance(mission, freelancer) == 0:
            total += w["experience"]
        else:
            total += w["experience_mismatch"]

        if freelancer.rating is not None and freelancer.completed_jobs and freelancer.completed_jobs > 0:
            total += (freelancer.rating / 5) * w["performance"]

        return round(clamp01(total), SCORE_PRECISION)


_ranking_score = CandidateRankingScore()


def score_mission_for_freelancer(freelancer: Freelancer, mission: Mission) -> MatchScore:
    """Score a mission as a recommendation for a freelancer."""
    return _ranking_score.score(freelancer, mission, Perspective.FREELANCER)


def score_freelancer_for_mission(mission: Mission, freelancer: Freelancer) -> MatchScore:
    """Score a freelancer as a candidate for a mission."""
    return _ranking_score.score(freelancer, mission, Perspective.COMPANY)
