"""Tests for candidate ranking and application fit scoring."""

import pytest

from missionmatch.matching.normalize import normalize_freelancer
from missionmatch.matching.scorer import (
    ApplicationFitScore,
    CandidateRankingScore,
    Perspective,
    clamp01,
    matched_required_skills,
    score_freelancer_for_mission,
    score_mission_for_freelancer,
    skill_matches,
)
from missionmatch.schemas.freelancer import Seniority
from missionmatch.schemas.mission import Modality
from tests.test_utils import make_test_freelancer, make_test_mission


@pytest.fixture
def react_freelancer():
    return make_test_freelancer(
        id="f1",
        skills=["React", "Node.js"],
        daily_rate=400,
        seniority=Seniority.SENIOR,
        remote=True,
        rating=4.5,
    )


@pytest.fixture
def react_mission():
    return make_test_mission(
        id="m1",
        required_skills=["react", "typescript"],
        budget_max=500,
        experience=Seniority.SENIOR,
        modality=Modality.REMOTE,
    )


class TestSkillMatches:
    def test_case_insensitive_substring(self):
        assert skill_matches("react", "React Native")
        assert skill_matches("REACT", "react")

    def test_no_match(self):
        assert not skill_matches("typescript", "React")
        assert not skill_matches("java", "Python")

    def test_longer_required_never_matches(self):
        assert not skill_matches("javascript", "java")

    def test_empty_required_never_matches(self):
        assert not skill_matches("", "React")

    def test_lower_threshold_allows_fuzzy_match(self):
        assert not skill_matches("kubernetis", "kubernetes")
        assert skill_matches("kubernetis", "kubernetes", threshold=80)

    def test_matched_required_skills(self, react_freelancer, react_mission):
        assert matched_required_skills(react_mission, react_freelancer) == ["react"]


class TestClamp01:
    def test_bounds(self):
        assert clamp01(-0.5) == 0.0
        assert clamp01(1.7) == 1.0
        assert clamp01(0.42) == 0.42


class TestCandidateRankingScore:
    def test_worked_example(self, react_freelancer, react_mission):
        result = score_mission_for_freelancer(react_freelancer, react_mission)

        assert result.score == 0.80
        assert result.reasons == [
            "1/2 required skills match",
            "Budget fits your daily rate",
            "Experience level matches",
            "Remote work preference matches",
            "High rating freelancer",
        ]

    def test_company_perspective_reasons(self, react_freelancer, react_mission):
        result = score_freelancer_for_mission(react_mission, react_freelancer)

        assert result.score == 0.80
        assert "Rate fits mission budget" in result.reasons
        assert "High-rated freelancer" in result.reasons

    def test_deterministic(self, react_freelancer, react_mission):
        first = score_mission_for_freelancer(react_freelancer, react_mission)
        second = score_mission_for_freelancer(react_freelancer, react_mission)

        assert first == second

    def test_partial_budget_credit(self, react_mission):
        freelancer = make_test_freelancer(skills=["React"], daily_rate=580)

        result = score_freelancer_for_mission(react_mission, freelancer)

        assert result.score == 0.35  # 0.20 skills + 0.15 partial budget
        assert "Rate close to budget" in result.reasons

    def test_rate_far_above_budget_scores_nothing(self, react_mission):
        freelancer = make_test_freelancer(skills=["React"], daily_rate=700)

        result = score_freelancer_for_mission(react_mission, freelancer)

        assert result.score == 0.20
        assert result.reasons == ["1/2 required skills match"]

    def test_missing_rate_or_budget_scores_no_budget(self):
        freelancer = make_test_freelancer(skills=["Go"])
        mission = make_test_mission(required_skills=["go"], budget_max=500)

        assert score_mission_for_freelancer(freelancer, mission).score == 0.40

    def test_adjacent_experience(self):
        freelancer = make_test_freelancer(seniority=Seniority.MID)
        mission = make_test_mission(experience=Seniority.SENIOR)

        result = score_mission_for_freelancer(freelancer, mission)

        assert result.score == 0.10
        assert result.reasons == ["Experience level close match"]

    def test_distant_experience_scores_nothing(self):
        freelancer = make_test_freelancer(seniority=Seniority.JUNIOR)
        mission = make_test_mission(experience=Seniority.SENIOR)

        assert score_mission_for_freelancer(freelancer, mission).score == 0.0

    def test_on_site_mission_with_location(self):
        freelancer = make_test_freelancer(location="Paris", remote=True)
        mission = make_test_mission(modality=Modality.ON_SITE)

        result = score_mission_for_freelancer(freelancer, mission)

        assert result.score == 0.05
        assert result.reasons == ["Location preference considered"]

    def test_remote_mission_non_remote_freelancer(self):
        freelancer = make_test_freelancer(location="Lyon", remote=False)
        mission = make_test_mission(modality=Modality.REMOTE)

        assert score_mission_for_freelancer(freelancer, mission).score == 0.0

    def test_no_required_skills_scores_no_skills(self):
        freelancer = make_test_freelancer(skills=["React"], remote=True)
        mission = make_test_mission(required_skills=[])

        result = score_mission_for_freelancer(freelancer, mission)

        assert result.score == 0.10
        assert not any("required skills" in reason for reason in result.reasons)

    def test_perfect_match_is_one(self):
        freelancer = make_test_freelancer(
            skills=["Python"], daily_rate=300, seniority=Seniority.MID, remote=True, rating=5.0
        )
        mission = make_test_mission(required_skills=["python"], budget_max=300, experience=Seniority.MID)

        assert score_mission_for_freelancer(freelancer, mission).score == 1.0

    def test_overweighted_score_is_clamped(self):
        scorer = CandidateRankingScore(weights={"skills": 0.9})
        freelancer = make_test_freelancer(skills=["Python"], daily_rate=300, remote=True)
        mission = make_test_mission(required_skills=["python"], budget_max=300)

        assert scorer.score(freelancer, mission, Perspective.COMPANY).score == 1.0

    def test_float_sums_are_rounded(self):
        # 0.20 + 0.10 drifts to 0.30000000000000004 without rounding
        freelancer = make_test_freelancer(skills=["React"], seniority=Seniority.MID)
        mission = make_test_mission(required_skills=["react", "vue"], experience=Seniority.SENIOR)

        assert score_mission_for_freelancer(freelancer, mission).score == 0.3


class TestApplicationFitScore:
    def test_full_fit(self):
        freelancer = make_test_freelancer(
            skills=["React"], daily_rate=400, seniority=Seniority.SENIOR, rating=5.0, completed_jobs=3
        )
        mission = make_test_mission(required_skills=["react"], budget_max=500, experience=Seniority.SENIOR)

        assert ApplicationFitScore().score(freelancer, mission) == 1.0

    def test_budget_scales_with_rate(self):
        freelancer = make_test_freelancer(daily_rate=800, seniority=Seniority.JUNIOR)
        mission = make_test_mission(budget_max=400, experience=Seniority.SENIOR)

        # 0.5 * 0.30 budget + 0.10 experience mismatch
        assert ApplicationFitScore().score(freelancer, mission) == 0.25

    def test_neutral_budget_when_missing(self):
        freelancer = make_test_freelancer()
        mission = make_test_mission()

        # 0.15 neutral budget + 0.10 experience mismatch
        assert ApplicationFitScore().score(freelancer, mission) == 0.25

    def test_performance_requires_completed_jobs(self):
        freelancer = make_test_freelancer(rating=5.0, completed_jobs=0)
        mission = make_test_mission()

        assert ApplicationFitScore().score(freelancer, mission) == 0.25

    def test_differs_from_ranking_score(self, react_freelancer, react_mission):
        fit = ApplicationFitScore().score(react_freelancer, react_mission)
        ranking = score_mission_for_freelancer(react_freelancer, react_mission).score

        # 0.20 skills + 0.30 budget + 0.20 experience (no rating: no completed jobs)
        assert fit == 0.70
        assert fit != ranking


class TestZeroAndMalformedNumbers:
    def test_zero_rate_fits_budget(self):
        freelancer = make_test_freelancer(daily_rate=0)
        mission = make_test_mission(budget_max=500)

        result = score_mission_for_freelancer(freelancer, mission)

        assert result.score == 0.25
        assert result.reasons == ["Budget fits your daily rate"]

    def test_zero_budget_is_not_missing(self):
        freelancer = make_test_freelancer(daily_rate=300)
        mission = make_test_mission(budget_max=0)

        # Present but exceeded: no budget credit, not the neutral 0.15
        assert score_mission_for_freelancer(freelancer, mission).score == 0.0
        assert ApplicationFitScore().score(freelancer, mission) == 0.10

    def test_fit_score_with_zero_rate(self):
        freelancer = make_test_freelancer(daily_rate=0)
        mission = make_test_mission(budget_max=500)

        # 0.30 full budget + 0.10 experience mismatch
        assert ApplicationFitScore().score(freelancer, mission) == 0.40

    def test_fit_score_with_nan_rate_is_neutral(self):
        freelancer = normalize_freelancer({"id": "x", "dailyRate": "nan"})
        mission = make_test_mission(budget_max=500)

        score = ApplicationFitScore().score(freelancer, mission)

        assert score == 0.25
        assert 0.0 <= score <= 1.0

    def test_zero_rating_counts_for_performance(self):
        freelancer = make_test_freelancer(rating=0.0, completed_jobs=4)
        mission = make_test_mission()

        assert ApplicationFitScore().score(freelancer, mission) == 0.25
