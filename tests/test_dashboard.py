"""
Unit tests for the dashboard assembler and recommendation rules.

These tests verify:
1. Weekly trend direction and change percent
2. Each recommendation rule fires on its own threshold
3. The recommendation list is never empty
4. Missing correlations never break the dashboard

Usage:
    pytest tests/test_dashboard.py -v
"""
from datetime import date, timedelta

import pytest

from mood_analytics import build_dashboard
from mood_analytics.dashboard import Trend, weekly_trend

TODAY = date(2025, 7, 31)


def _days(factory, scores, end=TODAY, **kwargs):
    """One observation per day, the last one on ``end``."""
    start = end - timedelta(days=len(scores) - 1)
    return [factory(start + timedelta(days=i), s, **kwargs) for i, s in enumerate(scores)]


class TestWeeklyTrend:
    """Test the week-over-week comparison."""

    def test_improving(self, observation_factory):
        observations = _days(observation_factory, [5] * 7 + [7] * 7)
        trend = weekly_trend(observations, TODAY)
        assert trend.trend is Trend.IMPROVING
        assert trend.recent_average == 7.0
        assert trend.previous_average == 5.0
        assert trend.change_percent == 40.0

    def test_declining(self, observation_factory):
        observations = _days(observation_factory, [7] * 7 + [5] * 7)
        trend = weekly_trend(observations, TODAY)
        assert trend.trend is Trend.DECLINING
        assert trend.change_percent == -28.6

    def test_equal_means_stable(self, observation_factory):
        observations = _days(observation_factory, [7] * 14)
        trend = weekly_trend(observations, TODAY)
        assert trend.trend is Trend.STABLE
        assert trend.change_percent == 0.0

    def test_no_previous_week(self, scenario_week):
        trend = weekly_trend(scenario_week, TODAY)
        assert trend.recent_average == 7.57
        assert trend.previous_average == 0.0
        assert trend.change_percent == 0.0
        assert trend.trend is Trend.STABLE

    def test_no_recent_entries_declining(self, observation_factory):
        observations = [
            observation_factory(TODAY - timedelta(days=n), 6) for n in range(8, 13)
        ]
        trend = weekly_trend(observations, TODAY)

        assert trend.recent_count == 0
        assert trend.previous_count == 5
        assert trend.previous_average == 6.0
        assert trend.trend is Trend.DECLINING
        assert trend.change_percent == -100.0

    def test_older_entries_ignored(self, observation_factory):
        observations = _days(observation_factory, [1] * 5, end=TODAY - timedelta(days=20))
        trend = weekly_trend(observations, TODAY)
        assert trend.recent_count == 0
        assert trend.previous_count == 0


class TestDashboardSnapshot:
    """Test the assembled snapshot."""

    def test_scenario(self, scenario_week):
        snapshot = build_dashboard(scenario_week, TODAY)

        assert snapshot.total_entries == 7
        assert snapshot.current_streak == 7
        assert snapshot.longest_streak == 7
        assert snapshot.averages.mood == 7.6
        assert snapshot.correlations.activities.top_positive[0].label == "Exercise"
        assert snapshot.recommendations == [
            "Keep making time for Exercise: it lines up with your best moods."
        ]

    def test_empty_history(self):
        snapshot = build_dashboard([], TODAY)

        assert snapshot.total_entries == 0
        assert snapshot.averages is None
        assert snapshot.current_streak == 0
        assert snapshot.correlations is None
        assert len(snapshot.recommendations) == 1
        assert "Keep tracking" in snapshot.recommendations[0]

    def test_insufficient_data_keeps_other_fields(self, observation_factory):
        observations = _days(observation_factory, [6, 7, 8])
        snapshot = build_dashboard(observations, TODAY)

        assert snapshot.correlations is None
        assert snapshot.current_streak == 3
        assert snapshot.total_entries == 3
        assert snapshot.averages.mood == 7.0

    def test_recent_mood_series(self, observation_factory):
        observations = [
            observation_factory(TODAY, 8),
            observation_factory(TODAY, 6, hour=18),
            observation_factory(TODAY - timedelta(days=2), 5),
        ]
        snapshot = build_dashboard(observations, TODAY)

        assert [d.date for d in snapshot.recent_mood] == [
            TODAY - timedelta(days=n) for n in range(6, -1, -1)
        ]
        assert [d.mood for d in snapshot.recent_mood] == [None, None, None, None, 5.0, None, 7.0]

    def test_idempotent(self, scenario_week):
        assert build_dashboard(scenario_week, TODAY).to_dict() == build_dashboard(scenario_week, TODAY).to_dict()


class TestRecommendations:
    """Test each recommendation rule."""

    def test_low_sleep(self, observation_factory):
        observations = _days(observation_factory, [7] * 5, sleep_hours=6.0)
        recommendations = build_dashboard(observations, TODAY).recommendations
        assert "sleep hygiene" in recommendations[0]

    def test_top_and_bottom_activity(self, observation_factory):
        observations = (
            _days(observation_factory, [8, 8, 8], activities=["Exercise"])
            + _days(observation_factory, [4, 4, 4], activities=["Doomscrolling"])
        )
        recommendations = build_dashboard(observations, TODAY).recommendations

        assert recommendations[0].startswith("Keep making time for Exercise")
        assert "Doomscrolling" in recommendations[1]
        assert "reducing" in recommendations[1]

    def test_bottom_activity_above_threshold_not_flagged(self, observation_factory):
        observations = _days(observation_factory, [8, 7, 9, 7, 8], activities=["Exercise"])
        recommendations = build_dashboard(observations, TODAY).recommendations
        assert not any("reducing" in r for r in recommendations)

    def test_positive_reinforcement(self, observation_factory):
        observations = _days(observation_factory, [4] * 7 + [8] * 7)
        recommendations = build_dashboard(observations, TODAY).recommendations
        assert recommendations == [
            "Your mood this week is above your usual level. "
            "Whatever you have been doing lately is working, keep it up!"
        ]

    def test_gentle_concern(self, observation_factory):
        observations = _days(observation_factory, [8] * 7 + [4] * 7)
        recommendations = build_dashboard(observations, TODAY).recommendations
        assert len(recommendations) == 1
        assert "dipped below your usual level" in recommendations[0]

    def test_several_rules_fire_in_order(self, observation_factory):
        observations = _days(
            observation_factory, [8] * 7 + [3] * 7, sleep_hours=5.0, activities=["Work"]
        )
        recommendations = build_dashboard(observations, TODAY).recommendations

        assert "sleep hygiene" in recommendations[0]
        assert recommendations[1].startswith("Keep making time for Work")
        assert "reducing" in recommendations[2]
        assert "dipped below" in recommendations[3]

    @pytest.mark.parametrize("scores", [[5], [5, 5, 5, 5, 5, 5], [9, 1, 9, 1, 9]])
    def test_never_empty(self, observation_factory, scores):
        observations = _days(observation_factory, scores)
        assert len(build_dashboard(observations, TODAY).recommendations) >= 1
