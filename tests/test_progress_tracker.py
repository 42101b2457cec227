"""
Unit tests for progress tracking: stats, XP, streaks and recommendations.
"""

import os
import sys
from datetime import datetime, timedelta, timezone
import pytest

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from analysis.scoring_system import ScoringSystem
from learning.progress_tracker import ProgressTracker
from storage.state_store import InMemoryStore, PROFILE_KEY, PROGRESS_KEY


class Clock:
    """Manually advanced clock."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def result(score, cognitive=0, constraints=0, efficiency=0):
    return {
        'score': score,
        'cognitiveLoadReduction': cognitive,
        'constraintImprovement': constraints,
        'improvementScore': 50,
        'efficiencyScore': efficiency
    }


@pytest.fixture
def clock():
    return Clock(datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def tracker(clock):
    return ProgressTracker(InMemoryStore(), clock=clock, tz=timezone.utc)


class TestRecordAttempt:
    """Tests for attempt recording."""

    def test_attempt_from_score_breakdown(self, tracker):
        mods = [{'elementId': 'cta', 'property': 'fontSize', 'value': '16'}]
        breakdown = ScoringSystem().calculate_challenge_score(mods, time_elapsed=90, clues_used=0)

        attempt = tracker.record_challenge_attempt('spacing_1', breakdown, mods, time_elapsed=90)

        assert attempt.score == pytest.approx(breakdown.score)
        assert attempt.metrics['cognitiveLoad'] == 15
        assert attempt.modifications[0]['property'] == 'fontSize'
        assert tracker.get_progress().attempt_history == [attempt]

    def test_stat_bumps(self, tracker):
        tracker.record_challenge_attempt('hierarchy_1', result(90, cognitive=85, constraints=70, efficiency=90))
        stats = tracker.get_progress().stats

        assert stats['cognitiveLoad'] == 5
        assert stats['accessibility'] == 5
        assert stats['hierarchy'] == 3
        assert stats['decisionSpeed'] == 4
        assert stats['spacing'] == 0

    def test_stats_capped(self, tracker):
        tracker.progress.stats['hierarchy'] = 99

        tracker.record_challenge_attempt('hierarchy_1', result(10))

        assert tracker.get_progress().stats['hierarchy'] == 100

    def test_xp_awarded_once(self, tracker):
        tracker.record_challenge_attempt('hierarchy_1', result(40))
        assert tracker.get_progress().total_xp == 0

        tracker.record_challenge_attempt('hierarchy_1', result(75.4))
        tracker.record_challenge_attempt('hierarchy_1', result(95))

        progress = tracker.get_progress()
        assert progress.total_xp == 754
        assert progress.completed_challenges == ['hierarchy_1']


class TestStreaks:
    """Tests for calendar-day streaks."""

    def test_day_streak(self, tracker, clock):
        tracker.record_challenge_attempt('a', result(50))
        assert tracker.get_progress().current_streak == 1

        clock.advance(hours=3)
        tracker.record_challenge_attempt('a', result(50))
        assert tracker.get_progress().current_streak == 1

        clock.advance(days=1)
        tracker.record_challenge_attempt('a', result(50))
        assert tracker.get_progress().current_streak == 2

        clock.advance(days=2)
        tracker.record_challenge_attempt('a', result(50))

        progress = tracker.get_progress()
        assert progress.current_streak == 1
        assert progress.longest_streak == 2
        assert progress.last_active == clock.now.isoformat()

    def test_streak_uses_learner_local_days(self):
        pacific = timezone(timedelta(hours=-8))
        # 17:00 on March 1st, then 09:00 on March 2nd, Pacific time; both fall on March 2nd in UTC
        clock = Clock(datetime(2024, 3, 2, 1, 0, tzinfo=timezone.utc))
        tracker = ProgressTracker(InMemoryStore(), clock=clock, tz=pacific)

        tracker.record_challenge_attempt('a', result(50))
        clock.advance(hours=16)
        tracker.record_challenge_attempt('a', result(50))

        assert tracker.get_progress().current_streak == 2

    def test_same_local_day_across_utc_midnight(self):
        pacific = timezone(timedelta(hours=-8))
        # 15:00 and 23:00 on March 1st Pacific time straddle UTC midnight
        clock = Clock(datetime(2024, 3, 1, 23, 0, tzinfo=timezone.utc))
        tracker = ProgressTracker(InMemoryStore(), clock=clock, tz=pacific)

        tracker.record_challenge_attempt('a', result(50))
        clock.advance(hours=8)
        tracker.record_challenge_attempt('a', result(50))

        assert tracker.get_progress().current_streak == 1

    def test_default_clock_is_timezone_aware(self):
        tracker = ProgressTracker(InMemoryStore())

        assert tracker.clock().tzinfo is not None


class TestPatterns:
    """Tests for mistake and strength detection."""

    def test_mistakes(self, tracker):
        mods = [
            {'elementId': 'a', 'property': 'fontSize', 'value': '12px'},
            {'elementId': 'a', 'property': 'padding', 'value': 6},
            {'elementId': 'b', 'property': 'text', 'value': 'next'},
            {'elementId': 'b', 'property': 'fontSize', 'value': 'small'}
        ]

        tracker.record_challenge_attempt('forms_1', result(30), mods)
        mistakes = tracker.get_progress().mistakes

        assert set(mistakes) == {'font_size_too_small', 'insufficient_spacing', 'improper_capitalization'}
        assert mistakes['font_size_too_small'].count == 1

    def test_empty_text_is_not_a_capitalization_mistake(self, tracker):
        mods = [
            {'elementId': 'b', 'property': 'text', 'value': None},
            {'elementId': 'b', 'property': 'text', 'value': ''}
        ]

        tracker.record_challenge_attempt('forms_1', result(30), mods)

        assert tracker.get_progress().mistakes == {}

    def test_strength_counters(self, tracker, clock):
        tracker.record_challenge_attempt('a', result(90, cognitive=90))
        first = clock.now.isoformat()
        clock.advance(minutes=5)
        tracker.record_challenge_attempt('b', result(90, cognitive=95, constraints=85))

        strengths = tracker.get_progress().strengths

        assert strengths['cognitive_load_management'].count == 2
        assert strengths['cognitive_load_management'].first_occurrence == first
        assert strengths['cognitive_load_management'].last_occurrence == clock.now.isoformat()
        assert strengths['accessibility_awareness'].count == 1


class TestGuidance:
    """Tests for recommendations and insights."""

    def test_recommendations(self, tracker):
        small_font = [{'elementId': 'a', 'property': 'fontSize', 'value': 10}]
        for _ in range(3):
            tracker.record_challenge_attempt('a', result(20), small_font)

        recommendations = tracker.get_recommendations()
        weaknesses = [r for r in recommendations if r.type == 'weakness']
        levels = [r.current_level for r in weaknesses]

        assert levels == sorted(levels)
        assert 'hierarchy' in [r.skill for r in weaknesses]
        assert recommendations[-1].type == 'mistake_pattern'
        assert recommendations[-1].mistake == 'font_size_too_small'
        assert recommendations[-1].count == 3

    def test_mistakes_below_threshold_not_recommended(self, tracker):
        tracker.record_challenge_attempt('a', result(20), [{'elementId': 'a', 'property': 'padding', 'value': 4}])

        assert all(r.type == 'weakness' for r in tracker.get_recommendations())

    def test_insights(self, tracker):
        for score in [40] * 8 + [90, 90]:
            tracker.record_challenge_attempt('a', result(score, cognitive=85))

        insights = tracker.get_insights()

        assert insights.strengths == ['Strong ability to reduce cognitive load in designs']
        assert insights.improvements == [
            'Performance improving by 20% in recent challenges',
            'Using fewer clues - showing increased confidence'
        ]
        assert 'Focus on spacing and layout challenges' in insights.focus_areas

    def test_insights_with_no_history(self, tracker):
        insights = tracker.get_insights()

        assert insights.improvements == []
        assert len(insights.focus_areas) == 3


class TestPersistence:

    def test_progress_survives_reload(self, clock):
        store = InMemoryStore()
        ProgressTracker(store, clock=clock).record_challenge_attempt('a', result(80))

        reloaded = ProgressTracker(store, clock=clock)

        assert reloaded.get_progress().total_xp == 800
        assert PROGRESS_KEY in store.keys()
        assert PROFILE_KEY not in store.keys()

    def test_reset(self, tracker):
        tracker.record_challenge_attempt('a', result(80))
        tracker.reset()

        progress = tracker.get_progress()
        assert progress.total_xp == 0
        assert progress.attempt_history == []
        assert progress.last_active is None
