"""
Unit tests for adaptive challenge selection and skill tracking.
"""

import os
import sys
import random
from datetime import datetime, timezone
import pytest
from pydantic import ValidationError as SchemaValidationError

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from learning.learning_system import LearningSystem, ChallengePerformance
from learning.schemas import LearnerProfile, DEFAULT_SKILLS
from models.challenge import Challenge
from models.challenge_library import get_all_challenges, get_challenge_by_id
from storage.state_store import InMemoryStore, PROFILE_KEY

FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def seeded_store(skills):
    profile = LearnerProfile(skill_profile=skills)
    return InMemoryStore({PROFILE_KEY: profile.model_dump_json()})


@pytest.fixture
def system():
    return LearningSystem(InMemoryStore(), rng=random.Random(7), clock=lambda: FIXED_NOW)


class TestChallengeSelection:
    """Tests for weak-skill biased selection."""

    def test_weak_skill_bias(self):
        store = seeded_store({'hierarchy': 10, 'accessibility': 80, 'decisionSpeed': 50, 'cognitiveLoad': 50})
        system = LearningSystem(store, rng=random.Random(42))
        pool = [c for c in get_all_challenges() if c.domain in ('hierarchy', 'accessibility')]

        picks = [system.select_next_challenge(pool) for _ in range(2000)]
        share = sum(1 for c in picks if c.domain == 'hierarchy') / len(picks)

        assert 0.65 <= share <= 0.75

    def test_closest_difficulty(self):
        store = seeded_store({'hierarchy': 10, 'accessibility': 80, 'forms': 90, 'spacing': 90})
        system = LearningSystem(store, rng=random.Random(0), config={'weak_skill_probability': 1.0})

        # Target difficulty ceil(10 / 100 * 10) = 1; hierarchy_1 (2) beats hierarchy_2 (4)
        assert system.select_next_challenge(get_all_challenges()).id == 'hierarchy_1'

    def test_falls_back_when_weak_domain_missing(self, system):
        pool = [get_challenge_by_id('spacing_1')]

        assert system.select_next_challenge(pool).id == 'spacing_1'

    def test_empty_pool(self, system):
        assert system.select_next_challenge([]) is None

    def test_weakest_skill_tie_break(self, system):
        assert system.get_weakest_skill() == DEFAULT_SKILLS[0]


class TestSkillUpdates:
    """Tests for skill deltas and completion records."""

    @pytest.mark.parametrize('score,time_spent,hints,expected', [
        (95, 2, 0, 15),
        (95, 10, 0, 10),
        (75, 2, 0, 10),
        (75, 2, 2, 6),
        (60, 2, 0, 2),
        (20, 2, 0, -3),
    ])
    def test_skill_delta(self, system, score, time_spent, hints, expected):
        performance = ChallengePerformance(score=score, passed=score >= 70, time_spent=time_spent, hints_used=hints)

        assert system.calculate_skill_delta(performance, estimated_time=5) == expected

    def test_complete_challenge(self, system):
        challenge = get_challenge_by_id('accessibility_1')

        delta = system.complete_challenge(challenge, {'score': 92, 'passed': True, 'timeSpent': 2, 'hintsUsed': 1})

        assert delta == 13
        assert system.get_skill_profile()['accessibility'] == 13
        assert system.profile.current_streak == 1
        assert system.profile.hint_usage.by_challenge == {'accessibility_1': 1}
        assert system.profile.completed_challenges[0].timestamp == FIXED_NOW.timestamp()

    def test_skill_clipped_at_zero(self, system):
        system.complete_challenge(get_challenge_by_id('spacing_1'), ChallengePerformance(score=10, passed=False))

        assert system.get_skill_profile()['spacing'] == 0
        assert system.profile.current_streak == 0

    def test_skill_clipped_at_hundred(self, system):
        assert system.update_skill('forms', 250) == 100

    def test_record_decision(self, system):
        decision = system.record_decision('hierarchy_1', 'signin', 'fontSize', 16, 20)

        assert decision.timestamp == FIXED_NOW.timestamp()
        assert system.profile.decision_history == [decision]


class TestPersistence:
    """Tests for profile persistence through the store."""

    def test_defaults_saved_on_first_load(self):
        store = InMemoryStore()
        system = LearningSystem(store)

        assert PROFILE_KEY in store.keys()
        assert system.get_skill_profile() == {skill: 0.0 for skill in DEFAULT_SKILLS}

    def test_profile_survives_reload(self):
        store = InMemoryStore()
        challenge = Challenge(id='forms_1', title='Checkout', domain='forms', difficulty=3)

        LearningSystem(store).complete_challenge(challenge, ChallengePerformance(score=80, passed=True, time_spent=10))
        reloaded = LearningSystem(store)

        assert reloaded.get_skill_profile()['forms'] == 5
        assert reloaded.profile.completed_challenges[0].id == 'forms_1'

    def test_corrupted_state(self):
        store = InMemoryStore({PROFILE_KEY: '{not json'})

        with pytest.raises(SchemaValidationError):
            LearningSystem(store)

    def test_reset(self, system):
        system.update_skill('hierarchy', 40)
        system.reset_progress()

        assert system.get_skill_profile()['hierarchy'] == 0


class TestInsights:

    def test_focus_area(self, system):
        insights = system.get_insights()

        assert insights[0].type == 'focus-area'
        assert 'Visual Hierarchy' in insights[0].message

    def test_momentum_and_hint_reliance(self, system):
        system.profile.skill_profile = {skill: 50.0 for skill in DEFAULT_SKILLS}
        challenge = get_challenge_by_id('hierarchy_1')

        for _ in range(3):
            system.complete_challenge(challenge, ChallengePerformance(score=95, passed=True, hints_used=3))

        assert [i.type for i in system.get_insights()] == ['momentum', 'independence']
