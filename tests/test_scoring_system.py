"""
Unit tests for the edit-log scoring system.
"""

import os
import sys
import pytest

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from analysis.scoring_system import ScoringSystem, Modification, to_modifications
from models.challenge_library import get_challenge_by_id
from models.fix_challenges import get_fix_challenge_by_id
from utils.validation import ValidationError


def edit(prop, value, element_id='el'):
    return {'elementId': element_id, 'property': prop, 'value': value}


@pytest.fixture
def scorer():
    return ScoringSystem()


class TestScoringSystem:
    """Tests for the weighted edit-log score."""

    def test_font_and_padding_edits(self, scorer):
        result = scorer.calculate_challenge_score([edit('fontSize', '16'), edit('padding', '14')],
                                                  time_elapsed=0, clues_used=0,
                                                  challenge=get_challenge_by_id('spacing_1'))

        assert result.cognitive_load_reduction == 30
        assert result.constraint_improvement == 20
        assert result.improvement_score == 50
        assert result.efficiency_score == 100
        # 30 * 0.35 + 20 * 0.30 + 50 * 0.20 + 100 * 0.15
        assert result.score == pytest.approx(41.5)

    def test_efficiency_penalties(self, scorer):
        assert scorer.calculate_efficiency(600, 2) == 50
        assert scorer.calculate_efficiency(350, 0) == pytest.approx(95)
        assert scorer.calculate_efficiency(300, 0) == 100

    def test_efficiency_floor(self, scorer):
        assert scorer.calculate_efficiency(10000, 12) == 0

    def test_text_rules(self, scorer):
        mods = to_modifications([edit('text', 'Save changes')])

        assert scorer.calculate_cognitive_load_reduction(mods) == 20
        assert scorer.calculate_constraint_improvement(mods) == 15

    def test_submit_label_scores_nothing(self, scorer):
        mods = to_modifications([edit('text', 'submit')])

        assert scorer.calculate_cognitive_load_reduction(mods) == 0
        assert scorer.calculate_constraint_improvement(mods) == 0

    def test_empty_text(self, scorer):
        assert scorer.calculate_cognitive_load_reduction(to_modifications([edit('text', '')])) == 0

    def test_border_and_colour_edits(self, scorer):
        mods = to_modifications([edit('border', '2px solid #333'), edit('color', '#000000'), edit('background', '#FFF')])

        assert scorer.calculate_cognitive_load_reduction(mods) == 10
        assert scorer.calculate_constraint_improvement(mods) == 30

    def test_unparseable_values(self, scorer):
        mods = to_modifications([edit('fontSize', 'large'), edit('padding', None)])

        assert scorer.calculate_cognitive_load_reduction(mods) == 0
        assert scorer.calculate_constraint_improvement(mods) == 0

    def test_component_cap(self, scorer):
        mods = to_modifications([edit('fontSize', '20px')] * 10)

        assert scorer.calculate_cognitive_load_reduction(mods) == 100

    def test_breakdown(self, scorer):
        result = scorer.calculate_challenge_score([edit('color', '#111111')], time_elapsed=120, clues_used=1)
        record = result.to_dict()

        assert sum(result.breakdown.values()) == pytest.approx(result.score)
        assert record['previousAttempts'] == 0
        assert record['constraintImprovement'] == 15

    def test_deterministic(self, scorer):
        mods = [edit('fontSize', '18'), edit('text', 'Continue'), edit('padding', '8')]

        first = scorer.calculate_challenge_score(mods, 400, 1).to_dict()
        second = scorer.calculate_challenge_score(mods, 400, 1).to_dict()

        assert first == second

    def test_improvement_provider(self):
        scorer = ScoringSystem(improvement_provider=lambda challenge: 150)

        assert scorer.calculate_improvement(None) == 100

    def test_partial_weights_keep_defaults(self):
        scorer = ScoringSystem({'weights': {'cognitive_load': 0.5}})

        result = scorer.calculate_challenge_score([], 0, 0)

        assert scorer.weights['constraints'] == 0.30
        # 50 * 0.20 improvement + 100 * 0.15 efficiency
        assert result.score == pytest.approx(25.0)

    def test_fix_challenge_verdict(self, scorer):
        challenge = get_fix_challenge_by_id('ch_001')

        fixed = scorer.calculate_challenge_score(challenge.correct_modifications(), 200, 0, challenge)
        untouched = scorer.calculate_challenge_score([], 200, 0, challenge)

        assert fixed.score == pytest.approx(90.0)
        assert fixed.passed is True
        assert untouched.passed is False

    def test_no_verdict_without_fix_challenge(self, scorer):
        assert scorer.calculate_challenge_score([], 0, 0).passed is None

    def test_invalid_weights(self):
        with pytest.raises(ValidationError):
            ScoringSystem({'weights': {'cognitive_load': 2.0}})


class TestModification:

    def test_from_dict(self):
        mod = Modification.from_dict({'element_id': 'cta', 'property': 'fontSize', 'value': '16px', 'timestamp': 3})

        assert mod.element_id == 'cta'
        assert mod.number == 16
        assert mod.to_dict()['elementId'] == 'cta'
