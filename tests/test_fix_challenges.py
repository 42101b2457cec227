"""
Unit tests for the "fix this layout" challenge catalogue.
"""

import os
import sys
import random

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from learning.schemas import ProgressState
from models.fix_challenges import (
    get_fix_challenges,
    get_fix_challenge_by_id,
    get_challenges_by_difficulty,
    get_challenges_by_category,
    get_random_challenge,
    get_recommended_challenge
)


class TestFixCatalogue:
    """Tests for catalogue contents and lookups."""

    def test_catalogue(self):
        challenges = get_fix_challenges()

        assert [c.id for c in challenges] == ['ch_001', 'ch_002', 'ch_003']
        assert all(c.hints and c.theories and c.elements for c in challenges)
        assert [c.min_score for c in challenges] == [70, 70, 80]

    def test_element_targets(self):
        challenge = get_fix_challenge_by_id('ch_001')
        button = challenge.get_element('button_submit')

        assert 'poor-label' in button.issues
        assert button.correct['text'] == 'Create Account'
        assert challenge.get_element('missing') is None

    def test_correct_modifications(self):
        mods = get_fix_challenge_by_id('ch_003').correct_modifications()

        assert mods[0] == {'elementId': 'heading', 'property': 'color', 'value': '#1F2937'}
        assert len(mods) == 5

    def test_lookup_by_difficulty_and_category(self):
        assert [c.id for c in get_challenges_by_difficulty('Intermediate')] == ['ch_002', 'ch_003']
        assert [c.id for c in get_challenges_by_category('Accessibility')] == ['ch_003']
        assert get_challenges_by_category('Typography') == []
        assert get_fix_challenge_by_id('ch_999') is None

    def test_random_challenge(self):
        assert get_random_challenge(random.Random(3)).id in {'ch_001', 'ch_002', 'ch_003'}

    def test_to_dict(self):
        record = get_fix_challenge_by_id('ch_002').to_dict()

        assert record['successCriteria']['minScore'] == 70
        assert record['initialState']['elements'][0]['id'] == 'card_title'


class TestRecommendation:
    """Tests for weakest-stat recommendations."""

    def test_default_progress(self):
        # All stats tie at 0; hierarchy comes first and maps to Layout & Spacing
        assert get_recommended_challenge(ProgressState()).id == 'ch_002'

    def test_weak_accessibility(self):
        stats = {'hierarchy': 40, 'accessibility': 10, 'decisionSpeed': 30, 'cognitiveLoad': 50}

        assert get_recommended_challenge({'stats': stats}).id == 'ch_003'

    def test_weak_decision_speed(self):
        stats = {'hierarchy': 40, 'accessibility': 30, 'decisionSpeed': 5, 'cognitiveLoad': 50}

        assert get_recommended_challenge({'stats': stats}).id == 'ch_001'

    def test_category_without_challenges_falls_back(self):
        stats = {'hierarchy': 40, 'accessibility': 30, 'decisionSpeed': 20, 'cognitiveLoad': 5}

        assert get_recommended_challenge({'stats': stats}).id == 'ch_001'

    def test_unmapped_stat_uses_form_design(self):
        progress = ProgressState(stats={'typography': 0, 'hierarchy': 50})

        assert get_recommended_challenge(progress).id == 'ch_001'
