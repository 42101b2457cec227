"""
Unit tests for the learner state stores.
"""

import os
import sys
import random

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from learning.learning_system import LearningSystem, ChallengePerformance
from learning.progress_tracker import ProgressTracker
from models.challenge_library import get_challenge_by_id
from storage.state_store import InMemoryStore, JsonFileStore, PROFILE_KEY, PROGRESS_KEY


class TestInMemoryStore:

    def test_missing_key(self):
        assert InMemoryStore().load('anything') is None

    def test_save_overwrites(self):
        store = InMemoryStore()
        store.save('k', '{"a": 1}')
        store.save('k', '{"a": 2}')

        assert store.load('k') == '{"a": 2}'
        assert store.keys() == ['k']


class TestJsonFileStore:
    """Tests for the directory-backed store."""

    def test_directory_created_on_save(self, tmp_path):
        directory = tmp_path / 'state' / 'learner'
        store = JsonFileStore(directory)

        assert store.load(PROFILE_KEY) is None

        store.save(PROFILE_KEY, '{}')

        assert (directory / 'learner_profile.json').read_text(encoding='utf-8') == '{}'

    def test_unsafe_key_characters(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.save('../escape', '{}')

        assert store.load('../escape') == '{}'
        assert not (tmp_path.parent / 'escape.json').exists()

    def test_separate_aggregates(self, tmp_path):
        store = JsonFileStore(tmp_path)

        learning = LearningSystem(store, rng=random.Random(1))
        learning.complete_challenge(get_challenge_by_id('hierarchy_1'),
                                    ChallengePerformance(score=92, passed=True, time_spent=10))

        tracker = ProgressTracker(store)
        tracker.record_challenge_attempt('hierarchy_1', {'score': 92, 'cognitiveLoadReduction': 65})

        assert (tmp_path / 'learner_profile.json').exists()
        assert (tmp_path / 'progress.json').exists()

        assert LearningSystem(JsonFileStore(tmp_path)).get_skill_profile()['hierarchy'] == 10
        assert ProgressTracker(JsonFileStore(tmp_path)).get_progress().stats['cognitiveLoad'] == 5
        assert PROGRESS_KEY != PROFILE_KEY
