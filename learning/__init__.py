"""
Learning Module

Adaptive challenge selection over the learner skill profile, and
progress tracking (stats, XP, streaks, recommendations).
"""

from .schemas import (
    LearnerProfile,
    ProgressState,
    Decision,
    CompletionRecord,
    AttemptRecord,
    FrequencyRecord,
    HintUsage,
    DEFAULT_SKILLS,
    DEFAULT_STATS
)
from .learning_system import LearningSystem, ChallengePerformance, Insight, SKILL_NAMES
from .progress_tracker import ProgressTracker, Recommendation, ProgressInsights

__all__ = [
    'LearnerProfile',
    'ProgressState',
    'Decision',
    'CompletionRecord',
    'AttemptRecord',
    'FrequencyRecord',
    'HintUsage',
    'DEFAULT_SKILLS',
    'DEFAULT_STATS',
    'LearningSystem',
    'ChallengePerformance',
    'Insight',
    'SKILL_NAMES',
    'ProgressTracker',
    'Recommendation',
    'ProgressInsights'
]
