"""
Perceptual Analysis Module

Perception metrics for element layouts, challenge evaluation with
explanations, and edit-log scoring.
"""

from .perception_engine import (
    PerceptionEngine,
    PerceptionMetrics,
    AttentionEntry,
    ContrastFailure,
    HitTargetFailure
)
from .explanation_engine import Explanation, ExplanationEngine
from .challenge_evaluator import ChallengeEvaluator, EvaluationResult
from .scoring_system import ScoringSystem, ScoreBreakdown, Modification, to_modifications

__all__ = [
    'PerceptionEngine',
    'PerceptionMetrics',
    'AttentionEntry',
    'ContrastFailure',
    'HitTargetFailure',
    'Explanation',
    'ExplanationEngine',
    'ChallengeEvaluator',
    'EvaluationResult',
    'ScoringSystem',
    'ScoreBreakdown',
    'Modification',
    'to_modifications'
]

__version__ = "1.0.0"
__author__ = "Willy Zuo"
