#!/usr/bin/env python3
"""
Challenge Evaluator

This module wraps a challenge's goal, success criteria and domain-specific
score formula around a layout and produces the verdict shown to the learner.

"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
import logging

from models.challenge import Challenge
from models.layout_element import LayoutElement
from utils.validation import ValidationError, merge_config, validate_scoring_config
from .perception_engine import PerceptionEngine, PerceptionMetrics
from .explanation_engine import Explanation, ExplanationEngine

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    """
    Outcome of evaluating a layout against a challenge.

    Contains the pass/fail verdict, the 0-100 domain score, the raw metrics
    and the ordered explanations.
    """

    passed: bool
    score: int
    metrics: PerceptionMetrics
    explanation: List[Explanation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary format."""
        return {
            'passed': self.passed,
            'score': self.score,
            'metrics': self.metrics.to_dict(),
            'explanation': [e.to_dict() for e in self.explanation]
        }


class ChallengeEvaluator:
    """
    Scores a layout for a challenge.

    Domain scores are weighted sums of perception metrics. Terms prefixed
    with 'inverse_' contribute (1 - metric).
    """

    def __init__(self,
                 engine: Optional[PerceptionEngine] = None,
                 config: Optional[Dict[str, Any]] = None):
        """
        Initialize the challenge evaluator.

        Args:
            engine: Perception engine to use (a default one is created if None)
            config: Overrides for domain weights and explanation thresholds

        Raises:
            ValidationError: If the configuration is invalid
        """
        self.engine = engine or PerceptionEngine()
        self.config = merge_config(self._get_default_config(), config)

        is_valid, errors = validate_scoring_config({'domain_weights': self.config['domain_weights']})
        if not is_valid:
            raise ValidationError("Invalid challenge evaluator configuration", errors)

        # Explanations quote the same target size the engine measured against
        self.explanation_engine = ExplanationEngine({
            'min_target_size': self.engine.config['min_target_size'],
            **self.config.get('explanations', {})
        })

        logger.info("ChallengeEvaluator initialized")

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default domain score weights."""

        return {
            'domain_weights': {
                'hierarchy': {
                    'hierarchy_strength': 40,
                    'inverse_cognitive_load': 30,
                    'first_attention_correct': 30
                },
                'accessibility': {
                    'contrast_compliance': 40,
                    'hit_target_compliance': 30,
                    'keyboard_navigable': 30
                },
                'spacing': {
                    'spacing_consistency': 50,
                    'inverse_visual_noise': 50
                },
                'forms': {
                    'hit_target_compliance': 40,
                    'contrast_compliance': 30,
                    'inverse_error_likelihood': 30
                }
            },
            'explanations': {}
        }

    def evaluate(self,
                 challenge: Challenge,
                 elements: Optional[Iterable[LayoutElement]] = None) -> EvaluationResult:
        """
        Evaluate a layout against a challenge.

        Args:
            challenge: Challenge supplying domain and success criteria
            elements: Layout to evaluate; defaults to the challenge's own elements

        Returns:
            EvaluationResult with verdict, score, metrics and explanations
        """
        layout = list(challenge.elements if elements is None else elements)

        metrics = self.engine.analyze(layout)
        score = self.calculate_score(challenge.domain, metrics)
        passed = challenge.check_success(metrics)
        explanation = self.explanation_engine.generate(challenge.domain, metrics, passed)

        logger.info(f"Evaluated {challenge.id}: score={score}, passed={passed}")

        return EvaluationResult(passed=passed, score=score, metrics=metrics, explanation=explanation)

    def calculate_score(self, domain: str, metrics: PerceptionMetrics) -> int:
        """
        Calculate the domain-specific score.

        Args:
            domain: Challenge domain
            metrics: Perception metrics

        Returns:
            Integer score clipped to [0, 100]
        """
        weights = self.config['domain_weights'].get(domain)
        if weights is None:
            logger.warning(f"No score weights for domain '{domain}'; scoring 0")
            return 0

        score = 0.0
        for term, weight in weights.items():
            score += self._term_value(term, metrics) * weight

        if math.isnan(score):
            score = 0.0

        clipped = max(0.0, min(100.0, score))
        return int(math.floor(clipped + 0.5))

    def _term_value(self, term: str, metrics: PerceptionMetrics) -> float:
        """Resolve one weighted term to a number."""
        inverse = term.startswith('inverse_')
        name = term[len('inverse_'):] if inverse else term

        value = metrics.get(name)
        if value is None:
            logger.warning(f"Unknown score term '{term}'")
            return 0.0

        value = float(value)
        return 1 - value if inverse else value
