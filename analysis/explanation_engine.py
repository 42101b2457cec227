#!/usr/bin/env python3
"""
Explanation Engine for Layout Feedback

This module turns perception metrics into ordered, human-readable
explanations: what is wrong, why the metric flags it, and what to change.

"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from .perception_engine import PerceptionMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Explanation:
    """
    One feedback record shown to the learner.

    Contains the detected issue, the measured reason and a concrete
    suggestion for fixing it.
    """
    issue: str
    reason: str
    suggestion: str
    metric: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert explanation to dictionary format."""
        return {
            'issue': self.issue,
            'reason': self.reason,
            'suggestion': self.suggestion,
            'metric': self.metric
        }


SUCCESS = Explanation(
    issue='Success',
    reason='All criteria met',
    suggestion='Challenge completed'
)


class ExplanationEngine:
    """
    Threshold-triggered explanation rules.

    Rules run in a fixed order so the same metrics always produce the same
    explanation list.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize explanation engine.

        Args:
            config: Threshold overrides merged over the defaults
        """
        self.config = {**self._get_default_config(), **(config or {})}

        logger.info("ExplanationEngine initialized")

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default rule thresholds."""
        return {
            'min_hierarchy_strength': 0.6,
            'max_cognitive_load': 0.7,
            'min_spacing_consistency': 0.7,
            'max_visual_noise': 0.4,
            'max_error_likelihood': 0.2,
            'min_target_size': 44
        }

    def generate(self, domain: str, metrics: PerceptionMetrics, passed: bool) -> List[Explanation]:
        """
        Generate explanations for one evaluation.

        Args:
            domain: Challenge domain
            metrics: Perception metrics of the evaluated layout
            passed: Whether all success criteria held

        Returns:
            Ordered explanations, with a Success record first when passed
        """
        explanations = []

        explanations.extend(self._hierarchy_rules(domain, metrics))
        explanations.extend(self._load_rules(metrics))
        explanations.extend(self._accessibility_rules(domain, metrics))
        explanations.extend(self._spacing_rules(domain, metrics))
        explanations.extend(self._form_rules(domain, metrics))

        if passed:
            explanations.insert(0, SUCCESS)

        logger.debug(f"Generated {len(explanations)} explanations for {domain} challenge")

        return explanations

    def _hierarchy_rules(self, domain: str, metrics: PerceptionMetrics) -> List[Explanation]:
        if domain != 'hierarchy' or not metrics.hierarchy_strength < self.config['min_hierarchy_strength']:
            return []

        return [Explanation(
            issue='Weak Visual Hierarchy',
            reason=f"Hierarchy strength: {metrics.hierarchy_strength * 100:.0f}%",
            suggestion='Increase size or weight difference between primary and secondary elements',
            metric='hierarchyStrength'
        )]

    def _load_rules(self, metrics: PerceptionMetrics) -> List[Explanation]:
        if not metrics.cognitive_load > self.config['max_cognitive_load']:
            return []

        return [Explanation(
            issue='High Cognitive Load',
            reason=f"Processing difficulty: {metrics.cognitive_load * 100:.0f}%",
            suggestion='Reduce visual complexity or improve information grouping',
            metric='cognitiveLoad'
        )]

    def _accessibility_rules(self, domain: str, metrics: PerceptionMetrics) -> List[Explanation]:
        if domain != 'accessibility':
            return []

        explanations = []
        target = self.config['min_target_size']

        if metrics.contrast_compliance < 1:
            explanations.append(Explanation(
                issue='Insufficient Color Contrast',
                reason=f"{len(metrics.failing_contrasts)} elements fail WCAG AA",
                suggestion='Increase contrast between text and background colors',
                metric='contrastCompliance'
            ))

        if metrics.hit_target_compliance < 1:
            explanations.append(Explanation(
                issue='Touch Targets Too Small',
                reason=f"{len(metrics.small_targets)} elements below {target}x{target}px",
                suggestion='Increase button and interactive element sizes',
                metric='hitTargetCompliance'
            ))

        if not metrics.keyboard_navigable:
            explanations.append(Explanation(
                issue='Primary Action Late in Tab Order',
                reason=f"Tab order: {', '.join(metrics.tab_order)}",
                suggestion='Move the primary action earlier in the reading order',
                metric='keyboardNavigable'
            ))

        return explanations

    def _spacing_rules(self, domain: str, metrics: PerceptionMetrics) -> List[Explanation]:
        if domain != 'spacing':
            return []

        explanations = []

        if metrics.spacing_consistency < self.config['min_spacing_consistency']:
            explanations.append(Explanation(
                issue='Inconsistent Spacing',
                reason=f"Spacing consistency: {metrics.spacing_consistency * 100:.0f}%",
                suggestion='Use a shared scale for margins and padding',
                metric='spacingConsistency'
            ))

        if metrics.visual_noise > self.config['max_visual_noise']:
            explanations.append(Explanation(
                issue='Visual Noise',
                reason=f"Visual noise: {metrics.visual_noise * 100:.0f}%",
                suggestion='Remove decorative elements and limit the color palette',
                metric='visualNoise'
            ))

        return explanations

    def _form_rules(self, domain: str, metrics: PerceptionMetrics) -> List[Explanation]:
        if domain != 'forms' or not metrics.error_likelihood >= self.config['max_error_likelihood']:
            return []

        return [Explanation(
            issue='Mis-click Risk',
            reason=f"Error likelihood: {metrics.error_likelihood * 100:.0f}%",
            suggestion='Separate adjacent buttons and raise contrast on inputs and buttons',
            metric='errorLikelihood'
        )]
