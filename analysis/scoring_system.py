#!/usr/bin/env python3
"""
Edit-Log Scoring System

This module scores free-form "fix this layout" challenges from the log of
property edits the learner made, rather than from the final layout state.
Points reward edits that reduce cognitive load and meet accessibility
constraints; efficiency reflects time taken and clues used.

"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
import logging

from models.challenge import Challenge
from models.fix_challenges import FixChallenge
from utils.validation import ValidationError, merge_config, parse_leading_int, validate_scoring_config

logger = logging.getLogger(__name__)

_CAPITALISED = re.compile(r'^[A-Z]')


@dataclass(frozen=True)
class Modification:
    """One property edit from the rendering layer."""
    element_id: str
    property: str
    value: Any
    timestamp: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Modification':
        return cls(
            element_id=str(data.get('elementId', data.get('element_id', ''))),
            property=str(data.get('property', '')),
            value=data.get('value'),
            timestamp=data.get('timestamp')
        )

    @property
    def text(self) -> str:
        return '' if self.value is None else str(self.value)

    @property
    def number(self) -> Optional[int]:
        return parse_leading_int(self.value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'elementId': self.element_id,
            'property': self.property,
            'value': self.value,
            'timestamp': self.timestamp
        }


def to_modifications(modifications: Iterable[Union[Modification, Dict[str, Any]]]) -> List[Modification]:
    """Normalise an edit log of records or Modification objects."""
    return [m if isinstance(m, Modification) else Modification.from_dict(m) for m in modifications]


@dataclass
class ScoreBreakdown:
    """
    Edit-log score with its components.

    Component scores are on a 0-100 scale; 'breakdown' holds each
    component's weighted contribution to the total.
    """

    score: float
    cognitive_load_reduction: float
    constraint_improvement: float
    improvement_score: float
    efficiency_score: float
    breakdown: Dict[str, float] = field(default_factory=dict)
    previous_attempts: int = 0
    passed: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert breakdown to dictionary format."""
        return {
            'score': self.score,
            'cognitiveLoadReduction': self.cognitive_load_reduction,
            'constraintImprovement': self.constraint_improvement,
            'improvementScore': self.improvement_score,
            'efficiencyScore': self.efficiency_score,
            'breakdown': dict(self.breakdown),
            'previousAttempts': self.previous_attempts,
            'passed': self.passed
        }


class ScoringSystem:
    """
    Learning-focused scorer driven by the edit log.

    The improvement component has no history to compare against by default
    and returns a fixed baseline; pass improvement_provider to plug one in.
    """

    def __init__(self,
                 config: Optional[Dict[str, Any]] = None,
                 improvement_provider: Optional[Callable[[Optional[Union[Challenge, FixChallenge]]], float]] = None):
        """
        Initialize the scoring system.

        Args:
            config: Overrides for component weights and efficiency parameters
            improvement_provider: Callable returning a 0-100 improvement score
                                  for a challenge

        Raises:
            ValidationError: If the configuration is invalid
        """
        self.config = merge_config(self._get_default_config(), config)

        is_valid, errors = validate_scoring_config(self.config)
        if not is_valid:
            raise ValidationError("Invalid scoring configuration", errors)

        self.weights = self.config['weights']
        self.improvement_provider = improvement_provider

        logger.info("ScoringSystem initialized")

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default scoring configuration."""

        return {
            'weights': {
                'cognitive_load': 0.35,  # Reducing cognitive load is key
                'constraints': 0.30,     # Meeting accessibility/usability constraints
                'improvement': 0.20,     # Improvement over previous attempts
                'efficiency': 0.15       # Time and clue usage
            },
            'baseline_improvement': 50,
            'time_allowance': 300,       # Seconds before time penalties apply
            'max_time_penalty': 30,
            'clue_penalty': 10,
            'max_component_score': 100
        }

    def calculate_challenge_score(self,
                                  modifications: Iterable[Union[Modification, Dict[str, Any]]],
                                  time_elapsed: float = 0,
                                  clues_used: int = 0,
                                  challenge: Optional[Union[Challenge, FixChallenge]] = None) -> ScoreBreakdown:
        """
        Calculate the weighted score for one attempt.

        Args:
            modifications: Ordered edit log
            time_elapsed: Seconds spent on the challenge
            clues_used: Number of clues revealed
            challenge: Challenge being attempted (used by improvement providers);
                       a FixChallenge also sets the pass verdict

        Returns:
            ScoreBreakdown with total and component scores
        """
        modifications = to_modifications(modifications)

        cognitive_load_reduction = self.calculate_cognitive_load_reduction(modifications)
        constraint_improvement = self.calculate_constraint_improvement(modifications)
        improvement_score = self.calculate_improvement(challenge)
        efficiency_score = self.calculate_efficiency(time_elapsed, clues_used)

        breakdown = {
            'cognitive_load': cognitive_load_reduction * self.weights['cognitive_load'],
            'constraints': constraint_improvement * self.weights['constraints'],
            'improvement': improvement_score * self.weights['improvement'],
            'efficiency': efficiency_score * self.weights['efficiency']
        }

        total = sum(breakdown.values())

        logger.debug(f"Edit-log score {total:.2f} from {len(modifications)} modifications")

        return ScoreBreakdown(
            score=total,
            cognitive_load_reduction=cognitive_load_reduction,
            constraint_improvement=constraint_improvement,
            improvement_score=improvement_score,
            efficiency_score=efficiency_score,
            breakdown=breakdown,
            passed=challenge.is_passing(total) if isinstance(challenge, FixChallenge) else None
        )

    def calculate_cognitive_load_reduction(self, modifications: List[Modification]) -> float:
        """Points for edits that make the layout easier to process."""
        score = 0

        for mod in modifications:
            if mod.property == 'fontSize' and (mod.number or 0) >= 16:
                score += 15 # Readable font size

            if mod.property == 'padding' and (mod.number or 0) >= 12:
                score += 15 # Better touch targets

            if mod.property == 'text':
                text = mod.text
                if text and text[0] == text[0].upper():
                    score += 10 # Proper capitalization
                if len(text) > 3 and 'submit' not in text.lower():
                    score += 10 # Descriptive labels

            if mod.property == 'border' and ('2px' in mod.text or '3px' in mod.text):
                score += 10 # Clear boundaries

        return float(min(self.config['max_component_score'], score))

    def calculate_constraint_improvement(self, modifications: List[Modification]) -> float:
        """Points for edits that address accessibility constraints."""
        score = 0

        for mod in modifications:
            if mod.property in ('color', 'background'):
                score += 15 # Attempted to improve contrast

            if mod.property == 'padding' and (mod.number or 0) >= 14:
                score += 20 # Touch target guideline

            if mod.property == 'text' and _CAPITALISED.match(mod.text) and len(mod.text) > 2:
                score += 15 # Screen-reader friendly labels

        return float(min(self.config['max_component_score'], score))

    def calculate_improvement(self, challenge: Optional[Union[Challenge, FixChallenge]]) -> float:
        if self.improvement_provider is None:
            return float(self.config['baseline_improvement'])

        value = float(self.improvement_provider(challenge))
        return max(0.0, min(float(self.config['max_component_score']), value))

    def calculate_efficiency(self, time_elapsed: float, clues_used: int) -> float:
        """
        Efficiency from time and clue usage.

        Time beyond the allowance costs a point per ten seconds, capped;
        every clue costs a fixed penalty. Never negative.
        """
        score = 100.0
        allowance = self.config['time_allowance']

        if time_elapsed > allowance:
            score -= min(self.config['max_time_penalty'], (time_elapsed - allowance) / 10)

        score -= clues_used * self.config['clue_penalty']

        return max(0.0, score)
