#!/usr/bin/env python3
"""
Perception Engine

This module simulates how a viewer perceives a layout: where attention lands
first, how strong the visual hierarchy is, how much processing effort the
layout demands and whether it meets basic accessibility thresholds.

All metrics are computed from the element records alone; the engine holds
no state between calls.

"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union
import logging

import numpy as np
from scipy.spatial.distance import pdist, squareform

from models.layout_element import LayoutElement, SemanticRole
from utils.validation import ValidationError, validate_engine_config

logger = logging.getLogger(__name__)


@dataclass
class AttentionEntry:
    """Attention probability for one element."""
    component_id: str
    attention_probability: float
    visual_weight: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'componentId': self.component_id,
            'attentionProbability': self.attention_probability,
            'visualWeight': self.visual_weight
        }


@dataclass
class ContrastFailure:
    """Element whose contrast ratio is below its WCAG requirement."""
    id: str
    actual: float
    required: float
    difference: float

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'actual': self.actual, 'required': self.required, 'difference': self.difference}


@dataclass
class HitTargetFailure:
    """Interactive element smaller than the minimum touch target."""
    id: str
    width: float
    height: float
    deficit_x: float
    deficit_y: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'width': self.width,
            'height': self.height,
            'deficitX': self.deficit_x,
            'deficitY': self.deficit_y
        }


# camelCase names used by success criteria and the UI layer
_METRIC_NAMES = {
    'attentionMap': 'attention_map',
    'hierarchyStrength': 'hierarchy_strength',
    'cognitiveLoad': 'cognitive_load',
    'errorLikelihood': 'error_likelihood',
    'firstAttentionCorrect': 'first_attention_correct',
    'contrastCompliance': 'contrast_compliance',
    'failingContrasts': 'failing_contrasts',
    'hitTargetCompliance': 'hit_target_compliance',
    'smallTargets': 'small_targets',
    'keyboardNavigable': 'keyboard_navigable',
    'tabOrder': 'tab_order',
    'spacingConsistency': 'spacing_consistency',
    'visualNoise': 'visual_noise'
}


@dataclass
class PerceptionMetrics:
    """
    Complete perception analysis of a layout.

    Compliance and consistency values lie in [0, 1] where 1 is best;
    load, noise and error values lie in [0, 1] where 0 is best.
    """

    attention_map: List[AttentionEntry] = field(default_factory=list)
    hierarchy_strength: float = 1.0
    cognitive_load: float = 0.0
    error_likelihood: float = 0.0
    first_attention_correct: bool = False
    contrast_compliance: float = 1.0
    failing_contrasts: List[ContrastFailure] = field(default_factory=list)
    hit_target_compliance: float = 1.0
    small_targets: List[HitTargetFailure] = field(default_factory=list)
    keyboard_navigable: bool = True
    tab_order: List[str] = field(default_factory=list)
    spacing_consistency: float = 1.0
    visual_noise: float = 0.0

    def get(self, name: str, default: Any = None) -> Any:
        """Look up a metric by camelCase or snake_case name."""
        attribute = _METRIC_NAMES.get(name, name)
        if attribute not in _METRIC_NAMES.values():
            return default
        return getattr(self, attribute)

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to the camelCase dictionary format."""
        result = {}
        for name, attribute in _METRIC_NAMES.items():
            value = getattr(self, attribute)
            if isinstance(value, list):
                value = [item.to_dict() if hasattr(item, 'to_dict') else item for item in value]
            result[name] = value
        return result


class PerceptionEngine:
    """
    Perception simulation over a list of layout elements.

    analyze() is pure and deterministic: the same elements always yield the
    same metrics, and malformed geometry never raises once elements exist.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the perception engine.

        Args:
            config: Overrides merged over the default thresholds

        Raises:
            ValidationError: If the merged configuration is invalid
        """
        self.config = {**self._get_default_config(), **(config or {})}

        is_valid, errors = validate_engine_config(self.config)
        if not is_valid:
            raise ValidationError("Invalid perception engine configuration", errors)

        logger.info("PerceptionEngine initialized")

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default thresholds for perception analysis."""

        return {
            # F-pattern reading bias
            'viewport_width': 800,
            'viewport_height': 600,
            'horizontal_bias': 0.4,
            'vertical_bias': 0.6,

            # Crowding
            'isolation_radius': 200,
            'isolation_step': 0.1,
            'min_isolation': 0.3,

            # Mis-click risk
            'button_proximity': 50,
            'button_proximity_penalty': 0.2,
            'low_contrast_threshold': 3.0,
            'low_contrast_penalty': 0.15,

            # WCAG
            'large_text_size': 18,
            'bold_weight': 700,
            'large_text_contrast': 3.0,
            'normal_text_contrast': 4.5,
            'min_target_size': 44,

            # Reading order
            'row_bucket_height': 50,

            # Load and noise normalisers
            'max_comfortable_elements': 15,
            'max_comfortable_colors': 8,
            'max_comfortable_font_sizes': 5,
            'noise_elements': 20,
            'noise_colors': 10,
            'hierarchy_variance_scale': 2.0,
            'spacing_variance_scale': 200.0
        }

    def analyze(self, elements: Iterable[Union[LayoutElement, Dict[str, Any]]]) -> PerceptionMetrics:
        """
        Perform complete perception analysis on a layout.

        Args:
            elements: Ordered layout elements (records are converted)

        Returns:
            PerceptionMetrics for the layout
        """
        elements = [e if isinstance(e, LayoutElement) else LayoutElement.from_dict(e) for e in elements]

        logger.debug(f"Analyzing layout with {len(elements)} elements")

        attention_map = self.calculate_attention_map(elements)
        contrast_compliance, failing_contrasts = self.evaluate_contrast(elements)
        hit_target_compliance, small_targets = self.evaluate_hit_targets(elements)
        keyboard_navigable, tab_order = self.evaluate_keyboard_navigation(elements)

        return PerceptionMetrics(
            attention_map=attention_map,
            hierarchy_strength=self.calculate_hierarchy_strength(elements),
            cognitive_load=self.calculate_cognitive_load(elements),
            error_likelihood=self.calculate_error_likelihood(elements),
            first_attention_correct=self.check_first_attention(attention_map, elements),
            contrast_compliance=contrast_compliance,
            failing_contrasts=failing_contrasts,
            hit_target_compliance=hit_target_compliance,
            small_targets=small_targets,
            keyboard_navigable=keyboard_navigable,
            tab_order=tab_order,
            spacing_consistency=self.calculate_spacing_consistency(elements),
            visual_noise=self.calculate_visual_noise(elements)
        )

    def _distance_matrix(self, elements: List[LayoutElement]) -> np.ndarray:
        """Euclidean distances between element origins."""
        if len(elements) < 2:
            return np.zeros((len(elements), len(elements)))

        points = np.array([[e.x, e.y] for e in elements], dtype=float)
        return squareform(pdist(points))

    def calculate_attention_map(self, elements: List[LayoutElement]) -> List[AttentionEntry]:
        """
        Estimate where a viewer looks first.

        Attention combines visual weight with an F-pattern position bias and
        an isolation factor that penalises crowded elements.

        Returns:
            Entries sorted by descending probability; probabilities sum to 1
        """
        if not elements:
            return []

        distances = self._distance_matrix(elements)
        radius = self.config['isolation_radius']

        weights = np.array([e.visual_weight for e in elements], dtype=float)
        positions = np.array([self._position_factor(e) for e in elements], dtype=float)

        # Diagonal is the element itself
        neighbours = (distances < radius).sum(axis=1) - 1
        isolation = np.maximum(self.config['min_isolation'], 1 - neighbours * self.config['isolation_step'])

        scores = np.clip(weights * positions * isolation, 0.0, None)
        total = scores.sum()

        if not np.isfinite(total) or total <= 0:
            probabilities = np.full(len(elements), 1.0 / len(elements))
        else:
            probabilities = scores / total

        entries = [
            AttentionEntry(component_id=e.id, attention_probability=float(p), visual_weight=float(w))
            for e, p, w in zip(elements, probabilities, weights)
        ]

        return sorted(entries, key=lambda entry: -entry.attention_probability)

    def _position_factor(self, element: LayoutElement) -> float:
        """F-pattern: top-left gets the highest weight."""
        x_factor = max(0.0, 1 - element.x / self.config['viewport_width'])
        y_factor = max(0.0, 1 - element.y / self.config['viewport_height'])

        return x_factor * self.config['horizontal_bias'] + y_factor * self.config['vertical_bias']

    def calculate_hierarchy_strength(self, elements: List[LayoutElement]) -> float:
        """Variance of visual weights; higher variance means clearer hierarchy."""
        if len(elements) < 2:
            return 1.0

        variance = float(np.var([e.visual_weight for e in elements]))

        return min(1.0, variance / self.config['hierarchy_variance_scale'])

    def calculate_cognitive_load(self, elements: List[LayoutElement]) -> float:
        """Processing difficulty from element count, colour and size variety."""
        count_load = min(1.0, len(elements) / self.config['max_comfortable_elements'])
        color_load = min(1.0, len({e.color for e in elements}) / self.config['max_comfortable_colors'])
        size_load = min(1.0, len({e.font_size for e in elements}) / self.config['max_comfortable_font_sizes'])

        return count_load * 0.4 + color_load * 0.3 + size_load * 0.3

    def calculate_error_likelihood(self, elements: List[LayoutElement]) -> float:
        """Mis-click and mis-read risk from crowded buttons and low-contrast controls."""
        error_score = 0.0
        distances = self._distance_matrix(elements)

        for i in range(len(elements)):
            for j in range(i + 1, len(elements)):
                if (elements[i].type == 'button' and elements[j].type == 'button'
                        and distances[i, j] < self.config['button_proximity']):
                    error_score += self.config['button_proximity_penalty']

        for element in elements:
            if element.is_interactive and element.contrast < self.config['low_contrast_threshold']:
                error_score += self.config['low_contrast_penalty']

        return min(1.0, error_score)

    def check_first_attention(self, attention_map: List[AttentionEntry], elements: List[LayoutElement]) -> bool:
        """Whether the element drawing the most attention is the primary one."""
        if not attention_map:
            return False

        top = next((e for e in elements if e.id == attention_map[0].component_id), None)
        return top is not None and top.semantic_role is SemanticRole.PRIMARY

    def required_contrast(self, element: LayoutElement) -> float:
        """WCAG AA requirement: relaxed for large or bold text."""
        if element.font_size >= self.config['large_text_size'] or element.font_weight >= self.config['bold_weight']:
            return self.config['large_text_contrast']
        return self.config['normal_text_contrast']

    def evaluate_contrast(self, elements: List[LayoutElement]) -> tuple[float, List[ContrastFailure]]:
        """
        Check every element against its contrast requirement.

        Returns:
            tuple: (compliance fraction, failing elements)
        """
        failing = []

        for element in elements:
            contrast = element.contrast
            required = self.required_contrast(element)

            if contrast < required:
                failing.append(ContrastFailure(
                    id=element.id,
                    actual=round(contrast, 2),
                    required=required,
                    difference=round(required - contrast, 2)
                ))

        if not elements:
            return 1.0, failing

        return (len(elements) - len(failing)) / len(elements), failing

    def evaluate_hit_targets(self, elements: List[LayoutElement]) -> tuple[float, List[HitTargetFailure]]:
        """
        Check interactive elements against the minimum touch target.

        Returns:
            tuple: (compliance fraction, undersized elements)
        """
        min_size = self.config['min_target_size']
        interactive = [e for e in elements if e.is_interactive]

        small = [
            HitTargetFailure(
                id=e.id,
                width=e.width,
                height=e.height,
                deficit_x=max(0, min_size - e.width),
                deficit_y=max(0, min_size - e.height)
            )
            for e in interactive
            if e.width < min_size or e.height < min_size
        ]

        if not interactive:
            return 1.0, small

        return (len(interactive) - len(small)) / len(interactive), small

    def evaluate_keyboard_navigation(self, elements: List[LayoutElement]) -> tuple[bool, List[str]]:
        """
        Check that the primary action comes early in reading order.

        Interactive elements are ordered by row buckets, then left to right.

        Returns:
            tuple: (navigable, tab order of element ids)
        """
        bucket = self.config['row_bucket_height']
        ordered = sorted(
            (e for e in elements if e.is_interactive),
            key=lambda e: (math.floor(e.y / bucket), e.x)
        )

        midpoint = len(ordered) / 2
        navigable = all(
            index <= midpoint
            for index, element in enumerate(ordered)
            if element.semantic_role is SemanticRole.PRIMARY
        )

        return navigable, [e.id for e in ordered]

    def calculate_spacing_consistency(self, elements: List[LayoutElement]) -> float:
        """Lower margin and padding variance means more consistent rhythm."""
        if len(elements) < 2:
            return 1.0

        margin_variance = float(np.var([e.margin for e in elements]))
        padding_variance = float(np.var([e.padding for e in elements]))

        return max(0.0, 1 - (margin_variance + padding_variance) / self.config['spacing_variance_scale'])

    def calculate_visual_noise(self, elements: List[LayoutElement]) -> float:
        density_noise = min(1.0, len(elements) / self.config['noise_elements'])
        color_noise = min(1.0, len({e.color for e in elements}) / self.config['noise_colors'])

        return (density_noise + color_noise) / 2
