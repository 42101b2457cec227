#!/usr/bin/env python3
"""
Challenge Domain Model

A challenge wraps a starting layout with a goal, a domain and a list of
success criteria that must all hold on the perception metrics.

"""

import math
import operator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence, Tuple
import logging

from .layout_element import LayoutElement

logger = logging.getLogger(__name__)


class Comparator(Enum):
    """Comparison operators allowed in success criteria."""
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    EQ = "=="

    @classmethod
    def from_symbol(cls, symbol: Any) -> Optional['Comparator']:
        """Resolve a symbol, returning None for anything unrecognised."""
        if isinstance(symbol, cls):
            return symbol

        for comparator in cls:
            if comparator.value == symbol:
                return comparator

        return None

    def apply(self, value: Any, threshold: Any) -> bool:
        return _OPERATORS[self](value, threshold)


_OPERATORS: Dict[Comparator, Callable[[Any, Any], bool]] = {
    Comparator.GT: operator.gt,
    Comparator.GTE: operator.ge,
    Comparator.LT: operator.lt,
    Comparator.LTE: operator.le,
    Comparator.EQ: operator.eq
}


@dataclass(frozen=True)
class SuccessCriterion:
    """
    One (metric, comparator, threshold) condition.

    A criterion without a recognised comparator is kept but never met.
    """

    metric: str
    comparator: Optional[Comparator]
    threshold: Any
    symbol: str = ''

    @classmethod
    def from_triple(cls, triple: Sequence[Any]) -> 'SuccessCriterion':
        metric, symbol, threshold = triple
        return cls(
            metric=str(metric),
            comparator=Comparator.from_symbol(symbol),
            threshold=threshold,
            symbol=str(symbol.value if isinstance(symbol, Comparator) else symbol)
        )

    def is_met(self, metrics: Any) -> bool:
        """
        Check the criterion against a metrics object.

        Args:
            metrics: Object exposing get(name) (PerceptionMetrics) or a dict

        Returns:
            True only when the comparator is known, the metric exists and
            the comparison holds
        """
        if self.comparator is None:
            logger.warning(f"Unrecognised comparator '{self.symbol}' for {self.metric}; criterion fails")
            return False

        value = metrics.get(self.metric)
        if value is None:
            logger.warning(f"Metric '{self.metric}' not available; criterion fails")
            return False

        if isinstance(value, float) and math.isnan(value):
            return False

        try:
            return bool(self.comparator.apply(value, self.threshold))
        except TypeError:
            logger.warning(f"Cannot compare {self.metric}={value!r} with {self.threshold!r}")
            return False

    def to_triple(self) -> Tuple[str, str, Any]:
        return (self.metric, self.comparator.value if self.comparator else self.symbol, self.threshold)


@dataclass(frozen=True)
class Challenge:
    """Design challenge: starting layout plus goal and success criteria."""

    id: str
    title: str
    domain: str
    difficulty: int
    elements: Tuple[LayoutElement, ...] = ()
    goal: str = ''
    success_criteria: Tuple[SuccessCriterion, ...] = ()
    estimated_time: float = 5
    description: str = ''

    def __post_init__(self):
        # Frozen: normalise through object.__setattr__
        object.__setattr__(self, 'elements', tuple(self.elements))
        object.__setattr__(self, 'success_criteria', tuple(
            c if isinstance(c, SuccessCriterion) else SuccessCriterion.from_triple(c)
            for c in self.success_criteria
        ))
        object.__setattr__(self, 'difficulty', max(1, min(10, int(self.difficulty))))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Challenge':
        """Build a challenge from a JSON-compatible mapping."""
        elements = [
            e if isinstance(e, LayoutElement) else LayoutElement.from_dict(e)
            for e in data.get('elements', data.get('components', []))
        ]

        return cls(
            id=data['id'],
            title=data.get('title', ''),
            domain=data.get('domain', ''),
            difficulty=data.get('difficulty', 1),
            elements=tuple(elements),
            goal=data.get('goal', ''),
            success_criteria=tuple(data.get('successCriteria', data.get('success_criteria', []))),
            estimated_time=data.get('estimatedTime', data.get('estimated_time', 5)),
            description=data.get('description', '')
        )

    def get_element(self, element_id: str) -> Optional[LayoutElement]:
        return next((e for e in self.elements if e.id == element_id), None)

    def check_success(self, metrics: Any) -> bool:
        """AND of all success criteria."""
        return all(criterion.is_met(metrics) for criterion in self.success_criteria)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'domain': self.domain,
            'difficulty': self.difficulty,
            'elements': [e.to_dict() for e in self.elements],
            'goal': self.goal,
            'successCriteria': [list(c.to_triple()) for c in self.success_criteria],
            'estimatedTime': self.estimated_time
        }
