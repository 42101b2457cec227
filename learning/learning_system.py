#!/usr/bin/env python3
"""
Learning System - Adaptive Challenge Selection and Skill Tracking

This module keeps the learner's skill profile, picks the next challenge with
a bias toward the weakest skill, and updates skills from challenge outcomes.
Every mutation is persisted immediately through the injected state store.

"""

import math
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
import logging

from models.challenge import Challenge
from storage.state_store import StateStore, PROFILE_KEY
from .schemas import CompletionRecord, Decision, LearnerProfile

logger = logging.getLogger(__name__)

SKILL_NAMES = {
    'hierarchy': 'Visual Hierarchy',
    'accessibility': 'Accessibility',
    'forms': 'Form Design',
    'spacing': 'Spacing & Rhythm'
}


@dataclass
class ChallengePerformance:
    """
    How a learner did on one challenge.

    time_spent and estimated_time share a unit (minutes); when
    estimated_time is None the challenge's estimate is used.
    """
    score: float
    passed: bool
    time_spent: float = 0.0
    estimated_time: Optional[float] = None
    hints_used: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ChallengePerformance':
        return cls(
            score=float(data.get('score', 0)),
            passed=bool(data.get('passed', False)),
            time_spent=float(data.get('timeSpent', data.get('time_spent', 0))),
            estimated_time=data.get('estimatedTime', data.get('estimated_time')),
            hints_used=int(data.get('hintsUsed', data.get('hints_used', 0)))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'passed': self.passed,
            'timeSpent': self.time_spent,
            'estimatedTime': self.estimated_time,
            'hintsUsed': self.hints_used
        }


@dataclass
class Insight:
    """Learning insight shown on the learner dashboard."""
    type: str
    message: str
    domain: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'message': self.message, 'domain': self.domain}


class LearningSystem:
    """
    Adaptive challenge selection over a persisted skill profile.

    The random source and clock are injectable so selection and timestamps
    are reproducible under test.
    """

    def __init__(self,
                 store: StateStore,
                 rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 config: Optional[Dict[str, Any]] = None):
        """
        Initialize the learning system and load (or create) the profile.

        Args:
            store: Persistence port for the learner profile
            rng: Random source for the weak-skill bias
            clock: Callable returning the current datetime
            config: Overrides for selection and insight thresholds
        """
        self.store = store
        self.rng = rng or random.Random()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.config = {**self._get_default_config(), **(config or {})}

        self.profile = self._load_profile()

        logger.info(f"LearningSystem initialized for {self.profile.id}")

    def _get_default_config(self) -> Dict[str, Any]:
        return {
            'weak_skill_probability': 0.7,  # 70% reinforce weak skill, 30% variety
            'focus_threshold': 30,
            'momentum_streak': 3,
            'hint_reliance': 2
        }

    def _load_profile(self) -> LearnerProfile:
        stored = self.store.load(PROFILE_KEY)
        if stored is None:
            profile = LearnerProfile()
            self.store.save(PROFILE_KEY, profile.model_dump_json())
            return profile

        return LearnerProfile.model_validate_json(stored)

    def _save(self) -> None:
        self.store.save(PROFILE_KEY, self.profile.model_dump_json())

    def get_weakest_skill(self) -> Optional[str]:
        """Lowest-scored domain; the first one wins ties."""
        skills = self.profile.skill_profile
        return min(skills, key=skills.get) if skills else None

    def get_strongest_skill(self) -> Optional[str]:
        skills = self.profile.skill_profile
        return max(skills, key=skills.get) if skills else None

    def select_next_challenge(self, available: Iterable[Challenge]) -> Optional[Challenge]:
        """
        Pick the next challenge for the learner.

        Args:
            available: Candidate challenges

        Returns:
            Challenge closest to the target difficulty, or None for an empty pool
        """
        available = list(available)
        if not available:
            return None

        weakest = self.get_weakest_skill()
        priority = [c for c in available if c.domain == weakest]
        others = [c for c in available if c.domain != weakest]

        if self.rng.random() < self.config['weak_skill_probability'] and priority:
            pool = priority
        elif others:
            pool = others
        else:
            pool = available

        skill_level = self.profile.skill_profile.get(weakest, 0.0) if weakest else 0.0
        target_difficulty = math.ceil((skill_level / 100) * 10)

        # min() keeps the first of equally close candidates
        challenge = min(pool, key=lambda c: abs(c.difficulty - target_difficulty))

        logger.debug(f"Selected {challenge.id} (weakest={weakest}, target difficulty={target_difficulty})")

        return challenge

    def record_decision(self,
                        challenge_id: str,
                        component_id: str,
                        property: str,
                        old_value: Any,
                        new_value: Any,
                        timestamp: Optional[float] = None) -> Decision:
        """Append a property edit to the audit log and persist it."""
        decision = Decision(
            challenge_id=challenge_id,
            component_id=component_id,
            property=property,
            old_value=old_value,
            new_value=new_value,
            timestamp=timestamp if timestamp is not None else self.clock().timestamp()
        )

        self.profile.decision_history.append(decision)
        self._save()

        return decision

    def calculate_skill_delta(self,
                              performance: ChallengePerformance,
                              estimated_time: Optional[float] = None) -> float:
        """
        Skill change for a performance, by score band.

        Fast high scores earn a bonus; each hint costs two points.
        """
        estimate = performance.estimated_time if performance.estimated_time is not None else estimated_time
        time_bonus = 5 if estimate is not None and performance.time_spent < estimate else 0
        hint_penalty = performance.hints_used * -2

        if performance.score >= 90:
            delta = 10 + time_bonus
        elif performance.score >= 70:
            delta = 5 + time_bonus
        elif performance.score >= 50:
            delta = 2
        else:
            delta = -3

        return delta + hint_penalty

    def complete_challenge(self,
                           challenge: Challenge,
                           performance: Union[ChallengePerformance, Dict[str, Any]]) -> float:
        """
        Apply a challenge outcome to the profile and persist it.

        Args:
            challenge: Completed challenge
            performance: Outcome of the attempt

        Returns:
            The skill delta that was applied (before clipping)
        """
        if not isinstance(performance, ChallengePerformance):
            performance = ChallengePerformance.from_dict(performance)

        delta = self.calculate_skill_delta(performance, challenge.estimated_time)
        self.update_skill(challenge.domain, delta)

        self.profile.completed_challenges.append(CompletionRecord(
            id=challenge.id,
            timestamp=self.clock().timestamp(),
            performance=performance.to_dict()
        ))

        self.profile.current_streak = self.profile.current_streak + 1 if performance.passed else 0
        self.profile.total_time += performance.time_spent

        hints = self.profile.hint_usage
        hints.total += performance.hints_used
        hints.by_challenge[challenge.id] = hints.by_challenge.get(challenge.id, 0) + performance.hints_used

        self._save()

        logger.info(f"Completed {challenge.id}: {challenge.domain} {delta:+g}, streak {self.profile.current_streak}")

        return delta

    def update_skill(self, domain: str, delta: float) -> float:
        """Apply a delta to one domain, clipped to [0, 100]."""
        current = self.profile.skill_profile.get(domain, 0.0)
        updated = max(0.0, min(100.0, current + delta))
        self.profile.skill_profile[domain] = updated
        return updated

    def get_insights(self) -> List[Insight]:
        """Generate learning insights from the profile."""
        insights = []

        weakest = self.get_weakest_skill()
        if weakest is not None and self.profile.skill_profile[weakest] < self.config['focus_threshold']:
            insights.append(Insight(
                type='focus-area',
                message=f"Focus on {self.format_skill_name(weakest)} - this is your growth opportunity",
                domain=weakest
            ))

        streak = self.profile.current_streak
        if streak >= self.config['momentum_streak']:
            insights.append(Insight(
                type='momentum',
                message=f"{streak} challenges in a row - you're building strong patterns"
            ))

        completed = len(self.profile.completed_challenges)
        average_hints = self.profile.hint_usage.total / completed if completed else 0
        if average_hints > self.config['hint_reliance']:
            insights.append(Insight(
                type='independence',
                message='Try solving the next challenge without hints - trust your instincts'
            ))

        return insights

    def format_skill_name(self, skill: str) -> str:
        return SKILL_NAMES.get(skill, skill)

    def get_skill_profile(self) -> Dict[str, float]:
        """Copy of the current skill profile."""
        return dict(self.profile.skill_profile)

    def reset_progress(self) -> None:
        """Replace the profile with defaults and persist."""
        self.profile = LearnerProfile()
        self._save()

        logger.info("Learner profile reset")
