#!/usr/bin/env python3
"""
Progress Tracker - Learning statistics, streaks and personalised guidance

This module keeps a second persisted aggregate, independent of the learner
skill profile: stat levels, XP, calendar-day streaks and the frequency of
recurring mistakes and strengths detected from edit logs. Recommendations
and insights are derived from that aggregate.

"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
import logging

import numpy as np

from analysis.scoring_system import Modification, ScoreBreakdown, to_modifications
from storage.state_store import StateStore, PROGRESS_KEY
from .schemas import AttemptRecord, FrequencyRecord, ProgressState

logger = logging.getLogger(__name__)

STRENGTH_DESCRIPTIONS = {
    'cognitive_load_management': 'Strong ability to reduce cognitive load in designs',
    'accessibility_awareness': 'Excellent understanding of accessibility requirements',
    'visual_hierarchy': 'Good grasp of visual hierarchy principles'
}


@dataclass
class Recommendation:
    """One practice recommendation."""
    type: str
    reason: str
    skill: Optional[str] = None
    current_level: Optional[float] = None
    mistake: Optional[str] = None
    count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {'type': self.type, 'reason': self.reason}
        if self.skill is not None:
            result.update({'skill': self.skill, 'currentLevel': self.current_level})
        if self.mistake is not None:
            result.update({'mistake': self.mistake, 'count': self.count})
        return result


@dataclass
class ProgressInsights:
    strengths: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)
    focus_areas: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'strengths': list(self.strengths),
            'improvements': list(self.improvements),
            'focusAreas': list(self.focus_areas)
        }


def _component(result: Union[ScoreBreakdown, Dict[str, Any]], attribute: str, key: str) -> float:
    """Read a score component from a ScoreBreakdown or its dict form."""
    if isinstance(result, ScoreBreakdown):
        return float(getattr(result, attribute))
    return float(result.get(key, result.get(attribute, 0)) or 0)


class ProgressTracker:
    """
    Stats, XP and streak tracking over a persisted ProgressState.

    Every recorded attempt rewrites the full state under the progress key.
    """

    def __init__(self,
                 store: StateStore,
                 clock: Optional[Callable[[], datetime]] = None,
                 config: Optional[Dict[str, Any]] = None,
                 tz: Optional[tzinfo] = None):
        """
        Initialize the tracker and load (or create) the progress state.

        Args:
            store: Persistence port for the progress aggregate
            clock: Callable returning the current datetime
            config: Overrides for stat thresholds and increments
            tz: Time zone whose calendar days count for streaks (system local if None)
        """
        self.store = store
        self.clock = clock or (lambda: datetime.now().astimezone())
        self.tz = tz
        self.config = {**self._get_default_config(), **(config or {})}

        self.progress = self._load_progress()

        logger.info(f"ProgressTracker initialized for {self.progress.user_id}")

    def _get_default_config(self) -> Dict[str, Any]:
        return {
            'stat_threshold': 60,
            'efficiency_threshold': 70,
            'strength_threshold': 80,
            'completion_score': 60,
            'xp_per_point': 10,
            'weak_stat': 50,
            'focus_stat': 60,
            'frequent_mistake': 3,
            'recent_window': 5
        }

    def _default_progress(self) -> ProgressState:
        return ProgressState(start_date=self.clock().isoformat())

    def _load_progress(self) -> ProgressState:
        stored = self.store.load(PROGRESS_KEY)
        if stored is None:
            return self._default_progress()

        return ProgressState.model_validate_json(stored)

    def save(self) -> None:
        self.store.save(PROGRESS_KEY, self.progress.model_dump_json())

    def record_challenge_attempt(self,
                                 challenge_id: str,
                                 result: Union[ScoreBreakdown, Dict[str, Any]],
                                 modifications: Iterable[Union[Modification, Dict[str, Any]]] = (),
                                 time_elapsed: float = 0,
                                 clues_used: int = 0) -> AttemptRecord:
        """
        Record one attempt and update stats, XP, streak and patterns.

        Args:
            challenge_id: Attempted challenge
            result: Edit-log score for the attempt
            modifications: Edit log of the attempt
            time_elapsed: Seconds spent
            clues_used: Clues revealed

        Returns:
            The appended attempt record
        """
        modifications = to_modifications(modifications)
        now = self.clock()

        score = _component(result, 'score', 'score')
        attempt = AttemptRecord(
            challenge_id=challenge_id,
            timestamp=now.isoformat(),
            score=score,
            time_elapsed=time_elapsed,
            clues_used=clues_used,
            modifications=[m.to_dict() for m in modifications],
            metrics={
                'cognitiveLoad': _component(result, 'cognitive_load_reduction', 'cognitiveLoadReduction'),
                'constraints': _component(result, 'constraint_improvement', 'constraintImprovement'),
                'improvement': _component(result, 'improvement_score', 'improvementScore'),
                'efficiency': _component(result, 'efficiency_score', 'efficiencyScore')
            }
        )
        self.progress.attempt_history.append(attempt)

        self._update_stats(result)

        if score >= self.config['completion_score'] and challenge_id not in self.progress.completed_challenges:
            self.progress.completed_challenges.append(challenge_id)
            self.progress.total_xp += int(np.floor(score * self.config['xp_per_point'] + 0.5))

        self._update_streak(now)
        self._analyze_patterns(result, modifications, now)

        self.save()

        logger.info(f"Recorded attempt on {challenge_id}: score {score:.1f}, XP {self.progress.total_xp}")

        return attempt

    def _bump(self, stat: str, amount: float) -> None:
        stats = self.progress.stats
        stats[stat] = min(100.0, stats.get(stat, 0.0) + amount)

    def _update_stats(self, result: Union[ScoreBreakdown, Dict[str, Any]]) -> None:
        threshold = self.config['stat_threshold']

        if _component(result, 'cognitive_load_reduction', 'cognitiveLoadReduction') > threshold:
            self._bump('cognitiveLoad', 5)

        if _component(result, 'constraint_improvement', 'constraintImprovement') > threshold:
            self._bump('accessibility', 5)

        self._bump('hierarchy', 3)

        if _component(result, 'efficiency_score', 'efficiencyScore') > self.config['efficiency_threshold']:
            self._bump('decisionSpeed', 4)

    def _update_streak(self, now: datetime) -> None:
        """Calendar-day streak: same day is a no-op, yesterday extends, a gap restarts."""
        today = self._local_day(now)

        if self.progress.last_active is not None:
            last_day = self._local_day(datetime.fromisoformat(self.progress.last_active))
            if last_day == today:
                return

            if last_day == today - timedelta(days=1):
                self.progress.current_streak += 1
            else:
                self.progress.current_streak = 1
        else:
            self.progress.current_streak = 1

        self.progress.longest_streak = max(self.progress.longest_streak, self.progress.current_streak)
        self.progress.last_active = now.isoformat()

    def _local_day(self, moment: datetime) -> date:
        """Calendar date of a moment in the learner's time zone."""
        return moment.astimezone(self.tz).date()

    def _analyze_patterns(self,
                          result: Union[ScoreBreakdown, Dict[str, Any]],
                          modifications: List[Modification],
                          now: datetime) -> None:
        """Track recurring mistakes in the edit log and strengths in the score."""
        for mod in modifications:
            number = mod.number

            if mod.property == 'fontSize' and number is not None and number < 14:
                self._track(self.progress.mistakes, 'font_size_too_small', now)

            if mod.property == 'padding' and number is not None and number < 10:
                self._track(self.progress.mistakes, 'insufficient_spacing', now)

            if mod.property == 'text' and mod.text and mod.text.lower() == mod.text:
                self._track(self.progress.mistakes, 'improper_capitalization', now)

        threshold = self.config['strength_threshold']

        if _component(result, 'cognitive_load_reduction', 'cognitiveLoadReduction') > threshold:
            self._track(self.progress.strengths, 'cognitive_load_management', now)

        if _component(result, 'constraint_improvement', 'constraintImprovement') > threshold:
            self._track(self.progress.strengths, 'accessibility_awareness', now)

    def _track(self, counters: Dict[str, FrequencyRecord], kind: str, now: datetime) -> None:
        timestamp = now.isoformat()
        record = counters.get(kind)

        if record is None:
            counters[kind] = FrequencyRecord(count=1, first_occurrence=timestamp, last_occurrence=timestamp)
        else:
            record.count += 1
            record.last_occurrence = timestamp

    def _frequent_mistakes(self) -> List[str]:
        """Mistake types seen often enough to act on, most frequent first."""
        frequent = [
            (kind, record.count) for kind, record in self.progress.mistakes.items()
            if record.count >= self.config['frequent_mistake']
        ]
        return [kind for kind, _ in sorted(frequent, key=lambda item: -item[1])]

    def get_recommendations(self) -> List[Recommendation]:
        """Weak stats (lowest first), then frequent mistake patterns."""
        recommendations = []

        weak_stats = sorted(
            ((skill, value) for skill, value in self.progress.stats.items() if value < self.config['weak_stat']),
            key=lambda item: item[1]
        )

        for skill, value in weak_stats:
            recommendations.append(Recommendation(
                type='weakness',
                skill=skill,
                current_level=value,
                reason=f"Your {skill} score is {value:g}%. Practice more challenges in this area."
            ))

        for kind in self._frequent_mistakes():
            count = self.progress.mistakes[kind].count
            recommendations.append(Recommendation(
                type='mistake_pattern',
                mistake=kind,
                count=count,
                reason=f"You've made {count} mistakes related to {kind.replace('_', ' ')}."
            ))

        return recommendations

    def get_insights(self) -> ProgressInsights:
        return ProgressInsights(
            strengths=[self.format_strength(s) for s in self.progress.strengths],
            improvements=self._improvement_insights(),
            focus_areas=self._focus_areas()
        )

    def format_strength(self, strength: str) -> str:
        return STRENGTH_DESCRIPTIONS.get(strength, strength.replace('_', ' '))

    def _improvement_insights(self) -> List[str]:
        insights = []
        history = self.progress.attempt_history
        recent = history[-self.config['recent_window']:]

        if len(recent) >= 2:
            average_recent = float(np.mean([a.score for a in recent]))
            average_all = float(np.mean([a.score for a in history]))

            if average_all > 0:
                improvement = (average_recent - average_all) / average_all * 100
                if improvement > 10:
                    insights.append(f"Performance improving by {round(improvement)}% in recent challenges")

        if recent and float(np.mean([a.clues_used for a in recent])) < 1:
            insights.append('Using fewer clues - showing increased confidence')

        return insights

    def _focus_areas(self) -> List[str]:
        areas = []
        stats = self.progress.stats
        threshold = self.config['focus_stat']

        if stats.get('accessibility', 0) < threshold:
            areas.append('Practice more with accessibility constraints and WCAG guidelines')

        if stats.get('spacing', 0) < threshold:
            areas.append('Focus on spacing and layout challenges')

        if stats.get('color', 0) < threshold:
            areas.append('Work on color contrast and theory')

        if 'font_size_too_small' in self._frequent_mistakes():
            areas.append('Review typography best practices')

        return areas

    def get_progress(self) -> ProgressState:
        return self.progress

    def reset(self) -> None:
        """Recreate default progress and persist it."""
        self.progress = self._default_progress()
        self.save()

        logger.info("Progress reset")
