"""
Persisted learner state models.

Two independent aggregates are stored per learner: the LearnerProfile
(adaptive selection skills) and the ProgressState (stats, XP, streaks).
Both serialize to flat JSON without a version field.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SKILLS = ('hierarchy', 'accessibility', 'forms', 'spacing')

DEFAULT_STATS = ('hierarchy', 'accessibility', 'decisionSpeed', 'cognitiveLoad', 'spacing', 'color', 'typography')


def _new_user_id() -> str:
    return f"user_{uuid4().hex[:12]}"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class StateModel(BaseModel):
    """Base for persisted models; unknown keys from older writers are ignored."""
    model_config = ConfigDict(extra='ignore')


class Decision(StateModel):
    """Audit entry for one property edit."""
    challenge_id: str
    component_id: str
    property: str
    old_value: Any = None
    new_value: Any = None
    timestamp: float


class CompletionRecord(StateModel):
    id: str
    timestamp: float
    performance: Dict[str, Any] = Field(default_factory=dict)


class HintUsage(StateModel):
    total: int = 0
    by_challenge: Dict[str, int] = Field(default_factory=dict)


class LearnerProfile(StateModel):
    """Skill profile and decision history used for adaptive selection."""
    id: str = Field(default_factory=_new_user_id)
    skill_profile: Dict[str, float] = Field(
        default_factory=lambda: {skill: 0.0 for skill in DEFAULT_SKILLS},
        description="Domain -> skill score in [0, 100]"
    )
    decision_history: List[Decision] = Field(default_factory=list)
    completed_challenges: List[CompletionRecord] = Field(default_factory=list)
    current_streak: int = Field(default=0, description="Consecutive passed challenges")
    total_time: float = 0.0
    hint_usage: HintUsage = Field(default_factory=HintUsage)


class FrequencyRecord(StateModel):
    """Occurrence counter with first/last timestamps."""
    count: int = 0
    first_occurrence: str
    last_occurrence: str


class AttemptRecord(StateModel):
    challenge_id: str
    timestamp: str
    score: float
    time_elapsed: float = 0.0
    clues_used: int = 0
    modifications: List[Dict[str, Any]] = Field(default_factory=list)
    metrics: Dict[str, float] = Field(default_factory=dict)


class ProgressState(StateModel):
    """Stats, XP, day streaks and mistake/strength patterns."""
    user_id: str = Field(default_factory=_new_user_id)
    start_date: str = Field(default_factory=_utc_now)
    last_active: Optional[str] = None
    stats: Dict[str, float] = Field(default_factory=lambda: {stat: 0.0 for stat in DEFAULT_STATS})
    completed_challenges: List[str] = Field(default_factory=list)
    attempt_history: List[AttemptRecord] = Field(default_factory=list)
    total_xp: int = 0
    current_streak: int = Field(default=0, description="Consecutive active calendar days")
    longest_streak: int = 0
    mistakes: Dict[str, FrequencyRecord] = Field(default_factory=dict)
    strengths: Dict[str, FrequencyRecord] = Field(default_factory=dict)
