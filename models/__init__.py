"""
Component Model Module

Layout element records, colour maths, the Challenge model, the
built-in challenge catalogue and the "fix this layout" catalogue.
"""

from .color import hex_to_rgb, relative_luminance, contrast_ratio, MAX_CONTRAST
from .layout_element import (
    LayoutElement,
    ElementProperty,
    SemanticRole,
    ROLE_MULTIPLIERS,
    INTERACTIVE_TYPES
)
from .challenge import Challenge, Comparator, SuccessCriterion
from .challenge_library import get_all_challenges, get_challenge_by_id
from .fix_challenges import (
    FixChallenge,
    FixElement,
    Theory,
    STAT_CATEGORIES,
    get_fix_challenges,
    get_fix_challenge_by_id,
    get_challenges_by_difficulty,
    get_challenges_by_category,
    get_random_challenge,
    get_recommended_challenge
)

__all__ = [
    'hex_to_rgb',
    'relative_luminance',
    'contrast_ratio',
    'MAX_CONTRAST',
    'LayoutElement',
    'ElementProperty',
    'SemanticRole',
    'ROLE_MULTIPLIERS',
    'INTERACTIVE_TYPES',
    'Challenge',
    'Comparator',
    'SuccessCriterion',
    'get_all_challenges',
    'get_challenge_by_id',
    'FixChallenge',
    'FixElement',
    'Theory',
    'STAT_CATEGORIES',
    'get_fix_challenges',
    'get_fix_challenge_by_id',
    'get_challenges_by_difficulty',
    'get_challenges_by_category',
    'get_random_challenge',
    'get_recommended_challenge'
]
