"""
Built-in challenge catalogue.

Each lookup builds fresh Challenge instances, so element edits made during
one session never leak into the next.
"""

from typing import Callable, Dict, List, Optional

from .challenge import Challenge
from .layout_element import LayoutElement

INK = '#121417'
PAPER = '#F4F2EE'
SLATE = '#4F5D75'
WHITE = '#FFFFFF'


def _first_attention() -> Challenge:
    return Challenge(
        id='hierarchy_1',
        title='First Attention',
        description='Adjust this login form so users notice the sign-in button first',
        domain='hierarchy',
        difficulty=2,
        estimated_time=3,
        elements=(
            LayoutElement('heading', 'heading', x=100, y=80, width=300, height=40,
                          font_size=24, font_weight=600, color=INK, background_color=PAPER,
                          content='Welcome Back', semantic_role='normal'),
            LayoutElement('email', 'input', x=100, y=150, width=300, height=45,
                          font_size=16, font_weight=400, color=INK, background_color=WHITE,
                          content='Email', semantic_role='normal'),
            LayoutElement('password', 'input', x=100, y=210, width=300, height=45,
                          font_size=16, font_weight=400, color=INK, background_color=WHITE,
                          content='Password', semantic_role='normal'),
            LayoutElement('signin', 'button', x=100, y=280, width=140, height=42,
                          font_size=16, font_weight=500, color=PAPER, background_color=SLATE,
                          content='Sign In', semantic_role='primary'),
            LayoutElement('forgot', 'button', x=260, y=280, width=140, height=42,
                          font_size=16, font_weight=400, color=SLATE, background_color=PAPER,
                          content='Forgot Password', semantic_role='secondary'),
        ),
        goal='Make the Sign In button capture attention first',
        success_criteria=(
            ('hierarchyStrength', '>', 0.5),
            ('firstAttentionCorrect', '==', True),
        )
    )


def _visual_weight() -> Challenge:
    return Challenge(
        id='hierarchy_2',
        title='Visual Weight',
        description='Create clear visual hierarchy in this pricing card',
        domain='hierarchy',
        difficulty=4,
        estimated_time=5,
        elements=(
            LayoutElement('plan', 'heading', x=150, y=100, width=200, height=30,
                          font_size=18, font_weight=500, color=INK, background_color=PAPER,
                          content='Professional', semantic_role='secondary'),
            LayoutElement('price', 'heading', x=150, y=140, width=200, height=50,
                          font_size=32, font_weight=700, color=INK, background_color=PAPER,
                          content='$49/mo', semantic_role='primary'),
            LayoutElement('feature1', 'text', x=150, y=210, width=200, height=25,
                          font_size=14, font_weight=400, color=INK, background_color=PAPER,
                          content='Unlimited projects', semantic_role='normal'),
            LayoutElement('feature2', 'text', x=150, y=240, width=200, height=25,
                          font_size=14, font_weight=400, color=INK, background_color=PAPER,
                          content='Priority support', semantic_role='normal'),
            LayoutElement('cta', 'button', x=150, y=290, width=200, height=44,
                          font_size=16, font_weight=600, color=PAPER, background_color=SLATE,
                          content='Get Started', semantic_role='primary'),
        ),
        goal='Ensure price is most prominent, then CTA, then features',
        success_criteria=(
            ('hierarchyStrength', '>', 0.65),
            ('cognitiveLoad', '<', 0.5),
        )
    )


def _contrast_crisis() -> Challenge:
    return Challenge(
        id='accessibility_1',
        title='Contrast Crisis',
        description='Fix the color contrast issues in this alert message',
        domain='accessibility',
        difficulty=3,
        estimated_time=4,
        elements=(
            LayoutElement('alert', 'text', x=100, y=100, width=400, height=80,
                          font_size=16, font_weight=400, color='#8B8B8B', background_color='#D6CFC4',
                          content='Your session will expire in 5 minutes', semantic_role='primary'),
            LayoutElement('dismiss', 'button', x=340, y=190, width=80, height=35,
                          font_size=14, font_weight=500, color='#A0A0A0', background_color='#C0C0C0',
                          content='Dismiss', semantic_role='secondary'),
        ),
        goal='Achieve WCAG AA contrast compliance (4.5:1 for normal text)',
        success_criteria=(
            ('contrastCompliance', '==', 1),
        )
    )


def _touch_target_test() -> Challenge:
    nav = [('home', 50, 'Home'), ('search', 150, 'Search'), ('profile', 250, 'Profile')]
    return Challenge(
        id='accessibility_2',
        title='Touch Target Test',
        description='Make these mobile navigation buttons accessible',
        domain='accessibility',
        difficulty=2,
        estimated_time=3,
        elements=tuple(
            LayoutElement(element_id, 'button', x=x, y=400, width=35, height=35,
                          font_size=14, font_weight=400, color=PAPER, background_color=SLATE,
                          content=label, semantic_role='normal')
            for element_id, x, label in nav
        ),
        goal='Meet minimum touch target size of 44x44px',
        success_criteria=(
            ('hitTargetCompliance', '==', 1),
        )
    )


def _rhythm_and_consistency() -> Challenge:
    return Challenge(
        id='spacing_1',
        title='Rhythm & Consistency',
        description='Create consistent spacing in this card layout',
        domain='spacing',
        difficulty=5,
        estimated_time=6,
        elements=(
            LayoutElement('title', 'heading', x=120, y=80, width=260, height=30,
                          font_size=20, font_weight=600, color=INK, background_color=PAPER,
                          margin=15, padding=12, content='Article Title', semantic_role='primary'),
            LayoutElement('meta', 'text', x=120, y=120, width=260, height=20,
                          font_size=14, font_weight=400, color=SLATE, background_color=PAPER,
                          margin=8, padding=4, content='Published 2 days ago', semantic_role='normal'),
            LayoutElement('body', 'text', x=120, y=155, width=260, height=60,
                          font_size=16, font_weight=400, color=INK, background_color=PAPER,
                          margin=20, padding=8, content='This is the article preview text...',
                          semantic_role='normal'),
            LayoutElement('read', 'button', x=120, y=235, width=120, height=40,
                          font_size=15, font_weight=500, color=PAPER, background_color=SLATE,
                          margin=12, padding=10, content='Read More', semantic_role='secondary'),
        ),
        goal='Establish consistent spacing rhythm',
        success_criteria=(
            ('spacingConsistency', '>', 0.7),
            ('visualNoise', '<', 0.4),
        )
    )


_BUILDERS: Dict[str, Callable[[], Challenge]] = {
    'hierarchy_1': _first_attention,
    'hierarchy_2': _visual_weight,
    'accessibility_1': _contrast_crisis,
    'accessibility_2': _touch_target_test,
    'spacing_1': _rhythm_and_consistency
}


def get_all_challenges() -> List[Challenge]:
    """Return fresh instances of every built-in challenge, in catalogue order."""
    return [build() for build in _BUILDERS.values()]


def get_challenge_by_id(challenge_id: str) -> Optional[Challenge]:
    build = _BUILDERS.get(challenge_id)
    return build() if build else None
