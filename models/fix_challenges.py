"""
"Fix this layout" challenge catalogue.

These challenges start from a deliberately flawed layout. Each element lists
the issues it has and the property values that correct them; the learner's
edit log is scored by the edit-log ScoringSystem and the attempt passes when
the score reaches the challenge's minimum.
"""

import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

# Weakest progress stat -> category to practise
STAT_CATEGORIES = {
    'hierarchy': 'Layout & Spacing',
    'accessibility': 'Accessibility',
    'decisionSpeed': 'Form Design',
    'cognitiveLoad': 'Visual Hierarchy'
}

DEFAULT_CATEGORY = 'Form Design'


@dataclass(frozen=True)
class Theory:
    """Design principle explained alongside a challenge."""
    name: str
    description: str
    reference: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'description': self.description, 'reference': self.reference}


@dataclass(frozen=True)
class FixElement:
    """Starting element with its known issues and correcting values."""
    id: str
    type: str
    html: str
    issues: Tuple[str, ...] = ()
    correct: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type,
            'html': self.html,
            'issues': list(self.issues),
            'correct': dict(self.correct)
        }


@dataclass(frozen=True)
class FixChallenge:
    """Flawed starting layout plus pass threshold, theory and hints."""

    id: str
    title: str
    category: str
    difficulty: str
    estimated_time: str
    description: str
    elements: Tuple[FixElement, ...] = ()
    min_score: float = 70
    required: Tuple[str, ...] = ()
    theories: Tuple[Theory, ...] = ()
    hints: Tuple[str, ...] = ()

    def get_element(self, element_id: str) -> Optional[FixElement]:
        return next((e for e in self.elements if e.id == element_id), None)

    def is_passing(self, score: float) -> bool:
        return score >= self.min_score

    def correct_modifications(self) -> List[Dict[str, Any]]:
        """Edit log that applies every correcting value, in element order."""
        return [
            {'elementId': element.id, 'property': prop, 'value': value}
            for element in self.elements
            for prop, value in element.correct.items()
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'category': self.category,
            'difficulty': self.difficulty,
            'estimatedTime': self.estimated_time,
            'description': self.description,
            'initialState': {'elements': [e.to_dict() for e in self.elements]},
            'successCriteria': {'minScore': self.min_score, 'required': list(self.required)},
            'theories': [t.to_dict() for t in self.theories],
            'hints': list(self.hints)
        }


def _registration_form() -> FixChallenge:
    def label(element_id, text, fixed):
        return FixElement(
            element_id, 'label',
            f'<div class="ui-element" data-element-id="{element_id}" '
            f'style="font-size:11px;color:#999;margin-bottom:2px;">{text}</div>',
            issues=('font-too-small', 'poor-contrast', 'no-capitalization'),
            correct={'fontSize': '14px', 'color': '#374151', 'text': fixed}
        )

    def field_input(element_id, kind):
        return FixElement(
            element_id, 'input',
            f'<input class="ui-element" data-element-id="{element_id}" type="{kind}" '
            f'style="width:100%;padding:4px;font-size:13px;border:1px solid #ddd;margin-bottom:8px;">',
            issues=('padding-too-small', 'font-too-small'),
            correct={'padding': '12px', 'fontSize': '16px', 'border': '2px solid #D1D5DB'}
        )

    return FixChallenge(
        id='ch_001',
        title='Fix the Registration Form',
        category='Form Design',
        difficulty='Beginner',
        estimated_time='5-8 minutes',
        description='This registration form has multiple UI/UX issues. Fix them using the toolbox.',
        elements=(
            label('label_name', 'name', 'Name:'),
            field_input('input_name', 'text'),
            label('label_email', 'email address', 'Email Address:'),
            field_input('input_email', 'email'),
            FixElement(
                'button_submit', 'button',
                '<button class="ui-element" data-element-id="button_submit" style="padding:6px 12px;'
                'background:#999;color:#fff;border:none;font-size:12px;cursor:pointer;">submit</button>',
                issues=('padding-too-small', 'poor-color', 'font-too-small', 'poor-label'),
                correct={'padding': '14px 28px', 'background': '#6366F1', 'fontSize': '16px',
                         'text': 'Create Account'}
            ),
        ),
        min_score=70,
        required=(
            'All labels properly capitalized',
            'Input fields have adequate padding (12px+)',
            'Button is prominent and clearly labeled',
            'Font sizes are readable (14px+)'
        ),
        theories=(
            Theory('WCAG 2.1 - Touch Targets',
                   'Interactive elements should be at least 44x44 pixels to accommodate different users '
                   'and prevent errors.',
                   'https://www.w3.org/WAI/WCAG21/Understanding/target-size.html'),
            Theory("Fitts' Law",
                   'The time to acquire a target is a function of the distance to and size of the target. '
                   'Larger buttons are easier to click.',
                   'https://lawsofux.com/fittss-law/'),
            Theory('Visual Hierarchy',
                   'Proper capitalization, sizing, and contrast create clear visual hierarchy that guides '
                   'user attention.',
                   'https://www.nngroup.com/articles/visual-hierarchy-ux-definition/'),
        ),
        hints=(
            'Start with the button - make it stand out as the primary action',
            'Labels should be capitalized and have proper punctuation',
            'Input fields need larger padding and better borders for accessibility'
        )
    )


def _card_spacing() -> FixChallenge:
    return FixChallenge(
        id='ch_002',
        title='Improve Card Layout Spacing',
        category='Layout & Spacing',
        difficulty='Intermediate',
        estimated_time='8-10 minutes',
        description='This card layout feels cramped. Improve the spacing and hierarchy.',
        elements=(
            FixElement(
                'card_title', 'heading',
                '<h3 class="ui-element" data-element-id="card_title" '
                'style="font-size:16px;margin:0;margin-bottom:4px;">Product Name</h3>',
                issues=('insufficient-margin', 'font-too-small'),
                correct={'fontSize': '20px', 'marginBottom': '12px'}
            ),
            FixElement(
                'card_price', 'text',
                '<p class="ui-element" data-element-id="card_price" '
                'style="font-size:18px;margin:0;margin-bottom:4px;font-weight:700;">$99</p>',
                issues=('insufficient-spacing',),
                correct={'marginBottom': '16px'}
            ),
            FixElement(
                'card_description', 'text',
                '<p class="ui-element" data-element-id="card_description" '
                'style="font-size:13px;margin:0;line-height:1.2;margin-bottom:6px;">'
                'This is a brief description of the product that explains its features.</p>',
                issues=('font-too-small', 'line-height-too-tight'),
                correct={'fontSize': '15px', 'lineHeight': '1.6', 'marginBottom': '20px'}
            ),
            FixElement(
                'card_button', 'button',
                '<button class="ui-element" data-element-id="card_button" style="padding:8px 12px;'
                'background:#6366F1;color:#fff;border:none;width:100%;font-size:13px;">Add to Cart</button>',
                issues=('padding-insufficient',),
                correct={'padding': '12px 24px', 'fontSize': '15px'}
            ),
        ),
        min_score=70,
        required=(
            'Adequate spacing between elements',
            'Readable font sizes throughout',
            'Proper line-height for text content',
            'Button has sufficient padding'
        ),
        theories=(
            Theory('Law of Proximity (Gestalt)',
                   'Objects near each other are perceived as related. Proper spacing creates visual '
                   'groupings and hierarchy.',
                   'https://lawsofux.com/law-of-proximity/'),
            Theory('White Space',
                   'White space (negative space) improves readability and draws attention to important '
                   'elements.',
                   'https://www.nngroup.com/articles/whitespace-principles-ux-design/'),
        ),
        hints=(
            'Increase spacing between distinct groups of information',
            'Improve line-height for better readability',
            'Give the button more breathing room with padding'
        )
    )


def _color_contrast() -> FixChallenge:
    return FixChallenge(
        id='ch_003',
        title='Fix Color Contrast Issues',
        category='Accessibility',
        difficulty='Intermediate',
        estimated_time='6-8 minutes',
        description='This interface has poor color contrast. Fix it to meet WCAG AA standards.',
        elements=(
            FixElement(
                'heading', 'heading',
                '<h2 class="ui-element" data-element-id="heading" '
                'style="color:#999;font-size:24px;margin-bottom:16px;">Important Notice</h2>',
                issues=('poor-contrast',),
                correct={'color': '#1F2937'}
            ),
            FixElement(
                'body_text', 'text',
                '<p class="ui-element" data-element-id="body_text" style="color:#AAA;font-size:14px;'
                'line-height:1.6;">This is some important information that users need to read carefully.</p>',
                issues=('poor-contrast', 'font-too-small'),
                correct={'color': '#374151', 'fontSize': '16px'}
            ),
            FixElement(
                'link', 'link',
                '<a href="#" class="ui-element" data-element-id="link" '
                'style="color:#B8B8FF;text-decoration:none;">Learn More</a>',
                issues=('poor-contrast', 'no-underline'),
                correct={'color': '#4F46E5', 'textDecoration': 'underline'}
            ),
        ),
        min_score=80,
        required=(
            'All text meets WCAG AA contrast ratio (4.5:1)',
            'Links are clearly identifiable',
            'Text is readable at specified sizes'
        ),
        theories=(
            Theory('WCAG 2.1 - Contrast (Minimum)',
                   'Text must have a contrast ratio of at least 4.5:1 for normal text and 3:1 for large text.',
                   'https://www.w3.org/WAI/WCAG21/Understanding/contrast-minimum.html'),
            Theory('Color Accessibility',
                   'Color should not be the only means of conveying information. Use text, icons, or '
                   'patterns as well.',
                   'https://www.nngroup.com/articles/color-accessibility/'),
        ),
        hints=(
            'Check contrast ratios - text should be much darker',
            'Links need to be distinguishable from regular text',
            'Consider users with visual impairments'
        )
    )


_BUILDERS: Dict[str, Callable[[], FixChallenge]] = {
    'ch_001': _registration_form,
    'ch_002': _card_spacing,
    'ch_003': _color_contrast
}


def get_fix_challenges() -> List[FixChallenge]:
    """Return every fix challenge, in catalogue order."""
    return [build() for build in _BUILDERS.values()]


def get_fix_challenge_by_id(challenge_id: str) -> Optional[FixChallenge]:
    build = _BUILDERS.get(challenge_id)
    return build() if build else None


def get_challenges_by_difficulty(difficulty: str) -> List[FixChallenge]:
    return [c for c in get_fix_challenges() if c.difficulty == difficulty]


def get_challenges_by_category(category: str) -> List[FixChallenge]:
    return [c for c in get_fix_challenges() if c.category == category]


def get_random_challenge(rng: Optional[random.Random] = None) -> FixChallenge:
    return (rng or random.Random()).choice(get_fix_challenges())


def get_recommended_challenge(progress: Any) -> FixChallenge:
    """
    Recommend a fix challenge for the learner's weakest progress stat.

    Args:
        progress: Object with a 'stats' mapping (ProgressState) or a mapping
                  holding 'stats'

    Returns:
        First challenge in the stat's category; the first catalogue entry
        when the category has none
    """
    stats: Mapping[str, float] = progress['stats'] if isinstance(progress, Mapping) else progress.stats

    category = DEFAULT_CATEGORY
    if stats:
        # min() keeps the first of equally weak stats
        weakest = min(stats, key=stats.get)
        category = STAT_CATEGORIES.get(weakest, DEFAULT_CATEGORY)

    candidates = get_challenges_by_category(category)
    challenge = candidates[0] if candidates else get_fix_challenges()[0]

    logger.debug(f"Recommended {challenge.id} for category '{category}'")

    return challenge
