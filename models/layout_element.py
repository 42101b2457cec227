#!/usr/bin/env python3
"""
Layout Element Component Model

This module defines the layout element record that the perception engine
analyzes, together with its derived visual properties (contrast, visual
weight) and the single typed update operation used by the rendering layer.

"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union
import logging

from utils.validation import (
    UnknownPropertyError,
    InvalidPropertyValueError,
    coerce_non_negative,
    coerce_positive,
    coerce_font_weight,
    coerce_role,
    parse_number,
    VALID_FONT_WEIGHTS,
    VALID_SEMANTIC_ROLES
)
from .color import contrast_ratio, MAX_CONTRAST

logger = logging.getLogger(__name__)

# Element types users can click or type into
INTERACTIVE_TYPES = frozenset({'button', 'input'})


class SemanticRole(str, Enum):
    """Declared importance tier of a layout element."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    NORMAL = "normal"

    @property
    def multiplier(self) -> float:
        return ROLE_MULTIPLIERS[self]


ROLE_MULTIPLIERS = {
    SemanticRole.PRIMARY: 1.5,
    SemanticRole.SECONDARY: 1.0,
    SemanticRole.NORMAL: 0.7
}


class ElementProperty(Enum):
    """Closed set of properties that may be edited on a layout element."""
    X = "x"
    Y = "y"
    WIDTH = "width"
    HEIGHT = "height"
    FONT_SIZE = "fontSize"
    FONT_WEIGHT = "fontWeight"
    COLOR = "color"
    BACKGROUND_COLOR = "backgroundColor"
    PADDING = "padding"
    MARGIN = "margin"
    BORDER_RADIUS = "borderRadius"
    SEMANTIC_ROLE = "semanticRole"
    Z_INDEX = "zIndex"
    CONTENT = "content"

    @property
    def attribute(self) -> str:
        return _ATTRIBUTES[self]


_ATTRIBUTES = {
    ElementProperty.X: 'x',
    ElementProperty.Y: 'y',
    ElementProperty.WIDTH: 'width',
    ElementProperty.HEIGHT: 'height',
    ElementProperty.FONT_SIZE: 'font_size',
    ElementProperty.FONT_WEIGHT: 'font_weight',
    ElementProperty.COLOR: 'color',
    ElementProperty.BACKGROUND_COLOR: 'background_color',
    ElementProperty.PADDING: 'padding',
    ElementProperty.MARGIN: 'margin',
    ElementProperty.BORDER_RADIUS: 'border_radius',
    ElementProperty.SEMANTIC_ROLE: 'semantic_role',
    ElementProperty.Z_INDEX: 'z_index',
    ElementProperty.CONTENT: 'content'
}

_DEFAULTS = {
    'x': 0,
    'y': 0,
    'width': 100,
    'height': 40,
    'font_size': 16,
    'font_weight': 400,
    'color': '#000000',
    'background_color': '#FFFFFF',
    'padding': 8,
    'margin': 0,
    'border_radius': 0,
    'semantic_role': 'normal',
    'z_index': 1,
    'content': ''
}


def _number(value: float) -> Union[int, float]:
    """Keep whole numbers as ints so rendered records stay tidy."""
    return int(value) if float(value).is_integer() else value


def _coerce_color(value: Any, default: str) -> str:
    return default if value is None else str(value)


def _coerce_z_index(value: Any, default: int) -> int:
    if value is None:
        return default

    number = parse_number(value)
    if number is None:
        logger.warning(f"Invalid zIndex value {value!r}, using default {default}")
        return default

    return int(number)


@dataclass
class LayoutElement:
    """
    One element of a user-built layout.

    Missing or invalid values are replaced with defaults at construction,
    so analysis code can rely on every field being well-formed.
    """

    id: str
    type: str = 'text'
    x: float = None
    y: float = None
    width: float = None
    height: float = None
    font_size: float = None
    font_weight: int = None
    color: str = None
    background_color: str = None
    padding: float = None
    margin: float = None
    border_radius: float = None
    semantic_role: SemanticRole = None
    z_index: int = None
    content: str = None

    def __post_init__(self):
        self.id = str(self.id)
        self.type = str(self.type or 'text').lower()

        for field in ('x', 'y', 'width', 'height', 'padding', 'margin', 'border_radius'):
            value = coerce_non_negative(getattr(self, field), _DEFAULTS[field], field)
            setattr(self, field, _number(value))

        self.font_size = _number(coerce_positive(self.font_size, _DEFAULTS['font_size'], 'font_size'))
        self.font_weight = coerce_font_weight(self.font_weight, _DEFAULTS['font_weight'])
        self.color = _coerce_color(self.color, _DEFAULTS['color'])
        self.background_color = _coerce_color(self.background_color, _DEFAULTS['background_color'])
        self.semantic_role = SemanticRole(coerce_role(self.semantic_role, _DEFAULTS['semantic_role']))
        self.z_index = _coerce_z_index(self.z_index, _DEFAULTS['z_index'])
        self.content = _DEFAULTS['content'] if self.content is None else str(self.content)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LayoutElement':
        """
        Build an element from a rendering-layer record.

        Args:
            data: Mapping with 'id', 'type' and camelCase property names,
                  optionally nested under 'properties'

        Returns:
            LayoutElement instance
        """
        properties = dict(data.get('properties') or {})
        properties.update({k: v for k, v in data.items() if k != 'properties'})

        kwargs = {}
        for prop in ElementProperty:
            if prop.value in properties:
                kwargs[prop.attribute] = properties[prop.value]

        return cls(id=properties.get('id', ''), type=properties.get('type', 'text'), **kwargs)

    def update_property(self, name: Union[str, ElementProperty], value: Any) -> None:
        """
        Update one editable property.

        Args:
            name: Property name (camelCase wire name or ElementProperty)
            value: New value; numeric properties accept strings like "16px"

        Raises:
            UnknownPropertyError: If the name is not an editable property
            InvalidPropertyValueError: If the value cannot be coerced
        """
        try:
            prop = name if isinstance(name, ElementProperty) else ElementProperty(name)
        except ValueError:
            raise UnknownPropertyError(
                f"Unknown property '{name}' for element '{self.id}'",
                [f"Valid properties: {[p.value for p in ElementProperty]}"]
            )

        setattr(self, prop.attribute, _UPDATERS[prop](value))

    @property
    def contrast(self) -> float:
        """WCAG contrast ratio of foreground against background."""
        return contrast_ratio(self.color, self.background_color)

    @property
    def is_interactive(self) -> bool:
        return self.type in INTERACTIVE_TYPES

    @property
    def visual_weight(self) -> float:
        """Composite of size, contrast, vertical position and semantic role."""
        size_weight = (self.width * self.height) / 10000
        contrast_weight = self.contrast / MAX_CONTRAST
        position_weight = (1 - self.y / 1000) * 0.3 # Top elements get more weight

        return (size_weight + contrast_weight + position_weight) * self.semantic_role.multiplier

    def to_dict(self) -> Dict[str, Any]:
        """Render the element as a camelCase record."""
        record = {'id': self.id, 'type': self.type}
        for prop in ElementProperty:
            value = getattr(self, prop.attribute)
            record[prop.value] = value.value if isinstance(value, SemanticRole) else value

        return record


def _strict_number(validator: Callable[[float], bool], message: str) -> Callable[[Any], Union[int, float]]:
    def coerce(value: Any) -> Union[int, float]:
        number = parse_number(value)
        if number is None or not validator(number):
            raise InvalidPropertyValueError(f"{message}, got {value!r}")
        return _number(number)

    return coerce


def _strict_font_weight(value: Any) -> int:
    number = parse_number(value)
    if number is None or int(number) != number or int(number) not in VALID_FONT_WEIGHTS:
        raise InvalidPropertyValueError(
            f"fontWeight must be one of {sorted(VALID_FONT_WEIGHTS)}, got {value!r}"
        )
    return int(number)


def _strict_role(value: Any) -> SemanticRole:
    if isinstance(value, SemanticRole):
        return value

    role = str(value).strip().lower()
    if role not in VALID_SEMANTIC_ROLES:
        raise InvalidPropertyValueError(
            f"semanticRole must be one of {sorted(VALID_SEMANTIC_ROLES)}, got {value!r}"
        )
    return SemanticRole(role)


def _strict_text(value: Any) -> str:
    if value is None:
        raise InvalidPropertyValueError("Value must not be None")
    return str(value)


_non_negative = _strict_number(lambda n: n >= 0, "Value must be a non-negative number")

_UPDATERS = {
    ElementProperty.X: _non_negative,
    ElementProperty.Y: _non_negative,
    ElementProperty.WIDTH: _non_negative,
    ElementProperty.HEIGHT: _non_negative,
    ElementProperty.FONT_SIZE: _strict_number(lambda n: n > 0, "fontSize must be positive"),
    ElementProperty.FONT_WEIGHT: _strict_font_weight,
    ElementProperty.COLOR: _strict_text,
    ElementProperty.BACKGROUND_COLOR: _strict_text,
    ElementProperty.PADDING: _non_negative,
    ElementProperty.MARGIN: _non_negative,
    ElementProperty.BORDER_RADIUS: _non_negative,
    ElementProperty.SEMANTIC_ROLE: _strict_role,
    ElementProperty.Z_INDEX: lambda value: int(_strict_number(lambda n: True, "zIndex must be a number")(value)),
    ElementProperty.CONTENT: _strict_text
}
