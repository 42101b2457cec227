"""
Validation utilities for the Layout Perception Coach

This module provides validation and coercion helpers for layout element
input, edit-log values and component configuration dictionaries.
"""

import re
import math
from enum import Enum
from typing import Dict, Any, List, Optional
import logging

logger = logging.getLogger(__name__)

# Allowed typography weights
VALID_FONT_WEIGHTS = {300, 400, 500, 600, 700}

# Semantic roles understood by the perception engine
VALID_SEMANTIC_ROLES = {'primary', 'secondary', 'normal'}

# Challenge domains
VALID_DOMAINS = {'hierarchy', 'accessibility', 'spacing', 'forms'}

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')
_LEADING_NUMBER = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+))')


class ValidationError(Exception):
    """Custom exception for validation errors"""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class UnknownPropertyError(ValidationError):
    """Raised when an element update names a property outside the updatable set."""


class InvalidPropertyValueError(ValidationError):
    """Raised when an element update carries a value that cannot be coerced."""


def parse_leading_int(value: Any) -> Optional[int]:
    """
    Parse the leading integer of an edit-log value.

    Accepts ints, floats (truncated) and strings such as "16" or "16px".

    Args:
        value: Raw value from a modification event

    Returns:
        Parsed integer, or None when no leading integer exists
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None

    if value is None:
        return None

    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a numeric property value.

    Args:
        value: Number or string with a leading decimal ("12", "12.5px")

    Returns:
        Float value, or None if the value is not numeric
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return None
        number = float(match.group(1))

    return number if math.isfinite(number) else None


def coerce_non_negative(value: Any, default: float, field: str) -> float:
    """
    Coerce a geometry/spacing value, falling back to the default when invalid.

    Args:
        value: Raw value (None means missing)
        default: Value used for missing or invalid input
        field: Field name, used for logging

    Returns:
        Non-negative number
    """
    if value is None:
        return default

    number = parse_number(value)
    if number is None or number < 0:
        logger.warning(f"Invalid {field} value {value!r}, using default {default}")
        return default

    return number


def coerce_positive(value: Any, default: float, field: str) -> float:
    """Coerce a strictly positive value (font size), with default fallback."""
    if value is None:
        return default

    number = parse_number(value)
    if number is None or number <= 0:
        logger.warning(f"Invalid {field} value {value!r}, using default {default}")
        return default

    return number


def coerce_font_weight(value: Any, default: int = 400) -> int:
    """Coerce a font weight into the allowed set, with default fallback."""
    if value is None:
        return default

    number = parse_number(value)
    if number is None or int(number) != number or int(number) not in VALID_FONT_WEIGHTS:
        logger.warning(f"Invalid fontWeight value {value!r}, using default {default}")
        return default

    return int(number)


def coerce_role(value: Any, default: str = 'normal') -> str:
    """Coerce a semantic role name, with default fallback."""
    if value is None:
        return default

    if isinstance(value, Enum):
        value = value.value

    role = str(value).strip().lower()
    if role not in VALID_SEMANTIC_ROLES:
        logger.warning(f"Invalid semanticRole value {value!r}, using default {default}")
        return default

    return role


def merge_config(defaults: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Merge caller overrides over a default configuration.

    Dictionary values present on both sides are merged one level deep, so
    overriding a single weight keeps the remaining default weights.

    Args:
        defaults: Default configuration
        overrides: Caller configuration (may be None)

    Returns:
        New merged configuration dictionary
    """
    merged = dict(defaults)

    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value

    return merged


def _validate_positive_numbers(config: Dict[str, Any], keys: List[str], errors: List[str]) -> None:
    for key in keys:
        if key in config:
            value = config[key]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                errors.append(f"{key} must be a positive number")


def validate_engine_config(config: Dict[str, Any]) -> tuple[bool, List[str]]:
    """
    Validate perception engine configuration parameters.

    Args:
        config: Configuration dictionary

    Returns:
        tuple: (is_valid, list_of_errors)
    """
    errors = []

    if not isinstance(config, dict):
        return False, ["Engine config must be a dictionary"]

    _validate_positive_numbers(config, [
        'viewport_width',
        'viewport_height',
        'noise_elements',
        'noise_colors',
        'hierarchy_variance_scale',
        'spacing_variance_scale',
        'isolation_radius',
        'button_proximity',
        'min_target_size',
        'row_bucket_height',
        'max_comfortable_elements',
        'max_comfortable_colors',
        'max_comfortable_font_sizes',
    ], errors)

    return len(errors) == 0, errors


def validate_scoring_config(config: Dict[str, Any]) -> tuple[bool, List[str]]:
    """
    Validate edit-log scoring and domain weight configuration.

    Args:
        config: Configuration dictionary

    Returns:
        tuple: (is_valid, list_of_errors)
    """
    errors = []

    if not isinstance(config, dict):
        return False, ["Scoring config must be a dictionary"]

    if 'weights' in config:
        weights = config['weights']
        if not isinstance(weights, dict):
            errors.append("weights must be a dictionary")
        else:
            valid_components = {'cognitive_load', 'constraints', 'improvement', 'efficiency'}
            for component, weight in weights.items():
                if component not in valid_components:
                    errors.append(f"Invalid component '{component}'. Valid components: {valid_components}")

                if isinstance(weight, bool) or not isinstance(weight, (int, float)) or not (0 <= weight <= 1):
                    errors.append(f"Weight for '{component}' must be a number between 0 and 1")

    if 'domain_weights' in config:
        domain_weights = config['domain_weights']
        if not isinstance(domain_weights, dict):
            errors.append("domain_weights must be a dictionary")
        else:
            for domain in domain_weights:
                if domain not in VALID_DOMAINS:
                    errors.append(f"Invalid domain '{domain}'. Valid domains: {VALID_DOMAINS}")

    _validate_positive_numbers(config, ['time_allowance', 'clue_penalty'], errors)

    return len(errors) == 0, errors
