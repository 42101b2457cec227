"""
Utilities Module for the Layout Perception Coach

Provides input coercion, configuration validation and the shared
validation error types.
"""

from .validation import (
    parse_leading_int,
    parse_number,
    coerce_non_negative,
    coerce_positive,
    coerce_font_weight,
    coerce_role,
    merge_config,
    validate_engine_config,
    validate_scoring_config,
    ValidationError,
    UnknownPropertyError,
    InvalidPropertyValueError,
    VALID_FONT_WEIGHTS,
    VALID_SEMANTIC_ROLES,
    VALID_DOMAINS
)

__all__ = [
    # Edit-log / element input coercion
    'parse_leading_int',
    'parse_number',
    'coerce_non_negative',
    'coerce_positive',
    'coerce_font_weight',
    'coerce_role',

    # Component configuration
    'merge_config',
    'validate_engine_config',
    'validate_scoring_config',

    # Errors and constants
    'ValidationError',
    'UnknownPropertyError',
    'InvalidPropertyValueError',
    'VALID_FONT_WEIGHTS',
    'VALID_SEMANTIC_ROLES',
    'VALID_DOMAINS'
]
