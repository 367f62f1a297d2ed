"""Domain validators. Pure validation functions."""

from activity_log.domain.validators.user_log_validator import (
    build_log_filter,
    parse_sort,
    validate_event_fields,
    validate_log_ids,
    validate_page,
)

__all__ = [
    "build_log_filter",
    "parse_sort",
    "validate_event_fields",
    "validate_log_ids",
    "validate_page",
]
