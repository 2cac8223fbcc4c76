from .automation_validator import (
    CONDITION_LOGIC_VALUES,
    UnknownRegistryReferenceError,
    parse_and_validate_automation,
)
from .definition_validator import (
    DURATION_PATTERN,
    DefinitionValidationError,
    ensure_valid_definition,
    parse_interval,
    validate_definition,
)

__all__ = [
    "CONDITION_LOGIC_VALUES",
    "DURATION_PATTERN",
    "DefinitionValidationError",
    "UnknownRegistryReferenceError",
    "ensure_valid_definition",
    "parse_and_validate_automation",
    "parse_interval",
    "validate_definition",
]
