from .evaluator import (
    FieldLookupError,
    apply_condition_logic,
    evaluate_conditions,
    evaluate_operator,
    get_field_value,
    parse_interval,
)
from .runner import AutomationRunError, AutomationRunner, Executor

__all__ = [
    "AutomationRunError",
    "AutomationRunner",
    "Executor",
    "FieldLookupError",
    "apply_condition_logic",
    "evaluate_conditions",
    "evaluate_operator",
    "get_field_value",
    "parse_interval",
]
