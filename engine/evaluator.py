"""
Evaluation of trigger responses against a definition's conditions.
"""

from typing import Any, Dict, List

from models import Trigger
from validations import parse_interval


class FieldLookupError(LookupError):
    """Raised when a condition field cannot be read as a number from a response."""


def evaluate_operator(value: float, operator: str, threshold: float) -> bool:
    if operator == ">":
        return value > threshold
    if operator == "<":
        return value < threshold
    if operator == ">=":
        return value >= threshold
    if operator == "<=":
        return value <= threshold
    if operator == "==":
        return value == threshold
    if operator == "!=":
        return value != threshold
    return False


def get_field_value(payload: Dict[str, Any], field: str) -> float:
    """Read a numeric value at a dotted path, e.g. ``sensor.temperature``."""
    current: Any = payload
    for part in field.split("."):
        if not isinstance(current, dict):
            raise FieldLookupError(f"field '{part}' is not an object")
        if part not in current:
            raise FieldLookupError(f"field '{part}' not found")
        current = current[part]

    if isinstance(current, bool) or not isinstance(current, (int, float)):
        raise FieldLookupError(f"field '{field}' is not a number")
    return float(current)


def evaluate_conditions(payload: Dict[str, Any], trigger: Trigger) -> bool:
    for condition in trigger.conditions:
        value = get_field_value(payload, condition.field)
        if not evaluate_operator(value, condition.operator, condition.threshold):
            return False
    return True


def apply_condition_logic(results: List[bool], logic: str) -> bool:
    """Combine per-trigger results; "or" needs any, anything else needs all."""
    if not results:
        return True
    if logic == "or":
        return any(results)
    return all(results)
