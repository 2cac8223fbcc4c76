"""
Form-level checks on an AutomationDefinition before it is serialized and
submitted. Only the first violated rule is reported.
"""

import math
import re
from datetime import timedelta
from typing import Optional

from models import OPERATORS, AutomationDefinition

DURATION_PATTERN = re.compile(r"([0-9]+)(ms|s|m|h)")

_UNITS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
}

# Smallest accepted magnitude per unit; m and h have no lower bound.
_MINIMUM_BY_UNIT = {"s": 1, "ms": 1000}


class DefinitionValidationError(ValueError):
    """First rule an automation definition violates.

    ``field`` is the dotted path of the offending input (``interval``,
    ``triggers[0].device``, ``actions`` ...) so a form can highlight it.
    """

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


def parse_interval(text: str) -> timedelta:
    match = DURATION_PATTERN.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"invalid interval: {text!r}")
    return int(match.group(1)) * _UNITS[match.group(2)]


def _check_interval(interval: str) -> Optional[DefinitionValidationError]:
    interval = interval.strip()
    if not interval:
        return DefinitionValidationError("Interval is required", "interval")
    match = DURATION_PATTERN.fullmatch(interval)
    if match is None:
        return DefinitionValidationError(
            "Interval must be a valid duration (e.g. '5m', '1h', '30s')", "interval"
        )
    amount, unit = int(match.group(1)), match.group(2)
    if amount < _MINIMUM_BY_UNIT.get(unit, 0):
        return DefinitionValidationError("Interval must be at least 1s", "interval")
    return None


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_definition(definition: AutomationDefinition) -> Optional[DefinitionValidationError]:
    """Return the first violation, or None when the definition is valid."""
    error = _check_interval(definition.interval)
    if error is not None:
        return error

    for t, trigger in enumerate(definition.triggers):
        path = f"triggers[{t}]"
        if not trigger.device:
            return DefinitionValidationError("Each trigger must have a device selected", f"{path}.device")
        if not trigger.action:
            return DefinitionValidationError("Each trigger must have an action selected", f"{path}.action")
        if not trigger.conditions:
            return DefinitionValidationError("Each trigger must have at least one condition", f"{path}.conditions")
        for c, condition in enumerate(trigger.conditions):
            condition_path = f"{path}.conditions[{c}]"
            if not condition.field.strip():
                return DefinitionValidationError("Condition field cannot be empty", f"{condition_path}.field")
            if not _is_number(condition.threshold):
                return DefinitionValidationError("Condition threshold is required", f"{condition_path}.threshold")
            if condition.operator not in OPERATORS:
                return DefinitionValidationError(
                    f"Condition operator must be one of {', '.join(OPERATORS)}", f"{condition_path}.operator"
                )

    if not definition.actions:
        return DefinitionValidationError("At least one action is required", "actions")

    for a, action in enumerate(definition.actions):
        path = f"actions[{a}]"
        if not action.device:
            return DefinitionValidationError("Each action must have a device selected", f"{path}.device")
        if not action.action:
            return DefinitionValidationError("Each action must have an action selected", f"{path}.action")

    return None


def ensure_valid_definition(definition: AutomationDefinition) -> AutomationDefinition:
    """Raise DefinitionValidationError for an invalid definition, else return it."""
    error = validate_definition(definition)
    if error is not None:
        raise error
    return definition
