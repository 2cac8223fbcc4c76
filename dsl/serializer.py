"""
Canonical text form of an AutomationDefinition.

The layout is fixed (two space indent unit) and list keys are only written
when their list is non-empty:

    interval: "5m"
    condition_logic: "and"
    triggers:
      - device: "Thermostat"
        action: "ReadTemp"
        conditions:
          - field: "temperature"
            operator: ">"
            threshold: 30
    actions:
      - device: "Fan"
        action: "TurnOn"

String values are quoted verbatim; an embedded double quote is not escaped.
"""

from typing import List

from models import AutomationDefinition

INDENT = "  "


def format_number(value: float) -> str:
    """Shortest text for a threshold: integral values drop the fractional part."""
    value = float(value)
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _quoted(key: str, value: str, depth: int = 0, item: bool = False) -> str:
    prefix = INDENT * depth + ("- " if item else "")
    return f'{prefix}{key}: "{value}"'


def serialize_definition(definition: AutomationDefinition) -> str:
    lines: List[str] = [_quoted("interval", definition.interval)]
    if definition.condition_logic:
        lines.append(_quoted("condition_logic", definition.condition_logic))

    if definition.triggers:
        lines.append("triggers:")
        for trigger in definition.triggers:
            lines.append(_quoted("device", trigger.device, 1, item=True))
            lines.append(_quoted("action", trigger.action, 2))
            if trigger.conditions:
                lines.append(f"{INDENT * 2}conditions:")
                for condition in trigger.conditions:
                    lines.append(_quoted("field", condition.field, 3, item=True))
                    lines.append(_quoted("operator", condition.operator, 4))
                    lines.append(f"{INDENT * 4}threshold: {format_number(condition.threshold)}")

    if definition.actions:
        lines.append("actions:")
        for action in definition.actions:
            lines.append(_quoted("device", action.device, 1, item=True))
            lines.append(_quoted("action", action.action, 2))

    return "\n".join(lines)
