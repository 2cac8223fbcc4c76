"""
Edit session behind the automation form.

The form keeps user input as entered (threshold stays text) and rebuilds an
AutomationDefinition from it whenever a preview, validation or submission is
needed. Section ids come from counters owned by the session, so two sessions
never share numbering.
"""

import math
from dataclasses import dataclass, field
from itertools import count
from typing import Dict, List, Optional

from dsl import coerce_threshold, format_number, leading_number, parse, serialize
from log import get_logger
from models import Action, AutomationDefinition, Condition, Trigger
from registry import DeviceRegistry, Registry
from validations import DefinitionValidationError, validate_definition

logger = get_logger(__name__)


@dataclass
class ConditionRow:
    field: str = ""
    operator: str = ">"
    threshold: str = ""


@dataclass
class TriggerSection:
    id: int
    device: str = ""
    action: str = ""
    conditions: List[ConditionRow] = field(default_factory=list)


@dataclass
class ActionSection:
    id: int
    device: str = ""
    action: str = ""


def _strict_threshold(text: str) -> float:
    # NaN marks text the validator must reject instead of silently using 0.
    value = leading_number(text)
    return math.nan if value is None else value


class BuilderSession:
    def __init__(self, registries: Optional[Dict[str, Registry]] = None) -> None:
        self.registries = registries or {}
        self.interval = ""
        self.condition_logic = ""
        self.triggers: List[TriggerSection] = []
        self.actions: List[ActionSection] = []
        self._trigger_ids = count()
        self._action_ids = count()

    @classmethod
    def load(cls, text: str, registries: Optional[Dict[str, Registry]] = None) -> "BuilderSession":
        """Start a session editing an existing definition."""
        session = cls(registries)
        definition = parse(text)
        session.interval = definition.interval
        session.condition_logic = definition.condition_logic
        for trigger in definition.triggers:
            session.add_trigger(trigger)
        for action in definition.actions:
            session.add_action(action)
        logger.debug("builder_loaded", triggers=len(session.triggers), actions=len(session.actions))
        return session

    # -- registry lookups --------------------------------------------------

    def device_choices(self) -> List[str]:
        devices = self.registries.get("device")
        return [device.name for device in devices.all()] if devices else []

    def action_choices(self, device: str) -> List[str]:
        devices: Optional[DeviceRegistry] = self.registries.get("device")
        actions = self.registries.get("action")
        if not device or devices is None or actions is None:
            return []
        return [record.name for record in devices.actions_for_device(device, actions)]

    # -- triggers ----------------------------------------------------------

    def _trigger(self, trigger_id: int) -> TriggerSection:
        for section in self.triggers:
            if section.id == trigger_id:
                return section
        raise KeyError(f"no trigger section {trigger_id}")

    def add_trigger(self, data: Optional[Trigger] = None) -> TriggerSection:
        section = TriggerSection(id=next(self._trigger_ids))
        self.triggers.append(section)
        if data is None:
            self.add_condition(section.id)
            return section
        section.device = data.device
        section.action = data.action
        for condition in data.conditions:
            self.add_condition(section.id, condition)
        return section

    def remove_trigger(self, trigger_id: int) -> None:
        self.triggers.remove(self._trigger(trigger_id))

    def select_trigger_device(self, trigger_id: int, device: str) -> None:
        section = self._trigger(trigger_id)
        section.device = device
        section.action = ""

    def add_condition(self, trigger_id: int, data: Optional[Condition] = None) -> ConditionRow:
        row = ConditionRow()
        if data is not None:
            row = ConditionRow(
                field=data.field,
                operator=data.operator,
                threshold=format_number(data.threshold),
            )
        self._trigger(trigger_id).conditions.append(row)
        return row

    def remove_condition(self, trigger_id: int, position: int) -> None:
        del self._trigger(trigger_id).conditions[position]

    # -- actions -----------------------------------------------------------

    def _action(self, action_id: int) -> ActionSection:
        for section in self.actions:
            if section.id == action_id:
                return section
        raise KeyError(f"no action section {action_id}")

    def add_action(self, data: Optional[Action] = None) -> ActionSection:
        section = ActionSection(id=next(self._action_ids))
        if data is not None:
            section.device = data.device
            section.action = data.action
        self.actions.append(section)
        return section

    def remove_action(self, action_id: int) -> None:
        self.actions.remove(self._action(action_id))

    def select_action_device(self, action_id: int, device: str) -> None:
        section = self._action(action_id)
        section.device = device
        section.action = ""

    # -- output ------------------------------------------------------------

    def _definition(self, strict: bool) -> AutomationDefinition:
        to_number = _strict_threshold if strict else coerce_threshold
        return AutomationDefinition(
            interval=self.interval,
            condition_logic=self.condition_logic,
            triggers=[
                Trigger(
                    device=section.device,
                    action=section.action,
                    conditions=[
                        Condition(field=row.field, operator=row.operator, threshold=to_number(row.threshold))
                        for row in section.conditions
                    ],
                )
                for section in self.triggers
            ],
            actions=[Action(device=section.device, action=section.action) for section in self.actions],
        )

    def build(self) -> AutomationDefinition:
        """Definition to serialize; unparsable thresholds become 0."""
        return self._definition(strict=False)

    def validate(self) -> Optional[DefinitionValidationError]:
        return validate_definition(self._definition(strict=True))

    def preview(self) -> str:
        return serialize(self.build())
