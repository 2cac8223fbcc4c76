from datetime import timedelta
from typing import Dict

from models import Automation, AutomationDefinition
from registry import DeviceRegistry, Registry

from .definition_validator import DefinitionValidationError, ensure_valid_definition, parse_interval

CONDITION_LOGIC_VALUES = ("", "and", "or")

MINIMUM_INTERVAL = timedelta(seconds=1)


class UnknownRegistryReferenceError(ValueError):
    """Raised when a definition references an unknown device or action, or an action the device does not offer."""


def _validate_reference(device_name: str, action_name: str, registries: Dict[str, Registry]) -> None:
    device_registry: DeviceRegistry = registries["device"]
    action_registry = registries["action"]

    if device_name not in device_registry:
        raise UnknownRegistryReferenceError(f"device '{device_name}' not found")
    if action_name not in action_registry:
        raise UnknownRegistryReferenceError(f"action '{action_name}' not found")
    if not device_registry.offers(device_name, action_name, action_registry):
        raise UnknownRegistryReferenceError(f"action '{action_name}' is not assigned to device '{device_name}'")


def _validate_against_registries(definition: AutomationDefinition, registries: Dict[str, Registry]) -> None:
    for trigger in definition.triggers:
        _validate_reference(trigger.device, trigger.action, registries)
    for action in definition.actions:
        _validate_reference(action.device, action.action, registries)


def parse_and_validate_automation(payload: dict, registries: Dict[str, Registry]) -> Automation:
    """
    Convert a create/update payload (dict) into an Automation and validate the
    definition text it carries, including registry membership of every device
    and action it names.
    Raises pydantic ValidationError, DefinitionValidationError or
    UnknownRegistryReferenceError on failure.
    """
    automation = Automation.model_validate(payload)
    definition = ensure_valid_definition(automation.parse_definition())

    # The form leaves m and h unbounded; a stored rule must still wait at least a second.
    if parse_interval(definition.interval) < MINIMUM_INTERVAL:
        raise DefinitionValidationError("interval must be at least 1s", "interval")

    if definition.condition_logic not in CONDITION_LOGIC_VALUES:
        raise DefinitionValidationError("condition_logic must be 'and' or 'or'", "condition_logic")

    _validate_against_registries(definition, registries)
    return automation
