"""Shared fixtures for automation tests."""

import pytest

from models import Action, AutomationDefinition, Condition, Trigger
from registry import create_default_registries

THERMOSTAT_TEXT = "\n".join(
    [
        'interval: "5m"',
        "triggers:",
        '  - device: "Thermostat"',
        '    action: "ReadTemp"',
        "    conditions:",
        '      - field: "temperature"',
        '        operator: ">"',
        "        threshold: 30",
        "actions:",
        '  - device: "Fan"',
        '    action: "TurnOn"',
    ]
)


@pytest.fixture
def registries():
    """Demo device and action registries."""
    return create_default_registries()


@pytest.fixture
def thermostat_definition():
    """Turn the fan on when the thermostat reads above 30."""
    return AutomationDefinition(
        interval="5m",
        condition_logic="",
        triggers=[
            Trigger(
                device="Thermostat",
                action="ReadTemp",
                conditions=[Condition(field="temperature", operator=">", threshold=30)],
            )
        ],
        actions=[Action(device="Fan", action="TurnOn")],
    )


@pytest.fixture
def thermostat_text():
    return THERMOSTAT_TEXT
