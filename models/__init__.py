from .automation import Automation
from .definition import OPERATORS, Action, AutomationDefinition, Condition, Trigger

__all__ = [
    "Action",
    "Automation",
    "AutomationDefinition",
    "Condition",
    "OPERATORS",
    "Trigger",
]
