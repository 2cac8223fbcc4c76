from typing import List

from pydantic import BaseModel, Field

OPERATORS = (">", "<", ">=", "<=", "==", "!=")


class Condition(BaseModel):
    field: str = Field("", description="Name of the observed quantity in the trigger response")
    operator: str = Field("", description="Comparison operator, one of OPERATORS")
    threshold: float = Field(0.0, description="Value the observed quantity is compared against")


class Trigger(BaseModel):
    device: str = Field("", description="Device name from the device registry")
    action: str = Field("", description="Action name from the action registry")
    conditions: List[Condition] = Field(default_factory=list)


class Action(BaseModel):
    device: str = Field("", description="Device name from the device registry")
    action: str = Field("", description="Action name from the action registry")


class AutomationDefinition(BaseModel):
    """
    Structured form of one automation rule. Triggers are evaluated and actions
    executed in list order, so both sequences keep their ordering.
    """

    interval: str = Field("", description="Duration literal such as 30s, 5m or 1h")
    condition_logic: str = Field("", description="How trigger results combine; omitted when empty")
    triggers: List[Trigger] = Field(default_factory=list)
    actions: List[Action] = Field(default_factory=list)
