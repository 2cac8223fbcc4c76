from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .definition import AutomationDefinition


class Automation(BaseModel):
    name: str = Field(..., description="Human friendly name for the automation")
    enabled: bool = True
    definition: str = Field(..., description="Serialized automation definition text")
    last_check: Optional[datetime] = None
    last_triggers_run: Optional[datetime] = None
    last_action_run: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def parse_definition(self) -> AutomationDefinition:
        # Imported lazily: dsl depends on this package.
        from dsl import parse

        return parse(self.definition)
