from .converters import apply_to_db_automation, db_to_pydantic_automation, pydantic_to_db_automation
from .models import AutomationModel, Base
from .repository import (
    AutomationNotFoundError,
    AutomationRepository,
    InMemoryAutomationRepository,
    SqlAlchemyAutomationRepository,
)

__all__ = [
    "AutomationNotFoundError",
    "AutomationRepository",
    "InMemoryAutomationRepository",
    "SqlAlchemyAutomationRepository",
    "AutomationModel",
    "Base",
    "apply_to_db_automation",
    "pydantic_to_db_automation",
    "db_to_pydantic_automation",
]
