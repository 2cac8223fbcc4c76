"""
Conversion utilities between Pydantic models and SQLAlchemy DB models.
"""

from models import Automation

from .models import AutomationModel


def pydantic_to_db_automation(automation: Automation, automation_id: str | None = None) -> AutomationModel:
    """
    Convert a Pydantic Automation model to a SQLAlchemy AutomationModel.
    The definition is stored as its text form.

    Args:
        automation: Pydantic Automation model to convert
        automation_id: Optional ID to assign (if None, will be generated on save)
    """
    return AutomationModel(
        id=automation_id,
        name=automation.name,
        enabled=automation.enabled,
        definition=automation.definition,
        last_check=automation.last_check,
        last_triggers_run=automation.last_triggers_run,
        last_action_run=automation.last_action_run,
    )


def apply_to_db_automation(automation: Automation, db_automation: AutomationModel) -> AutomationModel:
    """Copy the editable and bookkeeping fields of an Automation onto an existing row."""
    db_automation.name = automation.name
    db_automation.enabled = automation.enabled
    db_automation.definition = automation.definition
    db_automation.last_check = automation.last_check
    db_automation.last_triggers_run = automation.last_triggers_run
    db_automation.last_action_run = automation.last_action_run
    return db_automation


def db_to_pydantic_automation(db_automation: AutomationModel) -> Automation:
    """
    Convert a SQLAlchemy AutomationModel to a Pydantic Automation model.
    """
    return Automation(
        name=db_automation.name,
        enabled=db_automation.enabled,
        definition=db_automation.definition,
        last_check=db_automation.last_check,
        last_triggers_run=db_automation.last_triggers_run,
        last_action_run=db_automation.last_action_run,
        created_at=db_automation.created_at,
    )
