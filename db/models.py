"""
SQLAlchemy ORM models for persistence layer.
Only Automation is persisted here; its definition is kept as the serialized
definition text, exactly as the form submits it.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class AutomationModel(Base):
    """
    Database model for Automation.
    Devices and actions are referenced by name inside the definition text, not
    by foreign keys.
    """

    __tablename__ = "automations"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False, index=True)
    enabled = Column(Boolean, default=True, nullable=False)

    # Serialized definition: interval, condition_logic, triggers, actions
    definition = Column(Text, nullable=False)

    last_check = Column(DateTime, nullable=True)
    last_triggers_run = Column(DateTime, nullable=True)
    last_action_run = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<AutomationModel(id={self.id}, name={self.name})>"
