import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict

from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from log import get_logger
from models import Automation

from .converters import apply_to_db_automation, db_to_pydantic_automation, pydantic_to_db_automation
from .models import AutomationModel, Base

logger = get_logger(__name__)


class AutomationNotFoundError(KeyError):
    """Raised when updating or deleting an automation id that does not exist."""


class AutomationRepository(ABC):
    """
    Abstract persistence boundary. Implementations are responsible for
    durability, conflicts, and connectivity. This layer treats the DB as a
    black box.
    """

    @abstractmethod
    def save(self, automation: Automation) -> str:
        """Persist the automation and return its generated identifier."""
        raise NotImplementedError

    @abstractmethod
    def get(self, record_id: str) -> Automation | None:
        """Fetch an automation by id, or None if missing."""
        raise NotImplementedError

    @abstractmethod
    def update(self, record_id: str, automation: Automation) -> None:
        """Replace a stored automation; raises AutomationNotFoundError if missing."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, record_id: str) -> None:
        """Remove a stored automation; raises AutomationNotFoundError if missing."""
        raise NotImplementedError

    @abstractmethod
    def list(self) -> Dict[str, Automation]:
        """All automations keyed by id, oldest first."""
        raise NotImplementedError


class InMemoryAutomationRepository(AutomationRepository):
    """
    Minimal in-memory implementation for local testing. Not intended for prod.
    """

    def __init__(self) -> None:
        self._storage: Dict[str, Automation] = {}

    def save(self, automation: Automation) -> str:
        record_id = str(uuid.uuid4())
        if automation.created_at is None:
            automation = automation.model_copy(update={"created_at": datetime.utcnow()})
        self._storage[record_id] = automation
        logger.debug("automation_saved", record_id=record_id, automation=automation.name)
        return record_id

    def get(self, record_id: str) -> Automation | None:
        return self._storage.get(record_id)

    def update(self, record_id: str, automation: Automation) -> None:
        if record_id not in self._storage:
            raise AutomationNotFoundError(record_id)
        self._storage[record_id] = automation

    def delete(self, record_id: str) -> None:
        if self._storage.pop(record_id, None) is None:
            raise AutomationNotFoundError(record_id)

    def list(self) -> Dict[str, Automation]:
        return dict(self._storage)


class SqlAlchemyAutomationRepository(AutomationRepository):
    """Stores automations in the ``automations`` table through a session factory."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: str) -> "SqlAlchemyAutomationRepository":
        engine = create_engine(database_url)
        Base.metadata.create_all(engine)
        return cls(sessionmaker(bind=engine))

    def save(self, automation: Automation) -> str:
        record_id = str(uuid.uuid4())
        with self._session_factory() as session, session.begin():
            session.add(pydantic_to_db_automation(automation, record_id))
        logger.debug("automation_saved", record_id=record_id, automation=automation.name)
        return record_id

    def get(self, record_id: str) -> Automation | None:
        with self._session_factory() as session:
            db_automation = session.get(AutomationModel, record_id)
            return db_to_pydantic_automation(db_automation) if db_automation is not None else None

    def update(self, record_id: str, automation: Automation) -> None:
        with self._session_factory() as session, session.begin():
            db_automation = session.get(AutomationModel, record_id)
            if db_automation is None:
                raise AutomationNotFoundError(record_id)
            apply_to_db_automation(automation, db_automation)

    def delete(self, record_id: str) -> None:
        with self._session_factory() as session, session.begin():
            db_automation = session.get(AutomationModel, record_id)
            if db_automation is None:
                raise AutomationNotFoundError(record_id)
            session.delete(db_automation)

    def list(self) -> Dict[str, Automation]:
        with self._session_factory() as session:
            rows = session.scalars(select(AutomationModel).order_by(AutomationModel.created_at))
            return {row.id: db_to_pydantic_automation(row) for row in rows}
