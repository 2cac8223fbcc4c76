"""Tests for automation persistence."""

from datetime import datetime

import pytest

from db import (
    AutomationNotFoundError,
    InMemoryAutomationRepository,
    SqlAlchemyAutomationRepository,
    db_to_pydantic_automation,
    pydantic_to_db_automation,
)
from models import Automation


@pytest.fixture(params=["memory", "sqlite"])
def repository(request):
    """Each repository implementation behind the same interface."""
    if request.param == "memory":
        return InMemoryAutomationRepository()
    return SqlAlchemyAutomationRepository.from_url("sqlite://")


@pytest.fixture
def automation(thermostat_text):
    return Automation(name="Cool down", definition=thermostat_text)


class TestRepository:
    """Tests shared by all repositories."""

    def test_save_and_get(self, repository, automation, thermostat_text):
        record_id = repository.save(automation)

        stored = repository.get(record_id)

        assert stored.name == "Cool down"
        assert stored.enabled is True
        assert stored.definition == thermostat_text
        assert stored.created_at is not None

    def test_get_missing(self, repository):
        assert repository.get("missing") is None

    def test_definition_text_stored_verbatim(self, repository, automation):
        record_id = repository.save(automation)

        assert repository.get(record_id).parse_definition() == automation.parse_definition()

    def test_update(self, repository, automation):
        record_id = repository.save(automation)
        checked = datetime(2026, 1, 15, 12, 0, 0)

        repository.update(record_id, automation.model_copy(update={"enabled": False, "last_check": checked}))

        stored = repository.get(record_id)
        assert stored.enabled is False
        assert stored.last_check == checked

    def test_update_missing(self, repository, automation):
        with pytest.raises(AutomationNotFoundError):
            repository.update("missing", automation)

    def test_delete(self, repository, automation):
        record_id = repository.save(automation)

        repository.delete(record_id)

        assert repository.get(record_id) is None
        with pytest.raises(AutomationNotFoundError):
            repository.delete(record_id)

    def test_list(self, repository, automation):
        first = repository.save(automation)
        second = repository.save(automation.model_copy(update={"name": "Second"}))

        stored = repository.list()

        assert set(stored) == {first, second}
        assert stored[second].name == "Second"


class TestConverters:
    """Tests for pydantic and ORM conversion."""

    def test_round_trip(self, automation):
        checked = datetime(2026, 1, 15, 12, 0, 0)
        automation = automation.model_copy(update={"last_triggers_run": checked})

        db_automation = pydantic_to_db_automation(automation, "abc")
        restored = db_to_pydantic_automation(db_automation)

        assert db_automation.id == "abc"
        assert restored.definition == automation.definition
        assert restored.last_triggers_run == checked
