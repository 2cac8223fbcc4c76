"""Tests for scheduled automation processing."""

import json
from datetime import datetime, timedelta

import pytest

from db import InMemoryAutomationRepository
from engine import AutomationRunError, AutomationRunner
from models import Automation

NOW = datetime(2026, 1, 15, 12, 0, 0)


class FakeExecutor:
    """Records calls and answers with canned JSON per (device_id, action_id)."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    def execute(self, device_id, action_id):
        self.calls.append((device_id, action_id))
        response = self.responses.get((device_id, action_id), {})
        if isinstance(response, Exception):
            raise response
        return response if isinstance(response, str) else json.dumps(response)


class FailingFirstUpdateRepository(InMemoryAutomationRepository):
    """Fails the first update, then behaves normally."""

    def __init__(self):
        super().__init__()
        self.failed = False

    def update(self, record_id, automation):
        if not self.failed:
            self.failed = True
            raise RuntimeError("database is locked")
        super().update(record_id, automation)


@pytest.fixture
def repository():
    return InMemoryAutomationRepository()


def _store(repository, text, **fields):
    automation = Automation(name=fields.pop("name", "Cool down"), definition=text, **fields)
    record_id = repository.save(automation)
    return record_id, repository.get(record_id)


class TestProcess:
    """Tests for processing one automation."""

    def test_conditions_met_runs_actions(self, repository, registries, thermostat_text):
        executor = FakeExecutor({(1, 1): {"temperature": 31}})
        runner = AutomationRunner(executor, registries, repository)
        record_id, automation = _store(repository, thermostat_text, created_at=NOW - timedelta(minutes=10))

        assert runner.process(record_id, automation, NOW) is True

        assert executor.calls == [(1, 1), (2, 2)]
        stored = repository.get(record_id)
        assert stored.last_check == NOW
        assert stored.last_triggers_run == NOW
        assert stored.last_action_run == NOW

    def test_conditions_not_met(self, repository, registries, thermostat_text):
        executor = FakeExecutor({(1, 1): {"temperature": 20}})
        runner = AutomationRunner(executor, registries, repository)
        record_id, automation = _store(repository, thermostat_text, created_at=NOW - timedelta(minutes=10))

        assert runner.process(record_id, automation, NOW) is False

        assert executor.calls == [(1, 1)]
        assert repository.get(record_id).last_triggers_run == NOW
        assert repository.get(record_id).last_action_run is None

    def test_not_due_yet(self, repository, registries, thermostat_text):
        executor = FakeExecutor()
        runner = AutomationRunner(executor, registries, repository)
        record_id, automation = _store(repository, thermostat_text, last_triggers_run=NOW - timedelta(minutes=2))

        assert runner.process(record_id, automation, NOW) is False

        assert executor.calls == []
        assert repository.get(record_id).last_check == NOW

    def test_due_exactly_at_interval(self, repository, registries, thermostat_text):
        executor = FakeExecutor({(1, 1): {"temperature": 35}})
        runner = AutomationRunner(executor, registries, repository)
        record_id, automation = _store(repository, thermostat_text, last_triggers_run=NOW - timedelta(minutes=5))

        assert runner.process(record_id, automation, NOW) is True

    def test_no_triggers_always_runs_actions(self, repository, registries):
        text = 'interval: "1m"\nactions:\n  - device: "Fan"\n    action: "TurnOff"'
        executor = FakeExecutor()
        runner = AutomationRunner(executor, registries, repository)
        record_id, automation = _store(repository, text, created_at=NOW - timedelta(hours=1))

        assert runner.process(record_id, automation, NOW) is True
        assert executor.calls == [(2, 3)]

    def test_missing_field_in_response(self, repository, registries, thermostat_text):
        executor = FakeExecutor({(1, 1): {"humidity": 31}})
        runner = AutomationRunner(executor, registries, repository)
        record_id, automation = _store(repository, thermostat_text, created_at=NOW - timedelta(minutes=10))

        with pytest.raises(AutomationRunError, match="evaluating conditions for trigger \\[Thermostat/ReadTemp\\]"):
            runner.process(record_id, automation, NOW)

    def test_response_not_json(self, repository, registries, thermostat_text):
        executor = FakeExecutor({(1, 1): "<html>"})
        runner = AutomationRunner(executor, registries, repository)
        record_id, automation = _store(repository, thermostat_text, created_at=NOW - timedelta(minutes=10))

        with pytest.raises(AutomationRunError, match="parsing response"):
            runner.process(record_id, automation, NOW)

    def test_executor_failure_is_wrapped(self, repository, registries, thermostat_text):
        executor = FakeExecutor({(1, 1): ConnectionError("device offline")})
        runner = AutomationRunner(executor, registries, repository)
        record_id, automation = _store(repository, thermostat_text, created_at=NOW - timedelta(minutes=10))

        with pytest.raises(AutomationRunError, match="device offline"):
            runner.process(record_id, automation, NOW)

    def test_empty_response_is_an_error(self, repository, registries, thermostat_text):
        executor = FakeExecutor({(1, 1): ""})
        runner = AutomationRunner(executor, registries, repository)
        record_id, automation = _store(repository, thermostat_text, created_at=NOW - timedelta(minutes=10))

        with pytest.raises(AutomationRunError, match="parsing response"):
            runner.process(record_id, automation, NOW)

    def test_failed_last_check_stamp_does_not_stop_run(self, registries, thermostat_text):
        """Test that only the last_check stamp may fail without aborting."""
        repository = FailingFirstUpdateRepository()
        executor = FakeExecutor({(1, 1): {"temperature": 31}})
        runner = AutomationRunner(executor, registries, repository)
        record_id, automation = _store(repository, thermostat_text, created_at=NOW - timedelta(minutes=10))

        assert runner.process(record_id, automation, NOW) is True

        assert executor.calls == [(1, 1), (2, 2)]
        assert repository.get(record_id).last_action_run == NOW

    def test_missing_record_is_a_run_error(self, repository, registries, thermostat_text):
        """Test that a record deleted mid-run fails with AutomationRunError, not KeyError."""
        executor = FakeExecutor({(1, 1): {"temperature": 31}})
        runner = AutomationRunner(executor, registries, repository)
        record_id, automation = _store(repository, thermostat_text, created_at=NOW - timedelta(minutes=10))
        repository.delete(record_id)

        with pytest.raises(AutomationRunError, match="update triggers last run time"):
            runner.process(record_id, automation, NOW)

    def test_unknown_device(self, repository, registries):
        text = 'interval: "1m"\nactions:\n  - device: "Garage"\n    action: "TurnOn"'
        runner = AutomationRunner(FakeExecutor(), registries, repository)
        record_id, automation = _store(repository, text, created_at=NOW - timedelta(hours=1))

        with pytest.raises(AutomationRunError, match="device 'Garage' not found"):
            runner.process(record_id, automation, NOW)


class TestProcessAll:
    """Tests for processing every stored automation."""

    def test_skips_disabled(self, repository, registries, thermostat_text):
        executor = FakeExecutor({(1, 1): {"temperature": 31}})
        runner = AutomationRunner(executor, registries, repository)
        record_id, _ = _store(repository, thermostat_text, enabled=False)

        runner.process_all(NOW)

        assert executor.calls == []
        assert repository.get(record_id).last_check is None

    def test_failure_does_not_stop_others(self, repository, registries, thermostat_text):
        broken = 'interval: "1m"\nactions:\n  - device: "Garage"\n    action: "TurnOn"'
        executor = FakeExecutor({(1, 1): {"temperature": 31}})
        runner = AutomationRunner(executor, registries, repository)
        _store(repository, broken, name="Broken", created_at=NOW - timedelta(hours=1))
        good_id, _ = _store(repository, thermostat_text, name="Good", created_at=NOW - timedelta(hours=1))

        with pytest.raises(AutomationRunError, match="1 automation\\(s\\) encountered errors: Broken"):
            runner.process_all(NOW)

        assert repository.get(good_id).last_action_run == NOW
