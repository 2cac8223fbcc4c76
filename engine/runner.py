"""
Scheduled processing of stored automations: run each trigger's device action,
check its conditions against the response, and run the automation's actions
when the combined result holds.
"""

import json
from datetime import datetime
from typing import Any, Dict, Optional, Protocol

from db import AutomationRepository
from log import get_logger
from models import Automation, AutomationDefinition
from registry import Registry

from .evaluator import apply_condition_logic, evaluate_conditions, parse_interval

logger = get_logger(__name__)


class Executor(Protocol):
    """Boundary to the devices: run one action on one device and return its raw JSON result text."""

    def execute(self, device_id: int, action_id: int) -> str:
        ...


class AutomationRunError(RuntimeError):
    """Raised when a trigger or action of an automation cannot be completed."""


class AutomationRunner:
    def __init__(
        self,
        executor: Executor,
        registries: Dict[str, Registry],
        repository: AutomationRepository,
    ) -> None:
        self.executor = executor
        self.registries = registries
        self.repository = repository

    def _execute(self, device_name: str, action_name: str) -> Dict[str, Any]:
        device = self.registries["device"].get(device_name)
        if device is None:
            raise AutomationRunError(f"looking up device: device '{device_name}' not found")
        action = self.registries["action"].get(action_name)
        if action is None:
            raise AutomationRunError(f"looking up action: action '{action_name}' not found")

        try:
            result = self.executor.execute(device.id, action.id)
        except Exception as exc:
            raise AutomationRunError(f"executing action [{action_name}] on device [{device_name}]: {exc}") from exc
        try:
            response = json.loads(result)
        except (TypeError, json.JSONDecodeError) as exc:
            raise AutomationRunError(
                f"parsing response, device [{device_name}], action [{action_name}]: {exc}"
            ) from exc
        if not isinstance(response, dict):
            raise AutomationRunError(
                f"parsing response, device [{device_name}], action [{action_name}]: expected an object"
            )
        return response

    def _stamp(self, record_id: str, automation: Automation, stamp: str) -> None:
        try:
            self.repository.update(record_id, automation)
        except Exception as exc:
            raise AutomationRunError(f"update {stamp}: {exc}") from exc

    def _is_due(self, automation: Automation, interval_text: str, now: datetime) -> bool:
        last_run = automation.last_triggers_run or automation.created_at
        if last_run is None:
            return True
        try:
            interval = parse_interval(interval_text)
        except ValueError as exc:
            raise AutomationRunError(f"parsing interval: {exc}") from exc
        return last_run + interval <= now

    def _process_triggers(self, definition: AutomationDefinition) -> list[bool]:
        results = []
        for trigger in definition.triggers:
            response = self._execute(trigger.device, trigger.action)
            logger.info("trigger_executed", device=trigger.device, action=trigger.action, response=response)
            try:
                results.append(evaluate_conditions(response, trigger))
            except LookupError as exc:
                raise AutomationRunError(
                    f"evaluating conditions for trigger [{trigger.device}/{trigger.action}]: {exc}"
                ) from exc
        return results

    def process(self, record_id: str, automation: Automation, now: Optional[datetime] = None) -> bool:
        """Process one automation. Returns True when its actions were executed."""
        now = now or datetime.utcnow()
        automation.last_check = now
        try:
            self.repository.update(record_id, automation)
        except Exception as exc:
            # A missed last_check stamp does not stop the run.
            logger.warning("last_check_update_failed", automation=automation.name, error=str(exc))

        definition = automation.parse_definition()
        if not self._is_due(automation, definition.interval, now):
            return False

        results = self._process_triggers(definition)
        automation.last_triggers_run = now
        self._stamp(record_id, automation, "triggers last run time")

        if not apply_condition_logic(results, definition.condition_logic):
            return False

        for action in definition.actions:
            response = self._execute(action.device, action.action)
            automation.last_action_run = now
            self._stamp(record_id, automation, "action last run time")
            logger.info(
                "automation_action_executed",
                automation=automation.name,
                device=action.device,
                action=action.action,
                response=response,
            )

        logger.info("automation_processed", automation=automation.name)
        return True

    def process_all(self, now: Optional[datetime] = None) -> None:
        """Process every enabled automation; one failure does not stop the others."""
        now = now or datetime.utcnow()
        failed = []
        for record_id, automation in self.repository.list().items():
            if not automation.enabled:
                continue
            logger.info("processing_automation", automation=automation.name)
            try:
                self.process(record_id, automation, now)
            except AutomationRunError as exc:
                logger.error("automation_failed", automation=automation.name, error=str(exc))
                failed.append(automation.name)

        if failed:
            raise AutomationRunError(f"{len(failed)} automation(s) encountered errors: {', '.join(failed)}")
