from typing import Dict
import os

from openai import OpenAI

from log import get_logger
from registry import Registry

logger = get_logger(__name__)


class OpenAIDefinitionLLM:
    """
    Thin wrapper around OpenAI chat completion to turn natural language into the
    automation definition text expected by the downstream parser.
    """

    def __init__(self, model: str = "gpt-4o-mini", client: OpenAI | None = None) -> None:
        if client is None:
            api_key = os.getenv("OPENAI_API_KEY")
            client = OpenAI(api_key=api_key) if api_key else OpenAI()
        self.client = client
        self.model = model

    def _build_prompt(self, user_input: str, registries: Dict[str, Registry]) -> str:
        device_registry = registries["device"]
        action_registry = registries["action"]

        lines = ["Devices and the actions they offer:"]
        for device in device_registry.all():
            offered = [record.name for record in device_registry.actions_for_device(device.name, action_registry)]
            lines.append(f"- {device.name} ({device.type or 'device'}): {', '.join(offered) or 'no actions'}")
        device_block = "\n".join(lines)

        instructions = (
            "You are a system that maps natural language requests to an automation definition.\n"
            "Pick an interval, zero or more triggers and one or more actions that best fit the request.\n"
            "A trigger runs a device action whose response is checked by its conditions; "
            "each condition compares a response field against a number with one of >, <, >=, <=, ==, !=.\n"
            'Use condition_logic "and" or "or" only when there is more than one trigger.\n'
            "Return ONLY the definition text (no markdown, no commentary), using only the devices and "
            "actions listed, and an interval such as 30s, 5m or 1h."
        )

        format_hint = (
            'interval: "5m"\n'
            'condition_logic: "and"\n'
            "triggers:\n"
            '  - device: "<device>"\n'
            '    action: "<action>"\n'
            "    conditions:\n"
            '      - field: "<field>"\n'
            '        operator: ">"\n'
            "        threshold: 30\n"
            "actions:\n"
            '  - device: "<device>"\n'
            '    action: "<action>"'
        )

        return (
            f"{instructions}\n\n"
            f"{device_block}\n\n"
            f"Natural language request:\n{user_input}\n\n"
            f"Respond with text shaped exactly like:\n{format_hint}"
        )

    def generate_definition_text(self, user_input: str, registries: Dict[str, Registry]) -> str:
        prompt = self._build_prompt(user_input, registries)
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.2,
        )
        content = response.choices[0].message.content or ""
        logger.debug("definition_drafted", model=self.model, characters=len(content))
        return content.strip()
