from typing import Dict, Optional

from config import get_settings
from db import AutomationRepository, SqlAlchemyAutomationRepository
from dsl import parse, serialize
from llm import LlmDefinitionParser, OpenAIDefinitionLLM
from log import configure_logging, get_logger
from models import AutomationDefinition
from registry import Registry, create_default_registries
from validations import parse_and_validate_automation

logger = get_logger(__name__)


def _save_definition(
    name: str,
    definition: AutomationDefinition,
    repository: AutomationRepository,
    registries: Dict[str, Registry],
    enabled: bool,
) -> str:
    payload = {"name": name, "enabled": enabled, "definition": serialize(definition)}
    automation = parse_and_validate_automation(payload, registries)
    record_id = repository.save(automation)
    logger.info("automation_saved", record_id=record_id, automation=name)
    return record_id


def orchestrate_definition(
    name: str,
    text: str,
    repository: AutomationRepository,
    registries: Optional[Dict[str, Registry]] = None,
    enabled: bool = True,
) -> str:
    """
    Ingest definition text (from the form or hand-edited):
    1. Parse it leniently.
    2. Validate the definition and its registry references.
    3. Save the canonical re-serialized text.

    Returns the saved automation id.
    """
    registries = registries or create_default_registries()
    return _save_definition(name, parse(text), repository, registries, enabled)


def orchestrate_natural_language(
    user_input: str,
    repository: AutomationRepository,
    llm_client: Optional[OpenAIDefinitionLLM] = None,
    registries: Optional[Dict[str, Registry]] = None,
) -> str:
    """
    Full pipeline starting from natural language:
    1. Send NL to OpenAI with registry context to get definition text.
    2. Parse the text.
    3. Validate against the definition rules and registries.
    4. Save to persistence.
    """
    registries = registries or create_default_registries()
    llm_client = llm_client or OpenAIDefinitionLLM(model=get_settings().openai_model)
    llm_text = llm_client.generate_definition_text(user_input, registries)
    definition = LlmDefinitionParser().parse(llm_text)
    return _save_definition(user_input, definition, repository, registries, enabled=True)


if __name__ == "__main__":
    import sys

    from pydantic import ValidationError

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    repo = SqlAlchemyAutomationRepository.from_url(settings.database_url)

    if len(sys.argv) > 1:
        # If command-line argument provided, use it as the natural language input
        user_input = " ".join(sys.argv[1:])
    else:
        # Interactive mode: prompt user for input
        print("Enter your automation request in natural language:")
        print("(Or provide it as a command-line argument)")
        user_input = input("> ").strip()

        if not user_input:
            print("No input provided. Exiting.")
            sys.exit(1)

    try:
        automation_id = orchestrate_natural_language(user_input, repo)
    except (ValueError, ValidationError) as exc:
        print(f"Automation rejected: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"Automation saved with id: {automation_id}")
