from dsl import parse
from models import AutomationDefinition


class LlmDefinitionParser:
    """
    Adapter around the LLM output. The LLM is expected to return definition
    text, but models sometimes wrap it in a markdown code fence anyway.
    """

    def strip_fences(self, llm_text: str) -> str:
        lines = llm_text.strip().split("\n")
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        return "\n".join(lines)

    def parse(self, llm_text: str) -> AutomationDefinition:
        """
        Parse the LLM output into a definition. Never raises; unrecognized
        output yields an empty definition that validation will reject.
        """
        return parse(self.strip_fences(llm_text))
