from .openai_client import OpenAIDefinitionLLM
from .parser import LlmDefinitionParser

__all__ = ["LlmDefinitionParser", "OpenAIDefinitionLLM"]
