"""LLM gateway client and HTML response parser."""

from llm.client import LLMClient
from llm.parser import extract_html

__all__ = ["LLMClient", "extract_html"]
