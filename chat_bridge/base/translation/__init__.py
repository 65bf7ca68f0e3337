"""Shared (OpenAI-shaped) translation layer reused by provider packages."""

from .context import TranslationContext
from .content import parse_data_url, load_json_args, dump_json_args, is_number
from .openai_request import OpenAIRequestTranslator
from .openai_response import OpenAIResponseTranslator, empty_buffer, tool_call_shell

__all__ = [
    "TranslationContext",
    "parse_data_url",
    "load_json_args",
    "dump_json_args",
    "is_number",
    "OpenAIRequestTranslator",
    "OpenAIResponseTranslator",
    "empty_buffer",
    "tool_call_shell",
]
