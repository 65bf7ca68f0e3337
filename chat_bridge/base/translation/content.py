"""Helpers for multimodal payloads shared by provider translators."""
from __future__ import annotations

import json
import re
from typing import Any, Optional, Tuple

_DATA_URL = re.compile(r"^data:(?P<mime>[^;,]+)?(?:;[^,]*)?,(?P<data>.*)$", re.DOTALL)


def parse_data_url(url: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Split ``data:<mime>;base64,<payload>`` into ``(mime, payload)``.

    Returns ``(None, None)`` for anything that is not a data URL.
    """
    if not url:
        return None, None
    m = _DATA_URL.match(url)
    if not m:
        return None, None
    return m.group("mime"), m.group("data")


def load_json_args(arguments: Any) -> Any:
    """Decode a tool-call ``arguments`` string; empty or invalid becomes ``{}``."""
    if isinstance(arguments, (dict, list)):
        return arguments
    if not arguments:
        return {}
    try:
        return json.loads(arguments)
    except ValueError:
        return {}


def dump_json_args(arguments: Any) -> str:
    """Encode tool-call arguments as a JSON string (strings pass through)."""
    if isinstance(arguments, str):
        return arguments
    return json.dumps(arguments if arguments is not None else {})


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


__all__ = ["parse_data_url", "load_json_args", "dump_json_args", "is_number"]
