"""xAI Grok provider package."""

from .client import XAI, XAI_CONFIG
from .get_xai_models import parse_xai_models

__all__ = ["XAI", "XAI_CONFIG", "parse_xai_models"]
