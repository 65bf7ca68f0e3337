"""chat_bridge.config.defaults
===========================

Central place for stable default values: provider endpoints, default models,
cache TTLs and scheduling delays. These can be overridden via environment
variables, the optional config file, or explicit settings.

This module performs no I/O and imports nothing from the rest of the package
so it can be used anywhere without circular imports.
"""

from __future__ import annotations

# ---- Requests ----
# Completion token cap used when neither the request nor the adapter sets one.
DEFAULT_MAX_OUTPUT_TOKENS = 3000

# ---- Lifecycle ----
# Delay before the single automatic reload attempt after a failed load.
LOAD_RETRY_SECONDS = 60.0

# ---- Model catalog ----
# A cached per-provider catalog is valid for this long when non-empty.
CATALOG_TTL_SECONDS = 3600.0
# Shared third-party registry index (models.dev) refresh interval.
REGISTRY_TTL_SECONDS = 3600.0
REGISTRY_URL = "https://models.dev/api.json"
# Fallback limits when a registry entry omits them.
REGISTRY_DEFAULT_LIMIT = 10000
# Settle time before asking settings UIs to re-render after a refresh.
RE_RENDER_DELAY_SECONDS = 0.1
NO_MODELS_OPTION_NAME = "No models currently available"

# ---- OpenAI ----
OPENAI_DEFAULT_MODEL = "gpt-5-nano"
OPENAI_ENDPOINT = "https://api.openai.com/v1/chat/completions"
OPENAI_MODELS_ENDPOINT = "https://api.openai.com/v1/models"

# ---- Anthropic ----
ANTHROPIC_DEFAULT_MODEL = "claude-opus-4-1-20250805"
ANTHROPIC_ENDPOINT = "https://api.anthropic.com/v1/messages"
ANTHROPIC_MODELS_ENDPOINT = "https://api.anthropic.com/v1/models"
ANTHROPIC_VERSION = "2023-06-01"
ANTHROPIC_BETA = "tools-2024-04-04"

# ---- Google Gemini ----
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

# ---- Cohere ----
COHERE_DEFAULT_MODEL = "command-r"
COHERE_ENDPOINT = "https://api.cohere.ai/v1/chat"
COHERE_MODELS_ENDPOINT = "https://api.cohere.ai/v1/models"
COHERE_TOKENIZE_ENDPOINT = "https://api.cohere.ai/v1/tokenize"

# ---- Groq ----
GROQ_DEFAULT_MODEL = "llama3-8b-8192"
GROQ_ENDPOINT = "https://api.groq.com/openai/v1/chat/completions"
GROQ_MODELS_ENDPOINT = "https://api.groq.com/openai/v1/models"
GROQ_DEFAULT_CONTEXT = 8192

# ---- Ollama ----
OLLAMA_DEFAULT_MODEL = "llama3.2"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"

# ---- OpenRouter ----
OPENROUTER_DEFAULT_MODEL = "mistralai/mistral-7b-instruct:free"
OPENROUTER_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"
OPENROUTER_MODELS_ENDPOINT = "https://openrouter.ai/api/v1/models"

# ---- xAI ----
XAI_DEFAULT_MODEL = "grok-3-mini-beta"
XAI_ENDPOINT = "https://api.x.ai/v1/chat/completions"
XAI_MODELS_ENDPOINT = "https://api.x.ai/v1/models"
XAI_DEFAULT_CONTEXT = 128000

# ---- LM Studio ----
LM_STUDIO_DEFAULT_MODEL = "local-model"
LM_STUDIO_DEFAULT_HOST = "http://localhost:1234"

__all__ = [name for name in dir() if name.isupper()]
