"""llmchat_openai.config.defaults
=============================

Stable default values for the chat client. They can be overridden through
the configuration file, environment variables or constructor arguments.

Only plain constants live here (no I/O, no package imports) so every layer
can depend on this module without cycles.
"""

from __future__ import annotations

# ---- OpenAI ----
OPENAI_DEFAULT_CHAT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
OPENAI_DEFAULT_MODELS_ENDPOINT = "https://api.openai.com/v1/models"

# ---- OpenRouter (fallback routing capable) ----
OPENROUTER_CHAT_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"
OPENROUTER_MODELS_ENDPOINT = "https://openrouter.ai/api/v1/models"

# ---- Groq ----
GROQ_CHAT_ENDPOINT = "https://api.groq.com/openai/v1/chat/completions"
GROQ_MODELS_ENDPOINT = "https://api.groq.com/openai/v1/models"

DEFAULT_PROVIDER = "openai"

# Provider preset -> endpoint pair.
PROVIDER_PRESETS = {
    "openai": {
        "endpoint": OPENAI_DEFAULT_CHAT_ENDPOINT,
        "models_endpoint": OPENAI_DEFAULT_MODELS_ENDPOINT,
    },
    "openrouter": {
        "endpoint": OPENROUTER_CHAT_ENDPOINT,
        "models_endpoint": OPENROUTER_MODELS_ENDPOINT,
    },
    "groq": {
        "endpoint": GROQ_CHAT_ENDPOINT,
        "models_endpoint": GROQ_MODELS_ENDPOINT,
    },
}


__all__ = [
    "OPENAI_DEFAULT_CHAT_ENDPOINT",
    "OPENAI_DEFAULT_MODELS_ENDPOINT",
    "OPENROUTER_CHAT_ENDPOINT",
    "OPENROUTER_MODELS_ENDPOINT",
    "GROQ_CHAT_ENDPOINT",
    "GROQ_MODELS_ENDPOINT",
    "DEFAULT_PROVIDER",
    "PROVIDER_PRESETS",
]
