"""Base layer of the chat client: models, errors, transport and streaming.

Submodules are imported explicitly by callers (``llmchat_openai.base.errors``,
``llmchat_openai.base.models`` ...); this package does not re-export them.
"""
