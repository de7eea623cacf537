"""Implementation parts for :mod:`llmchat_openai.base.models`."""
