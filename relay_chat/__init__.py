"""relay-chat: one conversation, three interchangeable LLM backends."""

__version__ = "0.1.0"
