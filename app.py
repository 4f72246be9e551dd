"""HuggingFace Spaces entry point for relay-chat."""

import os
print(f"[startup] GROQ_API_KEY set: {bool(os.environ.get('GROQ_API_KEY'))}")
print(f"[startup] GEMINI_API_KEY set: {bool(os.environ.get('GEMINI_API_KEY'))}")
print(f"[startup] LM_STUDIO_SERVER_1: {os.environ.get('LM_STUDIO_SERVER_1', 'not set')}")

from relay_chat.main import configure_logging
from relay_chat.ui import create_app

configure_logging()

demo = create_app()

if __name__ == "__main__":
    demo.launch()
