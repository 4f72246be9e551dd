"""
Gradio application entry point for relay-chat.

CLI commands:
    relay-chat          - Launch the Gradio UI
"""

import inspect
import logging
import sys

import gradio as gr
from dotenv import load_dotenv

from relay_chat.config import get_gradio_port, get_log_level
from relay_chat.ui import create_app

# Load environment variables from .env file
load_dotenv()


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, get_log_level()),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def run():
    """Entry point for the application."""
    configure_logging()
    app = create_app()
    port = get_gradio_port()

    launch_kwargs = {
        "server_name": "127.0.0.1",
        "server_port": port,
        "share": False,
    }

    # Gradio 6.x moved theme from Blocks() to launch()
    if "theme" in inspect.signature(gr.Blocks.launch).parameters:
        launch_kwargs["theme"] = gr.themes.Soft()

    app.launch(**launch_kwargs)


if __name__ == "__main__":
    run()
