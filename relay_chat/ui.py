"""
Gradio UI definition for relay-chat.

Single chat view with a settings sidebar. Event handlers are in
relay_chat.handlers.
"""

import inspect

import gradio as gr

from relay_chat import handlers, state
from relay_chat.config import CLOUD_MODELS, ProviderId


def _chatbot_kwargs() -> dict:
    # Gradio 4/5 need type="messages"; Gradio 6 dropped the parameter
    kwargs = {"label": "Conversation", "height": 520}
    if "type" in inspect.signature(gr.Chatbot).parameters:
        kwargs["type"] = "messages"
    return kwargs


def create_app() -> gr.Blocks:
    """Create the Gradio application."""

    blocks_params = inspect.signature(gr.Blocks).parameters
    blocks_kwargs = {"title": "relay-chat"}
    if "theme" in blocks_params:
        blocks_kwargs["theme"] = gr.themes.Soft()

    settings = state.get_session().settings

    with gr.Blocks(**blocks_kwargs) as app:

        gr.Markdown("# relay-chat")

        with gr.Row():
            # ─────────────────────────────────────────────────────────
            # CHAT
            # ─────────────────────────────────────────────────────────
            with gr.Column(scale=3):
                chatbot = gr.Chatbot(
                    value=handlers.to_chatbot_messages(state.get_session().messages),
                    **_chatbot_kwargs(),
                )
                with gr.Row():
                    message_input = gr.Textbox(
                        placeholder="Ask anything...",
                        show_label=False,
                        lines=2,
                        scale=5,
                    )
                    send_btn = gr.Button("Send", variant="primary", scale=1)
                status = gr.Markdown("")

                with gr.Row():
                    clear_btn = gr.Button("🗑️ Clear", variant="secondary", size="sm")

                with gr.Accordion("New Thread", open=False):
                    seed_input = gr.Textbox(
                        label="First message of the new thread",
                        lines=2,
                    )
                    new_thread_btn = gr.Button("Start New Thread", variant="secondary")

                with gr.Accordion("Transcript", open=False):
                    transcript_btn = gr.Button("Refresh", size="sm")
                    transcript = gr.Markdown("")

            # ─────────────────────────────────────────────────────────
            # SETTINGS
            # ─────────────────────────────────────────────────────────
            with gr.Column(scale=1):
                provider = gr.Radio(
                    label="Provider",
                    choices=[(p.display_name, p.value) for p in ProviderId],
                    value=settings.provider.value,
                )
                cloud_model = gr.Dropdown(
                    label="Groq Model",
                    choices=[(m.name, model_id) for model_id, m in CLOUD_MODELS.items()],
                    value=settings.cloud_model,
                    visible=settings.provider == ProviderId.CLOUD,
                )
                cloud_model_info = gr.Markdown(
                    handlers.describe_cloud_model(settings.cloud_model),
                    visible=settings.provider == ProviderId.CLOUD,
                )
                temperature = gr.Slider(
                    label="Temperature", minimum=0.0, maximum=2.0, step=0.1,
                    value=settings.temperature,
                )
                max_tokens = gr.Slider(
                    label="Max Tokens", minimum=256, maximum=4096, step=256,
                    value=settings.max_tokens,
                )
                top_p = gr.Slider(
                    label="Top P", minimum=0.0, maximum=1.0, step=0.1,
                    value=settings.top_p,
                )
                with gr.Accordion("Advanced", open=False):
                    frequency_penalty = gr.Slider(
                        label="Frequency Penalty", minimum=-2.0, maximum=2.0, step=0.1,
                        value=settings.frequency_penalty,
                    )
                    presence_penalty = gr.Slider(
                        label="Presence Penalty", minimum=-2.0, maximum=2.0, step=0.1,
                        value=settings.presence_penalty,
                    )
                    system_prompt = gr.Textbox(
                        label="System Prompt",
                        lines=6,
                        value=settings.system_prompt,
                    )
                    reset_prompt_btn = gr.Button("Reset to default", size="sm")

        # ─────────────────────────────────────────────────────────────
        # EVENT BINDINGS
        # ─────────────────────────────────────────────────────────────

        settings_inputs = [
            provider, cloud_model, temperature, max_tokens, top_p,
            frequency_penalty, presence_penalty, system_prompt,
        ]
        for component in settings_inputs:
            component.change(
                fn=handlers.handle_settings_change,
                inputs=settings_inputs,
                outputs=[status],
            )

        def on_provider_change(selected):
            is_cloud = selected == ProviderId.CLOUD.value
            return gr.update(visible=is_cloud), gr.update(visible=is_cloud)

        provider.change(
            fn=on_provider_change,
            inputs=[provider],
            outputs=[cloud_model, cloud_model_info],
        )
        cloud_model.change(
            fn=handlers.describe_cloud_model,
            inputs=[cloud_model],
            outputs=[cloud_model_info],
        )
        reset_prompt_btn.click(fn=handlers.reset_system_prompt, outputs=[system_prompt])

        chat_outputs = [chatbot, message_input, status]
        send_btn.click(fn=handlers.handle_submit, inputs=[message_input], outputs=chat_outputs)
        message_input.submit(fn=handlers.handle_submit, inputs=[message_input], outputs=chat_outputs)
        clear_btn.click(fn=handlers.handle_clear, outputs=chat_outputs)
        new_thread_btn.click(
            fn=handlers.handle_new_thread,
            inputs=[seed_input],
            outputs=[chatbot, seed_input, status],
        )
        transcript_btn.click(fn=handlers.show_transcript, outputs=[transcript])

    return app
