"""Gradio layout composition for the garden designer."""

from __future__ import annotations

from typing import Any, Optional

try:
    import gradio as gr
except ImportError:  # pragma: no cover
    gr = None  # type: ignore

from config.settings import AppConfig
from modules.design.preferences import (
    EDIT_SUGGESTIONS,
    FEATURE_OPTIONS,
    SIZE_OPTIONS,
    GardenStyle,
    SunlightLevel,
)
from modules.pipelines.garden_image import GardenImageService
from modules.services.session import ImageService
from modules.ui.callbacks import READY_MESSAGE, build_callbacks


def build_app(config: AppConfig, service: Optional[ImageService] = None) -> Any:
    """Compose and return the Gradio application."""
    if gr is None:
        raise RuntimeError("Gradio is not installed; install the project dependencies first.")

    callbacks_map = build_callbacks(config, service=service or GardenImageService(config))

    with gr.Blocks(title="GardenDreamer AI") as demo:
        gr.Markdown(
            "## GardenDreamer AI\n"
            "Visualize, design, and perfect your outdoor sanctuary, "
            "from initial layouts to fine-tuned botanical edits."
        )
        session = gr.State(None)

        with gr.Row():
            # 左侧：表单与历史
            with gr.Column(scale=4):
                style = gr.Dropdown(
                    label="Architectural Style",
                    choices=[item.value for item in GardenStyle],
                    value=GardenStyle.MODERN.value,
                )
                size = gr.Dropdown(
                    label="Space Size",
                    choices=list(SIZE_OPTIONS),
                    value=SIZE_OPTIONS[0],
                )
                sunlight = gr.Radio(
                    label="Sunlight Exposure",
                    choices=[item.value for item in SunlightLevel],
                    value=SunlightLevel.FULL_SUN.value,
                )
                features = gr.CheckboxGroup(label="Key Features", choices=list(FEATURE_OPTIONS), value=[])
                description = gr.Textbox(
                    label="Vision & Details",
                    lines=3,
                    placeholder="Describe your dream garden (e.g., 'lots of lavender and white roses with a winding path')...",
                )
                generate_btn = gr.Button("Generate Garden Design", variant="primary")

                history = gr.Gallery(label="Recent Versions", columns=2, height="auto", allow_preview=False)

            # 右侧：画布与编辑
            with gr.Column(scale=8):
                status = gr.Markdown(READY_MESSAGE)
                canvas = gr.Image(label="Garden Design", type="pil", interactive=False)
                upload_btn = gr.UploadButton(
                    "Upload Current Garden Photo",
                    file_types=["image"],
                    type="filepath",
                )
                with gr.Row():
                    edit_prompt = gr.Textbox(
                        label="Iterative AI Redesign",
                        placeholder="e.g., 'Add a stone path', 'Make it look like autumn', 'Add more flowers'...",
                        scale=4,
                    )
                    edit_btn = gr.Button("Apply Change", scale=1)
                with gr.Row():
                    suggestion_buttons = [gr.Button(f"+ {text}", size="sm") for text in EDIT_SUGGESTIONS]

        view_outputs = [session, canvas, history, status]

        generate_btn.click(
            fn=callbacks_map["on_generate"],
            inputs=[session, style, size, sunlight, features, description],
            outputs=view_outputs,
        )

        edit_inputs = [session, edit_prompt]
        edit_btn.click(
            fn=callbacks_map["on_edit"],
            inputs=edit_inputs,
            outputs=view_outputs + [edit_prompt],
        )
        edit_prompt.submit(
            fn=callbacks_map["on_edit"],
            inputs=edit_inputs,
            outputs=view_outputs + [edit_prompt],
        )

        upload_btn.upload(
            fn=callbacks_map["on_upload"],
            inputs=[session, upload_btn],
            outputs=view_outputs,
        )

        def _on_select(current_session, evt: gr.SelectData):
            return callbacks_map["on_select_history"](current_session, evt.index)

        history.select(fn=_on_select, inputs=[session], outputs=view_outputs)

        for button, text in zip(suggestion_buttons, EDIT_SUGGESTIONS):
            button.click(
                fn=lambda text=text: callbacks_map["on_use_suggestion"](text),
                inputs=None,
                outputs=edit_prompt,
            )

    return demo
