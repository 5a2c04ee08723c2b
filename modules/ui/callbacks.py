"""Callback implementations for the Gradio interface."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from config.settings import AppConfig
from modules.design.preferences import GardenPreferences
from modules.pipelines.garden_image import GardenImageService
from modules.services.session import GardenSession, ImageService
from modules.utils.image_utils import data_uri_to_image

logger = logging.getLogger(__name__)

READY_MESSAGE = "Use the form to create your dream garden layout, or upload a photo of your garden."
BUSY_MESSAGE = "A request is already running. Please wait for it to finish."


def build_callbacks(
    config: AppConfig,
    service: Optional[ImageService] = None,
) -> dict[str, Any]:
    """Return a dictionary of Gradio callback functions.

    Every callback receives the browser's ``GardenSession`` (``None`` on first
    use) as its first argument and returns it as the first output.
    """

    image_service = service or GardenImageService(config)

    def _ensure_session(session: Optional[GardenSession]) -> GardenSession:
        if session is None:
            return GardenSession(image_service, history_limit=config.history_limit)
        return session

    def _gallery(session: GardenSession) -> list[tuple[Any, str]]:
        return [(data_uri_to_image(item.image_url), item.prompt) for item in session.state.history]

    def _status(session: GardenSession, success: str) -> str:
        if session.state.error:
            return f"**Error:** {session.state.error}"
        if session.state.current_image is None:
            return READY_MESSAGE
        return success

    def _render(session: GardenSession, success: str) -> tuple[GardenSession, Any, list, str]:
        return (
            session,
            data_uri_to_image(session.state.current_image),
            _gallery(session),
            _status(session, success),
        )

    def _busy(session: GardenSession) -> tuple[GardenSession, Any, list, str]:
        logger.info("Request ignored: another request is in flight")
        return session, data_uri_to_image(session.state.current_image), _gallery(session), BUSY_MESSAGE

    def on_generate(
        session: Optional[GardenSession],
        style: str,
        size: str,
        sunlight: str,
        features: Optional[Iterable[str]],
        description: str,
    ) -> tuple[GardenSession, Any, list, str]:
        session = _ensure_session(session)
        if session.state.is_loading:
            return _busy(session)
        try:
            prefs = GardenPreferences.from_form(style, size, sunlight, features, description)
        except ValueError as exc:
            return session, data_uri_to_image(session.state.current_image), _gallery(session), f"**Error:** {exc}"
        before = session.state
        if session.submit_generate(prefs) is before:
            return _busy(session)
        return _render(session, f"New {prefs.style.value} design ready.")

    def on_edit(
        session: Optional[GardenSession],
        instruction: str,
    ) -> tuple[GardenSession, Any, list, str, str]:
        session = _ensure_session(session)
        if session.state.is_loading:
            return (*_busy(session), instruction)
        if session.state.current_image is None:
            return (*_render(session, READY_MESSAGE), instruction)
        if not (instruction or "").strip():
            return (*_render(session, "Describe the change you would like to see."), instruction)

        before = session.state
        if session.submit_edit(instruction) is before:
            return (*_busy(session), instruction)
        if session.state.error:
            # keep the text so the user can retry
            return (*_render(session, ""), instruction)
        return (*_render(session, f"Applied: {instruction.strip()}"), "")

    def on_upload(
        session: Optional[GardenSession],
        file_path: Optional[str],
    ) -> tuple[GardenSession, Any, list, str]:
        session = _ensure_session(session)
        if not file_path:
            return _render(session, "No file selected.")
        try:
            session.upload_image(Path(file_path).read_bytes())
        except (OSError, ValueError) as exc:
            logger.warning("Rejected upload %s: %s", file_path, exc)
            return session, data_uri_to_image(session.state.current_image), _gallery(session), f"**Error:** {exc}"
        return _render(session, "Base image uploaded. Describe a change to redesign it.")

    def on_select_history(
        session: Optional[GardenSession],
        index: Optional[int],
    ) -> tuple[GardenSession, Any, list, str]:
        session = _ensure_session(session)
        history = session.state.history
        if index is None or not 0 <= index < len(history):
            return _render(session, "")
        item = history[index]
        session.select_history_item(item.id)
        return _render(session, f"Showing: {item.prompt}")

    def on_use_suggestion(suggestion: str) -> str:
        return suggestion

    return {
        "on_generate": on_generate,
        "on_edit": on_edit,
        "on_upload": on_upload,
        "on_select_history": on_select_history,
        "on_use_suggestion": on_use_suggestion,
    }
