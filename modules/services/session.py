"""Session state for the generate / edit / upload workflow.

State changes are plain functions over an immutable ``SessionState`` so they
can be exercised without a UI. ``GardenSession`` is the small stateful driver
the Gradio callbacks hold per browser session: it owns the current state,
talks to the image service, and drops new requests while one is in flight.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Protocol

from modules.design.preferences import GardenPreferences
from modules.pipelines.garden_image import ImageGenerationError, InvalidOperation
from modules.services.history_service import (
    HISTORY_CAPACITY,
    UPLOAD_LABEL,
    History,
    HistoryItem,
    edit_label,
    find_history_item,
    generation_label,
    make_history_item,
    new_item_id,
    now_millis,
    push_history,
)
from modules.utils.image_utils import encode_upload

logger = logging.getLogger(__name__)

GENERATE_FALLBACK_MESSAGE = "Failed to generate garden. Please check your API key."
EDIT_FALLBACK_MESSAGE = "Failed to edit image."


class ImageService(Protocol):
    def generate(self, prefs: GardenPreferences) -> str: ...

    def edit(self, current_image: str, instruction: str) -> str: ...


@dataclass(frozen=True, slots=True)
class SessionState:
    """Everything the UI needs to render the canvas and history."""

    current_image: Optional[str] = None
    is_loading: bool = False
    error: Optional[str] = None
    history: History = ()


def begin_request(state: SessionState) -> SessionState:
    return replace(state, is_loading=True, error=None)


def complete_request(
    state: SessionState, image_url: str, item: HistoryItem, limit: int = HISTORY_CAPACITY
) -> SessionState:
    return replace(
        state,
        current_image=image_url,
        is_loading=False,
        error=None,
        history=push_history(state.history, item, limit),
    )


def fail_request(state: SessionState, message: str) -> SessionState:
    return replace(state, is_loading=False, error=message)


def show_uploaded(
    state: SessionState, image_url: str, item: HistoryItem, limit: int = HISTORY_CAPACITY
) -> SessionState:
    return replace(
        state,
        current_image=image_url,
        history=push_history(state.history, item, limit),
    )


def select_history_item(state: SessionState, item_id: str) -> SessionState:
    """Show an earlier version; unknown ids leave the state untouched."""
    item = find_history_item(state.history, item_id)
    if item is None:
        return state
    return replace(state, current_image=item.image_url)


def _error_message(exc: Exception, fallback: str) -> str:
    message = str(exc).strip()
    return message or fallback


class GardenSession:
    """Drive one user's design session against an image service."""

    def __init__(
        self,
        service: ImageService,
        history_limit: int = HISTORY_CAPACITY,
        id_factory: Callable[[], str] = new_item_id,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self.service = service
        self.history_limit = max(1, min(history_limit, HISTORY_CAPACITY))
        self._id_factory = id_factory
        self._clock = clock
        self.state = SessionState()

    def _new_item(self, image_url: str, prompt: str) -> HistoryItem:
        return make_history_item(image_url, prompt, id_factory=self._id_factory, clock=self._clock)

    def _fail(self, exc: Exception, fallback: str) -> SessionState:
        if isinstance(exc, ImageGenerationError):
            logger.warning("Image request failed: %s", exc)
        else:
            logger.exception("Unexpected error during image request")
        self.state = fail_request(self.state, _error_message(exc, fallback))
        return self.state

    def submit_generate(self, prefs: GardenPreferences) -> SessionState:
        """Render a new design; ignored while another request is running."""
        if self.state.is_loading:
            logger.info("Dropping generate request: another request is in flight")
            return self.state

        self.state = begin_request(self.state)
        try:
            image_url = self.service.generate(prefs)
        except Exception as exc:  # noqa: BLE001
            return self._fail(exc, GENERATE_FALLBACK_MESSAGE)

        item = self._new_item(image_url, generation_label(prefs.style.value))
        self.state = complete_request(self.state, image_url, item, self.history_limit)
        return self.state

    def submit_edit(self, instruction: str, strict: bool = False) -> SessionState:
        """Apply ``instruction`` to the current image.

        Without a current image (or with a blank instruction) this is a no-op,
        unless ``strict`` is set, in which case ``InvalidOperation`` is raised.
        """
        if self.state.is_loading:
            logger.info("Dropping edit request: another request is in flight")
            return self.state

        instruction = (instruction or "").strip()
        current = self.state.current_image
        if not current or not instruction:
            if strict:
                raise InvalidOperation(
                    "There is no image to edit." if not current else "Edit instruction is empty."
                )
            return self.state

        self.state = begin_request(self.state)
        try:
            image_url = self.service.edit(current, instruction)
        except Exception as exc:  # noqa: BLE001
            return self._fail(exc, EDIT_FALLBACK_MESSAGE)

        item = self._new_item(image_url, edit_label(instruction))
        self.state = complete_request(self.state, image_url, item, self.history_limit)
        return self.state

    def upload_image(self, data: bytes, mime_type: Optional[str] = None) -> SessionState:
        """Use a local photo as the current design. Raises ValueError for non-images."""
        image_url = encode_upload(data, mime_type)
        self.state = show_uploaded(
            self.state, image_url, self._new_item(image_url, UPLOAD_LABEL), self.history_limit
        )
        return self.state

    def select_history_item(self, item_id: str) -> SessionState:
        self.state = select_history_item(self.state, item_id)
        return self.state
