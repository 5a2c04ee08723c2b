"""Garden render service backed by the Gemini image model."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Union

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from config.settings import AppConfig
from modules.design.preferences import GardenPreferences
from modules.design.prompts import build_edit_prompt, build_generation_prompt
from modules.utils.image_utils import decode_data_uri, to_data_uri

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "No image data received from the AI."


class ImageGenerationError(RuntimeError):
    """Base class for failures raised by the garden image service."""


class ServiceError(ImageGenerationError):
    """The image service rejected the call or could not be reached."""


class NoImageReturned(ImageGenerationError):
    """The service answered without any inline image part."""

    def __init__(self, message: str = NO_IMAGE_MESSAGE) -> None:
        super().__init__(message)


class InvalidOperation(ImageGenerationError):
    """An operation was requested in a state that does not allow it."""


@dataclass(frozen=True, slots=True)
class TextPart:
    text: str


@dataclass(frozen=True, slots=True)
class InlineImagePart:
    mime_type: Optional[str]
    data: Union[bytes, str]

    def to_reference(self) -> str:
        return to_data_uri(self.data, self.mime_type)


ResponsePart = Union[TextPart, InlineImagePart]


def iter_response_parts(response: Any) -> Iterator[ResponsePart]:
    """Yield the content parts of the first candidate as tagged variants."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            yield InlineImagePart(mime_type=getattr(inline, "mime_type", None), data=inline.data)
            continue
        text = getattr(part, "text", None)
        if text:
            yield TextPart(text=text)


def first_inline_image(parts: Iterator[ResponsePart]) -> str:
    """Return the first inline image as a data URI or raise NoImageReturned."""
    for part in parts:
        if isinstance(part, InlineImagePart):
            return part.to_reference()
        logger.debug("Skipping text part from image service: %s", part.text[:200])
    raise NoImageReturned()


class GardenImageService:
    """Facade around the Gemini image model for garden renders and edits."""

    def __init__(self, config: AppConfig, client: Optional[Any] = None) -> None:
        self.config = config
        self._client = client

    def _ensure_client(self) -> Any:
        """Lazy-create the SDK client from the configured API key."""
        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=self.config.aspect_ratio),
        )

    def _request(self, parts: List[types.Part]) -> str:
        client = self._ensure_client()
        try:
            response = client.models.generate_content(
                model=self.config.image_model,
                contents=types.Content(role="user", parts=parts),
                config=self._generation_config(),
            )
        except genai_errors.APIError as exc:
            logger.warning("Image service call failed: %s", exc)
            raise ServiceError(str(exc)) from exc
        return first_inline_image(iter_response_parts(response))

    def generate(self, prefs: GardenPreferences) -> str:
        """Render a new garden design from the user's preferences."""
        prompt = build_generation_prompt(prefs)
        logger.info("Generating %s garden (%s, %s)", prefs.style.value, prefs.size, prefs.sunlight.value)
        return self._request([types.Part.from_text(text=prompt)])

    def edit(self, current_image: str, instruction: str) -> str:
        """Apply a natural-language change to an existing render."""
        mime_type, data = decode_data_uri(current_image)
        logger.info("Editing current design: %s", instruction.strip())
        return self._request(
            [
                types.Part.from_bytes(data=data, mime_type=mime_type),
                types.Part.from_text(text=build_edit_prompt(instruction)),
            ]
        )
