"""Rolling history of generated and uploaded garden images."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

UPLOAD_LABEL = "Uploaded Base Image"
HISTORY_CAPACITY = 5


@dataclass(frozen=True, slots=True)
class HistoryItem:
    """A past version of the design shown in the history strip."""

    id: str
    image_url: str
    prompt: str
    timestamp: int  # epoch milliseconds


History = Tuple[HistoryItem, ...]


def generation_label(style: str) -> str:
    return f"New Design: {style} Garden"


def edit_label(instruction: str) -> str:
    return f"Edit: {instruction}"


def new_item_id() -> str:
    return uuid.uuid4().hex[:9]


def now_millis() -> int:
    return int(time.time() * 1000)


def make_history_item(
    image_url: str,
    prompt: str,
    id_factory: Callable[[], str] = new_item_id,
    clock: Callable[[], int] = now_millis,
) -> HistoryItem:
    """Create a history entry stamped with a fresh id and the current time."""
    return HistoryItem(id=id_factory(), image_url=image_url, prompt=prompt, timestamp=clock())


def push_history(history: History, item: HistoryItem, limit: int = HISTORY_CAPACITY) -> History:
    """Return ``history`` with ``item`` in front, trimmed to ``limit`` entries.

    ``limit`` never exceeds ``HISTORY_CAPACITY``.
    """
    if limit < 1:
        raise ValueError("History limit must be positive")
    return ((item,) + tuple(history))[: min(limit, HISTORY_CAPACITY)]


def find_history_item(history: History, item_id: str) -> Optional[HistoryItem]:
    for item in history:
        if item.id == item_id:
            return item
    return None
