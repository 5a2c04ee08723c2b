"""Configuration helpers for the GardenDreamer project."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_HISTORY_LIMIT = 5


@dataclass(slots=True)
class AppConfig:
    """Centralized application configuration."""

    api_key: Optional[str] = None
    image_model: str = DEFAULT_IMAGE_MODEL
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    history_limit: int = DEFAULT_HISTORY_LIMIT
    log_dir: Optional[Path] = None
    log_level: str = "INFO"
    server_name: str = "127.0.0.1"
    server_port: int = 7860
    metadata: dict[str, Any] = field(default_factory=dict)


def _load_env_file(path: Path) -> None:
    """Populate environment variables from a simple KEY=VALUE .env file."""
    if not path.exists():
        return

    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ[key.strip()] = value.strip().strip('"').strip("'")


def _int_from_env(name: str, default: int, minimum: int = 1, maximum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    if value < minimum:
        return default
    if maximum is not None and value > maximum:
        return maximum
    return value


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Return an AppConfig instance with environment-aware settings."""
    env_path = Path(config_path) if config_path else Path(".env")
    _load_env_file(env_path)

    # API_KEY is the name the hosted studio template injects
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None

    log_dir_env = os.getenv("GARDEN_LOG_DIR")
    log_dir = Path(log_dir_env).expanduser() if log_dir_env else None

    metadata: dict[str, Any] = {}
    if config_path:
        metadata["config_path"] = str(env_path)

    return AppConfig(
        api_key=api_key,
        image_model=os.getenv("GARDEN_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
        aspect_ratio=os.getenv("GARDEN_ASPECT_RATIO") or DEFAULT_ASPECT_RATIO,
        history_limit=_int_from_env("GARDEN_HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT, maximum=DEFAULT_HISTORY_LIMIT),
        log_dir=log_dir,
        log_level=(os.getenv("GARDEN_LOG_LEVEL") or "INFO").upper(),
        server_name=os.getenv("GARDEN_SERVER_NAME") or "127.0.0.1",
        server_port=_int_from_env("GARDEN_SERVER_PORT", 7860),
        metadata=metadata,
    )
