"""Prompt builders for garden generation and edits."""

from __future__ import annotations

from modules.design.preferences import GardenPreferences

GENERATION_TEMPLATE = (
    "A professional architectural 3D render of a {style} garden. "
    "Size: {size}. Lighting: {sunlight}. "
    "Details: {details}{features}. "
    "High-end landscape design, photorealistic, 4k resolution, beautiful composition, "
    "16:9 widescreen framing."
)

EDIT_TEMPLATE = (
    "Modify this garden design according to this request: {instruction}. "
    "Maintain the overall layout but apply the changes seamlessly. "
    "Photorealistic, professional landscape photography style."
)


def build_generation_prompt(prefs: GardenPreferences) -> str:
    """Describe the requested garden as a single render prompt."""
    features = f" featuring {', '.join(prefs.features)}" if prefs.features else ""
    return GENERATION_TEMPLATE.format(
        style=prefs.style.value,
        size=prefs.size,
        sunlight=prefs.sunlight.value,
        details=prefs.custom_description.strip(),
        features=features,
    )


def build_edit_prompt(instruction: str) -> str:
    return EDIT_TEMPLATE.format(instruction=instruction.strip())
