"""Garden preference vocabulary and the form-backed preferences record."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional


class GardenStyle(str, Enum):
    """Supported garden styles."""

    MODERN = "Modern Minimalist"
    ENGLISH = "English Cottage"
    JAPANESE = "Japanese Zen"
    MEDITERRANEAN = "Mediterranean"
    TROPICAL = "Tropical Paradise"
    WILDLIFE = "Wildlife-Friendly"


class SunlightLevel(str, Enum):
    """Sunlight exposure of the plot."""

    FULL_SUN = "Full Sun"
    PARTIAL_SHADE = "Partial Shade"
    FULL_SHADE = "Full Shade"


SIZE_OPTIONS: tuple[str, ...] = (
    "Small Courtyard (10-20m²)",
    "Medium Backyard (20-100m²)",
    "Large Estate (100m²+)",
    "Balcony / Terrace",
)

FEATURE_OPTIONS: tuple[str, ...] = (
    "Water Fountain",
    "Fire Pit",
    "Vegetable Patch",
    "Wooden Deck",
    "Stone Path",
    "Pergola",
    "Ambient Lighting",
)

EDIT_SUGGESTIONS: tuple[str, ...] = (
    "Retro Filter",
    "Remove Distractions",
    "More Sunset Lighting",
    "Add Pergola",
    "Native Plants Only",
)


def _unique(items: Iterable[str]) -> List[str]:
    seen: list[str] = []
    for item in items:
        label = str(item).strip()
        if label and label not in seen:
            seen.append(label)
    return seen


@dataclass(slots=True)
class GardenPreferences:
    """What the user wants the garden to look like."""

    style: GardenStyle = GardenStyle.MODERN
    size: str = SIZE_OPTIONS[0]
    sunlight: SunlightLevel = SunlightLevel.FULL_SUN
    features: List[str] = field(default_factory=list)
    custom_description: str = ""

    def __post_init__(self) -> None:
        self.style = GardenStyle(self.style)
        self.sunlight = SunlightLevel(self.sunlight)
        self.features = _unique(self.features)
        self.custom_description = self.custom_description or ""

    def toggle_feature(self, feature: str) -> None:
        """Add ``feature`` when missing, remove it otherwise."""
        if feature in self.features:
            self.features.remove(feature)
        else:
            self.features.append(feature)

    @classmethod
    def from_form(
        cls,
        style: str,
        size: Optional[str],
        sunlight: str,
        features: Optional[Iterable[str]],
        description: Optional[str],
    ) -> "GardenPreferences":
        """Build preferences from raw widget values."""
        return cls(
            style=GardenStyle(style),
            size=(size or "").strip() or SIZE_OPTIONS[0],
            sunlight=SunlightLevel(sunlight),
            features=list(features or []),
            custom_description=(description or "").strip(),
        )
