"""One-off script for checking garden generation and editing against the live service."""

from pathlib import Path

from config.settings import load_config
from modules.design.preferences import GardenPreferences, GardenStyle, SunlightLevel
from modules.pipelines.garden_image import GardenImageService
from modules.services.session import GardenSession
from modules.utils.image_utils import data_uri_to_image
from modules.utils.logging import setup_logging


def main() -> None:
    # 1. 读取 .env 中的 GEMINI_API_KEY
    config = load_config()
    setup_logging(config)

    session = GardenSession(GardenImageService(config), history_limit=config.history_limit)

    prefs = GardenPreferences(
        style=GardenStyle.JAPANESE,
        size="Small Courtyard (10-20m²)",
        sunlight=SunlightLevel.PARTIAL_SHADE,
        features=["Stone Path", "Water Fountain"],
        custom_description="bamboo and a koi pond",
    )

    # 2. 先生成，再做一次编辑
    state = session.submit_generate(prefs)
    if state.error is None:
        state = session.submit_edit("Make it look like autumn")

    print("Error:", state.error)
    for item in state.history:
        print("-", item.prompt)

    image = data_uri_to_image(state.current_image)
    if image is not None:
        out_path = Path("debug_garden_output.png")
        image.save(out_path)
        print("Saved:", out_path.resolve())
    else:
        print("No image returned, check the error above.")


if __name__ == "__main__":
    main()
