"""Gradio UI callback tests."""

from __future__ import annotations

import base64
from dataclasses import replace
from typing import Optional

from config.settings import AppConfig, load_config
from modules.design.preferences import GardenPreferences
from modules.pipelines.garden_image import ServiceError
from modules.services.session import GardenSession
from modules.ui import callbacks

from conftest import make_png_bytes


class DummyImageService:
    """Stub image service returning real PNG data URIs."""

    def __init__(self) -> None:
        self.last_prefs: Optional[GardenPreferences] = None
        self.last_edit: Optional[tuple[str, str]] = None
        self.should_fail = False

    def _image(self, color: str) -> str:
        if self.should_fail:
            raise ServiceError("quota exceeded")
        return "data:image/png;base64," + base64.b64encode(make_png_bytes(color)).decode("ascii")

    def generate(self, prefs: GardenPreferences) -> str:
        self.last_prefs = prefs
        return self._image("green")

    def edit(self, current_image: str, instruction: str) -> str:
        self.last_edit = (current_image, instruction)
        return self._image("red")


def build_callbacks(service: DummyImageService | None = None, config: AppConfig | None = None):
    return callbacks.build_callbacks(config or AppConfig(), service=service or DummyImageService())


def test_on_generate_creates_session_and_renders():
    service = DummyImageService()
    cb = build_callbacks(service)["on_generate"]

    session, image, gallery, status = cb(
        None,
        "Japanese Zen",
        "Small Courtyard (10-20m²)",
        "Partial Shade",
        ["Stone Path", "Pergola"],
        "bamboo and koi pond",
    )

    assert isinstance(session, GardenSession)
    assert image is not None and image.size == (8, 4)
    assert len(gallery) == 1
    assert gallery[0][1] == "New Design: Japanese Zen Garden"
    assert "Japanese Zen" in status
    assert service.last_prefs is not None
    assert service.last_prefs.features == ["Stone Path", "Pergola"]


def test_on_generate_reports_service_error():
    service = DummyImageService()
    service.should_fail = True
    cb = build_callbacks(service)["on_generate"]

    session, image, gallery, status = cb(None, "Mediterranean", "", "Full Sun", [], "")

    assert image is None
    assert gallery == []
    assert "quota exceeded" in status
    assert session.state.error == "quota exceeded"


def test_on_generate_rejects_unknown_style():
    cb = build_callbacks()["on_generate"]

    session, image, gallery, status = cb(None, "Brutalist", "", "Full Sun", [], "")

    assert image is None
    assert status.startswith("**Error:**")
    assert session.state.history == ()


def test_on_edit_requires_current_image():
    service = DummyImageService()
    cb = build_callbacks(service)["on_edit"]

    session, image, gallery, status, text = cb(None, "Add roses")

    assert image is None
    assert text == "Add roses"
    assert service.last_edit is None


def test_on_edit_applies_change_and_clears_textbox():
    service = DummyImageService()
    cb_map = build_callbacks(service)
    session, *_ = cb_map["on_generate"](None, "English Cottage", "", "Full Sun", [], "")

    session, image, gallery, status, text = cb_map["on_edit"](session, "Add cherry blossoms")

    assert text == ""
    assert [caption for _, caption in gallery] == [
        "Edit: Add cherry blossoms",
        "New Design: English Cottage Garden",
    ]
    assert "Add cherry blossoms" in status
    assert image.getpixel((0, 0)) == (255, 0, 0)


def test_on_edit_failure_keeps_text_for_retry():
    service = DummyImageService()
    cb_map = build_callbacks(service)
    session, *_ = cb_map["on_generate"](None, "English Cottage", "", "Full Sun", [], "")
    service.should_fail = True

    session, image, gallery, status, text = cb_map["on_edit"](session, "Add a pond")

    assert text == "Add a pond"
    assert "quota exceeded" in status
    assert image.getpixel((0, 0)) == (0, 128, 0)


def test_on_upload_reads_file(tmp_path):
    path = tmp_path / "garden.png"
    path.write_bytes(make_png_bytes("blue"))
    cb = build_callbacks()["on_upload"]

    session, image, gallery, status = cb(None, str(path))

    assert image.getpixel((0, 0)) == (0, 0, 255)
    assert gallery[0][1] == "Uploaded Base Image"


def test_on_upload_rejects_non_image(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")
    cb = build_callbacks()["on_upload"]

    session, image, gallery, status = cb(None, str(path))

    assert image is None
    assert status.startswith("**Error:**")
    assert session.state.history == ()


def test_on_select_history_switches_image():
    cb_map = build_callbacks()
    session, *_ = cb_map["on_generate"](None, "Tropical Paradise", "", "Full Sun", [], "")
    session, *_ = cb_map["on_edit"](session, "Add a pond")

    session, image, gallery, status = cb_map["on_select_history"](session, 1)

    assert image.getpixel((0, 0)) == (0, 128, 0)
    assert "New Design: Tropical Paradise Garden" in status
    assert len(gallery) == 2


def test_on_select_history_ignores_bad_index():
    cb_map = build_callbacks()
    session, *_ = cb_map["on_generate"](None, "Tropical Paradise", "", "Full Sun", [], "")
    before = session.state

    session, *_ = cb_map["on_select_history"](session, 7)

    assert session.state == before


def test_history_limit_comes_from_config():
    config = AppConfig(history_limit=2)
    cb = build_callbacks(config=config)["on_generate"]
    session = None
    for _ in range(4):
        session, image, gallery, status = cb(session, "Wildlife-Friendly", "", "Full Shade", [], "")

    assert len(gallery) == 2


def test_on_use_suggestion_fills_textbox():
    cb = build_callbacks()["on_use_suggestion"]

    assert cb("Add Pergola") == "Add Pergola"


def test_history_stays_at_five_with_larger_env_limit(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GARDEN_HISTORY_LIMIT", "9")
    cb = build_callbacks(config=load_config())["on_generate"]
    session = None
    for _ in range(8):
        session, image, gallery, status = cb(session, "Wildlife-Friendly", "", "Full Shade", [], "")

    assert len(gallery) == 5
    assert len(session.state.history) == 5


def test_on_edit_while_busy_keeps_text_and_reports_busy():
    service = DummyImageService()
    cb_map = build_callbacks(service)
    session, *_ = cb_map["on_generate"](None, "English Cottage", "", "Full Sun", [], "")
    session.state = replace(session.state, is_loading=True)
    before = session.state

    session, image, gallery, status, text = cb_map["on_edit"](session, "Add a pond")

    assert text == "Add a pond"
    assert status == callbacks.BUSY_MESSAGE
    assert session.state is before
    assert service.last_edit is None


def test_on_generate_while_busy_reports_busy():
    service = DummyImageService()
    cb_map = build_callbacks(service)
    session, *_ = cb_map["on_generate"](None, "English Cottage", "", "Full Sun", [], "")
    session.state = replace(session.state, is_loading=True)
    service.last_prefs = None

    session, image, gallery, status = cb_map["on_generate"](session, "Japanese Zen", "", "Full Sun", [], "")

    assert status == callbacks.BUSY_MESSAGE
    assert len(gallery) == 1
    assert service.last_prefs is None


def test_on_edit_dropped_during_race_keeps_text():
    service = DummyImageService()
    cb_map = build_callbacks(service)
    session, *_ = cb_map["on_generate"](None, "English Cottage", "", "Full Sun", [], "")

    def edit_started_elsewhere(instruction: str, strict: bool = False):
        # another request became active after the busy check
        return session.state

    session.submit_edit = edit_started_elsewhere

    session, image, gallery, status, text = cb_map["on_edit"](session, "Add a pond")

    assert text == "Add a pond"
    assert status == callbacks.BUSY_MESSAGE
