"""Pytest fixtures for Prose Lens tests."""

import json

import pytest
from pathlib import Path

from prose_lens import config
import prose_lens.formatting.classifier as classifier


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch):
    """Start every test from freshly loaded settings and classifier."""
    monkeypatch.setattr(config, "_settings", None)
    monkeypatch.setattr(classifier, "_default_classifier", None)
    for name in (
        "PROSE_LENS_ARTIFACT_DENYLIST",
        "PROSE_LENS_UPPER_LETTERS",
        "PROSE_LENS_LOWER_LETTERS",
        "PROSE_LENS_SKIP_EMPTY_SPANS",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def chapter_data() -> list[dict]:
    """A chapter as delivered by the content store."""
    return [
        {"type": "heading", "level": 2, "children": [{"type": "text", "text": "Chapitre 1"}]},
        {"type": "paragraph", "children": [{"type": "text", "text": "Le vent soufflait doucement."}]},
        {"type": "paragraph", "children": [{"type": "text", "text": ""}]},
        {"type": "paragraph", "children": [{"type": "text", "text": ""}]},
        {"type": "paragraph", "children": [{"type": "text", "text": "« Tu es prêt ? »"}]},
        {"type": "paragraph", "children": [{"type": "text", "text": "Drag"}]},
        {"type": "paragraph", "children": [{"type": "text", "text": "[Compétence débloquée]"}]},
        {
            "type": "paragraph",
            "children": [
                {"type": "text", "text": "Il ouvrit la "},
                {"type": "text", "text": "porte", "bold": True},
                {"type": "text", "text": "."},
            ],
        },
        {
            "type": "image",
            "image": {"url": "/uploads/carte.png", "alternativeText": "Carte du royaume"},
        },
    ]


@pytest.fixture
def chapter_file(tmp_path: Path, chapter_data: list[dict]) -> Path:
    """Write the sample chapter to a JSON file."""
    file_path = tmp_path / "chapitre.json"
    file_path.write_text(json.dumps(chapter_data, ensure_ascii=False), encoding="utf-8")
    return file_path


@pytest.fixture
def raw_markup() -> str:
    """A chapter paragraph exported as raw editor markup."""
    return (
        "<p>Le vent soufflait doucement.</p>"
        "<p>« Tu es prêt ? »</p>"
        "<p></p><p></p>"
        "<p><strong>Boom!</strong></p>"
        "<div>[Alerte système]</div>"
    )


@pytest.fixture
def markup_file(tmp_path: Path, raw_markup: str) -> Path:
    """Write the raw markup chapter to an HTML file."""
    file_path = tmp_path / "chapitre.html"
    file_path.write_text(raw_markup, encoding="utf-8")
    return file_path
