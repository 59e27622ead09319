"""Tests for the CLI interface."""

import json

import pytest
from pathlib import Path

from typer.testing import CliRunner

from prose_lens.cli import app, resolve_output_format


runner = CliRunner()


class TestResolveOutputFormat:
    """Tests for output format selection."""

    def test_explicit_format_wins(self):
        assert resolve_output_format(Path("sortie.txt"), "html") == ".html"
        assert resolve_output_format(None, ".txt") == ".txt"

    def test_format_from_output_path(self):
        assert resolve_output_format(Path("sortie.html"), None) == ".html"

    def test_defaults_to_json(self):
        assert resolve_output_format(None, None) == ".json"
        assert resolve_output_format(Path("sortie"), None) == ".json"


class TestCLI:
    """Tests for CLI commands."""

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "Prose Lens" in result.stdout

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "classify" in result.stdout
        assert "render" in result.stdout

    def test_classify(self):
        result = runner.invoke(app, ["classify", "Boom!", "« Tu es prêt ? »", "[Alerte]"])

        assert result.exit_code == 0
        assert "sfx" in result.stdout
        assert "dialogue" in result.stdout
        assert "game-badge" in result.stdout
        assert "[Alerte]" in result.stdout

    def test_verbose_classify(self):
        result = runner.invoke(app, ["--verbose", "classify", "Le vent soufflait."])

        assert result.exit_code == 0
        assert "narration" in result.stdout

    def test_segment(self, markup_file: Path):
        result = runner.invoke(app, ["segment", str(markup_file)])

        assert result.exit_code == 0
        assert "scene-break" in result.stdout
        assert "game-badge" in result.stdout

    def test_segment_text_file(self, tmp_path: Path):
        file_path = tmp_path / "chapitre.txt"
        file_path.write_text("Il pleuvait.\n\nTsk.", encoding="utf-8")

        result = runner.invoke(app, ["segment", str(file_path)])

        assert result.exit_code == 0
        assert "spacing" in result.stdout
        assert "sfx" in result.stdout

    def test_missing_file_error(self, tmp_path: Path):
        result = runner.invoke(app, ["render", str(tmp_path / "absent.json")])

        assert result.exit_code != 0


class TestRenderCommand:
    """Tests for the render command."""

    def test_render_json_to_stdout(self, chapter_file: Path):
        result = runner.invoke(app, ["render", str(chapter_file)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data[0]["tag"] == "heading"
        assert "dialogue" in [item["tag"] for item in data]

    def test_render_markup_as_tagged_text(self, markup_file: Path):
        result = runner.invoke(app, ["render", str(markup_file), "-f", "txt", "--show-tags"])

        assert result.exit_code == 0
        assert "[dialogue] « Tu es prêt ? »" in result.stdout
        assert "✦" in result.stdout

    def test_render_to_html_file(self, chapter_file: Path, tmp_path: Path):
        output = tmp_path / "chapitre.html"

        result = runner.invoke(app, ["render", str(chapter_file), "-o", str(output)])

        assert result.exit_code == 0
        assert "Success" in result.stdout
        html = output.read_text(encoding="utf-8")
        assert '<p class="dialogue">' in html
        assert '<figure class="illustration">' in html

    def test_render_drops_configured_artifacts(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("PROSE_LENS_ARTIFACT_DENYLIST", '["Glisser"]')
        file_path = tmp_path / "chapitre.json"
        file_path.write_text(json.dumps([
            {"type": "paragraph", "children": [{"type": "text", "text": "Glisser"}]},
            {"type": "paragraph", "children": [{"type": "text", "text": "Drag"}]},
        ]), encoding="utf-8")

        result = runner.invoke(app, ["render", str(file_path)])

        assert result.exit_code == 0
        assert [item["runs"][0]["text"] for item in json.loads(result.stdout)] == ["Drag"]

    def test_unsupported_input_format(self, tmp_path: Path):
        file_path = tmp_path / "chapitre.docx"
        file_path.write_text("contenu", encoding="utf-8")

        result = runner.invoke(app, ["render", str(file_path)])

        assert result.exit_code == 1
        assert "Unsupported" in result.stdout

    def test_unsupported_output_format(self, chapter_file: Path):
        result = runner.invoke(app, ["render", str(chapter_file), "-f", "pdf"])

        assert result.exit_code == 1

    def test_invalid_json(self, tmp_path: Path):
        file_path = tmp_path / "casse.json"
        file_path.write_text("[{", encoding="utf-8")

        result = runner.invoke(app, ["render", str(file_path)])

        assert result.exit_code == 1
        assert "Error" in result.stdout
