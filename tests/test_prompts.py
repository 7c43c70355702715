"""Unit tests for prompt loading."""
import pytest

from taleweaver.prompts import (
    ILLUSTRATION_KEYWORDS,
    STORY_CONTINUE,
    STORY_START,
    load_prompt,
    render_prompt,
)


class TestLoadPrompt:
    """Tests for load_prompt."""

    @pytest.mark.parametrize("name", [STORY_START, STORY_CONTINUE, ILLUSTRATION_KEYWORDS])
    def test_packaged_prompts_exist(self, name: str):
        """Test that every packaged template loads without a trailing newline."""
        text = load_prompt(name)
        assert text
        assert not text.endswith("\n")

    def test_working_directory_override(self, tmp_path, monkeypatch):
        """Test that ./prompts/<name>.txt wins over the packaged template."""
        prompts_dir = tmp_path / "prompts"
        prompts_dir.mkdir()
        (prompts_dir / "story_start.txt").write_text("Tell a pirate tale about {theme}\n")
        monkeypatch.chdir(tmp_path)

        assert render_prompt(STORY_START, theme="treasure") == "Tell a pirate tale about treasure"

    def test_missing_prompt(self):
        """Test that an unknown prompt name raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="not_a_prompt"):
            load_prompt("not_a_prompt")


class TestRenderPrompt:
    """Tests for render_prompt."""

    def test_story_start(self):
        """Test that the theme lands before the closing AI cue."""
        text = render_prompt(STORY_START, theme="Medieval Quest")
        assert text.endswith("Theme:\nMedieval Quest\n\nAI:")

    def test_values_with_braces(self):
        """Test that user text containing braces is inserted literally."""
        text = render_prompt(ILLUSTRATION_KEYWORDS, user_text="{open the door}", assistant_text="ok")
        assert "User: {open the door}" in text

    def test_missing_value(self):
        """Test that a missing placeholder value raises KeyError."""
        with pytest.raises(KeyError):
            render_prompt(STORY_CONTINUE)
