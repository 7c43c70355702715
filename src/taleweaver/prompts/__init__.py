"""Prompt management module.

Externalizes story prompts to text files for easy customization.
Prompts can be overridden by placing files in the working directory.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

# Default prompts directory (package location)
_PROMPTS_DIR = Path(__file__).parent

STORY_START = "story_start"
STORY_CONTINUE = "story_continue"
ILLUSTRATION_KEYWORDS = "illustration_keywords"


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt template from file.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: taleweaver/prompts/{name}.txt

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt template text, without the trailing newline

    Raises:
        FileNotFoundError: If prompt file not found in any location
    """
    filename = f"{name}.txt"

    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8").rstrip("\n")

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8").rstrip("\n")

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def render_prompt(name: str, **values: Any) -> str:
    """Load a prompt template and fill in its {placeholders}.

    Raises:
        KeyError: If the template names a placeholder missing from values
    """
    return load_prompt(name).format(**values)


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "STORY_START",
    "STORY_CONTINUE",
    "ILLUSTRATION_KEYWORDS",
    "load_prompt",
    "render_prompt",
    "clear_cache",
]
