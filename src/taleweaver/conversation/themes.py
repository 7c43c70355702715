"""Story themes offered before a conversation starts."""

EXAMPLE_THEMES = (
    "Space Adventure",
    "Medieval Quest",
    "Cyberpunk Heist",
    "Jungle Mystery",
)

PREMADE_STORIES = {
    "fbla": "A story about a kid who navigates the world of FBLA leadership and competitions..",
    "finance": (
        "A story about a student who takes on financial responsibilities, "
        "learning money management and investing."
    ),
}


def resolve_theme(value: str) -> str:
    """Turn a premade story key or free-text theme into the engine theme.

    Args:
        value: A PREMADE_STORIES key (case-insensitive) or any theme text

    Returns:
        The premade summary, or the trimmed theme text

    Raises:
        ValueError: If value is blank
    """
    theme = value.strip()
    if not theme:
        raise ValueError("Theme must not be empty")
    return PREMADE_STORIES.get(theme.lower(), theme)
