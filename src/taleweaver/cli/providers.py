"""Provider factory functions for CLI.

Centralizes creation of narrative and image providers from environment variables.
Hides configuration details from command implementations.
"""

import os

from rich.console import Console

from ..images import ImageSearchProvider, create_image_provider
from ..llm import LLMProvider, create_llm_provider

# Default console for output
_console = Console()

# Environment variable holding the API key for each narrative provider
_LLM_KEY_VARS = {
    "groq": "GROQ_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def get_llm(console: Console | None = None) -> LLMProvider | None:
    """Create narrative provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Narrative provider instance, or None if not configured

    Environment variables:
        LLM_PROVIDER: Provider type (groq, openai; default: groq)
        GROQ_API_KEY: Groq API key (for groq provider)
        GROQ_MODEL: Groq model (default: llama3-8b-8192)
        OPENAI_API_KEY: OpenAI API key (for openai provider)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o-mini)
    """
    con = console or _console
    llm_provider = os.getenv("LLM_PROVIDER", "groq").lower()

    key_var = _LLM_KEY_VARS.get(llm_provider)
    if key_var is None:
        con.print(f"[red]Error: Unknown LLM provider: {llm_provider}[/red]")
        return None

    api_key = os.getenv(key_var)
    if not api_key:
        con.print(f"[yellow]Warning: {key_var} not set, story generation disabled[/yellow]")
        return None

    if llm_provider == "groq":
        model = os.getenv("GROQ_MODEL", "llama3-8b-8192")
    else:
        model = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")
    return create_llm_provider(llm_provider, api_key=api_key, model=model)


def require_llm(console: Console | None = None) -> LLMProvider:
    """Get narrative provider, raising error if not configured.

    Args:
        console: Optional Rich console for output

    Returns:
        Narrative provider instance

    Raises:
        SystemExit: If the narrative provider is not configured
    """
    import typer

    con = console or _console
    llm = get_llm(con)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm


def get_image_provider(console: Console | None = None) -> ImageSearchProvider | None:
    """Create image provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Unsplash provider instance, or None if illustrations are disabled

    Environment variables:
        UNSPLASH_ACCESS_KEY: Unsplash access key (optional)
    """
    con = console or _console
    access_key = os.getenv("UNSPLASH_ACCESS_KEY")
    if not access_key:
        con.print("[yellow]Warning: UNSPLASH_ACCESS_KEY not set, illustrations disabled[/yellow]")
        return None
    return create_image_provider("unsplash", access_key=access_key)
