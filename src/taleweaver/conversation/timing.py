"""Elapsed story time formatting."""


def format_elapsed(seconds: float) -> str:
    """Format elapsed seconds as zero-padded MM:SS.

    Fractions are truncated and negative input is treated as zero. Minutes
    keep counting past 59 rather than rolling into hours.
    """
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def elapsed_since(started_at: float | None, now: float) -> str:
    """Format the time between started_at and now, or 00:00 if not started."""
    if started_at is None:
        return format_elapsed(0)
    return format_elapsed(now - started_at)
