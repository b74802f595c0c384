"""Markdown rendering helpers for review findings."""

from collections.abc import Iterable, Sequence


def link(text: str, url: str) -> str:
    """Render a Markdown link."""
    return f"[{text}]({url})"


def code(text: str) -> str:
    """Render inline code."""
    return f"`{text}`"


def table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a Markdown table.

    Args:
    ----
        headers: Column titles
        rows: Row cells, one sequence per row

    Returns:
    -------
        Table text without a trailing newline

    """
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "---|" * len(headers),
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return "\n".join(lines)


def section(heading: str, body: str) -> str:
    """Render a level-3 heading followed by ``body``."""
    return f"### {heading}\n{body}"
