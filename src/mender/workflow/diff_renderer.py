# src/mender/workflow/diff_renderer.py
# Renders before/after text as a colored unified diff.

import difflib

from rich.text import Text

MARKER_STYLES = {
    "+": "green",
    "-": "red",
    "@": "blue",
}
NEUTRAL_STYLE = "white"


def colorize_diff(diff_text: str) -> Text:
    """Style each line of a unified diff by its first character."""
    text = Text()
    lines = diff_text.split("\n")
    for i, line in enumerate(lines):
        style = MARKER_STYLES.get(line[:1], NEUTRAL_STYLE)
        text.append(line, style=style)
        if i < len(lines) - 1:
            text.append("\n")
    return text


def unified_diff(before: str, after: str, file_name: str = "file") -> str:
    """Plain unified diff of two texts; empty when they are equal."""
    return "\n".join(
        difflib.unified_diff(
            before.split("\n"),
            after.split("\n"),
            fromfile=file_name,
            tofile=file_name,
            lineterm="",
        )
    )


def render_diff(before: str, after: str, file_name: str = "file") -> Text:
    return colorize_diff(unified_diff(before, after, file_name))
