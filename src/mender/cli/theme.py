# src/mender/cli/theme.py
# Color theme for CLI prefixes.

from rich.theme import Theme


def get_theme() -> Theme:
    """
    Returns the Rich Theme used by the canvas prefixes.
    """
    return Theme({
        "info": "bright_blue",
        "success": "bright_green",
        "warning": "yellow",
        "error": "red",
        "step": "cyan",
    })
