# src/mender/cli/ascii.py
# Startup banner.

from rich.panel import Panel

BANNER = r"""
  _ __ ___   ___ _ __   __| | ___ _ __
 | '_ ` _ \ / _ \ '_ \ / _` |/ _ \ '__|
 | | | | | |  __/ | | | (_| |  __/ |
 |_| |_| |_|\___|_| |_|\__,_|\___|_|
      run it, read the traceback, patch it, run it again
"""


def show_banner(canvas):
    canvas.print(Panel(BANNER, style="bold cyan", title="[bright_blue]mender[/]", border_style="bright_blue"))
