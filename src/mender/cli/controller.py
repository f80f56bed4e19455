# src/mender/cli/controller.py
# Canvas: progress output for the repair loop.

from typing import Optional

from rich.console import Console
from rich.markup import escape

from mender.cli.theme import get_theme


class Canvas:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(theme=get_theme())
        self.prefix_info = "[info][INFO][/]:"
        self.prefix_step = "[step][STEP][/]:"
        self.prefix_success = "[success][SUCCESS][/]:"
        self.prefix_error = "[error][ERROR][/]:"
        self.prefix_warning = "[warning][WARNING][/]:"

    def step(self, message: str):
        self.console.print(f"{self.prefix_step} {escape(message)}")

    def info(self, message: str):
        self.console.print(f"{self.prefix_info} {escape(message)}")

    def success(self, message: str):
        self.console.print(f"{self.prefix_success} {escape(message)}")

    def error(self, message: str):
        self.console.print(f"{self.prefix_error} {escape(message)}")

    def warning(self, message: str):
        self.console.print(f"{self.prefix_warning} {escape(message)}")

    def print(self, renderable):
        # plain strings are program text, not markup
        if isinstance(renderable, str):
            self.console.print(renderable, markup=False)
        else:
            self.console.print(renderable)


# Instantiate globally for imports
canvas = Canvas()
