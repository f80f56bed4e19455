# src/mender/cli/view.py
# Panels for source code, program output and rendered diffs.

from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

LEXERS = {
    ".py": "python",
    ".js": "javascript",
    ".rb": "ruby",
    ".sh": "bash",
}


def show_code_block(canvas, code: str, filename: str = "main.py"):
    suffix = "." + filename.rsplit(".", 1)[-1] if "." in filename else ""
    syntax = Syntax(code, LEXERS.get(suffix.lower(), "text"), theme="monokai", line_numbers=True)
    canvas.print(Panel(syntax, title=filename, border_style="bright_blue"))


def show_output(canvas, output: str, failed: bool):
    body = Text(output.rstrip("\n") or "(no output)")
    canvas.print(Panel(body, title="Output", border_style="red" if failed else "green"))


def show_diff(canvas, file_name: str, diff: Text):
    canvas.print(Text(file_name, style="bold yellow"))
    canvas.print(diff if diff.plain else Text("(no changes)", style="white"))
