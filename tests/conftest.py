import io
from typing import List

import pytest
from rich.console import Console

from mender.cli.controller import Canvas
from mender.cli.theme import get_theme


class ScriptedPatchSource:
    """Stands in for the LLM: returns queued responses in order, repeating the last one."""

    def __init__(self, responses: List[str]):
        self.responses = list(responses)
        self.requests = []

    def request_patch(self, request):
        self.requests.append(request)
        if len(self.requests) <= len(self.responses):
            return self.responses[len(self.requests) - 1]
        return self.responses[-1]


@pytest.fixture
def quiet_canvas():
    """Canvas writing into a buffer; read it back with `quiet_canvas.console.file.getvalue()`."""
    return Canvas(Console(file=io.StringIO(), theme=get_theme(), width=120, color_system=None))


@pytest.fixture
def scripted_source():
    return ScriptedPatchSource
