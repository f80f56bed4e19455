# src/mender/agents/repair_team/fixer_agent.py
# Agent that asks the LLM for a JSON patch document fixing a failing program.

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from agno.agent import Agent

from mender.errors import PatchRequestError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepairRequest:
    file_path: Path
    source: str
    output: str
    intent: Optional[str] = None


class PatchSource(Protocol):
    """Anything that can answer a RepairRequest with raw patch text."""

    def request_patch(self, request: RepairRequest) -> str:
        ...


PATCH_FORMAT_EXAMPLE = """{
  "intent": "This should be what you think the program SHOULD do.",
  "explanation": "Explanation of what went wrong and the changes being made",
  "files": [
    {
      "file_name": "file_name.py",
      "changes": [
        {
          "action": "edit",
          "line_number": 2,
          "original_line": "print(hello world')",
          "new_line": "print('hello world')"
        }
      ]
    }
  ]
}"""


class CodeFixerAgent(Agent):
    """Proposes line-level fixes for a program that crashed."""

    def __init__(self, model=None, **kwargs):
        super().__init__(
            name="CodeFixer",
            model=model,
            description="Fixes programs that crash by proposing line-level edits as JSON.",
            instructions=[
                "You are a helpful assistant that is great at fixing code and not breaking it.",
                "You will receive the source of a program, the output of running it (including any error messages and stack traces) and possibly the intent of the program.",
                "## Output Format",
                "Return ONLY a JSON object describing the changes, in a format similar to git diff: for each file, whether a line is added, removed or edited.",
                "Use \"add\" for adding a line, \"remove\" for removing a line and \"edit\" for editing a line.",
                "'line_number' is 1-based. Changes in one file are applied top to bottom, in order, so account for lines added or removed by earlier changes.",
                "'original_line' must be the exact current content of the line for 'edit' and 'remove'.",
                "Use valid JSON syntax: double quotes only, no trailing commas, no comments, no markdown fences.",
                "### Example:",
                PATCH_FORMAT_EXAMPLE,
            ],
            **kwargs
        )

    def build_prompt(self, request: RepairRequest) -> str:
        intent = f"Intent: {request.intent}\n" if request.intent else ""
        return (
            "I have a program with errors and I would like you to help me fix the issues in the code.\n"
            f"The original code of the program run ({request.file_path.name}) and its output are below.\n"
            f"{intent}"
            "Original Code:\n"
            f"{request.source}\n"
            "Output:\n"
            f"{request.output}\n"
        )

    def request_patch(self, request: RepairRequest) -> str:
        prompt = self.build_prompt(request)
        logger.debug("Requesting patch for %s (%d prompt chars)", request.file_path, len(prompt))
        try:
            response = self.run(prompt)
        except Exception as e:
            raise PatchRequestError(f"Patch request failed: {e}") from e

        content = response.content if hasattr(response, "content") else response
        if not isinstance(content, str):
            content = "" if content is None else str(content)
        return content
