# src/mender/agents/repair_team/patch.py
# Structured patch document returned by the fixer agent.

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator, model_validator


class EditAction(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    EDIT = "edit"


# Which text fields each action must carry
_REQUIRED_TEXT = {
    EditAction.ADD.value: ("new_line",),
    EditAction.REMOVE.value: ("original_line",),
    EditAction.EDIT.value: ("original_line", "new_line"),
}


class Edit(BaseModel):
    """One line-level change. `line_number` is 1-based."""

    action: EditAction = Field(..., description="add, remove or edit")
    line_number: StrictInt = Field(..., description="1-based line the change targets")
    original_line: StrictStr = Field("", description="Current content of the line, used as a match guard")
    new_line: StrictStr = Field("", description="Replacement or inserted content")

    @model_validator(mode="before")
    @classmethod
    def _check_required_text(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        action = data.get("action")
        if isinstance(action, str):
            missing = [
                key for key in _REQUIRED_TEXT.get(action.strip().lower(), ())
                if data.get(key) is None
            ]
            if missing:
                raise ValueError(f"'{action}' change is missing {', '.join(missing)}")
        # null text fields fall back to the empty-string default
        return {key: value for key, value in data.items() if value is not None}

    @field_validator("action", mode="before")
    @classmethod
    def _normalize_action(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class FileChangeSet(BaseModel):
    file_name: str = Field(..., description="Path of the file to change, relative to the project root")
    changes: List[Edit] = Field(..., description="Changes applied top to bottom, in order")


class PatchDocument(BaseModel):
    """
    Everything one repair attempt proposes.
    `intent` and `explanation` are shown to the user and otherwise ignored.
    """

    intent: str = Field("", description="What the program is supposed to do")
    explanation: str = Field("", description="What went wrong and how the changes fix it")
    files: List[FileChangeSet] = Field(..., description="Per-file change sets")

    @property
    def file_names(self) -> List[str]:
        return [change_set.file_name for change_set in self.files]
