# src/mender/agents/repair_team/__init__.py
# Patch schema, validation and application.

from .patch import Edit, EditAction, FileChangeSet, PatchDocument
from .validator import parse_patch
from .patch_applier import EditOutcome, FileApplyReport, PatchApplier, apply_edits

__all__ = [
    "Edit",
    "EditAction",
    "FileChangeSet",
    "PatchDocument",
    "parse_patch",
    "EditOutcome",
    "FileApplyReport",
    "PatchApplier",
    "apply_edits",
]
