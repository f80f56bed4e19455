# src/mender/agents/repair_team/patch_applier.py
# Applies line-level change sets to files on disk.

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from mender.agents.repair_team.patch import Edit, EditAction, FileChangeSet, PatchDocument

logger = logging.getLogger(__name__)


@dataclass
class EditOutcome:
    """Whether one change took effect; `reason` explains a skip."""

    index: int
    edit: Edit
    applied: bool
    reason: Optional[str] = None


@dataclass
class FileApplyReport:
    """Result of applying one FileChangeSet."""

    file_name: str
    path: Path
    before: str = ""
    after: str = ""
    outcomes: List[EditOutcome] = field(default_factory=list)
    error: Optional[str] = None  # set when the file could not be read or written

    @property
    def changed(self) -> bool:
        return self.error is None and self.before != self.after

    @property
    def applied(self) -> List[EditOutcome]:
        return [o for o in self.outcomes if o.applied]

    @property
    def skipped(self) -> List[EditOutcome]:
        return [o for o in self.outcomes if not o.applied]


def _read_text(path: Path) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_atomic(path: Path, text: str):
    """Write through a sibling temp file so a failed write never truncates `path`."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def apply_edits(lines: List[str], changes: List[Edit]) -> List[EditOutcome]:
    """
    Apply `changes` to `lines` in place, strictly in the given order.

    Every line number is read against the list as it stands when that change
    runs, so an earlier add or remove moves the targets of later changes.
    Guard mismatches and out-of-range positions are skipped, never raised.
    """
    outcomes = []
    for index, edit in enumerate(changes):
        position = edit.line_number - 1

        if edit.action is EditAction.ADD:
            # len + 1 appends
            if not 0 <= position <= len(lines):
                outcomes.append(EditOutcome(index, edit, False, f"line {edit.line_number} out of range for insert"))
                continue
            lines.insert(position, edit.new_line)
            outcomes.append(EditOutcome(index, edit, True))
            continue

        if not 0 <= position < len(lines):
            outcomes.append(EditOutcome(index, edit, False, f"line {edit.line_number} out of range"))
            continue

        current = lines[position]
        if current.strip() != edit.original_line.strip():
            outcomes.append(EditOutcome(
                index, edit, False,
                f"line {edit.line_number} is {current.strip()!r}, expected {edit.original_line.strip()!r}",
            ))
            continue

        if edit.action is EditAction.EDIT:
            lines[position] = _leading_whitespace(current) + edit.new_line.lstrip()
        else:
            del lines[position]
        outcomes.append(EditOutcome(index, edit, True))

    return outcomes


class PatchApplier:
    """Writes change sets to files under `project_root`. No backups are kept."""

    def __init__(self, project_root: Path):
        self.project_root = Path(project_root).resolve()

    def resolve(self, file_name: str) -> Path:
        path = Path(file_name)
        if not path.is_absolute():
            path = self.project_root / path
        return path

    def apply(self, change_set: FileChangeSet) -> FileApplyReport:
        """
        Apply one file's changes and overwrite the file.

        A file that cannot be read or written is left untouched and the
        report carries the error instead of raising.
        """
        path = self.resolve(change_set.file_name)
        report = FileApplyReport(file_name=change_set.file_name, path=path)

        try:
            report.before = _read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            report.error = f"Cannot read {path}: {e}"
            logger.warning(report.error)
            return report

        # CRLF files keep their line endings
        newline = "\r\n" if "\r\n" in report.before else "\n"
        lines = report.before.split(newline)
        report.outcomes = apply_edits(lines, change_set.changes)
        after = newline.join(lines)

        for outcome in report.skipped:
            logger.info("Skipped change %d in %s: %s", outcome.index + 1, change_set.file_name, outcome.reason)

        if after != report.before:
            try:
                _write_atomic(path, after)
            except OSError as e:
                report.error = f"Cannot write {path}: {e}"
                logger.warning(report.error)
                report.after = report.before
                return report

        report.after = after
        return report

    def apply_document(self, document: PatchDocument) -> List[FileApplyReport]:
        """Apply every change set in order. Earlier files stay modified if a later one fails."""
        return [self.apply(change_set) for change_set in document.files]
