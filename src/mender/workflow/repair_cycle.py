# src/mender/workflow/repair_cycle.py
# Drives the probe -> request -> apply -> report loop until the program runs clean.

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from mender.agents.repair_team.fixer_agent import PatchSource, RepairRequest
from mender.agents.repair_team.patch import PatchDocument
from mender.agents.repair_team.patch_applier import FileApplyReport, PatchApplier
from mender.agents.repair_team.validator import parse_patch
from mender.agents.sre_team.sandbox import ExecutionProbe, ExecutionResult
from mender.cli.controller import Canvas, canvas as default_canvas
from mender.cli.view import show_code_block, show_diff, show_output
from mender.config.config import RepairSettings
from mender.errors import MalformedPatch, MenderError
from mender.workflow.diff_renderer import render_diff

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    PROBING = "probing"
    REQUESTING = "requesting"
    APPLYING = "applying"
    REPORTING = "reporting"
    DONE = "done"
    EXHAUSTED = "exhausted"
    FATAL = "fatal"


class RepairStatus(str, Enum):
    SUCCESS = "success"
    EXHAUSTED = "exhausted"
    FATAL = "fatal"


@dataclass
class AttemptRecord:
    attempt: int
    result: ExecutionResult
    document: Optional[PatchDocument] = None
    reports: List[FileApplyReport] = field(default_factory=list)


@dataclass
class RepairOutcome:
    status: RepairStatus
    attempts: int
    probes: int
    last_result: Optional[ExecutionResult] = None
    history: List[AttemptRecord] = field(default_factory=list)
    error: Optional[MenderError] = None

    @property
    def succeeded(self) -> bool:
        return self.status is RepairStatus.SUCCESS


class RepairLoopController:
    """
    Runs the target, and while its output carries the failure marker asks
    `patch_source` for a patch, applies it and runs the target again.

    The loop ends with:
      - SUCCESS once a run has no failure marker,
      - EXHAUSTED when `max_attempts` patches did not fix it,
      - FATAL when the program cannot be started, the LLM call fails, or
        every retry produced a malformed patch.
    Skipped edits and unreadable files never stop the loop; the next probe
    decides whether the fix worked.
    """

    def __init__(
        self,
        probe: ExecutionProbe,
        patch_source: PatchSource,
        settings: Optional[RepairSettings] = None,
        applier_factory: Callable[[Path], PatchApplier] = PatchApplier,
        canvas: Optional[Canvas] = None,
    ):
        self.probe = probe
        self.patch_source = patch_source
        self.settings = settings or RepairSettings()
        self.applier_factory = applier_factory
        self.canvas = canvas or default_canvas
        self.state = LoopState.PROBING
        self.transitions: List[LoopState] = []

    def _enter(self, state: LoopState):
        logger.debug("%s -> %s", self.state.value, state.value)
        self.state = state
        self.transitions.append(state)

    def _budget_spent(self, attempts: int) -> bool:
        max_attempts = self.settings.max_attempts
        return max_attempts is not None and attempts >= max_attempts

    def request_document(self, request: RepairRequest) -> PatchDocument:
        """Ask for a patch, re-asking up to `max_patch_retries` times on malformed answers."""
        tries = self.settings.max_patch_retries + 1
        attempt = 0
        while True:
            attempt += 1
            raw = self.patch_source.request_patch(request)
            self.canvas.info("Fix:")
            self.canvas.print(raw)
            try:
                return parse_patch(raw)
            except MalformedPatch as e:
                logger.warning("Malformed patch (%d/%d): %s", attempt, tries, e)
                self.canvas.warning(f"Malformed patch ({attempt}/{tries}): {e}")
                if attempt >= tries:
                    raise

    def report(self, reports: List[FileApplyReport]):
        for file_report in reports:
            if file_report.error:
                self.canvas.warning(f"{file_report.file_name}: {file_report.error}")
                continue
            show_diff(self.canvas, file_report.file_name, render_diff(file_report.before, file_report.after, file_report.file_name))
            if file_report.skipped:
                self.canvas.warning(
                    f"{len(file_report.skipped)} of {len(file_report.outcomes)} change(s) in "
                    f"{file_report.file_name} did not match and were skipped."
                )

    def run(self, target: Path, intent: Optional[str] = None) -> RepairOutcome:
        target = Path(target).resolve()
        applier = self.applier_factory(target.parent)
        history: List[AttemptRecord] = []
        attempts = 0
        probes = 0
        result: Optional[ExecutionResult] = None

        self.state = LoopState.PROBING
        self.transitions = [LoopState.PROBING]

        try:
            original_code = target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self._enter(LoopState.FATAL)
            self.canvas.error(f"Cannot read {target}: {e}")
            return RepairOutcome(RepairStatus.FATAL, attempts, probes, error=MenderError(str(e)))
        self.canvas.info("Original Code:")
        show_code_block(self.canvas, original_code, target.name)

        try:
            while True:
                # PROBING
                result = self.probe.run(target)
                probes += 1
                show_output(self.canvas, result.combined_output, result.failed)

                if not result.failed:
                    self._enter(LoopState.DONE)
                    self.canvas.success("Code runs without errors!")
                    return RepairOutcome(RepairStatus.SUCCESS, attempts, probes, result, history)

                if self._budget_spent(attempts):
                    self._enter(LoopState.EXHAUSTED)
                    self.canvas.error(f"Still failing after {attempts} fix attempt(s); giving up.")
                    return RepairOutcome(RepairStatus.EXHAUSTED, attempts, probes, result, history)

                # REQUESTING
                self._enter(LoopState.REQUESTING)
                attempts += 1
                record = AttemptRecord(attempt=attempts, result=result)
                history.append(record)
                self.canvas.step(f"Fixing code... (attempt {attempts})")
                try:
                    current_code = target.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as e:
                    raise MenderError(f"Cannot read {target}: {e}") from e
                request = RepairRequest(
                    file_path=target,
                    source=current_code,
                    output=result.combined_output,
                    intent=intent,
                )
                record.document = self.request_document(request)
                if record.document.explanation:
                    self.canvas.info(record.document.explanation)

                # APPLYING
                self._enter(LoopState.APPLYING)
                record.reports = applier.apply_document(record.document)

                # REPORTING
                self._enter(LoopState.REPORTING)
                self.report(record.reports)

                self._enter(LoopState.PROBING)
        except MenderError as e:
            self._enter(LoopState.FATAL)
            logger.error("Repair loop aborted: %s", e)
            self.canvas.error(f"Repair loop aborted: {e}")
            return RepairOutcome(RepairStatus.FATAL, attempts, probes, result, history, error=e)
