# src/mender/agents/sre_team/sandbox.py
# Runs the target program and classifies the run by its output.

import logging
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from mender.errors import SpawnFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageProfile:
    interpreter: str
    failure_marker: str


DEFAULT_PROFILES: Dict[str, LanguageProfile] = {
    ".py": LanguageProfile(interpreter=sys.executable or "python3", failure_marker="Traceback"),
}


@dataclass(frozen=True)
class ExecutionResult:
    combined_output: str
    failed: bool
    returncode: int = 0


class ExecutionProbe:
    """
    Runs a program with the interpreter registered for its suffix:
      1) captures stdout then stderr, whatever the exit code
      2) marks the run failed iff the output contains the failure marker
    A non-zero exit without the marker is a successful run.
    """

    def __init__(self, profiles: Optional[Dict[str, LanguageProfile]] = None, default_suffix: str = ".py"):
        self.profiles = dict(DEFAULT_PROFILES)
        if profiles:
            self.profiles.update(profiles)
        self.default_suffix = default_suffix

    def profile_for(self, path: Path) -> LanguageProfile:
        return self.profiles.get(Path(path).suffix.lower(), self.profiles[self.default_suffix])

    def run(self, path: Path) -> ExecutionResult:
        path = Path(path).resolve()
        profile = self.profile_for(path)
        command = [profile.interpreter, str(path)]
        logger.info("Running %s", " ".join(command))

        try:
            completed = subprocess.run(
                command,
                cwd=path.parent,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise SpawnFailure(
                f"Could not start {profile.interpreter} for {path}: {e}",
                {"command": command},
            ) from e

        output = (completed.stdout or "") + (completed.stderr or "")
        failed = profile.failure_marker in output
        logger.info("Exit code %s, failed=%s", completed.returncode, failed)
        return ExecutionResult(combined_output=output, failed=failed, returncode=completed.returncode)
