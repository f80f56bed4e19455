# src/mender/agents/repair_team/validator.py
# Turns raw LLM text into a validated PatchDocument.

import json
import logging

from pydantic import ValidationError

from mender.agents.repair_team.patch import PatchDocument
from mender.errors import MalformedPatch
from mender.utils.markdown import strip_markdown_code_block

logger = logging.getLogger(__name__)


def parse_patch(raw_text: str) -> PatchDocument:
    """
    Parse and validate a patch document.

    Line numbers are not checked against the target files; the applier
    skips out-of-range positions on its own.

    Raises:
        MalformedPatch: the text is not JSON, or a required field is missing
            or has the wrong shape. Nothing is returned in that case, so a
            malformed response can never be partially applied.
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        raise MalformedPatch("Patch response is empty")

    payload_text = strip_markdown_code_block(raw_text)
    try:
        payload = json.loads(payload_text)
    except json.JSONDecodeError as e:
        raise MalformedPatch(f"Patch response is not valid JSON: {e}", {"raw": raw_text}) from e

    if not isinstance(payload, dict):
        raise MalformedPatch(
            f"Patch response must be a JSON object, got {type(payload).__name__}",
            {"raw": raw_text},
        )

    try:
        document = PatchDocument.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise MalformedPatch(f"Patch document failed validation: {problems}", {"raw": raw_text}) from e

    logger.debug("Parsed patch touching %d file(s): %s", len(document.files), document.file_names)
    return document
