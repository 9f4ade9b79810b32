"""
Assignment generation entry point: prompt → model → validated record.
"""

import logging
from typing import List, Optional

from generation.errors import MalformedEnvelope
from generation.prompt_builder import SYSTEM_PROMPT, build_assignment_prompt
from generation.schemas import AssignmentRecord, AssignmentRequest, Diagnostic
from generation.validator import validate_response

log = logging.getLogger("generation.pipeline")


async def generate_assignment(
    request: AssignmentRequest,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> AssignmentRecord:
    """
    Generate one assignment and validate it.

    Raises:
        AssignmentValidationError: the reply was empty, not JSON, or inconsistent
        RuntimeError: OPENROUTER_API_KEY missing
    """
    from generation.gpt_client import call_gpt

    prompt = build_assignment_prompt(request)
    log.info(f"[GENERATE] subject='{request.subject}' title='{request.title}'")

    raw = (await call_gpt(prompt, system=SYSTEM_PROMPT, temperature=0.5)).strip()
    log.debug(f"[GENERATE] Raw response: {raw[:500]}")
    if not raw:
        raise MalformedEnvelope("Generated assignment content is empty", raw_text=raw)

    record = validate_response(raw, diagnostics=diagnostics)
    log.info(f"[GENERATE] Validated '{record.title}' with {record.number_of_tasks} tasks")
    return record
