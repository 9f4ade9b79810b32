"""
Step 3 — Response Validator

Turns the generator's raw reply into a canonical AssignmentRecord:
- strip ```json fences
- decode JSON
- check required fields (all missing fields reported together)
- reconcile numberOfTasks against the tasks array
    fewer tasks  → TaskCountDeficit (fatal)
    more tasks   → truncate, TaskCountSurplus diagnostic (warning)

Pure apart from the warning log; no I/O.
"""

import json
import logging
import re
from typing import Any, List, Optional

from generation.errors import (
    InvalidField,
    MalformedEnvelope,
    MalformedJSON,
    MissingField,
    TaskCountDeficit,
)
from generation.schemas import AssignmentRecord, Diagnostic, DiagnosticKind, Task

log = logging.getLogger("generation.pipeline")

REQUIRED_FIELDS = (
    "title",
    "deadline",
    "totalMarksWeightage",
    "evaluationCriteria",
    "numberOfTasks",
    "tasks",
)

_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*(?:\n|$)")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# ─── Envelope ──────────────────────────────────────────────────────────────────

def strip_code_fences(raw_text: str) -> str:
    """Remove a leading ```json (or bare ```) line and its closing fence."""
    cleaned = (raw_text or "").strip()
    match = _OPENING_FENCE.match(cleaned)
    if match:
        cleaned = cleaned[match.end():]
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]
    return cleaned.strip()


def decode_envelope(raw_text: str) -> dict:
    """Fence-strip and decode. Raises MalformedEnvelope / MalformedJSON."""
    return _decode(strip_code_fences(raw_text), raw_text)


def _decode(cleaned: str, raw_text: str) -> dict:
    if not cleaned:
        raise MalformedEnvelope("Generated assignment content is empty", raw_text=raw_text)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        log.error(f"[VALIDATE] Failed to parse response as JSON: {cleaned[:300]}")
        raise MalformedJSON(
            f"Expected JSON format but received malformed content: {e}", raw_text=cleaned
        ) from e

    if not isinstance(data, dict):
        raise MalformedJSON(
            f"Expected a JSON object, got {type(data).__name__}", raw_text=cleaned
        )
    return data


# ─── Field helpers ─────────────────────────────────────────────────────────────

def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_integer(value: Any) -> Optional[int]:
    """Leading-integer parse: 3, "3", "3 tasks" → 3. None when unparseable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def _scalar(data: dict, name: str, cleaned: str) -> Any:
    """A required text-like field. Lists and objects are rejected rather than stringified."""
    value = data[name]
    if isinstance(value, (list, dict)):
        raise InvalidField(name, f"expected text, got {type(value).__name__}", raw_text=cleaned)
    return value


def _coerce_tasks(items: List[Any], cleaned: str) -> List[Task]:
    tasks = []
    for position, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise InvalidField("tasks", f"task {position} is not an object", raw_text=cleaned)
        weightage = item.get("weightage")
        tasks.append(
            Task(
                description=str(item.get("description") or ""),
                weightage=weightage if isinstance(weightage, (str, int, float)) and not isinstance(weightage, bool) else "",
            )
        )
    return tasks


# ─── Main entry ────────────────────────────────────────────────────────────────

def validate_response(
    raw_text: str,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> AssignmentRecord:
    """
    Step 3: validate and normalise one generator reply.

    Args:
        raw_text:    Model output, optionally wrapped in ```json fences
        diagnostics: If given, non-fatal findings (task surplus) are appended here

    Returns:
        AssignmentRecord with exactly numberOfTasks tasks

    Raises:
        AssignmentValidationError subclass describing the failure
    """
    cleaned = strip_code_fences(raw_text)
    data = _decode(cleaned, raw_text)

    missing = [name for name in REQUIRED_FIELDS if _is_missing(data.get(name))]
    if missing:
        log.error(f"[VALIDATE] Missing required fields {missing}")
        raise MissingField(missing, raw_text=cleaned)

    title, deadline, total_marks, criteria = (
        _scalar(data, name, cleaned)
        for name in ("title", "deadline", "totalMarksWeightage", "evaluationCriteria")
    )

    expected = parse_integer(data["numberOfTasks"])
    if expected is None or expected < 0:
        raise InvalidField(
            "numberOfTasks", f"not a non-negative integer: {data['numberOfTasks']!r}", raw_text=cleaned
        )

    if not isinstance(data["tasks"], list):
        raise InvalidField("tasks", "expected a list of task objects", raw_text=cleaned)

    tasks = _coerce_tasks(data["tasks"], cleaned)
    actual = len(tasks)

    if actual < expected:
        log.error(f"[VALIDATE] Expected {expected} tasks, but tasks array has {actual}")
        raise TaskCountDeficit(expected, actual, raw_text=cleaned)

    if actual > expected:
        message = f"Expected {expected} tasks, but found {actual}. Trimming extra tasks."
        log.warning(f"[VALIDATE] {message}")
        if diagnostics is not None:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.TASK_COUNT_SURPLUS,
                    message=message,
                    details={"expected": expected, "actual": actual},
                )
            )
        tasks = tasks[:expected]

    if isinstance(total_marks, bool):
        total_marks = str(total_marks)

    return AssignmentRecord(
        title=str(title),
        deadline=str(deadline),
        total_marks_weightage=total_marks,
        evaluation_criteria=str(criteria),
        number_of_tasks=expected,
        tasks=tasks,
        language=str(data.get("language") or "English"),
        additional_instructions=str(data.get("additionalInstructions") or "None"),
    )
