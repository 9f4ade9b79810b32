"""
Step 4 — Markdown Renderer

Serialises an assignment (validated AssignmentRecord or a loose dict straight
from the model) into the canonical markdown document inserted into Google Docs.

Never fails: every missing or empty field falls back to the matching
RenderDefaults placeholder. Output is byte-stable for equal input, since the
document compiler's offsets depend on exact text lengths.

Field values are normalised so each stays inside its own block: blank lines
collapse to a space, and any line opening with a block marker (#, -, >, 1. ...)
is backslash-escaped. The title is folded onto one line.
"""

import re
from typing import Any, List, Mapping, Optional, Union

from generation.schemas import AssignmentRecord, RenderDefaults, Task

_BLANK_LINES = re.compile(r"\n\s*\n")
_ORDERED_MARKER = re.compile(r"^(\d+)([.)])(?=\s|$)")
_MARKER_CHARS = set("#>*+-=`~<")


def _escape_line(line: str) -> str:
    line = line.strip()
    ordered = _ORDERED_MARKER.match(line)
    if ordered:
        return f"{ordered.group(1)}\\{line[ordered.end(1):]}"
    if line[:1] in _MARKER_CHARS:
        return "\\" + line
    return line


def _text(value: Any, placeholder: str) -> str:
    if not value:
        return placeholder
    text = _BLANK_LINES.sub(" ", str(value).replace("\r\n", "\n")).strip()
    if not text:
        return placeholder
    return "\n".join(_escape_line(line) for line in text.split("\n"))


def _title(value: Any, placeholder: str) -> str:
    text = " ".join(str(value).split()) if value else ""
    return _escape_line(text) if text else placeholder


def _task_lines(tasks: Any, defaults: RenderDefaults) -> List[str]:
    if not isinstance(tasks, list) or not tasks:
        tasks = defaults.placeholder_tasks

    lines = []
    for index, task in enumerate(tasks, start=1):
        if isinstance(task, Task):
            task = task.model_dump()
        if not isinstance(task, Mapping):
            task = {}
        description = _text(task.get("description"), defaults.task_description)
        weightage = _text(task.get("weightage"), defaults.task_weightage)
        lines.append(f"Task {index}: {description} (Weightage: {weightage} marks)")
    return lines


def render_markdown(
    record: Union[AssignmentRecord, Mapping[str, Any]],
    defaults: Optional[RenderDefaults] = None,
) -> str:
    """
    Render an assignment as markdown.

    Example output:
    ```
    # Binary Trees

    ## Deadline

    2025-03-01

    ## Number of Tasks

    2

    ## Tasks

    Task 1: Implement insert (Weightage: 40 marks)

    Task 2: Implement delete (Weightage: 60 marks)

    ## Total Weightage Marks

    100

    ## Evaluation Criteria

    Correctness and style
    ```
    """
    defaults = defaults or RenderDefaults()
    if isinstance(record, AssignmentRecord):
        data = record.model_dump(by_alias=True)
    elif isinstance(record, Mapping):
        data = record
    else:
        data = {}

    tasks = data.get("tasks")
    number_of_tasks = data.get("numberOfTasks")
    if not number_of_tasks and isinstance(tasks, list) and tasks:
        number_of_tasks = len(tasks)

    blocks = [
        f"# {_title(data.get('title'), defaults.title)}",
        "## Deadline",
        _text(data.get("deadline"), defaults.deadline),
        "## Number of Tasks",
        _text(number_of_tasks, defaults.number_of_tasks),
        "## Tasks",
        *_task_lines(tasks, defaults),
        "## Total Weightage Marks",
        _text(data.get("totalMarksWeightage"), defaults.total_marks_weightage),
        "## Evaluation Criteria",
        _text(data.get("evaluationCriteria"), defaults.evaluation_criteria),
    ]
    return "\n\n".join(blocks).strip()
