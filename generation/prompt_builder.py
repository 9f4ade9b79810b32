"""
Step 1 — Prompt Builder

Fills the assignment prompt template from an AssignmentRequest plus an
academic-context blurb read from disk (ACADEMIC_CONTEXT_PATH).
"""

import logging
import os
from pathlib import Path
from typing import Optional

from generation.schemas import AssignmentRequest

log = logging.getLogger("generation.pipeline")

ACADEMIC_CONTEXT_PATH = os.getenv(
    "ACADEMIC_CONTEXT_PATH",
    str(Path(__file__).resolve().parent / "academic_context.txt"),
)

DEFAULT_ACADEMIC_CONTEXT = (
    "Academic assignments should follow a structured format with an introduction, "
    "clearly defined objectives, well-researched content, and a robust grading rubric. "
    "Assignments must challenge students to apply critical thinking and demonstrate "
    "their understanding of the subject."
)


# ─── System prompt ─────────────────────────────────────────────────────────────

SYSTEM_PROMPT = (
    "You are an experienced professor creating structured assignments. "
    "Ensure your response is STRICTLY formatted in valid JSON. Structure: "
    '{"title": "Assignment Title", "deadline": "Due date", '
    '"totalMarksWeightage": "Overall marks weightage", '
    '"evaluationCriteria": "Evaluation criteria", '
    '"numberOfTasks": "Number of tasks", '
    '"tasks": [ { "description": "Task details", "weightage": "Task weightage" } ]}'
)


# ─── User prompt ───────────────────────────────────────────────────────────────

ASSIGNMENT_PROMPT = """Assignment Generation for Top-Tier Academia
You are a world-class professor at a prestigious university, responsible for designing
structured, high-quality academic assignments that meet the highest educational standards.

Generate the assignment in the following language: {language}

ASSIGNMENT SPECIFICATIONS:
- Subject: {subject}
- Grade Level: {grade_level}
- Difficulty Level: {difficulty_level}
- Detail Level: {detail_level}
- Language: {language}
- Deadline: {deadline}
- Number of Tasks: {number_of_tasks}
- Total Marks: {total_marks}
- Evaluation Criteria: {evaluation_criteria}
- Additional Instructions: {additional_instructions}

ACADEMIC CONTEXT:
---
{context}
---

RESPONSE FORMAT — respond with ONLY a valid JSON object:
{{
  "title": "{title}",
  "deadline": "{deadline}",
  "totalMarksWeightage": "<overall marks>",
  "evaluationCriteria": "<evaluation criteria>",
  "numberOfTasks": {number_of_tasks_json},
  "tasks": [
    {{"description": "<task details>", "weightage": "<task weightage>"}}
  ]
}}

RULES:
1. The tasks array must contain exactly numberOfTasks entries
2. Task weightages should add up to the total marks
3. Return ONLY the JSON object
"""


def load_academic_context(path: Optional[str] = None) -> str:
    """Read the academic context file; fall back to a built-in paragraph."""
    context_path = Path(path or ACADEMIC_CONTEXT_PATH)
    try:
        if context_path.exists():
            return context_path.read_text(encoding="utf-8").strip() or "No additional academic context provided."
        log.warning(f"[PROMPT] {context_path} not found. Using default academic context.")
    except OSError as e:
        log.error(f"[PROMPT] Failed to read academic context: {e}")
    return DEFAULT_ACADEMIC_CONTEXT


def build_assignment_prompt(request: AssignmentRequest, context: Optional[str] = None) -> str:
    """Render ASSIGNMENT_PROMPT for one request. Extra `context` is appended to the academic context."""
    academic_context = load_academic_context()
    if context:
        academic_context = f"{context}\n\n{academic_context}"

    number_of_tasks = request.number_of_tasks if request.number_of_tasks not in (None, "") else "n"

    return ASSIGNMENT_PROMPT.format(
        title=request.title or "Untitled Assignment",
        subject=request.subject,
        grade_level=request.grade_level or "Not specified",
        difficulty_level=request.difficulty_level or "Not specified",
        detail_level=request.detail_level or "Not specified",
        language=request.language or "English",
        deadline=request.deadline or "Deadline not specified",
        number_of_tasks=number_of_tasks,
        number_of_tasks_json=number_of_tasks if isinstance(number_of_tasks, int) else f'"{number_of_tasks}"',
        total_marks=request.total_marks_weightage or "100",
        evaluation_criteria=request.evaluation_criteria or "Not specified",
        additional_instructions=request.additional_instructions or "None",
        context=academic_context,
    )
