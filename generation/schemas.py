"""
Pydantic schemas for the assignment generation pipeline.

Layer 1:  AssignmentRequest → prompt → raw model output → AssignmentRecord
Layer 2:  markdown → Token stream → Operation list (Google Docs edits)
"""

import enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ─── Layer 1: Request / Record ─────────────────────────────────────────────────

class AssignmentRequest(BaseModel):
    """What the educator asks for. Feeds the prompt builder."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    subject: str
    classroom_id: int = Field(..., alias="classroomId")
    deadline: str
    total_marks_weightage: Optional[Union[str, int, float]] = Field(None, alias="totalMarksWeightage")
    evaluation_criteria: Optional[str] = Field(None, alias="evaluationCriteria")
    number_of_tasks: Optional[Union[str, int]] = Field(None, alias="numberOfTasks")
    language: Optional[str] = None
    additional_instructions: Optional[str] = Field(None, alias="additionalInstructions")
    grade_level: Optional[str] = Field(None, alias="gradeLevel")
    difficulty_level: Optional[str] = Field(None, alias="difficultyLevel")
    detail_level: Optional[str] = Field(None, alias="detailLevel")


class Task(BaseModel):
    description: str = ""
    weightage: Union[str, int, float] = ""


class AssignmentRecord(BaseModel):
    """
    Canonical, validated assignment.

    Invariant once produced by the validator: len(tasks) == number_of_tasks.
    Serialise with model_dump(by_alias=True) to get the camelCase wire shape.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str
    deadline: str
    total_marks_weightage: Union[str, int, float] = Field(..., alias="totalMarksWeightage")
    evaluation_criteria: str = Field(..., alias="evaluationCriteria")
    number_of_tasks: int = Field(..., ge=0, alias="numberOfTasks")
    tasks: List[Task]
    language: str = "English"
    additional_instructions: str = Field("None", alias="additionalInstructions")


# ─── Diagnostics ───────────────────────────────────────────────────────────────

class DiagnosticKind(str, enum.Enum):
    """Non-fatal signals raised while validating or compiling."""
    TASK_COUNT_SURPLUS = "TaskCountSurplus"
    UNRECOGNIZED_TOKEN = "UnrecognizedToken"
    EMPTY_OUTPUT = "EmptyOutput"


class Diagnostic(BaseModel):
    kind: DiagnosticKind
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


# ─── Renderer placeholders ─────────────────────────────────────────────────────

class RenderDefaults(BaseModel):
    """Placeholder text used by the markdown renderer for each missing field."""
    title: str = "Untitled Assignment"
    deadline: str = "Deadline not specified"
    number_of_tasks: str = "Not specified"
    task_description: str = "No description provided"
    task_weightage: str = "Not specified"
    total_marks_weightage: str = "100"
    evaluation_criteria: str = "Auto-generated evaluation criteria"
    placeholder_tasks: List[Task] = Field(
        default_factory=lambda: [
            Task(description=f"Auto-generated Task {i} details", weightage="Auto-generated weightage")
            for i in (1, 2, 3)
        ]
    )


# ─── Layer 2: Tokens ───────────────────────────────────────────────────────────

class HeadingToken(BaseModel):
    type: Literal["heading"] = "heading"
    depth: int = Field(..., ge=1, le=6)
    text: str


class ParagraphToken(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    text: str


class ListItem(BaseModel):
    text: str = ""


class ListToken(BaseModel):
    type: Literal["list"] = "list"
    ordered: bool = False
    items: List[ListItem] = Field(default_factory=list)


class CodeToken(BaseModel):
    type: Literal["code"] = "code"
    text: str


class SpaceToken(BaseModel):
    type: Literal["space"] = "space"


class UnknownToken(BaseModel):
    type: Literal["unknown"] = "unknown"
    kind: str


Token = Annotated[
    Union[HeadingToken, ParagraphToken, ListToken, CodeToken, SpaceToken, UnknownToken],
    Field(discriminator="type"),
]


# ─── Layer 2: Operations ───────────────────────────────────────────────────────

class InsertText(BaseModel):
    kind: Literal["insert_text"] = "insert_text"
    index: int = Field(..., ge=1)
    text: str


class SetParagraphStyle(BaseModel):
    kind: Literal["set_paragraph_style"] = "set_paragraph_style"
    start: int
    end: int
    style_name: str


class SetListBullets(BaseModel):
    kind: Literal["set_list_bullets"] = "set_list_bullets"
    start: int
    end: int
    preset: str


class SetTextStyle(BaseModel):
    kind: Literal["set_text_style"] = "set_text_style"
    start: int
    end: int
    font_family: str
    weight: int


Operation = Annotated[
    Union[InsertText, SetParagraphStyle, SetListBullets, SetTextStyle],
    Field(discriminator="kind"),
]


class CompileResult(BaseModel):
    """Output of one compilation pass."""
    operations: List[Operation]
    final_cursor: int
    diagnostics: List[Diagnostic] = Field(default_factory=list)


# ─── Layer 3: Google Docs ──────────────────────────────────────────────────────

class DocumentLink(BaseModel):
    doc_id: str
    doc_link: str
