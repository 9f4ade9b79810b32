"""
Pydantic schemas for API request/response validation
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# ==========================================
# CLASSROOM SCHEMAS
# ==========================================

class ClassroomCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    students: List[EmailStr] = Field(default_factory=list)


class ClassroomResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    students: List[str]
    created_at: datetime


# ==========================================
# ASSIGNMENT SCHEMAS
# ==========================================

class AssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    subject: str
    classroom_id: int
    deadline: str
    tasks: List[dict]
    total_marks_weightage: Optional[str] = None
    evaluation_criteria: Optional[str] = None
    number_of_tasks: int
    language: str
    additional_instructions: str
    content: str
    doc_link: Optional[str] = None
    student_emails: List[str]
    created_by: str
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class CreateAssignmentResponse(BaseModel):
    message: str
    assignment: AssignmentResponse
    docLink: str
    warnings: List[str] = Field(default_factory=list)
