"""
Assignments Router — /api/assignments

Endpoints:
  POST /api/assignments                          — generate, publish to Google Docs, share, save
  PUT  /api/assignments/{id}/approve             — email the doc link to every student
  GET  /api/assignments/classroom/{classroom_id} — list a classroom's assignments
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from auth.security import GoogleUser, get_current_user
from database import crud
from database.database import get_db
from database.models import AssignmentStatus
from database.schemas import AssignmentResponse, CreateAssignmentResponse
from generation.assignment_generator import generate_assignment
from generation.errors import AssignmentValidationError
from generation.markdown_renderer import render_markdown
from generation.schemas import AssignmentRequest, Diagnostic
from services.gmail import approval_email_body, send_email
from services.google_docs import GoogleAPIError, create_google_doc, share_google_doc

router = APIRouter(prefix="/assignments", tags=["assignments"])

log = logging.getLogger("generation.pipeline")


# ─── Create ────────────────────────────────────────────────────────────────────

@router.post("", response_model=CreateAssignmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment(
    request: AssignmentRequest,
    user: GoogleUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Generate an assignment with the model, publish it as a formatted Google Doc,
    share it read-only with the classroom and store it with status "pending".
    """
    log.info(f"[CREATE] {user.email}: '{request.title}' for classroom {request.classroom_id}")

    classroom = crud.get_classroom(db, request.classroom_id)
    if not classroom:
        raise HTTPException(status_code=404, detail="Classroom not found")

    student_emails = list(classroom.students or [])
    if not student_emails:
        raise HTTPException(status_code=400, detail="No students found in the classroom")

    diagnostics: List[Diagnostic] = []
    try:
        record = await generate_assignment(request, diagnostics=diagnostics)
    except AssignmentValidationError as e:
        log.error(f"[CREATE] Generated content rejected: {e.kind}: {e}")
        raise HTTPException(status_code=422, detail=e.to_dict())

    markdown_content = render_markdown(record)
    if not markdown_content.strip():
        raise HTTPException(status_code=500, detail="Generated assignment content is empty")

    try:
        link = await create_google_doc(request.title, markdown_content, user.access_token)
        await share_google_doc(link.doc_id, student_emails, user.access_token)
    except GoogleAPIError as e:
        raise HTTPException(status_code=502, detail=f"Google API failed: {e}")

    assignment = crud.create_assignment(
        db,
        record=record,
        title=request.title,
        subject=request.subject,
        classroom_id=classroom.id,
        deadline=request.deadline,
        content=markdown_content,
        doc_id=link.doc_id,
        doc_link=link.doc_link,
        student_emails=student_emails,
        created_by=user.email,
    )
    log.info(f"[CREATE] Assignment saved with ID {assignment.id}")

    return CreateAssignmentResponse(
        message="Assignment created successfully",
        assignment=AssignmentResponse.model_validate(assignment),
        docLink=link.doc_link,
        warnings=[d.message for d in diagnostics],
    )


# ─── Approve ───────────────────────────────────────────────────────────────────

@router.put("/{assignment_id}/approve")
async def approve_assignment(
    assignment_id: int,
    user: GoogleUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Notify every student of the classroom by email and mark the assignment approved."""
    assignment = crud.get_assignment(db, assignment_id)
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")

    classroom = crud.get_classroom(db, assignment.classroom_id)
    if not classroom or not classroom.students:
        raise HTTPException(status_code=400, detail="Classroom data is missing")

    subject = f"New Assignment Approved: {assignment.title}"
    body = approval_email_body(assignment.subject, assignment.doc_link or "")
    try:
        for email in classroom.students:
            await send_email(user.access_token, user.email, email, subject, body)
    except GoogleAPIError as e:
        raise HTTPException(status_code=502, detail=f"Google API failed: {e}")

    crud.set_assignment_status(db, assignment, AssignmentStatus.APPROVED)
    return {"message": "Assignment approved and notifications sent"}


# ─── List ──────────────────────────────────────────────────────────────────────

@router.get("/classroom/{classroom_id}", response_model=List[AssignmentResponse])
def list_classroom_assignments(
    classroom_id: int,
    _: GoogleUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return crud.get_assignments_by_classroom(db, classroom_id)
