"""
CRUD operations for classrooms and assignments
All database operations go through these functions
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from database import models, schemas
from generation.schemas import AssignmentRecord


# ==========================================
# CLASSROOM CRUD
# ==========================================

def create_classroom(db: Session, classroom: schemas.ClassroomCreate) -> models.Classroom:
    """Create a new classroom"""
    db_classroom = models.Classroom(
        name=classroom.name,
        students=[str(email) for email in classroom.students],
    )
    db.add(db_classroom)
    db.commit()
    db.refresh(db_classroom)
    return db_classroom


def get_classroom(db: Session, classroom_id: int) -> Optional[models.Classroom]:
    """Get classroom by ID"""
    return db.query(models.Classroom).filter(models.Classroom.id == classroom_id).first()


# ==========================================
# ASSIGNMENT CRUD
# ==========================================

def create_assignment(
    db: Session,
    *,
    record: AssignmentRecord,
    title: str,
    subject: str,
    classroom_id: int,
    deadline: str,
    content: str,
    doc_id: str,
    doc_link: str,
    student_emails: List[str],
    created_by: str,
) -> models.Assignment:
    """Persist a validated assignment together with its published doc."""
    db_assignment = models.Assignment(
        title=title,
        subject=subject,
        classroom_id=classroom_id,
        deadline=deadline,
        tasks=[task.model_dump() for task in record.tasks],
        total_marks_weightage=str(record.total_marks_weightage),
        evaluation_criteria=record.evaluation_criteria,
        number_of_tasks=record.number_of_tasks,
        language=record.language,
        additional_instructions=record.additional_instructions,
        content=content,
        doc_id=doc_id,
        doc_link=doc_link,
        student_emails=list(student_emails),
        created_by=created_by,
        status=models.AssignmentStatus.PENDING.value,
    )
    db.add(db_assignment)
    db.commit()
    db.refresh(db_assignment)
    return db_assignment


def get_assignment(db: Session, assignment_id: int) -> Optional[models.Assignment]:
    """Get assignment by ID"""
    return db.query(models.Assignment).filter(models.Assignment.id == assignment_id).first()


def get_assignments_by_classroom(db: Session, classroom_id: int) -> List[models.Assignment]:
    """All assignments of a classroom, oldest first"""
    return (
        db.query(models.Assignment)
        .filter(models.Assignment.classroom_id == classroom_id)
        .order_by(models.Assignment.id)
        .all()
    )


def set_assignment_status(
    db: Session, assignment: models.Assignment, status: models.AssignmentStatus
) -> models.Assignment:
    assignment.status = status.value
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return assignment
