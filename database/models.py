"""
SQLAlchemy models for classrooms and generated assignments.
"""

import enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database.database import Base


class AssignmentStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"


# ==========================================
# CLASSROOMS
# ==========================================

class Classroom(Base):
    """A class of students. `students` is a JSON list of email addresses."""
    __tablename__ = "classrooms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    students = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    assignments = relationship("Assignment", back_populates="classroom", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Classroom(id={self.id}, name='{self.name}')>"


# ==========================================
# ASSIGNMENTS
# ==========================================

class Assignment(Base):
    """
    One generated assignment and the Google Doc it was published to.
    `content` holds only the final markdown, never the raw model reply.
    """
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    subject = Column(String(255), nullable=False)
    classroom_id = Column(Integer, ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False, index=True)
    deadline = Column(String(100), nullable=False)

    tasks = Column(JSON, nullable=False, default=list)
    total_marks_weightage = Column(String(100), nullable=True)
    evaluation_criteria = Column(Text, nullable=True)
    number_of_tasks = Column(Integer, nullable=False)
    language = Column(String(50), nullable=False, default="English")
    additional_instructions = Column(Text, nullable=False, default="None")

    content = Column(Text, nullable=False)
    doc_id = Column(String(255), nullable=True)
    doc_link = Column(String(500), nullable=True)
    student_emails = Column(JSON, nullable=False, default=list)

    created_by = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default=AssignmentStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    classroom = relationship("Classroom", back_populates="assignments")

    def __repr__(self):
        return f"<Assignment(id={self.id}, title='{self.title}', status='{self.status}')>"
