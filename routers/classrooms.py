"""
Classrooms Router — /api/classrooms
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from auth.security import GoogleUser, get_current_user
from database import crud, schemas
from database.database import get_db

router = APIRouter(prefix="/classrooms", tags=["classrooms"])


@router.post("", response_model=schemas.ClassroomResponse, status_code=status.HTTP_201_CREATED)
def create_classroom(
    classroom: schemas.ClassroomCreate,
    _: GoogleUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return crud.create_classroom(db, classroom)


@router.get("/{classroom_id}", response_model=schemas.ClassroomResponse)
def get_classroom(
    classroom_id: int,
    _: GoogleUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    classroom = crud.get_classroom(db, classroom_id)
    if not classroom:
        raise HTTPException(status_code=404, detail="Classroom not found")
    return classroom
