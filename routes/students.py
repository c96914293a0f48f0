# routes/students.py
from fastapi import APIRouter, Depends

from database import get_db
from models.student import Student, StudentCreate, StudentUpdate
from services import records
from services.reminders import build_reminder

router = APIRouter(prefix="/api/students", tags=["students"])

@router.post("", response_model=Student, status_code=201)
async def add_student(student: StudentCreate, db=Depends(get_db)):
    return await records.create_student(db, student)

@router.get("/{id}", response_model=Student)
async def get_student(id: str, db=Depends(get_db)):
    return await records.get_student(db, id)

@router.put("/{id}", response_model=Student)
async def update_student(id: str, student: StudentUpdate, db=Depends(get_db)):
    return await records.update_student(db, id, student)

@router.delete("/{id}")
async def delete_student(id: str, db=Depends(get_db)):
    await records.delete_student(db, id)
    return {"message": "Student deleted"}

@router.get("/{id}/reminder")
async def get_reminder(id: str, db=Depends(get_db)):
    student = await records.get_student(db, id)
    return build_reminder(student)
