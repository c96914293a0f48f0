# routes/courses.py
from fastapi import APIRouter, Depends
from typing import List

from database import get_db
from models.course import Course, CourseCreate, CourseUpdate, CourseWithStudents
from services import records
from services.aggregation import list_courses_with_students

router = APIRouter(prefix="/api/courses", tags=["courses"])

@router.get("", response_model=List[CourseWithStudents])
async def get_courses(db=Depends(get_db)):
    return await list_courses_with_students(db)

@router.post("", response_model=CourseWithStudents, status_code=201)
async def create_course(course: CourseCreate, db=Depends(get_db)):
    return await records.create_course(db, course)

@router.put("/{id}", response_model=Course)
async def update_course(id: str, course: CourseUpdate, db=Depends(get_db)):
    return await records.update_course(db, id, course)

@router.delete("/{id}")
async def delete_course(id: str, db=Depends(get_db)):
    deleted = await records.delete_course(db, id)
    return {"message": "Course and related students deleted", "deletedStudents": deleted}
