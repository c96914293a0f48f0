# models/course.py
from pydantic import BaseModel, computed_field, field_validator
from datetime import date
from typing import List, Optional
from config import DEFAULT_LANGUAGE
from models.student import Student, _blank_to_none

class CourseCreate(BaseModel):
    title: str
    description: Optional[str] = None
    whatYouLearn: Optional[str] = None
    startDate: Optional[date] = None
    endDate: Optional[date] = None
    language: str = DEFAULT_LANGUAGE

    @field_validator("startDate", "endDate", mode="before")
    @classmethod
    def empty_dates(cls, value):
        return _blank_to_none(value)

    @field_validator("language", mode="before")
    @classmethod
    def default_language(cls, value):
        return _blank_to_none(value) or DEFAULT_LANGUAGE

class CourseUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    whatYouLearn: Optional[str] = None
    startDate: Optional[date] = None
    endDate: Optional[date] = None
    language: Optional[str] = None

    @field_validator("startDate", "endDate", mode="before")
    @classmethod
    def empty_dates(cls, value):
        return _blank_to_none(value)

class Course(CourseCreate):
    id: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    @computed_field
    @property
    def durationDays(self) -> Optional[int]:
        if not self.startDate or not self.endDate:
            return None
        return (self.endDate - self.startDate).days

class CourseWithStudents(Course):
    students: List[Student] = []
