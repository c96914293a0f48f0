# models/student.py
from pydantic import BaseModel, Field, computed_field, field_validator
from datetime import date
from typing import Optional
from config import DEFAULT_TOTAL_FEE

def _blank_to_none(value):
    # HTML date inputs post "" when left empty
    if isinstance(value, str) and not value.strip():
        return None
    return value

class StudentCreate(BaseModel):
    name: str
    email: str
    phone: Optional[str] = None
    joinDate: Optional[date] = None
    totalFee: float = Field(default=DEFAULT_TOTAL_FEE, ge=0)
    paidAmount: float = Field(default=0, ge=0)
    reminderMessage: str = ""
    courseId: str

    @field_validator("joinDate", mode="before")
    @classmethod
    def empty_join_date(cls, value):
        return _blank_to_none(value)

class StudentUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    joinDate: Optional[date] = None
    totalFee: Optional[float] = Field(default=None, ge=0)
    paidAmount: Optional[float] = Field(default=None, ge=0)
    reminderMessage: Optional[str] = None
    courseId: Optional[str] = None

    @field_validator("joinDate", mode="before")
    @classmethod
    def empty_join_date(cls, value):
        return _blank_to_none(value)

class Student(StudentCreate):
    id: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    @computed_field
    @property
    def pendingAmount(self) -> float:
        return self.totalFee - self.paidAmount

    @computed_field
    @property
    def isPaid(self) -> bool:
        return self.paidAmount >= self.totalFee
