# services/aggregation.py
from collections import defaultdict
from typing import Iterable, List
from pymongo.errors import PyMongoError
import logging

from errors import StorageError
from models.course import CourseWithStudents
from models.student import Student

logger = logging.getLogger(__name__)

def pending_amount(student: Student) -> float:
    return student.totalFee - student.paidAmount

def is_paid(student: Student) -> bool:
    return student.paidAmount >= student.totalFee

def outstanding_amount(student: Student) -> float:
    """Pending amount floored at zero, used when summing across students."""
    return max(0, pending_amount(student))

async def list_courses_with_students(db) -> List[CourseWithStudents]:
    """Return every course with the students whose courseId matches it.

    Students are fetched in a single query and grouped by courseId, which
    gives the same result as looking them up course by course. Order within
    each course is retrieval order.
    """
    try:
        courses = await db.courses.find({}, {"_id": 0}).to_list(None)
        course_ids = [course["id"] for course in courses]
        students = await db.students.find(
            {"courseId": {"$in": course_ids}}, {"_id": 0}
        ).to_list(None) if course_ids else []
    except PyMongoError as e:
        logger.error(f"Failed to list courses: {e}")
        raise StorageError(f"Failed to list courses: {e}")

    by_course = defaultdict(list)
    for student in students:
        by_course[student["courseId"]].append(student)

    return [
        CourseWithStudents.model_validate({**course, "students": by_course.get(course["id"], [])})
        for course in courses
    ]

def dashboard_stats(courses: Iterable[CourseWithStudents]) -> dict:
    total_students = 0
    total_courses = 0
    total_pending = 0
    reminders = 0
    for course in courses:
        total_courses += 1
        total_students += len(course.students)
        for student in course.students:
            total_pending += outstanding_amount(student)
            if student.paidAmount < student.totalFee:
                reminders += 1
    return {
        "totalStudents": total_students,
        "totalCourses": total_courses,
        "totalPendingFees": total_pending,
        "remindersCount": reminders,
    }
