# services/records.py
from datetime import datetime, timezone
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
import logging
import uuid

from errors import NotFoundError, StorageError, ValidationError
from models.course import Course, CourseCreate, CourseUpdate, CourseWithStudents
from models.student import Student, StudentCreate, StudentUpdate
from services.reminders import normalize_phone

logger = logging.getLogger(__name__)

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

def _require_text(data: dict, fields) -> None:
    for field in fields:
        value = data.get(field)
        if value is None or not str(value).strip():
            raise ValidationError(f"{field} is required")

async def _course_exists(db, course_id: str) -> bool:
    try:
        return await db.courses.find_one({"id": course_id}, {"_id": 1}) is not None
    except PyMongoError as e:
        logger.error(f"Failed to look up course {course_id}: {e}")
        raise StorageError(f"Failed to look up course: {e}")

# Courses

async def create_course(db, course: CourseCreate) -> CourseWithStudents:
    course_dict = course.model_dump(mode="json")
    _require_text(course_dict, ["title"])
    course_dict["id"] = str(uuid.uuid4())
    course_dict["createdAt"] = course_dict["updatedAt"] = _now()
    try:
        await db.courses.insert_one(course_dict)
    except PyMongoError as e:
        logger.error(f"Failed to create course: {e}")
        raise StorageError(f"Failed to create course: {e}")
    course_dict.pop("_id", None)
    logger.info(f"Created course {course_dict['id']} ({course_dict['title']})")
    return CourseWithStudents.model_validate({**course_dict, "students": []})

async def update_course(db, course_id: str, changes: CourseUpdate) -> Course:
    update = changes.model_dump(mode="json", exclude_unset=True)
    if "title" in update:
        _require_text(update, ["title"])
    if "language" in update and not (update["language"] or "").strip():
        update.pop("language")
    update["updatedAt"] = _now()
    try:
        updated = await db.courses.find_one_and_update(
            {"id": course_id},
            {"$set": update},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
    except PyMongoError as e:
        logger.error(f"Failed to update course {course_id}: {e}")
        raise StorageError(f"Failed to update course: {e}")
    if updated is None:
        logger.warning(f"Course not found for update: {course_id}")
        raise NotFoundError("Course not found")
    logger.info(f"Updated course {course_id}")
    return Course.model_validate(updated)

async def delete_course(db, course_id: str) -> int:
    """Delete a course together with its students.

    Students go first. If that step fails the course is left in place, so the
    caller can retry without any student pointing at a missing course.
    """
    try:
        result = await db.students.delete_many({"courseId": course_id})
    except PyMongoError as e:
        logger.error(f"Failed to delete students of course {course_id}: {e}")
        raise StorageError(f"Failed to delete students of course: {e}")
    try:
        await db.courses.delete_one({"id": course_id})
    except PyMongoError as e:
        logger.error(f"Students of course {course_id} removed but course delete failed: {e}")
        raise StorageError(f"Failed to delete course: {e}")
    logger.info(f"Deleted course {course_id} and {result.deleted_count} students")
    return result.deleted_count

# Students

async def get_student(db, student_id: str) -> Student:
    try:
        student = await db.students.find_one({"id": student_id}, {"_id": 0})
    except PyMongoError as e:
        logger.error(f"Failed to fetch student {student_id}: {e}")
        raise StorageError(f"Failed to fetch student: {e}")
    if student is None:
        logger.warning(f"Student not found: {student_id}")
        raise NotFoundError("Student not found")
    return Student.model_validate(student)

async def create_student(db, student: StudentCreate) -> Student:
    student_dict = student.model_dump(mode="json")
    _require_text(student_dict, ["name", "email", "courseId"])
    if not await _course_exists(db, student_dict["courseId"]):
        raise ValidationError(f"Course not found: {student_dict['courseId']}")
    student_dict["phone"] = normalize_phone(student_dict.get("phone"))
    student_dict["id"] = str(uuid.uuid4())
    student_dict["createdAt"] = student_dict["updatedAt"] = _now()
    try:
        await db.students.insert_one(student_dict)
    except PyMongoError as e:
        logger.error(f"Failed to create student: {e}")
        raise StorageError(f"Failed to create student: {e}")
    student_dict.pop("_id", None)
    logger.info(f"Created student {student_dict['id']} in course {student_dict['courseId']}")
    return Student.model_validate(student_dict)

async def update_student(db, student_id: str, changes: StudentUpdate) -> Student:
    update = changes.model_dump(mode="json", exclude_unset=True)
    _require_text(update, [f for f in ("name", "email", "courseId") if f in update])
    for field in ("totalFee", "paidAmount"):
        if field in update and update[field] is None:
            raise ValidationError(f"{field} cannot be empty")
    if "reminderMessage" in update and update["reminderMessage"] is None:
        update["reminderMessage"] = ""
    if "phone" in update:
        update["phone"] = normalize_phone(update["phone"])
    if "courseId" in update and not await _course_exists(db, update["courseId"]):
        raise ValidationError(f"Course not found: {update['courseId']}")
    update["updatedAt"] = _now()
    try:
        updated = await db.students.find_one_and_update(
            {"id": student_id},
            {"$set": update},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
    except PyMongoError as e:
        logger.error(f"Failed to update student {student_id}: {e}")
        raise StorageError(f"Failed to update student: {e}")
    if updated is None:
        logger.warning(f"Student not found for update: {student_id}")
        raise NotFoundError("Student not found")
    logger.info(f"Updated student {student_id}")
    return Student.model_validate(updated)

async def delete_student(db, student_id: str) -> bool:
    try:
        result = await db.students.delete_one({"id": student_id})
    except PyMongoError as e:
        logger.error(f"Failed to delete student {student_id}: {e}")
        raise StorageError(f"Failed to delete student: {e}")
    if result.deleted_count == 0:
        logger.info(f"Delete requested for unknown student {student_id}")
    return result.deleted_count > 0
