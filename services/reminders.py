# services/reminders.py
from typing import Optional
from urllib.parse import quote

from config import DEFAULT_COUNTRY_CODE
from errors import ValidationError
from models.student import Student
from services.aggregation import pending_amount

WHATSAPP_BASE_URL = "https://wa.me"
# same unreserved set as JavaScript's encodeURIComponent
URL_SAFE_CHARS = "-_.!~*'()"

DEFAULT_REMINDER_TEMPLATE = (
    "Dear {name},\n\n"
    "Your pending fee is *{pending}*.\n"
    "Please pay soon to continue your course.\n\n"
    "Thank you!"
)

def normalize_phone(phone: Optional[str], country_code: str = DEFAULT_COUNTRY_CODE) -> Optional[str]:
    """Prefix a bare number with the country code; numbers starting with + are kept."""
    if phone is None:
        return None
    phone = phone.strip()
    if not phone or phone.startswith("+"):
        return phone
    return f"{country_code}{phone}"

def format_currency(amount: float) -> str:
    text = f"{amount:,.2f}".rstrip("0").rstrip(".")
    return f"₹{text}"

def compose_reminder(student: Student) -> str:
    if student.reminderMessage and student.reminderMessage.strip():
        return student.reminderMessage
    return DEFAULT_REMINDER_TEMPLATE.format(
        name=student.name,
        pending=format_currency(pending_amount(student)),
    )

def whatsapp_url(phone: str, message: str) -> str:
    return f"{WHATSAPP_BASE_URL}/{phone}?text={quote(message, safe=URL_SAFE_CHARS)}"

def build_reminder(student: Student) -> dict:
    phone = normalize_phone(student.phone)
    if not phone:
        raise ValidationError(f"Student {student.id} has no phone number")
    message = compose_reminder(student)
    return {
        "studentId": student.id,
        "phone": phone,
        "pendingAmount": pending_amount(student),
        "isPaid": student.isPaid,
        "message": message,
        "whatsappUrl": whatsapp_url(phone, message),
    }
