import logging
from typing import Any, Dict

from pydantic import ValidationError

from ..errors import InvalidEventError
from ..notifications import FcmClient, PushNotification
from ..students import Student, StudentDirectory
from .schemas import AttendanceKind, AttendanceRecord, WebhookEvent, WebhookOutcome

logger = logging.getLogger(__name__)

WATCHED_EVENT_TYPE = "INSERT"
WATCHED_TABLE = "attendance_records"

NOTIFICATION_TITLE = "SGE - Notificación de Asistencia"
CLICK_ACTION = "FLUTTER_NOTIFICATION_CLICK"
UNNAMED_STUDENT = "Su hijo/a"  # students rows with a null full_name


def build_attendance_notification(student: Student, token: str,
                                  record: AttendanceRecord) -> PushNotification:
    """Build the push sent to a parent when their child enters or leaves school."""
    name = student.full_name or UNNAMED_STUDENT
    if record.kind == AttendanceKind.ENTRY:
        body = f"✅ {name} ha INGRESADO al colegio."
    else:
        body = f"🏠 {name} ha SALIDO del colegio."

    data: Dict[str, str] = {
        "studentId": record.student_id,
        "type": record.type,
        "click_action": CLICK_ACTION,
    }
    return PushNotification(token=token, title=NOTIFICATION_TITLE, body=body, data=data)


def parse_attendance_record(record: Any) -> AttendanceRecord:
    if not isinstance(record, dict):
        raise InvalidEventError("Missing record in webhook payload")
    try:
        return AttendanceRecord.model_validate(record)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise InvalidEventError(f"Invalid attendance record, check fields: {fields}") from e


class AttendanceNotificationService:
    """Relays attendance_records inserts to the parent's device."""

    def __init__(self, directory: StudentDirectory, dispatcher: FcmClient):
        """
        Initialize the service.

        Args:
            directory: Student and parent lookups
            dispatcher: FCM client used to deliver the notification
        """
        self.directory = directory
        self.dispatcher = dispatcher

    @staticmethod
    def is_watched(event: WebhookEvent) -> bool:
        return event.type == WATCHED_EVENT_TYPE and event.table == WATCHED_TABLE

    async def handle_event(self, event: WebhookEvent) -> WebhookOutcome:
        """
        Process one webhook delivery.

        Redelivered events are sent again; there is no deduplication.

        Returns:
            The terminal outcome for benign and successful paths

        Raises:
            InvalidEventError: If the record lacks student_id or type
            CredentialError: If no FCM access token could be obtained
            PushDeliveryError: If FCM rejected the message
        """
        logger.info(f"Webhook received: {event.type} on {event.table}")

        if not self.is_watched(event):
            return WebhookOutcome.IGNORED

        record = parse_attendance_record(event.record)

        student = await self.directory.get_student(record.student_id)
        if student is None:
            return WebhookOutcome.STUDENT_NOT_FOUND

        if not student.parent_id:
            logger.info(f"Student {student.id} has no parent assigned")
            return WebhookOutcome.NO_PARENT

        token = await self.directory.get_parent_token(student.parent_id)
        if not token:
            logger.info(f"Parent {student.parent_id} has no FCM token")
            return WebhookOutcome.NO_TOKEN

        notification = build_attendance_notification(student, token, record)

        logger.info(f"Sending push to parent {student.parent_id}")
        await self.dispatcher.send(notification)
        logger.info(f"Notification sent for student {student.id} ({record.type})")

        return WebhookOutcome.SENT
