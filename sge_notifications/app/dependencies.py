from fastapi import Request

from .attendance import AttendanceNotificationService
from .notifications import FcmClient


# Singletons are built once in main.startup_event and kept on app.state
def get_notification_service(request: Request) -> AttendanceNotificationService:
    return request.app.state.notification_service


def get_push_dispatcher(request: Request) -> FcmClient:
    return request.app.state.push_dispatcher
