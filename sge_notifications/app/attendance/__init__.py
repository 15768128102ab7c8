from .service import AttendanceNotificationService, build_attendance_notification

__all__ = ["AttendanceNotificationService", "build_attendance_notification"]
