from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from sge_notifications.app.attendance import AttendanceNotificationService
from sge_notifications.app.dependencies import get_notification_service, get_push_dispatcher
from sge_notifications.app.main import app
from sge_notifications.app.students import Student


class FakeDirectory:
    """In-memory stand-in for StudentDirectory"""

    def __init__(self):
        self.students: Dict[str, Student] = {}
        self.tokens: Dict[str, Optional[str]] = {}
        self.student_lookups: List[str] = []
        self.parent_lookups: List[str] = []

    def add_student(self, student_id, full_name, parent_id=None, token=None):
        self.students[student_id] = Student(id=student_id, full_name=full_name, parent_id=parent_id)
        if parent_id is not None:
            self.tokens[parent_id] = token

    async def get_student(self, student_id):
        self.student_lookups.append(student_id)
        return self.students.get(student_id)

    async def get_parent_token(self, parent_id):
        self.parent_lookups.append(parent_id)
        return self.tokens.get(parent_id)


class FakeDispatcher:
    """Records notifications instead of calling FCM"""

    def __init__(self):
        self.sent = []
        self.error: Optional[Exception] = None

    async def send(self, notification):
        if self.error is not None:
            raise self.error
        self.sent.append(notification)
        return {"name": f"projects/asistencia-inicial/messages/{len(self.sent)}"}


@pytest.fixture
def directory():
    return FakeDirectory()


@pytest.fixture
def dispatcher():
    return FakeDispatcher()


@pytest.fixture
def client(directory, dispatcher):
    """A test client wired to the fake directory and dispatcher."""
    service = AttendanceNotificationService(directory=directory, dispatcher=dispatcher)
    app.dependency_overrides[get_notification_service] = lambda: service
    app.dependency_overrides[get_push_dispatcher] = lambda: dispatcher
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
