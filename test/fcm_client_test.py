import asyncio

import aiohttp
import pytest

from sge_notifications.app.errors import PushDeliveryError
from sge_notifications.app.notifications import FcmClient, PushNotification, build_fcm_message


class FakeCredentialProvider:
    async def get_access_token(self):
        return "access-123"


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self.body = body

    async def text(self):
        return self.body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    def __init__(self, status, body, requests):
        self.response = FakeResponse(status, body)
        self.requests = requests

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    def post(self, url, headers=None, json=None):
        self.requests.append({"url": url, "headers": headers, "json": json})
        return self.response


@pytest.fixture
def fake_fcm(monkeypatch):
    """Replaces aiohttp.ClientSession; returns the list of captured requests."""
    state = {"status": 200, "body": '{"name": "projects/asistencia-inicial/messages/0:1"}', "requests": []}

    def session_factory(*args, **kwargs):
        state["session_kwargs"] = kwargs
        return FakeSession(state["status"], state["body"], state["requests"])

    monkeypatch.setattr(aiohttp, "ClientSession", session_factory)
    return state


def notification():
    return PushNotification(
        token="T1",
        title="SGE - Notificación de Asistencia",
        body="✅ Ana Pérez ha INGRESADO al colegio.",
        data={"studentId": "S1", "type": "entry", "click_action": "FLUTTER_NOTIFICATION_CLICK"},
    )


def test_build_fcm_message():
    message = build_fcm_message(notification())

    assert message == {
        "message": {
            "token": "T1",
            "notification": {
                "title": "SGE - Notificación de Asistencia",
                "body": "✅ Ana Pérez ha INGRESADO al colegio.",
            },
            "data": {"studentId": "S1", "type": "entry", "click_action": "FLUTTER_NOTIFICATION_CLICK"},
            "android": {
                "priority": "high",
                "notification": {"sound": "default", "channel_id": "high_importance_channel"},
            },
        }
    }


def test_send_posts_to_project_endpoint(fake_fcm):
    client = FcmClient("asistencia-inicial", FakeCredentialProvider())

    result = asyncio.run(client.send(notification()))

    assert result == {"name": "projects/asistencia-inicial/messages/0:1"}
    assert len(fake_fcm["requests"]) == 1
    request = fake_fcm["requests"][0]
    assert request["url"] == "https://fcm.googleapis.com/v1/projects/asistencia-inicial/messages:send"
    assert request["headers"]["Authorization"] == "Bearer access-123"
    assert request["headers"]["Content-Type"] == "application/json"
    assert request["json"]["message"]["token"] == "T1"
    assert fake_fcm["session_kwargs"] == {}


def test_send_uses_configured_channel_and_base_url(fake_fcm):
    client = FcmClient(
        "demo", FakeCredentialProvider(),
        base_url="http://localhost:9099/", channel_id="attendance", timeout_seconds=5,
    )

    asyncio.run(client.send(notification()))

    request = fake_fcm["requests"][0]
    assert request["url"] == "http://localhost:9099/v1/projects/demo/messages:send"
    assert request["json"]["message"]["android"]["notification"]["channel_id"] == "attendance"
    assert fake_fcm["session_kwargs"]["timeout"].total == 5


def test_non_2xx_raises_with_raw_body(fake_fcm):
    fake_fcm["status"] = 400
    fake_fcm["body"] = '{"error": {"code": 400, "status": "INVALID_ARGUMENT"}}'
    client = FcmClient("asistencia-inicial", FakeCredentialProvider())

    with pytest.raises(PushDeliveryError) as excinfo:
        asyncio.run(client.send(notification()))

    assert excinfo.value.status == 400
    assert excinfo.value.body == '{"error": {"code": 400, "status": "INVALID_ARGUMENT"}}'
    assert str(excinfo.value) == excinfo.value.body
