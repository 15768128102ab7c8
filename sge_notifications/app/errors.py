from typing import Optional


class NotifierError(Exception):
    """Base error for failures that end a request with an error response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidEventError(NotifierError):
    """The webhook record is missing fields required for the lookups."""

    status_code = 400


class CredentialError(NotifierError):
    """Service-account credentials are missing, malformed or rejected."""


class PushDeliveryError(NotifierError):
    """FCM answered the send request with a non-2xx status."""

    def __init__(self, body: str, status: Optional[int] = None):
        super().__init__(body)
        self.body = body
        self.status = status
