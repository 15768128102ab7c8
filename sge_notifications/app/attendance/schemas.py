from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AttendanceKind(str, Enum):
    ENTRY = "entry"
    EXIT = "exit"


class WebhookOutcome(str, Enum):
    IGNORED = "ignored"
    STUDENT_NOT_FOUND = "student_not_found"
    NO_PARENT = "no_parent"
    NO_TOKEN = "no_token"
    SENT = "sent"


class WebhookEvent(BaseModel):
    """Database webhook payload sent by Supabase on a row change"""
    model_config = ConfigDict(extra="allow")

    type: Optional[Any] = None  # INSERT, UPDATE or DELETE
    table: Optional[Any] = None
    record: Optional[Any] = None  # checked by parse_attendance_record once the event is watched


class AttendanceRecord(BaseModel):
    """Row inserted into attendance_records"""
    model_config = ConfigDict(extra="ignore")

    student_id: str = Field(..., min_length=1)
    type: str  # 'entry' or 'exit'; anything else is phrased as an exit

    @field_validator("student_id", mode="before")
    @classmethod
    def stringify_student_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def kind(self) -> AttendanceKind:
        return AttendanceKind.ENTRY if self.type == AttendanceKind.ENTRY.value else AttendanceKind.EXIT
