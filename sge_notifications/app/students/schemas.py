from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Student(BaseModel):
    """Row of the students table, limited to the columns we read"""
    model_config = ConfigDict(extra="ignore")

    id: str
    full_name: Optional[str] = None
    parent_id: Optional[str] = None

    @field_validator("id", "parent_id", mode="before")
    @classmethod
    def stringify_ids(cls, v: Any) -> Optional[str]:
        # Supabase returns uuid strings or integer keys depending on the schema
        return None if v is None else str(v)


class Parent(BaseModel):
    """Row of the users table for a parent account"""
    model_config = ConfigDict(extra="ignore")

    id: str
    fcm_token: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        return str(v)
