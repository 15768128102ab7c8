import asyncio
import logging
from typing import Any, Dict, Optional

from supabase import Client

from .schemas import Parent, Student

logger = logging.getLogger(__name__)


class StudentDirectory:
    """Point lookups of students and their parents in Supabase."""

    STUDENTS_TABLE = "students"
    USERS_TABLE = "users"

    def __init__(self, client: Optional[Client]):
        """
        Initialize the directory.

        Args:
            client: Supabase client, or None when the data store is not configured
        """
        self.client = client

    def _fetch_one(self, table: str, columns: str, row_id: str) -> Optional[Dict[str, Any]]:
        if self.client is None:
            raise RuntimeError("Supabase client is not configured")

        response = (
            self.client.table(table)
            .select(columns)
            .eq("id", row_id)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        return rows[0] if rows else None

    async def get_student(self, student_id: str) -> Optional[Student]:
        """
        Fetch a student by primary key.

        Args:
            student_id: The student's ID

        Returns:
            The student, or None if it does not exist or the lookup failed
        """
        try:
            row = await asyncio.to_thread(
                self._fetch_one, self.STUDENTS_TABLE, "full_name, parent_id", student_id
            )
        except Exception as e:
            logger.error(f"Error fetching student {student_id}: {str(e)}")
            return None

        if row is None:
            logger.warning(f"Student {student_id} not found")
            return None

        return Student.model_validate({**row, "id": student_id})

    async def get_parent(self, parent_id: str) -> Optional[Parent]:
        """
        Fetch a parent user by primary key.

        Args:
            parent_id: The parent's user ID

        Returns:
            The parent, or None if it does not exist or the lookup failed
        """
        try:
            row = await asyncio.to_thread(
                self._fetch_one, self.USERS_TABLE, "fcm_token", parent_id
            )
        except Exception as e:
            logger.error(f"Error fetching parent {parent_id}: {str(e)}")
            return None

        if row is None:
            logger.warning(f"Parent {parent_id} not found")
            return None

        return Parent.model_validate({**row, "id": parent_id})

    async def get_parent_token(self, parent_id: str) -> Optional[str]:
        """Return the parent's FCM token, or None if the parent has none."""
        parent = await self.get_parent(parent_id)
        if parent is None or not parent.fcm_token:
            return None
        return parent.fcm_token
