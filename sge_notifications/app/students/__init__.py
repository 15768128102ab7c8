from .directory import StudentDirectory
from .schemas import Parent, Student

__all__ = ["StudentDirectory", "Parent", "Student"]
