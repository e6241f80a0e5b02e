"""Viewer identity supplied by the auth collaborator."""
from enum import Enum

from pydantic import BaseModel


class UserRole(str, Enum):
    """Account role. Trusted as supplied by the auth provider."""
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class Viewer(BaseModel):
    """The current caller."""

    user_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_staff(self) -> bool:
        """Teachers and admins may publish content."""
        return self.role in (UserRole.TEACHER, UserRole.ADMIN)
