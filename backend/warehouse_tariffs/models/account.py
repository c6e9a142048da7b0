"""Authenticated caller model."""

from __future__ import annotations

from pydantic import BaseModel

from warehouse_tariffs.models.enums import UserRole


class SessionUser(BaseModel):
    """The user behind a validated session token."""

    id: str
    email: str | None = None
    name: str | None = None
    role: UserRole
    is_active: bool = True

    def has_role(self, *roles: UserRole) -> bool:
        return self.is_active and self.role in roles
