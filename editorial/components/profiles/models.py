"""Profile input models."""

from __future__ import annotations

from dataclasses import dataclass

from editorial.domain.entities import RoleType


@dataclass(frozen=True)
class CreateProfileInput:
    email: str
    display_name: str | None = None
    role: RoleType = "author"
    avatar_url: str | None = None


@dataclass(frozen=True)
class UpdateProfileInput:
    display_name: str | None = None
    role: RoleType | None = None
    avatar_url: str | None = None
