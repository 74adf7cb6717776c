"""
Profiles component - author/editor/admin records.

Identity and credentials live with the external auth collaborator; a
profile only carries display data and the role used for stamping.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from uuid import UUID

from editorial.domain.entities import Profile
from editorial.domain.errors import ConflictError, InvalidInputError, NotFoundError

from .models import CreateProfileInput, UpdateProfileInput
from .ports import ClockPort, UnitOfWorkPort

logger = logging.getLogger(__name__)

_ROLES = ("admin", "editor", "author")


def _check_role(role: object) -> None:
    if role not in _ROLES:
        raise InvalidInputError(f"Unknown role: {role!r}", field="role")


class ProfileComponent:
    def __init__(self, uow: UnitOfWorkPort, clock: ClockPort) -> None:
        self._uow = uow
        self._clock = clock

    def create(self, inp: CreateProfileInput, profile_id: UUID | None = None) -> Profile:
        """Register a profile, optionally under the id the auth provider assigned."""
        email = (inp.email or "").strip().lower()
        if "@" not in email:
            raise InvalidInputError("A valid email is required", field="email")
        _check_role(inp.role)

        now = self._clock.now_utc()
        fields = dict(
            email=email,
            display_name=inp.display_name,
            avatar_url=inp.avatar_url,
            role=inp.role,
            created_at=now,
            updated_at=now,
        )
        profile = Profile(id=profile_id, **fields) if profile_id else Profile(**fields)

        with self._uow as uow:
            if uow.profiles.get_by_email(email) is not None:
                raise ConflictError(f"Profile for {email} already exists")
            uow.profiles.insert(profile)
            uow.commit()
        logger.info("Created %s profile %s", profile.role, profile.id)
        return profile

    def update(self, profile_id: UUID, inp: UpdateProfileInput) -> Profile:
        updates: dict[str, object] = {}
        if inp.display_name is not None:
            updates["display_name"] = inp.display_name
        if inp.avatar_url is not None:
            updates["avatar_url"] = inp.avatar_url
        if inp.role is not None:
            _check_role(inp.role)
            updates["role"] = inp.role

        with self._uow as uow:
            profile = uow.profiles.get_by_id(profile_id)
            if profile is None:
                raise NotFoundError("Profile", profile_id)
            if not updates:
                return profile
            updated = profile.model_copy(update={**updates, "updated_at": self._clock.now_utc()})
            uow.profiles.update(updated)
            uow.commit()

        if "role" in updates and updates["role"] != profile.role:
            logger.info("Profile %s role: %s -> %s", profile_id, profile.role, updated.role)
        return updated

    def get(self, profile_id: UUID) -> Profile:
        with self._uow as uow:
            profile = uow.profiles.get_by_id(profile_id)
        if profile is None:
            raise NotFoundError("Profile", profile_id)
        return profile

    def get_many(self, profile_ids: Iterable[UUID]) -> dict[UUID, Profile]:
        """Profiles keyed by id; ids without a profile are absent."""
        with self._uow as uow:
            found = uow.profiles.get_many(profile_ids)
        return {p.id: p for p in found}

    def list(self) -> list[Profile]:
        with self._uow as uow:
            return uow.profiles.list_all()
