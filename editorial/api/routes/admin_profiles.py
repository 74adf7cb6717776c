"""Admin routes for author profiles."""

from uuid import UUID

from fastapi import APIRouter, Depends

from editorial.api.deps import get_principal, get_profile_component
from editorial.api.schemas import ProfileCreateRequest, ProfileUpdateRequest
from editorial.components.profiles import (
    CreateProfileInput,
    ProfileComponent,
    UpdateProfileInput,
)
from editorial.domain.entities import Principal, Profile

router = APIRouter(dependencies=[Depends(get_principal)])


@router.get("/profiles", response_model=list[Profile])
def list_profiles(profiles: ProfileComponent = Depends(get_profile_component)) -> list[Profile]:
    return profiles.list()


@router.post("/profiles", response_model=Profile, status_code=201)
def create_profile(
    data: ProfileCreateRequest,
    profiles: ProfileComponent = Depends(get_profile_component),
) -> Profile:
    return profiles.create(
        CreateProfileInput(
            email=data.email,
            display_name=data.display_name,
            role=data.role,
            avatar_url=data.avatar_url,
        ),
        profile_id=data.id,
    )


@router.get("/profiles/me", response_model=Profile)
def get_own_profile(
    principal: Principal = Depends(get_principal),
    profiles: ProfileComponent = Depends(get_profile_component),
) -> Profile:
    return profiles.get(principal.id)


@router.get("/profiles/{profile_id}", response_model=Profile)
def get_profile(
    profile_id: UUID,
    profiles: ProfileComponent = Depends(get_profile_component),
) -> Profile:
    return profiles.get(profile_id)


@router.patch("/profiles/{profile_id}", response_model=Profile)
def update_profile(
    profile_id: UUID,
    data: ProfileUpdateRequest,
    profiles: ProfileComponent = Depends(get_profile_component),
) -> Profile:
    return profiles.update(
        profile_id,
        UpdateProfileInput(
            display_name=data.display_name, role=data.role, avatar_url=data.avatar_url
        ),
    )
