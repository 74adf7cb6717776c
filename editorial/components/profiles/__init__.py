"""Profiles - display records for authenticated principals."""

from .component import ProfileComponent
from .models import CreateProfileInput, UpdateProfileInput

__all__ = ["ProfileComponent", "CreateProfileInput", "UpdateProfileInput"]
