"""Pydantic schemas for College Events API request/response validation."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# --- User Schemas ---


class UserCreate(BaseModel):
    """Schema for registering a new user."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: str
    password: str


class UserSummary(BaseModel):
    """User as returned alongside a token."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class UserResponse(UserSummary):
    """Full user profile (never includes the password hash)."""

    created_at: datetime
    updated_at: datetime


# --- Authentication Schemas ---


class AuthResponse(BaseModel):
    """Token plus the user it was issued for."""

    token: str
    user: UserSummary


# --- Event Schemas ---


class EventSummary(BaseModel):
    """Projected event returned by the public listing."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    date: datetime
    type: str
    image: str | None = None


class EventResponse(EventSummary):
    """Full event document."""

    location: str
    created_by: str
    created_at: datetime
    updated_at: datetime


class EventFilter(BaseModel):
    """Query filter for the public listing."""

    search: str | None = None
    type: str | None = None


# --- Response Schemas ---


class MessageResponse(BaseModel):
    """Generic message response schema."""

    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    detail: str
    code: str


def error_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    """OpenAPI ``responses`` entries documenting the error body for each status."""
    return {code: {"model": ErrorResponse} for code in status_codes}


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str
