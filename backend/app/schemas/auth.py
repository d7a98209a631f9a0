from typing import Literal

from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    email: str = Field(min_length=3)
    password: str
    full_name: str
    # Admin accounts are never self-registered.
    role: Literal["job_seeker", "employer"] = "job_seeker"
    company_name: str | None = None


class SignInRequest(BaseModel):
    email: str
    password: str


class SignInResponse(BaseModel):
    token: str
    expires_in_seconds: int
    role: str
    dashboard: str


class ThrottleResponse(BaseModel):
    error: str
    retry_after_seconds: float


class ProfileResponse(BaseModel):
    id: str
    email: str
    full_name: str
    role: str
    is_employer_approved: bool
    company_name: str | None = None
    company_logo: str | None = None
    phone: str | None = None
    resume_url: str | None = None
    created_at: str


class ProfileUpdate(BaseModel):
    full_name: str | None = Field(None, min_length=1)
    company_name: str | None = None
    company_logo: str | None = None
    phone: str | None = None
    resume_url: str | None = None


class MeResponse(BaseModel):
    profile: ProfileResponse
    dashboard: str
