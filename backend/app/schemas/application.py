from typing import Literal

from pydantic import BaseModel

from app.schemas.job import JobResponse

ApplicationStatus = Literal["pending", "reviewed", "accepted", "rejected"]


class ApplicationCreate(BaseModel):
    cover_letter: str | None = None


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class ApplicantSummary(BaseModel):
    id: str
    full_name: str
    email: str
    phone: str | None = None
    resume_url: str | None = None


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    job_seeker_id: str
    status: str
    cover_letter: str | None
    applied_at: str
    updated_at: str


class SeekerApplicationResponse(ApplicationResponse):
    job: JobResponse | None = None


class ApplicantResponse(ApplicationResponse):
    applicant: ApplicantSummary


class ApplicationCheckResponse(BaseModel):
    has_applied: bool
    application_id: str | None = None
    status: str | None = None
