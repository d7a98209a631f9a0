from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

JobType = Literal["full-time", "part-time", "contract", "internship", "freelance"]
Category = Literal[
    "technology", "marketing", "design", "sales",
    "finance", "healthcare", "education", "other",
]
JobStatus = Literal["active", "closed"]

# Largest value a SQLite INTEGER column can hold.
MAX_SALARY = 2**63 - 1


def _split_skills(value):
    if value is None:
        return value
    if isinstance(value, str):
        value = value.split(",")
    return [s.strip() for s in value if s and s.strip()]


def _check_salary_range(salary_min: int | None, salary_max: int | None):
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise ValueError("salary_min must not exceed salary_max")


class JobCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    location: str = Field(min_length=1)
    job_type: JobType = "full-time"
    category: Category = "technology"
    salary_min: int | None = Field(None, ge=0, le=MAX_SALARY)
    salary_max: int | None = Field(None, ge=0, le=MAX_SALARY)
    skills: list[str] = []
    experience_level: str | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_skills(cls, value):
        return _split_skills(value)

    @model_validator(mode="after")
    def check_salary_range(self):
        _check_salary_range(self.salary_min, self.salary_max)
        return self


class JobUpdate(BaseModel):
    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    location: str | None = Field(None, min_length=1)
    job_type: JobType | None = None
    category: Category | None = None
    salary_min: int | None = Field(None, ge=0, le=MAX_SALARY)
    salary_max: int | None = Field(None, ge=0, le=MAX_SALARY)
    skills: list[str] | None = None
    experience_level: str | None = None
    status: JobStatus | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_skills(cls, value):
        return _split_skills(value)

    @model_validator(mode="after")
    def check_salary_range(self):
        _check_salary_range(self.salary_min, self.salary_max)
        return self


class EmployerSummary(BaseModel):
    id: str
    full_name: str | None = None
    email: str | None = None
    company_name: str | None = None
    company_logo: str | None = None


class JobResponse(BaseModel):
    id: str
    employer_id: str
    title: str
    description: str
    location: str
    job_type: str
    category: str
    salary_min: int | None
    salary_max: int | None
    salary_display: str
    skills: list[str] = []
    experience_level: str | None
    status: str
    created_at: str
    updated_at: str
    employer: EmployerSummary | None = None
    is_bookmarked: bool = False


class JobDetailResponse(JobResponse):
    has_applied: bool = False


class EmployerJobResponse(JobResponse):
    applicant_count: int = 0


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    total: int
