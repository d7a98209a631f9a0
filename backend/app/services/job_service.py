from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.application import Application
from app.models.bookmark import Bookmark
from app.models.job import JobPosting
from app.schemas.job import EmployerSummary, JobResponse
from app.services.access_gate import Actor


def _thousands(amount: int) -> str:
    thousands = (Decimal(amount) / 1000).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"${thousands}k"


def format_salary(salary_min: int | None, salary_max: int | None) -> str:
    if not salary_min and not salary_max:
        return "Salary not specified"
    if salary_min and salary_max:
        return f"{_thousands(salary_min)} - {_thousands(salary_max)}"
    if salary_min:
        return f"From {_thousands(salary_min)}"
    return f"Up to {_thousands(salary_max)}"


def job_fields(job: JobPosting, bookmarked_ids: set[str] | None = None) -> dict:
    employer = None
    if job.employer is not None:
        employer = EmployerSummary(
            id=job.employer.id,
            full_name=job.employer.full_name,
            email=job.employer.email,
            company_name=job.employer.company_name,
            company_logo=job.employer.company_logo,
        )
    return dict(
        id=job.id,
        employer_id=job.employer_id,
        title=job.title,
        description=job.description,
        location=job.location,
        job_type=job.job_type,
        category=job.category,
        salary_min=job.salary_min,
        salary_max=job.salary_max,
        salary_display=format_salary(job.salary_min, job.salary_max),
        skills=list(job.skills or []),
        experience_level=job.experience_level,
        status=job.status,
        created_at=job.created_at,
        updated_at=job.updated_at,
        employer=employer,
        is_bookmarked=bool(bookmarked_ids) and job.id in bookmarked_ids,
    )


def job_to_response(job: JobPosting, bookmarked_ids: set[str] | None = None) -> JobResponse:
    return JobResponse(**job_fields(job, bookmarked_ids))


def bookmarked_job_ids(db: Session, actor: Actor) -> set[str]:
    if actor.is_anonymous:
        return set()
    rows = db.query(Bookmark.job_id).filter(Bookmark.user_id == actor.id).all()
    return {row.job_id for row in rows}


def applicant_counts(db: Session, job_ids: list[str]) -> dict[str, int]:
    if not job_ids:
        return {}
    rows = (
        db.query(Application.job_id, func.count(Application.id).label("n"))
        .filter(Application.job_id.in_(job_ids))
        .group_by(Application.job_id)
        .all()
    )
    return {row.job_id: row.n for row in rows}
