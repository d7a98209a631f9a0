import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_actor, require_approved_employer
from app.models.application import Application
from app.models.job import JobPosting
from app.schemas.job import JobCreate, JobDetailResponse, JobListResponse, JobResponse, JobUpdate
from app.schemas.search import NEUTRAL, FilterCriteria
from app.services.access_gate import Actor, Role
from app.services.job_service import bookmarked_job_ids, job_fields, job_to_response
from app.services.search_service import search_jobs
from app.utils.timestamps import now_iso

logger = logging.getLogger("app.jobs")

router = APIRouter(prefix="/jobs", tags=["jobs"])

# Columns that may not be cleared to NULL through an update.
_REQUIRED_FIELDS = {"title", "description", "location", "job_type", "category", "skills", "status"}


def _owned_job(db: Session, job_id: str, actor: Actor) -> JobPosting:
    job = db.query(JobPosting).filter(JobPosting.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job.employer_id != actor.id:
        raise HTTPException(status_code=403, detail="You can only manage your own job postings")
    return job


@router.get("", response_model=JobListResponse)
async def list_jobs(
    search: str = "",
    location: str = "",
    job_type: str = Query(NEUTRAL, alias="jobType"),
    category: str = NEUTRAL,
    salary_min: str | None = Query(None, alias="salaryMin"),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    criteria = FilterCriteria(
        search=search,
        location=location,
        job_type=job_type,
        category=category,
        salary_min=salary_min,
    )
    jobs = search_jobs(db, criteria)
    bookmarked = bookmarked_job_ids(db, actor)
    return JobListResponse(
        jobs=[job_to_response(j, bookmarked) for j in jobs],
        total=len(jobs),
    )


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    req: JobCreate,
    actor: Actor = Depends(require_approved_employer),
    db: Session = Depends(get_db),
):
    now = now_iso()
    job = JobPosting(
        id=str(uuid.uuid4()),
        employer_id=actor.id,
        title=req.title,
        description=req.description,
        location=req.location,
        job_type=req.job_type,
        category=req.category,
        salary_min=req.salary_min,
        salary_max=req.salary_max,
        skills=req.skills,
        experience_level=req.experience_level,
        status="active",
        created_at=now,
        updated_at=now,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Employer %s posted job %s", actor.id, job.id)
    return job_to_response(job)


@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job(
    job_id: str,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    job = db.query(JobPosting).filter(JobPosting.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    has_applied = False
    if actor.role == Role.JOB_SEEKER:
        has_applied = (
            db.query(Application.id)
            .filter(Application.job_id == job_id, Application.job_seeker_id == actor.id)
            .first()
            is not None
        )
    return JobDetailResponse(
        **job_fields(job, bookmarked_job_ids(db, actor)),
        has_applied=has_applied,
    )


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    req: JobUpdate,
    actor: Actor = Depends(require_approved_employer),
    db: Session = Depends(get_db),
):
    job = _owned_job(db, job_id, actor)

    update_data = req.model_dump(exclude_unset=True)
    update_data = {
        k: v for k, v in update_data.items()
        if not (v is None and k in _REQUIRED_FIELDS)
    }
    salary_min = update_data.get("salary_min", job.salary_min)
    salary_max = update_data.get("salary_max", job.salary_max)
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise HTTPException(status_code=400, detail="Minimum salary must not exceed maximum salary")

    for key, value in update_data.items():
        setattr(job, key, value)
    job.updated_at = now_iso()

    db.commit()
    db.refresh(job)
    return job_to_response(job)


@router.delete("/{job_id}")
async def delete_job(
    job_id: str,
    actor: Actor = Depends(require_approved_employer),
    db: Session = Depends(get_db),
):
    job = _owned_job(db, job_id, actor)
    db.delete(job)
    db.commit()
    logger.info("Employer %s deleted job %s", actor.id, job_id)
    return {"message": "Job deleted successfully"}
