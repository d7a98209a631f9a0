from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.dependencies import require_approved_employer
from app.models.application import Application
from app.models.job import JobPosting
from app.schemas.application import ApplicantResponse, ApplicantSummary
from app.schemas.job import EmployerJobResponse
from app.services.access_gate import Actor
from app.services.job_service import applicant_counts, job_fields

router = APIRouter(prefix="/employer", tags=["employer"])


@router.get("/jobs", response_model=list[EmployerJobResponse])
async def my_jobs(
    actor: Actor = Depends(require_approved_employer),
    db: Session = Depends(get_db),
):
    jobs = (
        db.query(JobPosting)
        .options(joinedload(JobPosting.employer))
        .filter(JobPosting.employer_id == actor.id)
        .order_by(JobPosting.created_at.desc(), JobPosting.id.desc())
        .all()
    )
    counts = applicant_counts(db, [j.id for j in jobs])
    return [
        EmployerJobResponse(**job_fields(j), applicant_count=counts.get(j.id, 0))
        for j in jobs
    ]


@router.get("/jobs/{job_id}/applicants", response_model=list[ApplicantResponse])
async def job_applicants(
    job_id: str,
    actor: Actor = Depends(require_approved_employer),
    db: Session = Depends(get_db),
):
    job = db.query(JobPosting).filter(JobPosting.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job.employer_id != actor.id:
        raise HTTPException(status_code=403, detail="You can only view applicants for your own jobs")

    applications = (
        db.query(Application)
        .options(joinedload(Application.job_seeker))
        .filter(Application.job_id == job_id)
        .order_by(Application.applied_at.desc(), Application.id.desc())
        .all()
    )
    return [
        ApplicantResponse(
            id=a.id,
            job_id=a.job_id,
            job_seeker_id=a.job_seeker_id,
            status=a.status,
            cover_letter=a.cover_letter,
            applied_at=a.applied_at,
            updated_at=a.updated_at,
            applicant=ApplicantSummary(
                id=a.job_seeker.id,
                full_name=a.job_seeker.full_name,
                email=a.job_seeker.email,
                phone=a.job_seeker.phone,
                resume_url=a.job_seeker.resume_url,
            ),
        )
        for a in applications
    ]
