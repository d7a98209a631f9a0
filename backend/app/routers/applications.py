import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.dependencies import require_approved_employer, require_job_seeker
from app.models.application import Application
from app.models.job import JobPosting
from app.schemas.application import (
    ApplicationCheckResponse,
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusUpdate,
    SeekerApplicationResponse,
)
from app.services.access_gate import Actor
from app.services.job_service import job_to_response
from app.utils.timestamps import now_iso

logger = logging.getLogger("app.applications")

router = APIRouter(tags=["applications"])


def _application_fields(application: Application) -> dict:
    return dict(
        id=application.id,
        job_id=application.job_id,
        job_seeker_id=application.job_seeker_id,
        status=application.status,
        cover_letter=application.cover_letter,
        applied_at=application.applied_at,
        updated_at=application.updated_at,
    )


@router.post("/jobs/{job_id}/applications", response_model=ApplicationResponse, status_code=201)
async def apply_to_job(
    job_id: str,
    req: ApplicationCreate,
    actor: Actor = Depends(require_job_seeker),
    db: Session = Depends(get_db),
):
    job = db.query(JobPosting).filter(JobPosting.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job.status != "active":
        raise HTTPException(status_code=400, detail="This job is no longer accepting applications")

    existing = (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.job_seeker_id == actor.id)
        .first()
    )
    if existing:
        raise HTTPException(status_code=409, detail="You have already applied for this job")

    now = now_iso()
    cover_letter = (req.cover_letter or "").strip() or None
    application = Application(
        id=str(uuid.uuid4()),
        job_id=job_id,
        job_seeker_id=actor.id,
        status="pending",
        cover_letter=cover_letter,
        applied_at=now,
        updated_at=now,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        # Lost the race against a concurrent submit; the unique constraint decides.
        db.rollback()
        raise HTTPException(status_code=409, detail="You have already applied for this job")
    db.refresh(application)
    logger.info("Job seeker %s applied to job %s", actor.id, job_id)
    return ApplicationResponse(**_application_fields(application))


@router.get("/jobs/{job_id}/applications/mine", response_model=ApplicationCheckResponse)
async def check_application(
    job_id: str,
    actor: Actor = Depends(require_job_seeker),
    db: Session = Depends(get_db),
):
    application = (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.job_seeker_id == actor.id)
        .first()
    )
    if not application:
        return ApplicationCheckResponse(has_applied=False)
    return ApplicationCheckResponse(
        has_applied=True,
        application_id=application.id,
        status=application.status,
    )


@router.get("/me/applications", response_model=list[SeekerApplicationResponse])
async def my_applications(
    actor: Actor = Depends(require_job_seeker),
    db: Session = Depends(get_db),
):
    applications = (
        db.query(Application)
        .options(joinedload(Application.job).joinedload(JobPosting.employer))
        .filter(Application.job_seeker_id == actor.id)
        .order_by(Application.applied_at.desc(), Application.id.desc())
        .all()
    )
    return [
        SeekerApplicationResponse(
            **_application_fields(a),
            job=job_to_response(a.job) if a.job else None,
        )
        for a in applications
    ]


@router.put("/applications/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    req: ApplicationStatusUpdate,
    actor: Actor = Depends(require_approved_employer),
    db: Session = Depends(get_db),
):
    application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    if application.job.employer_id != actor.id:
        raise HTTPException(status_code=403, detail="You can only manage applicants for your own jobs")

    application.status = req.status
    application.updated_at = now_iso()
    db.commit()
    db.refresh(application)
    return ApplicationResponse(**_application_fields(application))
