import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_admin
from app.models.application import Application
from app.models.job import JobPosting
from app.models.profile import Profile
from app.schemas.admin import AdminStatsResponse, PendingEmployerResponse
from app.services.access_gate import Actor, Role

logger = logging.getLogger("app.admin")

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/employers/pending", response_model=list[PendingEmployerResponse])
async def pending_employers(db: Session = Depends(get_db)):
    employers = (
        db.query(Profile)
        .filter(Profile.role == Role.EMPLOYER.value, ~Profile.is_employer_approved)
        .order_by(Profile.created_at.asc())
        .all()
    )
    return [
        PendingEmployerResponse(
            id=e.id,
            full_name=e.full_name,
            email=e.email,
            company_name=e.company_name,
            created_at=e.created_at,
        )
        for e in employers
    ]


@router.post("/employers/{profile_id}/approve")
async def approve_employer(
    profile_id: str,
    actor: Actor = Depends(require_admin),
    db: Session = Depends(get_db),
):
    employer = (
        db.query(Profile)
        .filter(Profile.id == profile_id, Profile.role == Role.EMPLOYER.value)
        .first()
    )
    if not employer:
        raise HTTPException(status_code=404, detail="Employer not found")
    employer.is_employer_approved = True
    db.commit()
    logger.info("Admin %s approved employer %s", actor.id, profile_id)
    return {"message": "Employer approved"}


@router.get("/stats", response_model=AdminStatsResponse)
async def admin_stats(db: Session = Depends(get_db)):
    return AdminStatsResponse(
        users=db.query(func.count(Profile.id)).scalar(),
        jobs=db.query(func.count(JobPosting.id)).scalar(),
        applications=db.query(func.count(Application.id)).scalar(),
    )
