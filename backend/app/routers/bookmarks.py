import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.dependencies import require_signed_in
from app.models.bookmark import Bookmark
from app.models.job import JobPosting
from app.schemas.bookmark import BookmarkResponse, BookmarkToggleResponse
from app.services.access_gate import Actor
from app.services.job_service import job_to_response
from app.utils.timestamps import now_iso

router = APIRouter(tags=["bookmarks"])


@router.post("/jobs/{job_id}/bookmark", response_model=BookmarkToggleResponse)
async def toggle_bookmark(
    job_id: str,
    actor: Actor = Depends(require_signed_in),
    db: Session = Depends(get_db),
):
    job = db.query(JobPosting).filter(JobPosting.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    existing = (
        db.query(Bookmark)
        .filter(Bookmark.user_id == actor.id, Bookmark.job_id == job_id)
        .first()
    )
    if existing:
        db.delete(existing)
        db.commit()
        return BookmarkToggleResponse(job_id=job_id, bookmarked=False, message="Bookmark removed")

    db.add(Bookmark(id=str(uuid.uuid4()), user_id=actor.id, job_id=job_id, created_at=now_iso()))
    try:
        db.commit()
    except IntegrityError:
        # A concurrent toggle already saved it.
        db.rollback()
    return BookmarkToggleResponse(job_id=job_id, bookmarked=True, message="Job bookmarked")


@router.get("/me/bookmarks", response_model=list[BookmarkResponse])
async def my_bookmarks(
    actor: Actor = Depends(require_signed_in),
    db: Session = Depends(get_db),
):
    bookmarks = (
        db.query(Bookmark)
        .options(joinedload(Bookmark.job).joinedload(JobPosting.employer))
        .filter(Bookmark.user_id == actor.id)
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
        .all()
    )
    return [
        BookmarkResponse(
            id=b.id,
            job_id=b.job_id,
            created_at=b.created_at,
            job=job_to_response(b.job, {b.job_id}),
        )
        for b in bookmarks
    ]
