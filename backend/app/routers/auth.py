from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.dependencies import bearer_token, require_signed_in
from app.models.profile import Profile
from app.schemas.auth import (
    MeResponse,
    ProfileResponse,
    ProfileUpdate,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    ThrottleResponse,
)
from app.services.access_gate import Actor, dashboard_route
from app.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _profile_to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        email=profile.email,
        full_name=profile.full_name,
        role=profile.role,
        is_employer_approved=bool(profile.is_employer_approved),
        company_name=profile.company_name,
        company_logo=profile.company_logo,
        phone=profile.phone,
        resume_url=profile.resume_url,
        created_at=profile.created_at,
    )


def _load_profile(db: Session, actor: Actor) -> Profile:
    profile = db.query(Profile).filter(Profile.id == actor.id).first()
    if not profile:
        raise HTTPException(status_code=401, detail="Please sign in to continue")
    return profile


@router.post("/signup", response_model=ProfileResponse, status_code=201)
async def sign_up(req: SignUpRequest, db: Session = Depends(get_db)):
    if not req.full_name.strip():
        raise HTTPException(status_code=400, detail="Please enter your full name")
    if len(req.password) < settings.min_password_length:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {settings.min_password_length} characters",
        )
    if auth_service.find_by_email(db, req.email):
        raise HTTPException(status_code=409, detail="An account with this email already exists")

    try:
        profile = auth_service.sign_up(
            db, req.email, req.password, req.full_name, req.role, company_name=req.company_name
        )
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="An account with this email already exists")
    return _profile_to_response(profile)


@router.post("/signin", response_model=SignInResponse | ThrottleResponse)
async def sign_in(req: SignInRequest, db: Session = Depends(get_db)):
    result = auth_service.sign_in(db, req.email, req.password)
    if result is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if "error" in result:
        raise HTTPException(status_code=429, detail=result)
    profile = result["profile"]
    return SignInResponse(
        token=result["token"],
        expires_in_seconds=result["expires_in_seconds"],
        role=profile.role,
        dashboard=dashboard_route(profile.role),
    )


@router.post("/signout")
async def sign_out(token: str | None = Depends(bearer_token)):
    if not token or not auth_service.sign_out(token):
        raise HTTPException(status_code=401, detail="Not signed in")
    return {"message": "Signed out"}


@router.get("/me", response_model=MeResponse)
async def me(actor: Actor = Depends(require_signed_in), db: Session = Depends(get_db)):
    profile = _load_profile(db, actor)
    return MeResponse(profile=_profile_to_response(profile), dashboard=dashboard_route(actor.role))


@router.put("/me", response_model=ProfileResponse)
async def update_me(
    req: ProfileUpdate,
    actor: Actor = Depends(require_signed_in),
    db: Session = Depends(get_db),
):
    profile = _load_profile(db, actor)
    for key, value in req.model_dump(exclude_unset=True).items():
        if key == "full_name" and value is None:
            continue
        setattr(profile, key, value)
    db.commit()
    db.refresh(profile)
    return _profile_to_response(profile)
