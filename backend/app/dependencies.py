import logging

from fastapi import Depends, Header, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.access_gate import ANONYMOUS, Actor, Outcome, Role, dashboard_route, evaluate
from app.services.auth_service import auth_service

logger = logging.getLogger("app.auth")

_ROLE_LABELS = {
    Role.JOB_SEEKER: "job seekers",
    Role.EMPLOYER: "employers",
    Role.ADMIN: "admins",
}


async def bearer_token(authorization: str | None = Header(None)) -> str | None:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization[7:]


async def get_current_actor(
    token: str | None = Depends(bearer_token),
    db: Session = Depends(get_db),
) -> Actor:
    # A failed session lookup degrades to anonymous; the gate then redirects to sign-in.
    try:
        return auth_service.resolve_actor(db, token)
    except SQLAlchemyError as exc:
        logger.warning("Session lookup failed, treating request as anonymous: %s", exc)
        db.rollback()
        return ANONYMOUS


def require_roles(*roles: Role, approved: bool = False):
    """Dependency enforcing the access gate for an API route.

    Denials carry ``X-Redirect-To`` with the gate's redirect target. With
    ``approved=True`` an employer still awaiting approval is refused too.
    """
    labels = " or ".join(_ROLE_LABELS[r] for r in roles)

    async def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        decision = evaluate(actor, roles)
        if decision.outcome == Outcome.DENIED_ANONYMOUS:
            raise HTTPException(
                status_code=401,
                detail="Please sign in to continue",
                headers={"X-Redirect-To": decision.redirect_to},
            )
        if decision.outcome == Outcome.DENIED_WRONG_ROLE:
            raise HTTPException(
                status_code=403,
                detail=f"Only {labels} can do this",
                headers={"X-Redirect-To": decision.redirect_to},
            )
        if approved and decision.outcome == Outcome.ALLOWED_RESTRICTED:
            raise HTTPException(
                status_code=403,
                detail="Your employer account is pending admin approval",
                headers={"X-Redirect-To": dashboard_route(actor.role)},
            )
        return actor

    return dependency


require_signed_in = require_roles(Role.JOB_SEEKER, Role.EMPLOYER, Role.ADMIN)
require_job_seeker = require_roles(Role.JOB_SEEKER)
require_approved_employer = require_roles(Role.EMPLOYER, approved=True)
require_admin = require_roles(Role.ADMIN)
