from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_current_actor
from app.schemas.access import AccessDecisionResponse
from app.services.access_gate import PAGES, Actor, evaluate_page

router = APIRouter(prefix="/access", tags=["access"])


@router.get("/{page}", response_model=AccessDecisionResponse)
async def page_access(page: str, actor: Actor = Depends(get_current_actor)):
    if page not in PAGES:
        raise HTTPException(status_code=404, detail="Unknown page")
    decision = evaluate_page(page, actor)
    return AccessDecisionResponse(
        page=page,
        role=actor.role.value,
        outcome=decision.outcome.value,
        redirect_to=decision.redirect_to,
    )
