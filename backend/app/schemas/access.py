from pydantic import BaseModel


class AccessDecisionResponse(BaseModel):
    page: str
    role: str
    outcome: str
    redirect_to: str | None = None
