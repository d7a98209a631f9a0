from pydantic import BaseModel


class PendingEmployerResponse(BaseModel):
    id: str
    full_name: str
    email: str
    company_name: str | None = None
    created_at: str


class AdminStatsResponse(BaseModel):
    users: int
    jobs: int
    applications: int
