from pydantic import BaseModel

from app.schemas.job import JobResponse


class BookmarkToggleResponse(BaseModel):
    job_id: str
    bookmarked: bool
    message: str


class BookmarkResponse(BaseModel):
    id: str
    job_id: str
    created_at: str
    job: JobResponse
