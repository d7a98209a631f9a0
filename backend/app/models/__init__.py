from app.models.profile import Profile
from app.models.job import JobPosting
from app.models.application import Application
from app.models.bookmark import Bookmark

__all__ = ["Profile", "JobPosting", "Application", "Bookmark"]
