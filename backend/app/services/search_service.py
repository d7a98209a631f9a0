from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, joinedload

from app.models.job import JobPosting
from app.schemas.search import FilterCriteria


def compose_job_query(db: Session, criteria: FilterCriteria | None = None) -> Query:
    """Build the active-postings query for ``criteria``, newest first.

    Each non-neutral field narrows the result with AND; neutral fields add
    nothing. The returned query is lazy and can be executed repeatedly.
    """
    criteria = criteria or FilterCriteria()
    query = (
        db.query(JobPosting)
        .options(joinedload(JobPosting.employer))
        .filter(JobPosting.status == "active")
    )

    search = criteria.search_text
    if search:
        query = query.filter(
            or_(
                JobPosting.title.icontains(search, autoescape=True),
                JobPosting.description.icontains(search, autoescape=True),
            )
        )

    location = criteria.location_text
    if location:
        query = query.filter(JobPosting.location.icontains(location, autoescape=True))

    job_type = criteria.job_type_value
    if job_type:
        query = query.filter(JobPosting.job_type == job_type)

    category = criteria.category_value
    if category:
        query = query.filter(JobPosting.category == category)

    salary_floor = criteria.salary_floor
    if salary_floor is not None:
        # NULL salary_min never satisfies >=, so unsalaried postings drop out here.
        query = query.filter(JobPosting.salary_min >= salary_floor)

    return query.order_by(JobPosting.created_at.desc(), JobPosting.id.desc())


def search_jobs(db: Session, criteria: FilterCriteria | None = None) -> list[JobPosting]:
    return compose_job_query(db, criteria).all()
