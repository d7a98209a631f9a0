import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from app.database import get_db
from app.main import app
from app.config import settings
from app.models.job import JobPosting
from app.models.profile import Profile
from app.services.auth_service import auth_service

API = "/api/v1"
PASSWORD = "test-password-123"


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def tmp_data(tmp_path):
    data_path = tmp_path / "JobPortal"
    data_path.mkdir()
    return data_path


@pytest.fixture
def test_db(tmp_data):
    db_path = tmp_data / "jobportal.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    from app.database import init_db
    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db(test_db):
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def fresh_auth_service():
    """Reset session state for each test."""
    original = auth_service.__dict__.copy()
    auth_service._sessions = {}
    yield auth_service
    auth_service.__dict__.update(original)


@pytest.fixture
def client(tmp_data, test_db, fresh_auth_service):
    original_data_path = settings.data_path
    settings.data_path = tmp_data
    c = TestClient(app)
    yield c
    settings.data_path = original_data_path


def _sign_in(client, email):
    r = client.post(f"{API}/auth/signin", json={"email": email, "password": PASSWORD})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def signup(client, test_db):
    """Register an account through the API and return its id and auth headers."""

    def _signup(email, role="job_seeker", approved=False, full_name="Test User", company_name=None):
        r = client.post(f"{API}/auth/signup", json={
            "email": email,
            "password": PASSWORD,
            "full_name": full_name,
            "role": role,
            "company_name": company_name,
        })
        assert r.status_code == 201, r.text
        profile_id = r.json()["id"]
        if approved:
            session = test_db()
            session.query(Profile).filter(Profile.id == profile_id).update({"is_employer_approved": True})
            session.commit()
            session.close()
        return {"id": profile_id, "headers": _sign_in(client, email)}

    return _signup


@pytest.fixture
def admin(client, test_db):
    session = test_db()
    profile = auth_service.ensure_admin(session, "admin@example.com", PASSWORD, "Site Admin")
    profile_id = profile.id
    session.close()
    return {"id": profile_id, "headers": _sign_in(client, "admin@example.com")}


@pytest.fixture
def seeker(signup):
    return signup("seeker@example.com", role="job_seeker", full_name="Sam Seeker")


@pytest.fixture
def employer(signup):
    return signup("boss@example.com", role="employer", approved=True,
                  full_name="Erin Employer", company_name="Acme Corp")


@pytest.fixture
def make_profile(db):
    """Insert a profile row directly, bypassing password hashing."""
    counter = {"n": 0}

    def _make(role="employer", approved=True, company_name="Acme Corp"):
        counter["n"] += 1
        profile = Profile(
            id=f"profile-{counter['n']}",
            email=f"user{counter['n']}@example.com",
            password_hash="not-a-real-hash",
            full_name=f"User {counter['n']}",
            role=role,
            is_employer_approved=approved,
            company_name=company_name,
            created_at="2024-01-01T00:00:00.000000Z",
        )
        db.add(profile)
        db.commit()
        return profile

    return _make


@pytest.fixture
def make_job(db, make_profile):
    """Insert a posting directly with an explicit creation time."""
    state = {"n": 0, "employer": None}

    def _make(title="Software Engineer", created_at=None, **fields):
        state["n"] += 1
        if state["employer"] is None:
            state["employer"] = make_profile()
        now = created_at or f"2024-01-{state['n']:02d}T00:00:00.000000Z"
        job = JobPosting(
            id=fields.pop("id", f"job-{state['n']:03d}"),
            employer_id=fields.pop("employer_id", state["employer"].id),
            title=title,
            description=fields.pop("description", "A great role"),
            location=fields.pop("location", "Remote"),
            job_type=fields.pop("job_type", "full-time"),
            category=fields.pop("category", "technology"),
            skills=fields.pop("skills", []),
            status=fields.pop("status", "active"),
            created_at=now,
            updated_at=now,
            **fields,
        )
        db.add(job)
        db.commit()
        return job

    return _make
