import logging
import time
import uuid

from sqlalchemy import text
from sqlalchemy.orm import Session

from app.config import settings
from app.models.profile import Profile
from app.services.access_gate import ANONYMOUS, Actor, Role
from app.utils.security import generate_token, hash_password, verify_password
from app.utils.timestamps import now_iso

logger = logging.getLogger("app.auth")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    def __init__(self):
        self._sessions: dict[str, tuple[str, float]] = {}  # token -> (profile_id, expires_at)

    def _cleanup_expired(self):
        now = time.time()
        self._sessions = {
            t: entry for t, entry in self._sessions.items() if entry[1] > now
        }

    def find_by_email(self, db: Session, email: str) -> Profile | None:
        return db.query(Profile).filter(Profile.email == normalize_email(email)).first()

    def sign_up(
        self,
        db: Session,
        email: str,
        password: str,
        full_name: str,
        role: str,
        company_name: str | None = None,
    ) -> Profile:
        profile = Profile(
            id=str(uuid.uuid4()),
            email=normalize_email(email),
            password_hash=hash_password(password),
            full_name=full_name.strip(),
            role=role,
            # Admins are trusted; employers wait for an admin to approve them.
            is_employer_approved=role == Role.ADMIN.value,
            company_name=company_name,
            created_at=now_iso(),
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
        logger.info("Registered %s account %s", role, profile.id)
        return profile

    def sign_in(self, db: Session, email: str, password: str) -> dict | None:
        throttle_key = f"signin:{normalize_email(email)}"
        delay = self._get_throttle_delay(db, throttle_key)
        if delay > 0:
            logger.warning("Sign-in throttled for %s (%.0fs remaining)", throttle_key, delay)
            return {"error": "too_many_attempts", "retry_after_seconds": delay}

        profile = self.find_by_email(db, email)
        if not profile or not verify_password(profile.password_hash, password):
            self._record_failed_attempt(db, throttle_key)
            logger.info("Failed sign-in for %s", throttle_key)
            return None

        self._reset_failed_attempts(db, throttle_key)
        token = generate_token()
        self._sessions[token] = (profile.id, time.time() + settings.session_ttl_seconds)
        return {
            "token": token,
            "expires_in_seconds": settings.session_ttl_seconds,
            "profile": profile,
        }

    def sign_out(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    def clear(self):
        self._sessions.clear()

    def profile_id_for(self, token: str) -> str | None:
        self._cleanup_expired()
        entry = self._sessions.get(token)
        if entry is None:
            return None
        # Sliding expiry: each use extends the session.
        self._sessions[token] = (entry[0], time.time() + settings.session_ttl_seconds)
        return entry[0]

    def resolve_actor(self, db: Session, token: str | None) -> Actor:
        if not token:
            return ANONYMOUS
        profile_id = self.profile_id_for(token)
        if profile_id is None:
            return ANONYMOUS
        profile = db.query(Profile).filter(Profile.id == profile_id).first()
        if profile is None:
            self.sign_out(token)
            return ANONYMOUS
        return actor_for(profile)

    def ensure_admin(self, db: Session, email: str, password: str, full_name: str) -> Profile:
        existing = self.find_by_email(db, email)
        if existing:
            if existing.role != Role.ADMIN.value:
                logger.warning("Bootstrap admin email %s belongs to a %s account", email, existing.role)
            return existing
        return self.sign_up(db, email, password, full_name, Role.ADMIN.value)

    def _get_throttle_delay(self, db: Session, key: str) -> float:
        row = db.execute(
            text("SELECT failed_attempts, last_failed_at FROM auth_throttle WHERE key = :key"),
            {"key": key},
        ).fetchone()
        if not row:
            return 0
        failed_attempts = int(row[0])
        last_failed_at = float(row[1])

        if failed_attempts < 3:
            return 0
        if failed_attempts < 5:
            delay = 5.0
        elif failed_attempts < 10:
            delay = 30.0
        else:
            delay = 300.0
        elapsed = time.time() - last_failed_at
        remaining = delay - elapsed
        return max(0, remaining)

    def _record_failed_attempt(self, db: Session, key: str):
        now = time.time()
        db.execute(
            text(
                """
                INSERT INTO auth_throttle (key, failed_attempts, last_failed_at)
                VALUES (:key, 1, :now)
                ON CONFLICT(key) DO UPDATE SET
                    failed_attempts = failed_attempts + 1,
                    last_failed_at = :now
                """
            ),
            {"key": key, "now": now},
        )
        db.commit()

    def _reset_failed_attempts(self, db: Session, key: str):
        db.execute(
            text(
                """
                INSERT INTO auth_throttle (key, failed_attempts, last_failed_at)
                VALUES (:key, 0, :now)
                ON CONFLICT(key) DO UPDATE SET
                    failed_attempts = 0,
                    last_failed_at = :now
                """
            ),
            {"key": key, "now": time.time()},
        )
        db.commit()


def actor_for(profile: Profile) -> Actor:
    try:
        role = Role(profile.role)
    except ValueError:
        return ANONYMOUS
    return Actor(id=profile.id, role=role, is_employer_approved=bool(profile.is_employer_approved))


auth_service = AuthService()
