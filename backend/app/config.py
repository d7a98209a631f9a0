from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / "JobPortal"
    session_ttl_seconds: int = 86400  # 1 day
    min_password_length: int = 6
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]
    # Optional bootstrap admin, created on startup when both are set.
    admin_email: str | None = None
    admin_password: str | None = None
    admin_full_name: str = "Administrator"

    @property
    def db_path(self) -> Path:
        return self.data_path / "jobportal.sqlite"

    model_config = {"env_prefix": "JOBPORTAL_"}


settings = Settings()
