from sqlalchemy import Boolean, Column, Text
from sqlalchemy.orm import relationship
from app.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Text, primary_key=True)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    full_name = Column(Text, nullable=False)
    role = Column(Text, nullable=False)
    is_employer_approved = Column(Boolean, nullable=False, default=False)
    company_name = Column(Text)
    company_logo = Column(Text)
    phone = Column(Text)
    resume_url = Column(Text)
    created_at = Column(Text, nullable=False)

    jobs = relationship("JobPosting", back_populates="employer", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="job_seeker", cascade="all, delete-orphan")
    bookmarks = relationship("Bookmark", back_populates="user", cascade="all, delete-orphan")
