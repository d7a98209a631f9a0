from sqlalchemy import JSON, Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from app.database import Base


class JobPosting(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    employer_id = Column(Text, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    job_type = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    skills = Column(JSON, nullable=False, default=list)
    experience_level = Column(Text)
    status = Column(Text, nullable=False, default="active")
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    employer = relationship("Profile", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")
    bookmarks = relationship("Bookmark", back_populates="job", cascade="all, delete-orphan")
