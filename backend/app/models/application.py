from sqlalchemy import Column, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database import Base


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("job_id", "job_seeker_id"),)

    id = Column(Text, primary_key=True)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    job_seeker_id = Column(Text, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    status = Column(Text, nullable=False, default="pending")
    cover_letter = Column(Text)
    applied_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    job = relationship("JobPosting", back_populates="applications")
    job_seeker = relationship("Profile", back_populates="applications")
