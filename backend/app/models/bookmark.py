from sqlalchemy import Column, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database import Base


class Bookmark(Base):
    __tablename__ = "bookmarks"
    __table_args__ = (UniqueConstraint("user_id", "job_id"),)

    id = Column(Text, primary_key=True)
    user_id = Column(Text, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(Text, nullable=False)

    user = relationship("Profile", back_populates="bookmarks")
    job = relationship("JobPosting", back_populates="bookmarks")
