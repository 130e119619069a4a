from sqlalchemy import Boolean, Column, Integer, String, UniqueConstraint

from roadmap.models.base import Base


class UserCourse(Base):
    __tablename__ = "user_courses"
    __table_args__ = (UniqueConstraint("user_id", "course_id"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    course_id = Column(String, nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=True)
    semester = Column(String, nullable=True)
    year = Column(Integer, nullable=True)
