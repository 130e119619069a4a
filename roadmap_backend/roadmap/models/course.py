import uuid

from sqlalchemy import Boolean, Column, Integer, String

from roadmap.models.base import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(String, primary_key=True, default=lambda: uuid.uuid4().hex)
    code = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    credits = Column(Integer, nullable=False, default=3)
    is_elective = Column(Boolean, default=False)
    elective_tier = Column(String, default="none")  # none/tier_a/tier_b
    category = Column(String, nullable=True)
