from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint

from roadmap.models.base import Base


class CourseRelation(Base):
    __tablename__ = "course_relations"
    __table_args__ = (UniqueConstraint("course_id", "related_id", "relation"),)

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(String, ForeignKey("courses.id"), nullable=False, index=True)
    # Not a foreign key: catalog rows may point at courses that were never imported
    related_id = Column(String, nullable=False, index=True)
    relation = Column(String, nullable=False, default="prerequisite")  # prerequisite/corequisite/alternative
