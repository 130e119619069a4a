from roadmap.models.course import Course
from roadmap.models.relation import CourseRelation
from roadmap.models.completion import UserCourse

__all__ = ["Course", "CourseRelation", "UserCourse"]
