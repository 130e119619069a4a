from pydantic import BaseModel, Field

from roadmap.services.catalog import CatalogCourse, ElectiveTier


class CourseIn(BaseModel):
    id: str
    code: str
    name: str = ""
    credits: int = Field(3, ge=1)
    is_elective: bool = False
    elective_tier: ElectiveTier = ElectiveTier.NONE
    prerequisites: list[str] = []
    corequisites: list[str] = []
    alternatives: list[str] = []

    def to_catalog(self) -> CatalogCourse:
        return CatalogCourse(
            id=self.id,
            code=self.code,
            name=self.name or self.code,
            credits=self.credits,
            is_elective=self.is_elective,
            elective_tier=self.elective_tier,
            prerequisites=frozenset(self.prerequisites),
            corequisites=frozenset(self.corequisites),
            alternatives=frozenset(self.alternatives),
        )

