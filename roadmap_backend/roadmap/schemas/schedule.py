from pydantic import BaseModel, Field, model_validator

from roadmap.schemas.course import CourseIn
from roadmap.services.catalog import CompletionRecord
from roadmap.services.scheduler import ScheduleResult, UnresolvedReason
from roadmap.services.terms import CreditPolicy, Season


class CompletionRecordIn(BaseModel):
    course_id: str
    completed: bool = True

    def to_record(self) -> CompletionRecord:
        return CompletionRecord(course_id=self.course_id, completed=self.completed)


class CreditPolicyIn(BaseModel):
    target: int = Field(15, ge=1, le=30)
    minimum: int = Field(12, ge=1, le=30)
    maximum: int = Field(18, ge=1, le=30)

    @model_validator(mode="after")
    def check_order(self):
        if not self.minimum <= self.target <= self.maximum:
            raise ValueError("credit policy needs minimum <= target <= maximum")
        return self

    def to_policy(self) -> CreditPolicy:
        return CreditPolicy(target=self.target, minimum=self.minimum, maximum=self.maximum)


class ScheduleOptions(BaseModel):
    elective_selections: list[str] = []
    # e.g. "Spring 2027"; derived from today's date when omitted
    start_term: str | None = None
    include_summer: bool | None = None
    policy: CreditPolicyIn | None = None
    horizon_terms: int | None = Field(None, ge=1, le=24)


class ScheduleGenerateRequest(ScheduleOptions):
    courses: list[CourseIn]
    completed: list[CompletionRecordIn] = []


class AssignmentOut(BaseModel):
    course_id: str
    season: Season
    year: int


class TermOut(BaseModel):
    term: str
    credits: int
    course_ids: list[str]
    below_minimum: bool = False


class UnresolvedOut(BaseModel):
    course_id: str
    code: str
    reason: UnresolvedReason


class ScheduleResponse(BaseModel):
    assignments: list[AssignmentOut] = []
    terms: list[TermOut] = []
    unresolved: list[UnresolvedOut] = []

    @classmethod
    def from_result(cls, result: ScheduleResult) -> "ScheduleResponse":
        return cls(
            assignments=[
                AssignmentOut(course_id=a.course_id, season=a.season, year=a.year)
                for a in result.assignments
            ],
            terms=[
                TermOut(
                    term=f"{t.season.value} {t.year}",
                    credits=t.credits,
                    course_ids=t.course_ids,
                    below_minimum=t.below_minimum,
                )
                for t in result.terms
            ],
            unresolved=[
                UnresolvedOut(course_id=u.course_id, code=u.code, reason=u.reason)
                for u in result.unresolved
            ],
        )
