import logging
from collections import defaultdict
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable

from sqlalchemy.orm import Session

from roadmap.models.completion import UserCourse
from roadmap.models.course import Course
from roadmap.models.relation import CourseRelation

logger = logging.getLogger(__name__)


class ElectiveTier(str, Enum):
    NONE = "none"
    TIER_A = "tier_a"
    TIER_B = "tier_b"


@dataclass(frozen=True)
class CatalogCourse:
    id: str
    code: str
    name: str
    credits: int
    is_elective: bool = False
    elective_tier: ElectiveTier = ElectiveTier.NONE
    prerequisites: frozenset[str] = field(default_factory=frozenset)
    corequisites: frozenset[str] = field(default_factory=frozenset)
    alternatives: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class CompletionRecord:
    course_id: str
    completed: bool = True


class Catalog:
    """Immutable arena of catalog courses addressed by id.

    Iteration follows catalog-code order. Alternative groups are the connected
    components of the (symmetric) alternative relation.
    """

    def __init__(self, courses: list[CatalogCourse], groups: dict[str, frozenset[str]]):
        self._courses = {c.id: c for c in courses}
        self._order = [c.id for c in courses]
        self._groups = groups

    def __iter__(self):
        return (self._courses[cid] for cid in self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, course_id: str) -> bool:
        return course_id in self._courses

    def get(self, course_id: str) -> CatalogCourse | None:
        return self._courses.get(course_id)

    def alternative_group(self, course_id: str) -> frozenset[str]:
        return self._groups.get(course_id, frozenset({course_id}))


def _components(adjacency: dict[str, set[str]]) -> dict[str, frozenset[str]]:
    groups: dict[str, frozenset[str]] = {}
    for start in adjacency:
        if start in groups:
            continue
        seen = {start}
        stack = [start]
        while stack:
            node = stack.pop()
            for nxt in adjacency.get(node, ()):
                if nxt not in seen:
                    seen.add(nxt)
                    stack.append(nxt)
        group = frozenset(seen)
        for member in group:
            groups[member] = group
    return groups


def build_catalog(courses: Iterable[CatalogCourse]) -> Catalog:
    by_id: dict[str, CatalogCourse] = {}
    for course in courses:
        if course.id in by_id:
            logger.warning("Duplicate catalog id %s (%s), keeping the first", course.id, course.code)
            continue
        if course.credits < 1:
            logger.warning("Skipping %s: non-positive credits (%s)", course.code, course.credits)
            continue
        by_id[course.id] = course

    cleaned: list[CatalogCourse] = []
    alt_edges: dict[str, set[str]] = defaultdict(set)
    for course in by_id.values():
        # Unknown prerequisites stay: they keep the course blocked unless completed
        prereqs = frozenset(p for p in course.prerequisites if p != course.id)
        coreqs = set()
        for ref in course.corequisites:
            if ref == course.id:
                continue
            if ref not in by_id:
                logger.warning("Skipping unknown corequisite %s on %s", ref, course.code)
                continue
            coreqs.add(ref)
        alts = set()
        for ref in course.alternatives:
            if ref == course.id:
                continue
            if ref not in by_id:
                logger.warning("Skipping unknown alternative %s on %s", ref, course.code)
                continue
            alts.add(ref)
            alt_edges[course.id].add(ref)
            alt_edges[ref].add(course.id)
        cleaned.append(
            replace(
                course,
                prerequisites=prereqs,
                corequisites=frozenset(coreqs),
                alternatives=frozenset(alts),
            )
        )

    cleaned.sort(key=lambda c: (c.code, c.id))
    return Catalog(cleaned, _components(alt_edges))


def completed_ids(records: Iterable[CompletionRecord]) -> frozenset[str]:
    return frozenset(r.course_id for r in records if r.completed)


def load_catalog(db: Session) -> list[CatalogCourse]:
    relations: dict[str, dict[str, set[str]]] = defaultdict(lambda: defaultdict(set))
    for row in db.query(CourseRelation).all():
        relations[row.course_id][row.relation].add(row.related_id)

    courses = []
    for row in db.query(Course).order_by(Course.code).all():
        rel = relations.get(row.id, {})
        try:
            tier = ElectiveTier(row.elective_tier or "none")
        except ValueError:
            logger.warning("Unknown elective tier %r on %s", row.elective_tier, row.code)
            tier = ElectiveTier.NONE
        courses.append(
            CatalogCourse(
                id=row.id,
                code=row.code,
                name=row.name,
                credits=row.credits,
                is_elective=bool(row.is_elective),
                elective_tier=tier,
                prerequisites=frozenset(rel.get("prerequisite", ())),
                corequisites=frozenset(rel.get("corequisite", ())),
                alternatives=frozenset(rel.get("alternative", ())),
            )
        )
    return courses


def load_completed(db: Session, user_id: str) -> list[CompletionRecord]:
    rows = db.query(UserCourse).filter(UserCourse.user_id == user_id).all()
    return [CompletionRecord(course_id=r.course_id, completed=bool(r.completed)) for r in rows]
