from dataclasses import dataclass, field

from roadmap.services.catalog import Catalog, CatalogCourse


@dataclass
class DependencyMaps:
    prereqs: dict[str, list[str]]  # course -> prereqs still to be satisfied
    coreqs: dict[str, list[str]]  # course -> coreqs inside the requirement set
    groups: dict[str, frozenset[str]] = field(default_factory=dict)  # prereq -> alternative group

    def satisfied(self, prereq_id: str, done: set[str] | frozenset[str]) -> bool:
        group = self.groups.get(prereq_id, frozenset({prereq_id}))
        return not group.isdisjoint(done)

    def is_eligible(self, course_id: str, done: set[str] | frozenset[str]) -> bool:
        return all(self.satisfied(p, done) for p in self.prereqs.get(course_id, []))


def build_dependency_maps(
    requirement_set: list[CatalogCourse],
    catalog: Catalog,
    completed: frozenset[str],
) -> DependencyMaps:
    members = {c.id for c in requirement_set}
    prereqs: dict[str, list[str]] = {}
    coreqs: dict[str, list[str]] = {}
    groups: dict[str, frozenset[str]] = {}

    for course in requirement_set:
        pending = []
        for prereq in sorted(course.prerequisites):
            group = catalog.alternative_group(prereq)
            if group.isdisjoint(completed):
                pending.append(prereq)
                groups[prereq] = group
        prereqs[course.id] = pending
        coreqs[course.id] = [c for c in sorted(course.corequisites) if c in members]

    return DependencyMaps(prereqs=prereqs, coreqs=coreqs, groups=groups)


def resolvable(requirement_set: list[CatalogCourse], maps: DependencyMaps, completed: frozenset[str]) -> set[str]:
    """Requirement-set courses that could become eligible given unlimited terms."""
    done = set(completed)
    open_ids = [c.id for c in requirement_set]
    progress = True
    while progress:
        progress = False
        still_open = []
        for course_id in open_ids:
            if maps.is_eligible(course_id, done):
                done.add(course_id)
                progress = True
            else:
                still_open.append(course_id)
        open_ids = still_open
    return done - completed
