import logging
from typing import Iterable

from roadmap.services.catalog import Catalog, CatalogCourse

logger = logging.getLogger(__name__)


def build_requirement_set(
    catalog: Catalog,
    completed: frozenset[str],
    elective_selections: Iterable[str] = (),
) -> list[CatalogCourse]:
    """Courses that still need a term: open required courses, then chosen electives.

    Only one member of an alternative group is kept. The first member seen in
    catalog order claims the group, unless some member is already completed.
    """
    required: list[CatalogCourse] = []
    claimed: set[str] = set()
    for course in catalog:
        if course.is_elective or course.id in completed:
            continue
        group = catalog.alternative_group(course.id)
        if len(group) > 1:
            if group & completed or group & claimed:
                logger.debug("Skipping %s: alternative requirement already covered", course.code)
                continue
            claimed.update(group)
        required.append(course)

    wanted = set()
    for course_id in elective_selections:
        course = catalog.get(course_id)
        if course is None:
            logger.info("Ignoring elective selection %s: not in catalog", course_id)
            continue
        if not course.is_elective:
            logger.info("Ignoring elective selection %s: %s is a required course", course_id, course.code)
            continue
        wanted.add(course_id)

    electives = [c for c in catalog if c.id in wanted and c.id not in completed]
    return required + electives
