import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable

from roadmap.core.config import Settings, settings as default_settings
from roadmap.services.catalog import (
    Catalog,
    CatalogCourse,
    CompletionRecord,
    build_catalog,
    completed_ids,
)
from roadmap.services.graph import DependencyMaps, build_dependency_maps, resolvable
from roadmap.services.requirements import build_requirement_set
from roadmap.services.terms import (
    CreditPolicy,
    Season,
    TermSlot,
    generate_terms,
    next_term_start,
)

logger = logging.getLogger(__name__)


class UnresolvedReason(str, Enum):
    MISSING_PREREQUISITE = "missing_prerequisite"
    PREREQUISITE_NOT_PLANNED = "prerequisite_not_planned"
    BLOCKED = "blocked"
    EXCEEDS_CREDIT_LIMIT = "exceeds_credit_limit"
    HORIZON_EXHAUSTED = "horizon_exhausted"


@dataclass(frozen=True)
class Assignment:
    course_id: str
    season: Season
    year: int


@dataclass
class TermSummary:
    season: Season
    year: int
    credits: int
    course_ids: list[str]
    below_minimum: bool


@dataclass(frozen=True)
class UnresolvedCourse:
    course_id: str
    code: str
    reason: UnresolvedReason


@dataclass
class ScheduleResult:
    assignments: list[Assignment]
    terms: list[TermSummary]
    unresolved: list[UnresolvedCourse]


def build_timeline(
    today: date | None = None,
    *,
    start: tuple[Season, int] | None = None,
    policy: CreditPolicy | None = None,
    include_summer: bool | None = None,
    horizon: int | None = None,
    config: Settings | None = None,
) -> list[TermSlot]:
    config = config or default_settings
    if start is None:
        start = next_term_start(today or date.today(), config.fall_cutoff_month)
    if policy is None:
        policy = CreditPolicy(
            target=config.target_credits,
            minimum=config.min_credits,
            maximum=config.max_credits,
        )
    return generate_terms(
        start[0],
        start[1],
        horizon if horizon is not None else config.horizon_terms,
        policy=policy,
        include_summer=config.include_summer if include_summer is None else include_summer,
    )


def allocate_terms(
    requirement_set: list[CatalogCourse],
    maps: DependencyMaps,
    completed: frozenset[str],
    terms: list[TermSlot],
) -> tuple[list[Assignment], list[TermSummary]]:
    by_id = {c.id: c for c in requirement_set}
    scheduled = set(completed)
    remaining = [c.id for c in requirement_set]
    placed: dict[str, Assignment] = {}
    summaries: list[TermSummary] = []

    for term in terms:
        if not remaining:
            break
        policy = term.policy
        # Eligibility is fixed at the start of the term
        eligible = [cid for cid in remaining if maps.is_eligible(cid, scheduled)]
        eligible_set = set(eligible)
        claimed: list[str] = []
        claimed_set: set[str] = set()
        running = 0

        for cid in eligible:
            if running >= policy.target:
                break
            if cid in claimed_set:
                continue
            bundle = [cid] + [
                co for co in maps.coreqs.get(cid, []) if co in eligible_set and co not in claimed_set
            ]
            credits = sum(by_id[c].credits for c in bundle)
            if credits > policy.maximum and len(bundle) > 1:
                # The bundle can never share a term, so place the course on its own
                bundle = [cid]
                credits = by_id[cid].credits
            if running + credits > policy.maximum:
                continue
            claimed.extend(bundle)
            claimed_set.update(bundle)
            running += credits

        for cid in claimed:
            assert cid not in placed, f"course {cid} scheduled twice"
            placed[cid] = Assignment(course_id=cid, season=term.season, year=term.year)
        scheduled.update(claimed)
        remaining = [cid for cid in remaining if cid not in claimed_set]
        summaries.append(
            TermSummary(
                season=term.season,
                year=term.year,
                credits=running,
                course_ids=claimed,
                below_minimum=running < policy.minimum,
            )
        )
        logger.debug("%s: %s credits, %s courses", term.label, running, len(claimed))

    return list(placed.values()), summaries


def _diagnose(
    requirement_set: list[CatalogCourse],
    maps: DependencyMaps,
    catalog: Catalog,
    completed: frozenset[str],
    placed: set[str],
    max_credits: int | None,
) -> list[UnresolvedCourse]:
    members = {c.id for c in requirement_set}
    too_heavy = set()
    if max_credits is not None:
        too_heavy = {c.id for c in requirement_set if c.credits > max_credits}
    reachable = resolvable(
        [c for c in requirement_set if c.id not in too_heavy], maps, completed
    )

    unresolved = []
    for course in requirement_set:
        if course.id in placed:
            continue
        pending = maps.prereqs.get(course.id, [])
        if any(p not in catalog for p in pending):
            reason = UnresolvedReason.MISSING_PREREQUISITE
        elif any(maps.groups.get(p, frozenset({p})).isdisjoint(members) for p in pending):
            reason = UnresolvedReason.PREREQUISITE_NOT_PLANNED
        elif course.id in too_heavy:
            reason = UnresolvedReason.EXCEEDS_CREDIT_LIMIT
        elif course.id not in reachable:
            reason = UnresolvedReason.BLOCKED
        else:
            reason = UnresolvedReason.HORIZON_EXHAUSTED
        unresolved.append(UnresolvedCourse(course_id=course.id, code=course.code, reason=reason))
    return unresolved


def generate_schedule(
    courses: Iterable[CatalogCourse],
    completed: Iterable[CompletionRecord],
    elective_selections: Iterable[str] = (),
    *,
    terms: list[TermSlot] | None = None,
    today: date | None = None,
) -> ScheduleResult:
    """Plan the remaining courses into terms.

    Courses that cannot be placed are left out of ``assignments``; the
    ``unresolved`` list names them with a reason. Nothing here raises for bad
    catalog data.
    """
    catalog = build_catalog(courses)
    done = completed_ids(completed)
    if terms is None:
        terms = build_timeline(today)

    requirement_set = build_requirement_set(catalog, done, elective_selections)
    if not requirement_set:
        logger.info("Nothing left to schedule")
        return ScheduleResult(assignments=[], terms=[], unresolved=[])

    maps = build_dependency_maps(requirement_set, catalog, done)
    assignments, summaries = allocate_terms(requirement_set, maps, done, terms)
    unresolved = _diagnose(
        requirement_set,
        maps,
        catalog,
        done,
        {a.course_id for a in assignments},
        terms[0].policy.maximum if terms else None,
    )

    logger.info(
        "Scheduled %s of %s courses across %s terms",
        len(assignments),
        len(requirement_set),
        len(summaries),
    )
    if unresolved:
        logger.warning(
            "%s course(s) left unscheduled: %s",
            len(unresolved),
            ", ".join(f"{u.code} ({u.reason.value})" for u in unresolved),
        )
    return ScheduleResult(assignments=assignments, terms=summaries, unresolved=unresolved)
