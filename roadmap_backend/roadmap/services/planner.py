import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from roadmap.schemas.schedule import ScheduleGenerateRequest, ScheduleOptions, ScheduleResponse
from roadmap.services.catalog import load_catalog, load_completed
from roadmap.services.scheduler import build_timeline, generate_schedule
from roadmap.services.terms import TermSlot, parse_term_label

logger = logging.getLogger(__name__)


def _timeline(options: ScheduleOptions) -> list[TermSlot]:
    start = None
    if options.start_term:
        start = parse_term_label(options.start_term)
        if start is None:
            raise HTTPException(
                status_code=422,
                detail=f"Invalid start_term '{options.start_term}'. Expected e.g. 'Fall 2027'.",
            )
    return build_timeline(
        start=start,
        policy=options.policy.to_policy() if options.policy else None,
        include_summer=options.include_summer,
        horizon=options.horizon_terms,
    )


def generate_plan(payload: ScheduleGenerateRequest) -> ScheduleResponse:
    terms = _timeline(payload)
    result = generate_schedule(
        [c.to_catalog() for c in payload.courses],
        [r.to_record() for r in payload.completed],
        payload.elective_selections,
        terms=terms,
    )
    return ScheduleResponse.from_result(result)


def generate_plan_for_user(db: Session, user_id: str, payload: ScheduleOptions) -> ScheduleResponse:
    terms = _timeline(payload)
    courses = load_catalog(db)
    completed = load_completed(db, user_id)
    logger.info(
        "Planning for user %s: %s catalog courses, %s completion records",
        user_id,
        len(courses),
        len(completed),
    )
    result = generate_schedule(courses, completed, payload.elective_selections, terms=terms)
    return ScheduleResponse.from_result(result)
