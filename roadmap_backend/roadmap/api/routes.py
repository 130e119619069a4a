from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from roadmap.core.database import get_db
from roadmap.schemas.schedule import ScheduleGenerateRequest, ScheduleOptions, ScheduleResponse
from roadmap.services.planner import generate_plan, generate_plan_for_user

router = APIRouter(prefix="/api")


@router.post("/schedule/generate", response_model=ScheduleResponse)
def generate_schedule_endpoint(payload: ScheduleGenerateRequest):
    return generate_plan(payload)


@router.post("/users/{user_id}/schedule", response_model=ScheduleResponse)
def generate_user_schedule_endpoint(
    user_id: str,
    payload: ScheduleOptions,
    db: Session = Depends(get_db),
):
    return generate_plan_for_user(db, user_id, payload)
