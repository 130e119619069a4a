from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roadmap.api.routes import router as api_router
from roadmap.core.config import settings
from roadmap.core.database import engine
from roadmap.core.logging_config import configure_logging
from roadmap.models.base import Base
import roadmap.models  # noqa: F401

configure_logging(settings.log_level)

app = FastAPI(title="Roadmap Planner API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)


@app.get("/health")
def health_check():
    return {"status": "ok"}
