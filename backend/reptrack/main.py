# reptrack/main.py
import os
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from reptrack.errors import TrackerError
from reptrack.routers.sets import router as sets_router
from reptrack.routers.routines import router as routines_router
from reptrack.routers.analytics import router as analytics_router
from reptrack.routers.exercises import router as exercises_router
from reptrack.routers.coach import router as coach_router
from reptrack.routers.profile import router as profile_router
from reptrack.services.catalog import ExerciseCatalog
from reptrack.services.coach import CoachClient
from reptrack.settings import get_settings
from reptrack.db import SessionLocal  # for healthz DB check

log = logging.getLogger("uvicorn")

app = FastAPI(
    title="RepTrack API",
    openapi_tags=[
        {"name": "sets", "description": "Logged sets and exercise history"},
        {"name": "routines", "description": "Weekly day routines and schedule sync"},
        {"name": "analytics", "description": "Muscle split, consistency and streaks"},
        {"name": "exercises", "description": "Custom exercises and catalog search"},
        {"name": "profile", "description": "Body composition profile and measurement history"},
        {"name": "coach", "description": "LLM coaching summary"},
    ],
)

settings = get_settings()
app.state.catalog = ExerciseCatalog.from_settings(settings)
app.state.coach = CoachClient.from_settings(settings)


# CORS (relax for local dev; tighten origins in prod via env)
ALLOW_ORIGINS = os.getenv("ALLOW_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

@app.get("/")
def root():
    return {"ok": True, "name": "RepTrack API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(sets_router)
app.include_router(routines_router)
app.include_router(analytics_router)
app.include_router(exercises_router)
app.include_router(profile_router)
app.include_router(coach_router)
