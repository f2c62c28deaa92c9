# reptrack/deps/providers.py
"""
Per-app collaborators handed to routes through Depends().

The clock, catalog client and coach client live on ``app.state`` so tests
can swap them with ``app.dependency_overrides`` instead of patching globals.
"""
from fastapi import Request

from reptrack.clock import Clock, utcnow
from reptrack.services.catalog import ExerciseCatalog
from reptrack.services.coach import CoachClient

def get_clock() -> Clock:
    return utcnow

def get_catalog(request: Request) -> ExerciseCatalog:
    return request.app.state.catalog

def get_coach(request: Request) -> CoachClient:
    return request.app.state.coach
