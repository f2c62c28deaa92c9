import datetime as dt
from pydantic import BaseModel, Field

class ProgressionTip(BaseModel):
    exercise: str
    current_level: str = ""
    recommendation: str = ""
    reasoning: str = ""

class WeakPoint(BaseModel):
    area: str
    explanation: str = ""
    fix: str = ""

class RoutineSuggestion(BaseModel):
    suggestion: str
    reason: str = ""

class CoachAdvice(BaseModel):
    """Structured advice the model is asked to return."""
    summary: str = ""
    progression_tips: list[ProgressionTip] = []
    weak_points: list[WeakPoint] = []
    routine_suggestions: list[RoutineSuggestion] = []
    recovery_tips: list[str] = []
    body_composition_advice: str = ""

class CoachRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=120)

class CoachRecommendationRead(BaseModel):
    cached: bool = True
    recommendations: CoachAdvice | None = None
    generated_at: dt.datetime | None = None
    data_snapshot: dict | None = None

    model_config = {"from_attributes": True}
