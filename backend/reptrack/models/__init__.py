from reptrack.models.workout_set import WorkoutSet
from reptrack.models.day_routine import DayRoutine
from reptrack.models.custom_exercise import CustomExercise
from reptrack.models.coach_recommendation import CoachRecommendation
from reptrack.models.body_profile import BodyProfile, BodyMeasurement

__all__ = ["WorkoutSet", "DayRoutine", "CustomExercise", "CoachRecommendation", "BodyProfile", "BodyMeasurement"]
