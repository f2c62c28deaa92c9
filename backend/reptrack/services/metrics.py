"""
Derived metrics for sets and body measurements.

All functions are pure and never raise. Degenerate set input gives 0;
body measurements that cannot be derived give None.
"""
import math
from typing import Optional


def round_half_up(x: float) -> int:
    # round() is banker's rounding; the metrics want 82.5 -> 83
    return int(math.floor(x + 0.5))


def estimated_one_rep_max(weight: float, reps: int) -> float:
    """
    Epley estimate of the one-rep max, rounded to the nearest whole unit.

    1RM = weight * (1 + reps / 30)

    Returns 0 when weight or reps is not positive.
    """
    if not weight or not reps or weight <= 0 or reps <= 0:
        return 0
    return round_half_up(weight * (1 + reps / 30))


def volume(weight: float, reps: int) -> float:
    """Training volume of one set (weight x reps); 0 if either side is zero or missing."""
    if not weight or not reps:
        return 0
    return weight * reps


def round_tenth(x: float) -> float:
    return round_half_up(x * 10) / 10


def body_mass_index(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[float]:
    """BMI from kilograms and centimetres, one decimal. None when either is missing."""
    if not weight_kg or not height_cm or weight_kg <= 0 or height_cm <= 0:
        return None
    metres = height_cm / 100
    return round_tenth(weight_kg / (metres * metres))


def body_fat_percentage(fat_mass_kg: Optional[float], weight_kg: Optional[float]) -> Optional[float]:
    if not fat_mass_kg or not weight_kg or fat_mass_kg <= 0 or weight_kg <= 0:
        return None
    return round_tenth(fat_mass_kg / weight_kg * 100)
