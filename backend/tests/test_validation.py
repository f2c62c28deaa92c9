import pytest
from reptrack.errors import ValidationError
from reptrack.validation import (
    coerce_reps, coerce_rpe, coerce_weight, exercise_key, normalize_day, require_text,
)

def test_weight_coercion():
    assert coerce_weight("62.5") == 62.5
    assert coerce_weight(" 60 ") == 60.0
    assert coerce_weight(80) == 80.0
    for bad in ("abc", "", None, -1, "nan", True):
        with pytest.raises(ValidationError):
            coerce_weight(bad)

def test_reps_coercion():
    assert coerce_reps("8") == 8
    assert coerce_reps(5.0) == 5
    assert coerce_reps(0) == 0
    for bad in ("eight", "8.5", 8.5, None, -2, False):
        with pytest.raises(ValidationError):
            coerce_reps(bad)

def test_rpe_optional_and_bounded():
    assert coerce_rpe(None) is None
    assert coerce_rpe("") is None
    assert coerce_rpe(0) is None
    assert coerce_rpe("8") == 8
    with pytest.raises(ValidationError):
        coerce_rpe(11)
    with pytest.raises(ValidationError):
        coerce_rpe("hard")

@pytest.mark.parametrize("blank", ["0", " 0 ", "  ", 0.0])
def test_rpe_zero_in_any_form_is_not_given(blank):
    assert coerce_rpe(blank) is None

def test_rpe_rejects_fractions_and_bools():
    assert coerce_rpe(7.0) == 7
    assert coerce_rpe(" 9 ") == 9
    for bad in (7.9, "7.5", True):
        with pytest.raises(ValidationError):
            coerce_rpe(bad)

def test_days_are_normalised():
    assert normalize_day(" Monday ") == "monday"
    with pytest.raises(ValidationError):
        normalize_day("funday")
    with pytest.raises(ValidationError):
        normalize_day("")

def test_identity_helpers():
    assert exercise_key("  Bench Press ") == "bench press"
    assert require_text(" u1 ", "user_id") == "u1"
    with pytest.raises(ValidationError, match="user_id is required"):
        require_text("   ", "user_id")
