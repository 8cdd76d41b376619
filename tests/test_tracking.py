from datetime import date

import pytest

from tracking import (
    COMPLETED_STEPS,
    TRACKING_STEP_LABELS,
    apply_status,
    bengali_date,
    initial_tracking_steps,
)

TODAY = date(2026, 10, 19)


def test_bengali_date_uses_bengali_digits():
    assert bengali_date(TODAY) == "১৯/১০/২০২৬"
    assert bengali_date(date(2025, 1, 5)) == "৫/১/২০২৫"


def test_initial_steps():
    steps = initial_tracking_steps(TODAY)
    assert [s["step"] for s in steps] == TRACKING_STEP_LABELS
    assert steps[0]["completed"] is True
    assert steps[0]["date"] == "১৯/১০/২০২৬"
    assert all(not s["completed"] and s["date"] is None for s in steps[1:])


def test_shipped_completes_first_four():
    steps = apply_status(initial_tracking_steps(TODAY), "shipped", TODAY)
    assert [s["completed"] for s in steps] == [True, True, True, True, False]
    assert steps[4]["date"] is None


def test_delivered_completes_all():
    steps = apply_status(initial_tracking_steps(TODAY), "delivered", TODAY)
    assert all(s["completed"] for s in steps)
    assert len(steps) == 5


def test_cancelled_only_touches_first_step():
    received = initial_tracking_steps(date(2026, 10, 1))
    steps = apply_status(received, "cancelled", TODAY)
    assert [s["completed"] for s in steps] == [True, False, False, False, False]
    assert steps[0]["date"] == "১/১০/২০২৬"


def test_cancelled_and_pending_keep_earlier_dates():
    shipped = apply_status(initial_tracking_steps(date(2026, 10, 1)), "shipped", date(2026, 10, 5))
    for status in ("cancelled", "pending"):
        assert apply_status(shipped, status, TODAY) == shipped


def test_confirmed_restamps_its_steps():
    steps = apply_status(initial_tracking_steps(date(2026, 10, 1)), "confirmed", TODAY)
    assert [s["date"] for s in steps[:2]] == ["১৯/১০/২০২৬", "১৯/১০/২০২৬"]


def test_moving_backwards_never_unmarks():
    delivered = apply_status(initial_tracking_steps(TODAY), "delivered", TODAY)
    pending = apply_status(delivered, "pending", TODAY)
    assert all(s["completed"] for s in pending)


def test_input_steps_are_not_mutated():
    steps = initial_tracking_steps(TODAY)
    apply_status(steps, "processing", TODAY)
    assert steps[1]["completed"] is False


@pytest.mark.parametrize("status,count", sorted(COMPLETED_STEPS.items()))
def test_each_status_completes_its_prefix(status, count):
    blank = [{"step": label, "completed": False, "date": None} for label in TRACKING_STEP_LABELS]
    steps = apply_status(blank, status, TODAY)
    assert [s["completed"] for s in steps] == [i < count for i in range(5)]


def test_unknown_status_rejected():
    with pytest.raises(ValueError):
        apply_status(initial_tracking_steps(TODAY), "lost", TODAY)
