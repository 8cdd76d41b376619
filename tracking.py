"""
Order status and the five-stage tracking checklist.

Each status completes a fixed prefix of the checklist. Setting a status only
ever marks steps completed; nothing is un-marked, and any status may follow
any other.
"""
from datetime import date
from typing import Any, Dict, List, Optional

TRACKING_STEP_LABELS = [
    "অর্ডার প্রাপ্ত",
    "পেমেন্ট যাচাই",
    "প্রোডাকশন শুরু",
    "শিপমেন্ট প্রস্তুত",
    "ডেলিভারি সম্পন্ন",
]

# status -> number of leading steps that are completed
COMPLETED_STEPS = {
    "pending": 0,
    "confirmed": 2,
    "processing": 3,
    "shipped": 4,
    "delivered": 5,
    "cancelled": 1,
}

# these never restamp a step that is already completed
FLAG_ONLY_STATUSES = {"pending", "cancelled"}

_BENGALI_DIGITS = str.maketrans("0123456789", "০১২৩৪৫৬৭৮৯")


def bengali_date(day: Optional[date] = None) -> str:
    """Format like a ``bn-BD`` locale date, e.g. ``১৯/১০/২০২৬``."""
    day = day or date.today()
    return f"{day.day}/{day.month}/{day.year}".translate(_BENGALI_DIGITS)


def initial_tracking_steps(today: Optional[date] = None) -> List[Dict[str, Any]]:
    steps = [{"step": label, "completed": False, "date": None} for label in TRACKING_STEP_LABELS]
    steps[0].update(completed=True, date=bengali_date(today))
    return steps


def apply_status(steps: List[Dict[str, Any]], status: str, today: Optional[date] = None) -> List[Dict[str, Any]]:
    if status not in COMPLETED_STEPS:
        raise ValueError(f"Unknown order status: {status}")
    cutoff = COMPLETED_STEPS[status]
    stamp = bengali_date(today)
    updated = []
    for index, step in enumerate(steps):
        step = dict(step)
        if index < cutoff and not (status in FLAG_ONLY_STATUSES and step.get("completed")):
            step.update(completed=True, date=stamp)
        updated.append(step)
    return updated
