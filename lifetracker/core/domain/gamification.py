"""
Gamification Domain Rules - pure functions for streaks.

AICODE-NOTE: Pure functions WITHOUT store access and WITHOUT side effects
beyond the object passed in. Called from use cases.
"""

from datetime import date, timedelta

from lifetracker.core.schemas import StreakData


def calculate_streak(
    last_activity: date | None, current: int, today: date
) -> tuple[int, bool]:
    """
    Calculate the global streak for an activity on `today`.

    Returns:
    - new streak (int)
    - whether the streak was advanced (bool)

    Logic:
    - Activity already counted today (or a later day) → streak unchanged
    - Activity yesterday → streak += 1
    - Missed a day or first activity → streak = 1
    """
    if last_activity is not None and last_activity >= today:
        return current, False

    if last_activity and (today - last_activity).days == 1:
        return current + 1, True

    return 1, True


def update_global_streak(streak_data: StreakData, today: date) -> bool:
    """
    Advance the cross-quest streak at most once per calendar day.

    Returns True if streak_data was changed.
    """
    new_streak, advanced = calculate_streak(
        streak_data.last_completed_date, streak_data.current, today
    )
    if not advanced:
        return False

    streak_data.current = new_streak
    streak_data.longest = max(streak_data.longest, new_streak)
    streak_data.last_completed_date = today
    return True


def run_length(history: set[date], end: date | None) -> int:
    """Number of consecutive days in `history` ending at `end`."""
    count = 0
    day = end
    while day is not None and day in history:
        count += 1
        day -= timedelta(days=1)
    return count


def streak_after_completion(
    streak: int, last_completed: date | None, history: set[date], day: date
) -> int:
    """
    Per-quest streak after completing `day` (history excludes `day`).

    - First completion → 1
    - Day after the last completion → streak + 1
    - Later day with a gap → 1
    - Same day as the last completion → unchanged
    - Back-filled day that touches the current run → run grows, joined with
      any completed days right before it
    """
    if last_completed is None:
        return 1

    if day > last_completed:
        return streak + 1 if (day - last_completed).days == 1 else 1

    if day == last_completed:
        return max(streak, 1)

    run_start = last_completed - timedelta(days=max(streak, 1) - 1)
    if day == run_start - timedelta(days=1):
        return max(streak, 1) + 1 + run_length(history, day - timedelta(days=1))
    return streak


def streak_after_undo(
    streak: int, last_completed: date | None, history: set[date], day: date
) -> int:
    """
    Per-quest streak after removing `day` (history already excludes `day`).

    Recounts from what is left without dropping pre-history (legacy) streak
    counts: undoing the newest day shortens the run by one, undoing a day
    inside the run cuts it at that day.
    """
    if last_completed is None:
        return 0

    if day == last_completed:
        new_latest = max(history) if history else None
        if new_latest is None:
            return 0
        if (day - new_latest).days == 1:
            return max(streak - 1, run_length(history, new_latest))
        return run_length(history, new_latest)

    run_start = last_completed - timedelta(days=max(streak, 1) - 1)
    if run_start <= day < last_completed:
        return (last_completed - day).days
    return streak
