## Roadmap progress and daily completion streak
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, List, Mapping, Optional, Tuple

from app.agents.schemas import TASK_CATEGORIES, Roadmap


class UnknownTaskError(KeyError):
    pass


@dataclass(frozen=True)
class ProgressSummary:
    total: int = 0
    completed: int = 0
    percentage: float = 0.0
    completion_dates: Tuple[date, ...] = ()  # most recent first
    streak: int = 0

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "completed": self.completed,
            "percentage": self.percentage,
            "completion_dates": [d.isoformat() for d in self.completion_dates],
            "streak": self.streak,
        }


def task_key(month_position: int, category: str, item_position: int) -> str:
    return f"{month_position}-{category}-{item_position}"


def task_keys(roadmap: Optional[Roadmap]) -> List[str]:
    if roadmap is None:
        return []
    keys = []
    for m_pos, month in enumerate(roadmap.months):
        for category in TASK_CATEGORIES:
            for i_pos, _ in enumerate(month.items(category)):
                keys.append(task_key(m_pos, category, i_pos))
    return keys


def _completion_day(timestamp: str) -> Optional[date]:
    try:
        return date.fromisoformat(timestamp.split("T", 1)[0])
    except (AttributeError, ValueError):
        return None


def _streak(dates_desc: List[date], today: date) -> int:
    if not dates_desc:
        return 0

    most_recent = dates_desc[0]
    if most_recent not in (today, today - timedelta(days=1)):
        return 0

    streak = 1
    cursor = most_recent
    for d in dates_desc[1:]:
        if d == cursor - timedelta(days=1):
            streak += 1
            cursor = d
        elif d != cursor:
            break
    return streak


def summarize_progress(
    roadmap: Optional[Roadmap],
    completed_items: Mapping[str, str],
    today: date,
) -> ProgressSummary:
    """
    Aggregate progress for a roadmap and its completion record.

    `completed` is the raw size of the record: keys are not checked against
    the roadmap and the count is not clamped to `total`. `today` is the
    evaluation date; the clock is never read here.
    """
    if roadmap is None or not roadmap.months:
        return ProgressSummary()

    total = sum(
        len(month.items(category))
        for month in roadmap.months
        for category in TASK_CATEGORIES
    )
    completed = len(completed_items)
    percentage = (completed / total) * 100 if total > 0 else 0.0

    days = {_completion_day(ts) for ts in completed_items.values()}
    days.discard(None)
    dates_desc = sorted(days, reverse=True)

    return ProgressSummary(
        total=total,
        completed=completed,
        percentage=percentage,
        completion_dates=tuple(dates_desc),
        streak=_streak(dates_desc, today),
    )


def toggle_completion(
    roadmap: Optional[Roadmap],
    completed_items: Mapping[str, str],
    key: str,
    now: datetime,
) -> Dict[str, str]:
    """Return a new completion record with `key` marked done, or unmarked if it already was."""
    if key not in task_keys(roadmap):
        raise UnknownTaskError(key)

    updated = dict(completed_items)
    if key in updated:
        del updated[key]
    else:
        updated[key] = now.isoformat()
    return updated
