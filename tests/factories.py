"""Record builders and a fixed reference time for planner tests."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from study_planner.models import CourseLite, GradeCategory, RoadmapEntry, StudySessionLite, UpcomingEvent

# Wednesday; the week started Monday 2026-10-19.
NOW = datetime(2026, 10, 21, 12, 0, tzinfo=timezone.utc)

COURSES = [CourseLite(id="bio", name="Biology"), CourseLite(id="chem", name="Chemistry")]


def ago(**kwargs) -> str:
    """ISO timestamp the given timedelta before NOW."""
    return (NOW - timedelta(**kwargs)).isoformat()


def ahead(**kwargs) -> str:
    """ISO timestamp the given timedelta after NOW."""
    return (NOW + timedelta(**kwargs)).isoformat()


def session(session_id: str, completed_at: str, minutes: float = 25, mode: str = "pomodoro",
            message: str | None = None, course_id: str | None = None) -> StudySessionLite:
    return StudySessionLite(
        id=session_id,
        completed_at=completed_at,
        duration_minutes=minutes,
        mode=mode,
        commit_message=message,
        course_id=course_id,
    )


def event(event_id: str, date: str | None, high_stakes: bool | None = True, course_id: str = "bio",
          title: str | None = None) -> UpcomingEvent:
    return UpcomingEvent(
        id=event_id,
        title=title or f"Event {event_id}",
        course_id=course_id,
        date=date,
        is_high_stakes=high_stakes,
    )


def category(category_id: str, weight: float, score: float | None, name: str | None = None,
             course_id: str = "bio") -> GradeCategory:
    return GradeCategory(
        id=category_id,
        category=name or f"Category {category_id}",
        weight=weight,
        course_id=course_id,
        current_score=score,
    )


def roadmap(entry_id: str, week: int, tasks: list, course_id: str = "bio", focus: str = "Cells") -> RoadmapEntry:
    return RoadmapEntry.from_row({
        "id": entry_id,
        "course_id": course_id,
        "week_number": week,
        "tasks": tasks,
        "focus_area": focus,
    })
