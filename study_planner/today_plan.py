# -*- coding: utf-8 -*-
"""Today-plan generator.

Three independent candidate streams are ranked together:

- high-stakes events due within the next two weeks,
- weak grade categories worth recovering,
- the earliest roadmap tasks.
"""
from __future__ import annotations

import logging
import typing as t
from datetime import datetime

from study_planner.models import CourseLite, GradeCategory, PlanItem, RoadmapEntry, UpcomingEvent
from study_planner.temporal import days_until

logger = logging.getLogger(__name__)

MAX_PLAN_ITEMS = 8
EVENT_HORIZON_DAYS = 14
WEAK_SCORE_THRESHOLD = 78
MAX_GRADE_ITEMS = 4
TASKS_PER_ROADMAP_ENTRY = 2
MAX_ROADMAP_ITEMS = 6
ROADMAP_PRIORITY = 25
UNKNOWN_COURSE = "Course"


def course_names(courses: t.Iterable[CourseLite]) -> dict[str, str]:
    """Build the course id -> display name lookup."""
    return {course.id: course.name for course in courses}


def format_number(value: float) -> str:
    """Render 72.0 as "72" and 72.5 as "72.5"."""
    return f"{value:g}"


def _event_items(events: t.Iterable[UpcomingEvent], names: dict[str, str], now: datetime) -> list[PlanItem]:
    items: list[PlanItem] = []
    for event in events:
        if not event.is_high_stakes:
            continue
        days = days_until(event.date, now)
        if not 0 <= days <= EVENT_HORIZON_DAYS:
            continue
        plural = "" if days == 1 else "s"
        items.append(PlanItem(
            id=f"event-{event.id}",
            title=f"Prep: {event.title}",
            detail=f"{names.get(event.course_id, UNKNOWN_COURSE)} • due in {days} day{plural}",
            priority=100 - days,
            type="event",
        ))
    return items


def _grade_items(categories: t.Iterable[GradeCategory], names: dict[str, str]) -> list[PlanItem]:
    weak = [
        c for c in categories
        if c.current_score is not None and c.current_score < WEAK_SCORE_THRESHOLD
    ]
    weak.sort(key=lambda c: c.weight or 0, reverse=True)

    return [
        PlanItem(
            id=f"grade-{category.id}",
            title=f"Recover {category.category}",
            detail=(
                f"{names.get(category.course_id, UNKNOWN_COURSE)} • "
                f"{format_number(category.current_score)}% ({format_number(category.weight or 0)}% of grade)"
            ),
            priority=(category.weight or 0) * 2,
            type="grade",
        )
        for category in weak[:MAX_GRADE_ITEMS]
    ]


def _roadmap_items(roadmap: t.Iterable[RoadmapEntry], names: dict[str, str]) -> list[PlanItem]:
    items: list[PlanItem] = []
    for entry in sorted(roadmap, key=lambda e: e.week_number):
        course = names.get(entry.course_id, UNKNOWN_COURSE)
        for idx, task in enumerate(entry.tasks[:TASKS_PER_ROADMAP_ENTRY]):
            items.append(PlanItem(
                id=f"roadmap-{entry.id}-{idx}",
                title=task,
                detail=f"{course} • Week {entry.week_number}: {entry.focus_area}",
                priority=ROADMAP_PRIORITY,
                type="roadmap",
            ))
    return items[:MAX_ROADMAP_ITEMS]


def generate_today_plan(
        events: t.Sequence[UpcomingEvent],
        categories: t.Sequence[GradeCategory],
        roadmap: t.Sequence[RoadmapEntry],
        courses: t.Sequence[CourseLite],
        *,
        now: datetime,
) -> list[PlanItem]:
    """Merge the candidate streams into one ranked plan.

    :param events: Syllabus events; only high-stakes ones due in 0-14 days count.
    :param categories: Grading categories; scored ones below 78 count.
    :param roadmap: Roadmap weeks; the earliest weeks contribute tasks.
    :param courses: Courses used for display names.
    :param now: Reference time for day arithmetic.
    :return: Up to 8 plan items, highest priority first. Ties keep stream order.
    """
    names = course_names(courses)
    event_items = _event_items(events, names, now)
    grade_items = _grade_items(categories, names)
    roadmap_items = _roadmap_items(roadmap, names)
    logger.debug(
        "Plan candidates: %d event, %d grade, %d roadmap",
        len(event_items), len(grade_items), len(roadmap_items),
    )

    merged = event_items + grade_items + roadmap_items
    merged.sort(key=lambda item: item.priority, reverse=True)
    return merged[:MAX_PLAN_ITEMS]
