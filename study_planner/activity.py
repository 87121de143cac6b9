# -*- coding: utf-8 -*-
"""Study activity aggregates: a daily heatmap and time spent per course."""
from __future__ import annotations

import typing as t
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from study_planner.models import CourseLite, StudySessionLite
from study_planner.temporal import ensure_aware, local_day, parse_date_or_null

HEATMAP_DAYS = 112  # ~16 weeks
MAX_COURSE_NAME = 12


@dataclass(frozen=True)
class HeatmapDay:
    day: str  # YYYY-MM-DD
    minutes: float
    intensity: int  # 0-4


@dataclass(frozen=True)
class CourseTime:
    course_id: str
    name: str
    hours: float


def intensity_for(minutes: float) -> int:
    if not minutes:
        return 0
    if minutes < 30:
        return 1
    if minutes < 60:
        return 2
    if minutes < 120:
        return 3
    return 4


def study_heatmap(
        sessions: t.Sequence[StudySessionLite],
        *,
        now: datetime,
        days: int = HEATMAP_DAYS,
) -> list[HeatmapDay]:
    """Minutes studied per local day, oldest first, ending today.

    The window covers ``days`` days before today plus today itself.
    """
    now = ensure_aware(now)
    today = now.date()
    first = today - timedelta(days=days)

    minutes_by_day: dict[date, float] = defaultdict(float)
    for session in sessions:
        moment = parse_date_or_null(session.completed_at, now.tzinfo)
        if moment is None:
            continue
        minutes_by_day[local_day(moment, now)] += session.duration_minutes

    heatmap = []
    for offset in range(days + 1):
        day = first + timedelta(days=offset)
        minutes = minutes_by_day.get(day, 0)
        heatmap.append(HeatmapDay(day=day.isoformat(), minutes=minutes, intensity=intensity_for(minutes)))
    return heatmap


def course_time_distribution(
        sessions: t.Sequence[StudySessionLite],
        courses: t.Sequence[CourseLite],
) -> list[CourseTime]:
    """Hours studied per course, largest first. Courses without time are omitted."""
    minutes_by_course: dict[str, float] = defaultdict(float)
    for session in sessions:
        if session.course_id:
            minutes_by_course[session.course_id] += session.duration_minutes

    rows = []
    for course in courses:
        hours = round(minutes_by_course.get(course.id, 0) / 60, 1)
        if hours <= 0:
            continue
        name = course.name
        if len(name) > MAX_COURSE_NAME:
            name = name[:MAX_COURSE_NAME] + "…"
        rows.append(CourseTime(course_id=course.id, name=name, hours=hours))

    rows.sort(key=lambda row: row.hours, reverse=True)
    return rows
