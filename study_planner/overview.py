# -*- coding: utf-8 -*-
"""One-call dashboard over a full snapshot of a student's records."""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from datetime import datetime

from study_planner.activity import CourseTime, HeatmapDay, course_time_distribution, study_heatmap
from study_planner.goals import build_goal_engine
from study_planner.models import (CourseLite, GoalEngineResult, GradeCategory, PlanItem, ReviewItem, RoadmapEntry,
                                  StudySessionLite, UpcomingEvent)
from study_planner.review_queue import generate_review_queue
from study_planner.temporal import ensure_aware
from study_planner.today_plan import generate_today_plan


@dataclass(frozen=True)
class Overview:
    """Everything the dashboard renders, computed against one ``now``."""
    now: str
    today_plan: list[PlanItem] = field(default_factory=list)
    review_queue: list[ReviewItem] = field(default_factory=list)
    goals: GoalEngineResult = field(default_factory=GoalEngineResult)
    heatmap: list[HeatmapDay] = field(default_factory=list)
    course_time: list[CourseTime] = field(default_factory=list)


def build_overview(
        events: t.Sequence[UpcomingEvent],
        categories: t.Sequence[GradeCategory],
        roadmap: t.Sequence[RoadmapEntry],
        sessions: t.Sequence[StudySessionLite],
        courses: t.Sequence[CourseLite],
        *,
        now: datetime,
) -> Overview:
    """Run every planner over the same snapshot.

    ``events`` serves both as upcoming deadlines and as the past syllabus
    events for review; each planner filters by date itself.
    """
    now = ensure_aware(now)
    return Overview(
        now=now.isoformat(),
        today_plan=generate_today_plan(events, categories, roadmap, courses, now=now),
        review_queue=generate_review_queue(sessions, events, courses, now=now),
        goals=build_goal_engine(sessions, now=now),
        heatmap=study_heatmap(sessions, now=now),
        course_time=course_time_distribution(sessions, courses),
    )
