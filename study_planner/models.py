# -*- coding: utf-8 -*-
"""
Data models for the study planning engine.

Input records are immutable snapshots of rows read by an external store; the
derived records are what the engine hands back to the presentation layer.
"""
from __future__ import annotations

import typing as t
from collections.abc import Mapping
from dataclasses import dataclass, field


PlanItemType = t.Literal["event", "grade", "roadmap"]
ReviewSource = t.Literal["session", "syllabus"]


def normalize_tasks(raw: t.Any) -> list[str]:
    """Flatten a loosely typed roadmap ``tasks`` payload into plain strings.

    Items may be strings or objects carrying a ``task`` or ``title`` key.
    Anything else is dropped, as are empty strings.
    """
    if not isinstance(raw, (list, tuple)):
        return []

    tasks: list[str] = []
    for item in raw:
        if isinstance(item, str):
            text = item
        elif isinstance(item, Mapping) and "task" in item:
            text = str(item["task"])
        elif isinstance(item, Mapping) and "title" in item:
            text = str(item["title"])
        else:
            text = ""
        if text:
            tasks.append(text)
    return tasks


def _optional_str(value: t.Any) -> t.Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class CourseLite:
    """A course, used only to resolve display names."""
    id: str
    name: str

    @classmethod
    def from_row(cls, row: t.Mapping[str, t.Any]) -> CourseLite:
        return cls(id=str(row["id"]), name=row.get("name", "") or "")


@dataclass(frozen=True)
class UpcomingEvent:
    """A graded syllabus deadline."""
    id: str
    title: str
    course_id: str
    date: t.Optional[str] = None  # ISO date or datetime, may be dirty
    is_high_stakes: t.Optional[bool] = None

    @classmethod
    def from_row(cls, row: t.Mapping[str, t.Any]) -> UpcomingEvent:
        return cls(
            id=str(row["id"]),
            title=row.get("title", "") or "",
            course_id=str(row.get("course_id", "") or ""),
            date=row.get("date"),
            is_high_stakes=row.get("is_high_stakes"),
        )


@dataclass(frozen=True)
class GradeCategory:
    """One grading bucket of a course, e.g. "Midterm"."""
    id: str
    category: str
    weight: float
    course_id: str
    current_score: t.Optional[float] = None  # None until a score is entered

    @classmethod
    def from_row(cls, row: t.Mapping[str, t.Any]) -> GradeCategory:
        score = row.get("current_score")
        return cls(
            id=str(row["id"]),
            category=row.get("category", "") or "",
            weight=float(row.get("weight", 0.0) or 0.0),
            course_id=str(row.get("course_id", "") or ""),
            current_score=None if score is None else float(score),
        )


@dataclass(frozen=True)
class RoadmapEntry:
    """One week of a course study roadmap with its tasks already normalized."""
    id: str
    course_id: str
    week_number: int
    tasks: list[str] = field(default_factory=list)
    focus_area: str = ""

    @classmethod
    def from_row(cls, row: t.Mapping[str, t.Any]) -> RoadmapEntry:
        return cls(
            id=str(row["id"]),
            course_id=str(row.get("course_id", "") or ""),
            week_number=int(row.get("week_number", 0) or 0),
            tasks=normalize_tasks(row.get("tasks")),
            focus_area=row.get("focus_area", "") or "",
        )


@dataclass(frozen=True)
class StudySessionLite:
    """A finished focus block."""
    id: str
    completed_at: str  # ISO timestamp
    duration_minutes: float
    mode: str
    commit_message: t.Optional[str] = None
    syllabus_item_id: t.Optional[str] = None
    course_id: t.Optional[str] = None

    @classmethod
    def from_row(cls, row: t.Mapping[str, t.Any]) -> StudySessionLite:
        return cls(
            id=str(row["id"]),
            completed_at=row.get("completed_at", "") or "",
            duration_minutes=row.get("duration_minutes", 0) or 0,
            mode=row.get("mode", "") or "",
            commit_message=row.get("commit_message"),
            syllabus_item_id=_optional_str(row.get("syllabus_item_id")),
            course_id=_optional_str(row.get("course_id")),
        )


@dataclass(frozen=True)
class PlanItem:
    """A ranked action for today's plan."""
    id: str
    title: str
    detail: str
    priority: float
    type: PlanItemType


@dataclass(frozen=True)
class ReviewItem:
    """A spaced-review prompt."""
    id: str
    title: str
    source: ReviewSource
    due_at: str  # ISO timestamp
    stage_label: str
    is_due_now: bool


@dataclass(frozen=True)
class Goal:
    """Weekly progress toward a fixed target."""
    label: str
    current: float
    target: float


@dataclass(frozen=True)
class GoalEngineResult:
    """Weekly goals plus streak state."""
    goals: list[Goal] = field(default_factory=list)
    streak_days: int = 0
    recovery_available: bool = False
