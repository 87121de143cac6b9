"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models in
study_planner.models, plus the request/response bodies of the planner service.
"""
from __future__ import annotations

import typing as t
from pydantic import BaseModel, Field


PlanItemType = t.Literal["event", "grade", "roadmap"]
ReviewSource = t.Literal["session", "syllabus"]


# Input records
class CourseLite(BaseModel):
    """A course, used only for display names."""
    id: str
    name: str = ""


class UpcomingEvent(BaseModel):
    """A graded syllabus deadline."""
    id: str
    title: str = ""
    course_id: str = ""
    date: t.Optional[str] = None            # ISO date/datetime; dirty values are tolerated
    is_high_stakes: t.Optional[bool] = None


class GradeCategory(BaseModel):
    """One grading bucket of a course."""
    id: str
    category: str = ""
    weight: float = 0.0
    course_id: str = ""
    current_score: t.Optional[float] = None


class RoadmapEntry(BaseModel):
    """
    One roadmap week as stored. ``tasks`` stays loosely typed here:
    strings, {"task": ...} or {"title": ...} objects.
    """
    id: str
    course_id: str = ""
    week_number: int = 0
    tasks: t.Any = Field(default_factory=list)
    focus_area: str = ""


class StudySessionLite(BaseModel):
    """A finished focus block."""
    id: str
    completed_at: str = ""
    duration_minutes: float = 0.0
    mode: str = ""
    commit_message: t.Optional[str] = None
    syllabus_item_id: t.Optional[str] = None
    course_id: t.Optional[str] = None


# Derived records
class PlanItem(BaseModel):
    id: str
    title: str
    detail: str
    priority: float
    type: PlanItemType


class ReviewItem(BaseModel):
    id: str
    title: str
    source: ReviewSource
    due_at: str
    stage_label: str
    is_due_now: bool


class Goal(BaseModel):
    label: str
    current: float
    target: float


class GoalEngineResult(BaseModel):
    goals: list[Goal] = Field(default_factory=list)
    streak_days: int = 0
    recovery_available: bool = False


class GradeLabel(BaseModel):
    letter: str
    tone: str


class GradeTarget(BaseModel):
    label: str
    needed: float
    met: bool
    gap: float


class GradeProjection(BaseModel):
    current: float
    current_label: GradeLabel
    simulated: float
    simulated_label: GradeLabel
    hypothetical_score: float
    exam_category: t.Optional[str] = None
    targets: list[GradeTarget] = Field(default_factory=list)


class HeatmapDay(BaseModel):
    day: str
    minutes: float
    intensity: int


class CourseTime(BaseModel):
    course_id: str
    name: str
    hours: float


# Request/Response Models for API endpoints
class TodayPlanRequest(BaseModel):
    """Request model for generating today's plan."""
    events: list[UpcomingEvent] = Field(default_factory=list)
    categories: list[GradeCategory] = Field(default_factory=list)
    roadmap: list[RoadmapEntry] = Field(default_factory=list)
    courses: list[CourseLite] = Field(default_factory=list)
    now: t.Optional[str] = None


class ReviewQueueRequest(BaseModel):
    """Request model for building the review queue."""
    sessions: list[StudySessionLite] = Field(default_factory=list)
    past_syllabus_events: list[UpcomingEvent] = Field(default_factory=list)
    courses: list[CourseLite] = Field(default_factory=list)
    now: t.Optional[str] = None


class GoalEngineRequest(BaseModel):
    """Request model for weekly goals and streaks."""
    sessions: list[StudySessionLite] = Field(default_factory=list)
    now: t.Optional[str] = None


class GradeProjectionRequest(BaseModel):
    """Request model for a course grade projection."""
    categories: list[GradeCategory] = Field(default_factory=list)
    hypothetical_score: float = 85.0
    scores: t.Optional[dict[str, float]] = None


class HeatmapRequest(BaseModel):
    """Request model for the study heatmap."""
    sessions: list[StudySessionLite] = Field(default_factory=list)
    days: int = Field(default=112, ge=0, le=366)
    now: t.Optional[str] = None


class CourseTimeRequest(BaseModel):
    """Request model for time spent per course."""
    sessions: list[StudySessionLite] = Field(default_factory=list)
    courses: list[CourseLite] = Field(default_factory=list)


class Snapshot(BaseModel):
    """
    All of a student's records as read from the store.
    Used by the overview endpoint and as the CLI snapshot file format.
    """
    courses: list[CourseLite] = Field(default_factory=list)
    events: list[UpcomingEvent] = Field(default_factory=list)
    categories: list[GradeCategory] = Field(default_factory=list)
    roadmap: list[RoadmapEntry] = Field(default_factory=list)
    sessions: list[StudySessionLite] = Field(default_factory=list)
    now: t.Optional[str] = None


class Overview(BaseModel):
    """Response model for the combined dashboard."""
    now: str
    today_plan: list[PlanItem] = Field(default_factory=list)
    review_queue: list[ReviewItem] = Field(default_factory=list)
    goals: GoalEngineResult = Field(default_factory=GoalEngineResult)
    heatmap: list[HeatmapDay] = Field(default_factory=list)
    course_time: list[CourseTime] = Field(default_factory=list)
