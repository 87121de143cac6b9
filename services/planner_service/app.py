"""
FastAPI service for study planning operations.

This service exposes the pure planning engine in study_planner as REST API
endpoints. Records arrive already fetched in the request body; every call is a
fast, synchronous computation with no storage behind it.
"""
from __future__ import annotations

import logging
import os
import typing as t
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from services.shared.models import (
    CourseTime as PydanticCourseTime,
    GoalEngineResult as PydanticGoalEngineResult,
    GradeProjection as PydanticGradeProjection,
    HeatmapDay as PydanticHeatmapDay,
    Overview as PydanticOverview,
    PlanItem as PydanticPlanItem,
    ReviewItem as PydanticReviewItem,
    CourseTimeRequest,
    GoalEngineRequest,
    GradeProjectionRequest,
    HeatmapRequest,
    ReviewQueueRequest,
    Snapshot,
    TodayPlanRequest,
)
from study_planner.activity import course_time_distribution, study_heatmap
from study_planner.goals import build_goal_engine
from study_planner.grades import project_grades
from study_planner.models import (CourseLite, GradeCategory, RoadmapEntry, StudySessionLite, UpcomingEvent)
from study_planner.overview import build_overview
from study_planner.review_queue import generate_review_queue
from study_planner.temporal import resolve_now
from study_planner.today_plan import generate_today_plan

logger = logging.getLogger(__name__)

PLANNER_SERVICE_HOST = os.getenv("PLANNER_SERVICE_HOST", "0.0.0.0")
PLANNER_SERVICE_PORT = int(os.getenv("PLANNER_SERVICE_PORT", "8004"))
PLANNER_LOG_LEVEL = os.getenv("PLANNER_LOG_LEVEL", "INFO")

ModelT = t.TypeVar("ModelT", bound=BaseModel)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup."""
    logging.basicConfig(
        level=PLANNER_LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Planner service starting")
    yield


app = FastAPI(
    title="Study Planner Service",
    description="REST API for today plans, spaced review, goals and grade projections",
    version="1.0.0",
    lifespan=lifespan,
)


def _records(record_type: t.Any, models: t.Iterable[BaseModel]) -> list[t.Any]:
    """Convert request models into engine dataclasses via their row constructors."""
    return [record_type.from_row(model.model_dump()) for model in models]


def _responses(model_type: type[ModelT], records: t.Iterable[t.Any]) -> list[ModelT]:
    """Convert engine dataclasses into response models."""
    return [model_type.model_validate(asdict(record)) for record in records]


def _now(value: t.Optional[str]) -> datetime:
    try:
        return resolve_now(value)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "planner-service"}


@app.post("/planning/today", response_model=list[PydanticPlanItem])
async def today_plan(request: TodayPlanRequest) -> list[PydanticPlanItem]:
    """Rank today's actions from events, weak grade categories and roadmap tasks."""
    now = _now(request.now)
    try:
        items = generate_today_plan(
            _records(UpcomingEvent, request.events),
            _records(GradeCategory, request.categories),
            _records(RoadmapEntry, request.roadmap),
            _records(CourseLite, request.courses),
            now=now,
        )
        return _responses(PydanticPlanItem, items)
    except Exception as e:
        logger.exception("Failed to generate today plan")
        raise HTTPException(status_code=500, detail=f"Error generating today plan: {str(e)}")


@app.post("/planning/reviews", response_model=list[PydanticReviewItem])
async def review_queue(request: ReviewQueueRequest) -> list[PydanticReviewItem]:
    """Build the spaced-review queue from sessions and past syllabus events."""
    now = _now(request.now)
    try:
        items = generate_review_queue(
            _records(StudySessionLite, request.sessions),
            _records(UpcomingEvent, request.past_syllabus_events),
            _records(CourseLite, request.courses),
            now=now,
        )
        return _responses(PydanticReviewItem, items)
    except Exception as e:
        logger.exception("Failed to build review queue")
        raise HTTPException(status_code=500, detail=f"Error building review queue: {str(e)}")


@app.post("/planning/goals", response_model=PydanticGoalEngineResult)
async def goals(request: GoalEngineRequest) -> PydanticGoalEngineResult:
    """Weekly goal progress, streak and recovery availability."""
    now = _now(request.now)
    try:
        result = build_goal_engine(_records(StudySessionLite, request.sessions), now=now)
        return PydanticGoalEngineResult.model_validate(asdict(result))
    except Exception as e:
        logger.exception("Failed to build goal engine")
        raise HTTPException(status_code=500, detail=f"Error building goals: {str(e)}")


@app.post("/grades/projection", response_model=PydanticGradeProjection)
async def grade_projection(request: GradeProjectionRequest) -> PydanticGradeProjection:
    """Current weighted grade plus a what-if grade for the exam-like category."""
    try:
        projection = project_grades(
            _records(GradeCategory, request.categories),
            request.hypothetical_score,
            request.scores,
        )
        return PydanticGradeProjection.model_validate(asdict(projection))
    except Exception as e:
        logger.exception("Failed to project grades")
        raise HTTPException(status_code=500, detail=f"Error projecting grades: {str(e)}")


@app.post("/activity/heatmap", response_model=list[PydanticHeatmapDay])
async def heatmap(request: HeatmapRequest) -> list[PydanticHeatmapDay]:
    """Minutes studied per day over the trailing window."""
    now = _now(request.now)
    try:
        days = study_heatmap(_records(StudySessionLite, request.sessions), now=now, days=request.days)
        return _responses(PydanticHeatmapDay, days)
    except Exception as e:
        logger.exception("Failed to build heatmap")
        raise HTTPException(status_code=500, detail=f"Error building heatmap: {str(e)}")


@app.post("/activity/courses", response_model=list[PydanticCourseTime])
async def course_time(request: CourseTimeRequest) -> list[PydanticCourseTime]:
    """Hours studied per course."""
    try:
        rows = course_time_distribution(
            _records(StudySessionLite, request.sessions),
            _records(CourseLite, request.courses),
        )
        return _responses(PydanticCourseTime, rows)
    except Exception as e:
        logger.exception("Failed to compute course time")
        raise HTTPException(status_code=500, detail=f"Error computing course time: {str(e)}")


@app.post("/planning/overview", response_model=PydanticOverview)
async def overview(request: Snapshot) -> PydanticOverview:
    """Run every planner over one snapshot with a single reference time."""
    now = _now(request.now)
    try:
        result = build_overview(
            _records(UpcomingEvent, request.events),
            _records(GradeCategory, request.categories),
            _records(RoadmapEntry, request.roadmap),
            _records(StudySessionLite, request.sessions),
            _records(CourseLite, request.courses),
            now=now,
        )
        return PydanticOverview.model_validate(asdict(result))
    except Exception as e:
        logger.exception("Failed to build overview")
        raise HTTPException(status_code=500, detail=f"Error building overview: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=PLANNER_SERVICE_HOST, port=PLANNER_SERVICE_PORT)
