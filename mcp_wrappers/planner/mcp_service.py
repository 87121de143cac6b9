"""
MCP wrapper for the planner service.

This module keeps the MCP tool signatures of study_planner/server.py but makes
HTTP calls to the planner REST service. It converts between the engine
dataclasses used by the MCP interface and the Pydantic models used over HTTP.
"""

import logging
import os
import typing as t
from dataclasses import asdict

import httpx
from fastmcp import FastMCP

# Engine dataclass models for MCP interface compatibility
from study_planner.grades import DEFAULT_WHAT_IF_SCORE, GradeLabel, GradeProjection, GradeTarget
from study_planner.models import (CourseLite, Goal, GoalEngineResult, GradeCategory, PlanItem, ReviewItem,
                                  RoadmapEntry, StudySessionLite, UpcomingEvent)
# Pydantic models for HTTP serialization
from services.shared.models import (
    GoalEngineResult as PydanticGoalEngineResult,
    GradeProjection as PydanticGradeProjection,
    PlanItem as PydanticPlanItem,
    ReviewItem as PydanticReviewItem,
    GoalEngineRequest,
    GradeProjectionRequest,
    ReviewQueueRequest,
    RoadmapEntry as RoadmapRow,
    TodayPlanRequest,
)

logger = logging.getLogger(__name__)

mcp = FastMCP("StudyPlannerMCPWrapper")

# Service URL - configurable via environment variable
PLANNER_SERVICE_URL = os.getenv("PLANNER_SERVICE_URL", "http://localhost:8004")

# Planning calls are fast in-memory computations (in seconds)
STANDARD_TIMEOUT = 30.0


def _post(path: str, payload: dict[str, t.Any]) -> t.Any:
    """POST a JSON payload to the planner service and return the decoded body."""
    url = f"{PLANNER_SERVICE_URL}{path}"
    logger.debug("POST %s", url)
    try:
        with httpx.Client(timeout=STANDARD_TIMEOUT) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
        return response.json()

    except httpx.TimeoutException:
        raise RuntimeError(f"Planner service call {path} timed out after {STANDARD_TIMEOUT} seconds")
    except httpx.HTTPStatusError as e:
        raise RuntimeError(f"HTTP error from planner service: {e.response.status_code} {e.response.text}")
    except Exception as e:
        raise RuntimeError(f"Error calling planner service: {str(e)}")


def _dumps(records: t.Iterable[t.Any]) -> list[dict[str, t.Any]]:
    return [asdict(record) for record in records]


def _generate_today_plan(
    events: list[UpcomingEvent],
    categories: list[GradeCategory],
    roadmap: list[RoadmapEntry],
    courses: list[CourseLite],
    now: t.Optional[str] = None,
) -> list[PlanItem]:
    """Rank today's actions through the planner service."""
    request = TodayPlanRequest(
        events=_dumps(events),
        categories=_dumps(categories),
        roadmap=_dumps(roadmap),
        courses=_dumps(courses),
        now=now,
    )
    data = _post("/planning/today", request.model_dump())
    return [PlanItem(**PydanticPlanItem(**item).model_dump()) for item in data]


def _generate_review_queue(
    sessions: list[StudySessionLite],
    past_syllabus_events: list[UpcomingEvent],
    courses: list[CourseLite],
    now: t.Optional[str] = None,
) -> list[ReviewItem]:
    """Build the spaced-review queue through the planner service."""
    request = ReviewQueueRequest(
        sessions=_dumps(sessions),
        past_syllabus_events=_dumps(past_syllabus_events),
        courses=_dumps(courses),
        now=now,
    )
    data = _post("/planning/reviews", request.model_dump())
    return [ReviewItem(**PydanticReviewItem(**item).model_dump()) for item in data]


def _build_goal_engine(sessions: list[StudySessionLite], now: t.Optional[str] = None) -> GoalEngineResult:
    """Compute weekly goals and streaks through the planner service."""
    request = GoalEngineRequest(sessions=_dumps(sessions), now=now)
    result = PydanticGoalEngineResult(**_post("/planning/goals", request.model_dump()))
    return _pydantic_to_dataclass_goals(result)


def _project_course_grade(
    categories: list[GradeCategory],
    hypothetical_score: float = DEFAULT_WHAT_IF_SCORE,
    scores: t.Optional[dict[str, float]] = None,
) -> GradeProjection:
    """Project a course grade through the planner service."""
    request = GradeProjectionRequest(
        categories=_dumps(categories),
        hypothetical_score=hypothetical_score,
        scores=scores,
    )
    result = PydanticGradeProjection(**_post("/grades/projection", request.model_dump()))
    return _pydantic_to_dataclass_projection(result)


def _pydantic_to_dataclass_goals(result: PydanticGoalEngineResult) -> GoalEngineResult:
    """Rebuild the nested goal dataclasses from a service response."""
    data = result.model_dump()
    return GoalEngineResult(
        goals=[Goal(**goal) for goal in data.get("goals", [])],
        streak_days=data["streak_days"],
        recovery_available=data["recovery_available"],
    )


def _pydantic_to_dataclass_projection(result: PydanticGradeProjection) -> GradeProjection:
    """Rebuild the nested projection dataclasses from a service response."""
    data = result.model_dump()
    return GradeProjection(
        current=data["current"],
        current_label=GradeLabel(**data["current_label"]),
        simulated=data["simulated"],
        simulated_label=GradeLabel(**data["simulated_label"]),
        hypothetical_score=data["hypothetical_score"],
        exam_category=data.get("exam_category"),
        targets=[GradeTarget(**target) for target in data.get("targets", [])],
    )


# MCP tool wrappers that call the raw functions
@mcp.tool()
def generate_today_plan(
    events: list[UpcomingEvent],
    categories: list[GradeCategory],
    roadmap: list[RoadmapRow],
    courses: list[CourseLite],
    now: t.Optional[str] = None,
) -> list[PlanItem]:
    """Ranks today's actions from upcoming events, weak grades and roadmap tasks."""
    entries = [RoadmapEntry.from_row(row.model_dump()) for row in roadmap]
    return _generate_today_plan(events, categories, entries, courses, now)


@mcp.tool()
def generate_review_queue(
    sessions: list[StudySessionLite],
    past_syllabus_events: list[UpcomingEvent],
    courses: list[CourseLite],
    now: t.Optional[str] = None,
) -> list[ReviewItem]:
    """Lists items due for spaced review."""
    return _generate_review_queue(sessions, past_syllabus_events, courses, now)


@mcp.tool()
def build_goal_engine(sessions: list[StudySessionLite], now: t.Optional[str] = None) -> GoalEngineResult:
    """Computes weekly goal progress, the study streak and the recovery flag."""
    return _build_goal_engine(sessions, now)


@mcp.tool()
def project_course_grade(
    categories: list[GradeCategory],
    hypothetical_score: float = DEFAULT_WHAT_IF_SCORE,
    scores: t.Optional[dict[str, float]] = None,
) -> GradeProjection:
    """Computes the weighted grade and a what-if grade for one course."""
    return _project_course_grade(categories, hypothetical_score, scores)


if __name__ == "__main__":
    mcp.run()
