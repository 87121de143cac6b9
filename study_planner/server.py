# -*- coding: utf-8 -*-
import typing as t

from fastmcp import FastMCP

from services.shared.models import RoadmapEntry as RoadmapRow
from study_planner.grades import DEFAULT_WHAT_IF_SCORE, GradeProjection, project_grades
from study_planner.goals import build_goal_engine as _build_goal_engine
from study_planner.models import (CourseLite, GoalEngineResult, GradeCategory, PlanItem, ReviewItem, RoadmapEntry,
                                  StudySessionLite, UpcomingEvent)
from study_planner.review_queue import generate_review_queue as _generate_review_queue
from study_planner.temporal import resolve_now
from study_planner.today_plan import generate_today_plan as _generate_today_plan

mcp = FastMCP("StudyPlanner")


def format_today_plan(items: list[PlanItem]) -> str:
    """Render plan items as a fixed-width table.

    :param items: Plan items, already ranked.
    :return: Table text, or a short message when the plan is empty.
    """
    if not items:
        return "🗓️ Nothing planned for today."

    lines = []
    lines.append("🗓️ TODAY'S PLAN")
    lines.append("=" * 100)
    lines.append(f"{'#':<4} {'Type':<9} {'Priority':<9} {'Title':<35} {'Detail':<40}")
    lines.append("-" * 100)

    for idx, item in enumerate(items, 1):
        title = item.title[:34] if len(item.title) > 34 else item.title
        detail = item.detail[:39] if len(item.detail) > 39 else item.detail
        lines.append(f"{idx:<4} {item.type:<9} {item.priority:<9g} {title:<35} {detail:<40}")

    lines.append("=" * 100)
    lines.append(f"Total: {len(items)} item(s)")
    return "\n".join(lines)


def _roadmap_entries(rows: list[RoadmapRow]) -> list[RoadmapEntry]:
    """Stored roadmap rows carry loosely shaped tasks; normalize them here."""
    return [RoadmapEntry.from_row(row.model_dump()) for row in rows]


@mcp.tool()
def generate_today_plan(
        events: list[UpcomingEvent],
        categories: list[GradeCategory],
        roadmap: list[RoadmapRow],
        courses: list[CourseLite],
        now: t.Optional[str] = None,
) -> list[PlanItem]:
    """Ranks today's actions from upcoming events, weak grades and roadmap tasks.

    :param events: Syllabus events with optional dates and high-stakes flags.
    :param categories: Grading categories with current scores and weights.
    :param roadmap: Weekly roadmap entries.
    :param courses: Courses for display names.
    :param now: Optional ISO reference time. Defaults to the current time.
    :return: Up to 8 PlanItem objects, highest priority first.
    """
    return _generate_today_plan(events, categories, _roadmap_entries(roadmap), courses, now=resolve_now(now))


@mcp.tool()
def generate_review_queue(
        sessions: list[StudySessionLite],
        past_syllabus_events: list[UpcomingEvent],
        courses: list[CourseLite],
        now: t.Optional[str] = None,
) -> list[ReviewItem]:
    """Lists items due for spaced review on the 1/3/7/14-day ladder.

    :param sessions: Completed study sessions.
    :param past_syllabus_events: Syllabus events that may already have happened.
    :param courses: Courses for display names.
    :param now: Optional ISO reference time. Defaults to the current time.
    :return: Up to 10 ReviewItem objects, earliest due first.
    """
    return _generate_review_queue(sessions, past_syllabus_events, courses, now=resolve_now(now))


@mcp.tool()
def build_goal_engine(sessions: list[StudySessionLite], now: t.Optional[str] = None) -> GoalEngineResult:
    """Computes weekly goal progress, the study streak and the recovery flag.

    :param sessions: Completed study sessions.
    :param now: Optional ISO reference time. Defaults to the current time.
    :return: A GoalEngineResult.
    """
    return _build_goal_engine(sessions, now=resolve_now(now))


@mcp.tool()
def project_course_grade(
        categories: list[GradeCategory],
        hypothetical_score: float = DEFAULT_WHAT_IF_SCORE,
        scores: t.Optional[dict[str, float]] = None,
) -> GradeProjection:
    """Computes the weighted grade and a what-if grade for one course.

    :param categories: The course's grading categories.
    :param hypothetical_score: Score to simulate for the final/exam/midterm category.
    :param scores: Optional score overrides keyed by category id.
    :return: A GradeProjection with letters and target gaps.
    """
    return project_grades(categories, hypothetical_score, scores)


@mcp.tool()
def show_today_plan(
        events: list[UpcomingEvent],
        categories: list[GradeCategory],
        roadmap: list[RoadmapRow],
        courses: list[CourseLite],
        now: t.Optional[str] = None,
) -> str:
    """Displays today's plan as a formatted table.

    :return: Formatted string of the ranked plan.
    """
    return format_today_plan(
        _generate_today_plan(events, categories, _roadmap_entries(roadmap), courses, now=resolve_now(now))
    )


if __name__ == "__main__":
    mcp.run()
