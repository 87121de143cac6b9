"""Tests for the planner MCP wrapper's HTTP calls.

The wrapper's httpx client is routed into the FastAPI app in-process.
"""
import httpx
import pytest
from fastapi.testclient import TestClient
from fastmcp import Client

from mcp_wrappers.planner import mcp_service
from services.planner_service.app import app
from study_planner.models import GoalEngineResult, PlanItem
from tests.factories import COURSES, NOW, ago, ahead, category, event, roadmap, session

REAL_CLIENT = httpx.Client


@pytest.fixture
def service(monkeypatch: pytest.MonkeyPatch) -> None:
    """Send wrapper requests to the in-process planner service."""
    monkeypatch.setattr(mcp_service.httpx, "Client", lambda timeout: TestClient(app))


def _respond_with(monkeypatch: pytest.MonkeyPatch, handler) -> None:
    monkeypatch.setattr(
        mcp_service.httpx,
        "Client",
        lambda timeout: REAL_CLIENT(transport=httpx.MockTransport(handler)),
    )


def test_today_plan_round_trip(service) -> None:
    items = mcp_service._generate_today_plan(
        [event("e1", ahead(days=3), title="Final")],
        [category("c1", 30, 60)],
        [roadmap("r1", 1, ["Read"])],
        COURSES,
        NOW.isoformat(),
    )

    assert all(isinstance(item, PlanItem) for item in items)
    assert [item.id for item in items] == ["event-e1", "grade-c1", "roadmap-r1-0"]


@pytest.mark.asyncio
async def test_today_plan_tool_normalizes_roadmap_rows(service) -> None:
    row = {"id": "r1", "course_id": "bio", "week_number": 2,
           "tasks": [{"task": "Outline"}, "Read"], "focus_area": "Cells"}
    async with Client(mcp_service.mcp) as client:
        result = await client.call_tool("generate_today_plan", {
            "events": [], "categories": [], "roadmap": [row], "courses": [], "now": NOW.isoformat(),
        })

    assert not result.is_error
    assert "Outline" in result.content[0].text


def test_goal_engine_round_trip(service) -> None:
    result = mcp_service._build_goal_engine(
        [session("a", ago(hours=1), minutes=120, mode="deep-work")], NOW.isoformat())

    assert isinstance(result, GoalEngineResult)
    assert result.streak_days == 1
    assert result.goals[1].current == 2.0


def test_review_queue_round_trip(service) -> None:
    items = mcp_service._generate_review_queue([session("a", ago(days=7))], [], COURSES, NOW.isoformat())
    assert [(item.id, item.is_due_now) for item in items] == [("session-a", True)]


def test_grade_projection_round_trip(service) -> None:
    projection = mcp_service._project_course_grade(
        [category("hw", 50, 80, name="Homework"), category("mid", 50, None, name="Midterm")], 100)

    assert projection.simulated == pytest.approx(90.0)
    assert projection.simulated_label.letter == "A-"
    assert projection.targets[0].label == "A (93%)"


def test_http_errors_become_runtime_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    _respond_with(monkeypatch, lambda request: httpx.Response(500, text="boom"))

    with pytest.raises(RuntimeError, match="HTTP error from planner service: 500 boom"):
        mcp_service._build_goal_engine([], NOW.isoformat())


def test_timeouts_become_runtime_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    _respond_with(monkeypatch, slow)

    with pytest.raises(RuntimeError, match="timed out"):
        mcp_service._generate_today_plan([], [], [], [], NOW.isoformat())
