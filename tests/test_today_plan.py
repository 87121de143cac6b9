"""Tests for the today-plan generator."""
from study_planner.models import CourseLite, GradeCategory
from study_planner.today_plan import generate_today_plan
from tests.factories import COURSES, NOW, ago, ahead, category, event, roadmap


def _plan(events=(), categories=(), entries=(), courses=COURSES):
    return generate_today_plan(list(events), list(categories), list(entries), list(courses), now=NOW)


def test_empty_inputs_give_empty_plan() -> None:
    """No candidates means no plan items."""
    assert _plan() == []


def test_high_stakes_event_within_two_weeks() -> None:
    """A near high-stakes event becomes a prep item ranked by closeness."""
    items = _plan(events=[event("e1", ahead(days=2), title="Midterm")])

    assert len(items) == 1
    item = items[0]
    assert item.id == "event-e1"
    assert item.title == "Prep: Midterm"
    assert item.detail == "Biology • due in 2 days"
    assert item.priority == 98
    assert item.type == "event"


def test_event_due_tomorrow_uses_singular_day() -> None:
    items = _plan(events=[event("e1", ahead(days=1))])
    assert items[0].detail.endswith("due in 1 day")


def test_events_outside_window_or_not_high_stakes_are_skipped() -> None:
    """Only high-stakes events due in 0-14 days qualify."""
    events = [
        event("low", ahead(days=3), high_stakes=False),
        event("unknown", ahead(days=3), high_stakes=None),
        event("far", ahead(days=15)),
        event("past", ago(days=2)),
        event("undated", None),
        event("garbage", "next tuesday"),
        event("edge", ahead(days=14)),
        event("today", NOW.isoformat()),
    ]
    items = _plan(events=events)
    assert [item.id for item in items] == ["event-today", "event-edge"]


def test_weak_categories_ranked_by_weight() -> None:
    """Scored categories under 78 are recovered, heaviest first, at most 4."""
    categories = [
        category("light", 5, 60),
        category("heavy", 30, 70, name="Labs"),
        category("passing", 50, 78),
        category("unscored", 40, None),
        category("mid", 20, 50),
        category("small", 10, 40),
        category("tiny", 8, 30),
    ]
    items = _plan(categories=categories)

    assert [item.id for item in items] == ["grade-heavy", "grade-mid", "grade-small", "grade-tiny"]
    assert items[0].title == "Recover Labs"
    assert items[0].detail == "Biology • 70% (30% of grade)"
    assert items[0].priority == 60
    assert all(item.type == "grade" for item in items)


def test_heavy_failing_category_outranks_events() -> None:
    """Grade priority is weight * 2, so a heavy category can beat a close event."""
    items = _plan(
        events=[event("quiz", ahead(days=2))],
        categories=[category("final", 60, 55)],
    )
    assert [item.id for item in items] == ["grade-final", "event-quiz"]
    assert items[0].priority == 120


def test_category_without_weight_reads_as_zero() -> None:
    weightless = GradeCategory(id="w", category="Quizzes", weight=None, course_id="bio", current_score=40)
    items = _plan(categories=[weightless])

    assert items[0].detail == "Biology • 40% (0% of grade)"
    assert items[0].priority == 0


def test_roadmap_tasks_take_earliest_weeks() -> None:
    """Two tasks per week, earliest weeks first, six at most."""
    entries = [
        roadmap("w3", 3, ["c1", "c2", "c3"]),
        roadmap("w1", 1, ["a1", {"task": "a2"}, "a3"], focus="Intro"),
        roadmap("w2", 2, [{"title": "b1"}, 7, {"other": "x"}, "b2"]),
        roadmap("w4", 4, ["d1", "d2"]),
    ]
    items = _plan(entries=entries)

    assert [item.title for item in items] == ["a1", "a2", "b1", "b2", "c1", "c2"]
    assert items[0].id == "roadmap-w1-0"
    assert items[0].detail == "Biology • Week 1: Intro"
    assert {item.priority for item in items} == {25}


def test_unknown_course_falls_back_to_placeholder() -> None:
    items = _plan(events=[event("e1", ahead(days=3), course_id="missing")], courses=[])
    assert items[0].detail == "Course • due in 3 days"


def test_plan_is_capped_and_sorted() -> None:
    """The merged plan keeps the 8 highest priorities in non-increasing order."""
    events = [event(f"e{i}", ahead(days=i)) for i in range(6)]
    categories = [category(f"c{i}", 10 + i, 50) for i in range(4)]
    entries = [roadmap(f"r{i}", i + 1, ["x", "y"]) for i in range(3)]

    items = _plan(events=events, categories=categories, entries=entries)

    assert len(items) == 8
    priorities = [item.priority for item in items]
    assert priorities == sorted(priorities, reverse=True)
    assert items[6].id == "grade-c3"
    assert items[7].id == "roadmap-r0-0"


def test_ties_keep_stream_order() -> None:
    """Equal priorities keep event, grade, roadmap order."""
    items = _plan(
        events=[event("e", ahead(days=75))],
        categories=[category("c", 12.5, 50)],
        entries=[roadmap("r", 1, ["task"])],
    )
    # The event is outside the window; the grade item ties the roadmap at 25.
    assert [item.id for item in items] == ["grade-c", "roadmap-r-0"]


def test_same_inputs_give_same_plan(now) -> None:
    """Planning is deterministic for a fixed reference time."""
    args = (
        [event("e1", ahead(days=4))],
        [category("c1", 25, 61)],
        [roadmap("r1", 2, ["read"])],
        [CourseLite(id="bio", name="Biology")],
    )
    assert generate_today_plan(*args, now=now) == generate_today_plan(*args, now=now)
