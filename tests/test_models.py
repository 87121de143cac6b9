"""Tests for record construction at the input boundary."""
from study_planner.models import GradeCategory, RoadmapEntry, StudySessionLite, UpcomingEvent, normalize_tasks


def test_normalize_tasks_accepts_strings_and_objects() -> None:
    raw = ["Read ch. 1", {"task": "Flashcards"}, {"title": "Problem set"}, {"task": 3}, "", None, 5, {"x": 1}]
    assert normalize_tasks(raw) == ["Read ch. 1", "Flashcards", "Problem set", "3"]


def test_normalize_tasks_rejects_non_lists() -> None:
    assert normalize_tasks(None) == []
    assert normalize_tasks("Read ch. 1") == []
    assert normalize_tasks({"task": "x"}) == []


def test_from_row_coerces_database_rows() -> None:
    entry = RoadmapEntry.from_row({"id": 7, "course_id": 2, "week_number": "3", "tasks": [{"task": "Outline"}],
                                   "focus_area": None})
    assert entry == RoadmapEntry(id="7", course_id="2", week_number=3, tasks=["Outline"], focus_area="")

    grade = GradeCategory.from_row({"id": "g", "category": "Quiz", "weight": "15", "current_score": 72,
                                    "course_id": "c"})
    assert grade.weight == 15.0
    assert grade.current_score == 72.0
    assert GradeCategory.from_row({"id": "g", "weight": 10}).current_score is None

    event = UpcomingEvent.from_row({"id": "e", "title": "Final", "date": None, "course_id": "c"})
    assert event.is_high_stakes is None

    study = StudySessionLite.from_row({"id": 1, "completed_at": "2026-10-20T10:00:00Z", "duration_minutes": 25,
                                       "mode": "pomodoro", "syllabus_item_id": 4})
    assert study.syllabus_item_id == "4"
    assert study.course_id is None
