"""Utility functions for the dashboard CLI."""
import typing as t
from collections import defaultdict
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from services.shared.models import Snapshot
from study_planner.models import CourseLite, GradeCategory, RoadmapEntry, StudySessionLite, UpcomingEvent

console = Console()
err_console = Console(stderr=True)


class SnapshotRecords(t.NamedTuple):
    """Engine records built from a snapshot file."""
    courses: list[CourseLite]
    events: list[UpcomingEvent]
    categories: list[GradeCategory]
    roadmap: list[RoadmapEntry]
    sessions: list[StudySessionLite]


def load_snapshot(path: str) -> Snapshot:
    """Read and validate a snapshot JSON file.
    
    Args:
        path: Path to a JSON file shaped like services.shared.models.Snapshot
        
    Returns:
        The validated snapshot
        
    Raises:
        SystemExit: If the file cannot be read or does not validate
    """
    snapshot_path = Path(path)
    try:
        raw = snapshot_path.read_text(encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Error:[/red] Cannot read snapshot '{path}': {e}")
        raise SystemExit(1)

    try:
        return Snapshot.model_validate_json(raw)
    except ValidationError as e:
        err_console.print(f"[red]Error:[/red] Snapshot '{path}' is not valid: {e.error_count()} error(s)")
        err_console.print(str(e), markup=False)
        raise SystemExit(1)


def snapshot_records(snapshot: Snapshot) -> SnapshotRecords:
    """Normalize snapshot rows into engine records."""
    return SnapshotRecords(
        courses=[CourseLite.from_row(c.model_dump()) for c in snapshot.courses],
        events=[UpcomingEvent.from_row(e.model_dump()) for e in snapshot.events],
        categories=[GradeCategory.from_row(c.model_dump()) for c in snapshot.categories],
        roadmap=[RoadmapEntry.from_row(r.model_dump()) for r in snapshot.roadmap],
        sessions=[StudySessionLite.from_row(s.model_dump()) for s in snapshot.sessions],
    )


def categories_by_course(categories: t.Iterable[GradeCategory]) -> dict[str, list[GradeCategory]]:
    """Group grading categories by course id, keeping input order."""
    grouped: dict[str, list[GradeCategory]] = defaultdict(list)
    for category in categories:
        grouped[category.course_id].append(category)
    return dict(grouped)
