# -*- coding: utf-8 -*-
import json
import logging
import typing as t
from dataclasses import asdict

import click
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dashboard.utils import categories_by_course, console, err_console, load_snapshot, snapshot_records
from study_planner.activity import CourseTime, HeatmapDay, course_time_distribution, study_heatmap
from study_planner.goals import build_goal_engine
from study_planner.grades import DEFAULT_WHAT_IF_SCORE, GradeProjection, project_grades
from study_planner.models import GoalEngineResult, PlanItem, ReviewItem
from study_planner.review_queue import generate_review_queue
from study_planner.temporal import parse_date_or_null, resolve_now
from study_planner.today_plan import generate_today_plan

TYPE_ICONS = {"event": "📅", "grade": "📉", "roadmap": "🧭"}
TONE_STYLES = {"success": "green", "primary": "cyan", "warning": "yellow", "destructive": "red"}


def format_datetime_human(iso_datetime: str) -> str:
    """Convert an ISO datetime to a short human-readable form (MM/DD HH:MM)."""
    parsed = parse_date_or_null(iso_datetime)
    return parsed.strftime("%m/%d %H:%M") if parsed else iso_datetime


def truncate_title(title: str, max_length: int = 45) -> str:
    """Truncate title to max_length characters, adding ellipsis if needed."""
    if len(title) <= max_length:
        return title
    return title[:max_length-3] + "..."


def create_plan_table(items: list[PlanItem]) -> Table:
    table = Table(title="🗓️ Today's Plan", show_header=True, header_style="bold magenta")
    table.add_column("", style="cyan", width=3)
    table.add_column("Title", style="white")
    table.add_column("Detail", style="dim")
    table.add_column("Priority", style="yellow", justify="right")

    for item in items:
        table.add_row(
            TYPE_ICONS.get(item.type, "•"),
            truncate_title(item.title),
            item.detail,
            f"{item.priority:g}",
        )
    return table


def create_review_table(items: list[ReviewItem]) -> Table:
    table = Table(title="🔁 Review Queue", show_header=True, header_style="bold magenta")
    table.add_column("Title", style="white")
    table.add_column("Source", style="cyan")
    table.add_column("Stage", style="yellow")
    table.add_column("Due", style="white")

    for item in items:
        due = format_datetime_human(item.due_at)
        table.add_row(
            truncate_title(item.title),
            item.source,
            item.stage_label,
            f"[bold green]{due} (now)[/bold green]" if item.is_due_now else due,
        )
    return table


def create_goals_panel(result: GoalEngineResult) -> Panel:
    text = Text()
    for goal in result.goals:
        done = goal.current >= goal.target
        text.append(f"{goal.label}: ", style="white")
        text.append(f"{goal.current:g}/{goal.target:g}", style="bold green" if done else "bold yellow")
        text.append("\n")
    text.append("Streak: ", style="white")
    text.append(f"{result.streak_days} day(s)", style="bold cyan")
    if result.recovery_available:
        text.append("\nYesterday was missed - study today to keep your rhythm.", style="bold red")
    return Panel(text, title="🎯 Weekly Goals", border_style="green")


def create_grade_table(projections: dict[str, GradeProjection], course_names: dict[str, str]) -> Table:
    table = Table(title="🧮 Grade Projection", show_header=True, header_style="bold magenta")
    table.add_column("Course", style="white")
    table.add_column("Current", justify="right")
    table.add_column("What-if", justify="right")
    table.add_column("Simulated category", style="dim")
    table.add_column("Need for A / B / C", style="dim")

    for course_id, projection in projections.items():
        current_style = TONE_STYLES.get(projection.current_label.tone, "white")
        simulated_style = TONE_STYLES.get(projection.simulated_label.tone, "white")
        needs = " / ".join("✓" if target.met else f"+{target.gap:g}%" for target in projection.targets)
        table.add_row(
            course_names.get(course_id, "Course"),
            f"[{current_style}]{projection.current_label.letter} ({projection.current:.1f}%)[/{current_style}]",
            f"[{simulated_style}]{projection.simulated_label.letter} ({projection.simulated:.1f}%)[/{simulated_style}]",
            projection.exam_category or "—",
            needs,
        )
    return table


def create_activity_panel(heatmap: list[HeatmapDay], course_time: list[CourseTime]) -> Panel:
    last_week = heatmap[-7:]
    text = Text()
    text.append("Last 7 days: ", style="white")
    text.append(" ".join(str(day.intensity) for day in last_week), style="bold green")
    text.append(f"  ({sum(day.minutes for day in last_week):g} min)\n", style="dim")
    active_days = sum(1 for day in heatmap if day.minutes)
    text.append(f"Active days in window: {active_days}/{len(heatmap)}\n", style="white")
    for row in course_time:
        text.append(f"  {row.name}: {row.hours:g}h\n", style="cyan")
    return Panel(text, title="📊 Study Activity", border_style="blue")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "snapshot_json",
    type=click.Path(exists=True, dir_okay=False),
)
@click.option("--now", "now_value", default=None, help="ISO reference time. Defaults to the snapshot's or the clock.")
@click.option("--what-if", "what_if", type=click.FloatRange(0, 100), default=DEFAULT_WHAT_IF_SCORE,
              show_default=True, help="Hypothetical exam score for grade projections.")
@click.option("--course", "course_id", default=None, help="Only project grades for this course id.")
@click.option("--remote", is_flag=True, help="Compute plan, reviews and goals through the planner service.")
@click.option("--json", "as_json", is_flag=True, help="Print the computed dashboard as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
def main(snapshot_json: str, now_value: t.Optional[str], what_if: float, course_id: t.Optional[str],
         remote: bool, as_json: bool, verbose: bool) -> None:
    """Render a study dashboard from a snapshot of a student's records.

    SNAPSHOT_JSON: Path to a JSON file with courses, events, categories, roadmap and sessions.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    snapshot = load_snapshot(snapshot_json)
    records = snapshot_records(snapshot)
    now_text = now_value or snapshot.now
    try:
        now = resolve_now(now_text)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if remote:
        from mcp_wrappers.planner import mcp_service
        iso_now = now.isoformat()
        try:
            plan = mcp_service._generate_today_plan(
                records.events, records.categories, records.roadmap, records.courses, iso_now)
            reviews = mcp_service._generate_review_queue(
                records.sessions, records.events, records.courses, iso_now)
            goals = mcp_service._build_goal_engine(records.sessions, iso_now)
        except RuntimeError as e:
            err_console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)
    else:
        plan = generate_today_plan(records.events, records.categories, records.roadmap, records.courses, now=now)
        reviews = generate_review_queue(records.sessions, records.events, records.courses, now=now)
        goals = build_goal_engine(records.sessions, now=now)

    grouped = categories_by_course(records.categories)
    if course_id is not None:
        grouped = {course_id: grouped.get(course_id, [])}
    projections = {cid: project_grades(categories, what_if) for cid, categories in grouped.items()}
    heatmap = study_heatmap(records.sessions, now=now)
    course_time = course_time_distribution(records.sessions, records.courses)

    if as_json:
        payload = {
            "now": now.isoformat(),
            "today_plan": [asdict(item) for item in plan],
            "review_queue": [asdict(item) for item in reviews],
            "goals": asdict(goals),
            "grades": {cid: asdict(projection) for cid, projection in projections.items()},
            "course_time": [asdict(row) for row in course_time],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    console.print(
        Panel.fit(
            f"[bold blue]📚 Study Dashboard[/bold blue]\n"
            f"As of [bold]{format_datetime_human(now.isoformat())}[/bold] · "
            f"{len(records.courses)} course(s), {len(records.sessions)} session(s)",
            border_style="blue"
        )
    )

    if plan:
        console.print(create_plan_table(plan))
    else:
        console.print("[dim]Nothing planned for today.[/dim]")

    if reviews:
        console.print(create_review_table(reviews))
    else:
        console.print("[dim]No reviews scheduled.[/dim]")

    console.print(create_goals_panel(goals))

    if projections:
        names = {course.id: course.name for course in records.courses}
        console.print(create_grade_table(projections, names))

    console.print(create_activity_panel(heatmap, course_time))


if __name__ == "__main__":
    main()
