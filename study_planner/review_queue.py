# -*- coding: utf-8 -*-
"""Spaced-review queue builder.

Finished study sessions and past syllabus events come back for review on a
fixed ladder of 1, 3, 7 and 14 days. Each rung is actionable for one day;
items older than the last rung plus a day leave the queue.
"""
from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass
from datetime import datetime, timedelta

from study_planner.models import CourseLite, ReviewItem, ReviewSource, StudySessionLite, UpcomingEvent
from study_planner.temporal import DAY, days_until, ensure_aware, parse_date_or_null
from study_planner.today_plan import UNKNOWN_COURSE, course_names, format_number

logger = logging.getLogger(__name__)

REVIEW_INTERVALS: tuple[int, ...] = (1, 3, 7, 14)
MAX_REVIEW_ITEMS = 10
MAX_SOURCE_ITEMS = 20


@dataclass(frozen=True)
class ReviewSchedule:
    """Where a completed item sits on the review ladder."""
    interval_days: int
    due_at: datetime
    is_due_now: bool

    @property
    def stage_label(self) -> str:
        return f"{self.interval_days}d review"


def schedule_review(completed_at: t.Any, *, now: datetime) -> t.Optional[ReviewSchedule]:
    """Place a completion timestamp on the review ladder.

    :param completed_at: When the session finished or the event happened.
    :param now: Reference time.
    :return: The current rung, or None when the timestamp is unparsable or
        has aged past the last rung.
    """
    now = ensure_aware(now)
    completed = parse_date_or_null(completed_at, now.tzinfo)
    if completed is None:
        return None

    elapsed_days = (now - completed) / DAY
    interval = next((i for i in REVIEW_INTERVALS if elapsed_days < i + 1), None)
    if interval is None:
        return None

    return ReviewSchedule(
        interval_days=interval,
        due_at=completed + timedelta(days=interval),
        is_due_now=interval <= elapsed_days <= interval + 1,
    )


def _review_item(item_id: str, title: str, source: ReviewSource, completed_at: t.Any,
                 now: datetime) -> t.Optional[tuple[datetime, ReviewItem]]:
    schedule = schedule_review(completed_at, now=now)
    if schedule is None:
        return None
    return schedule.due_at, ReviewItem(
        id=item_id,
        title=title,
        source=source,
        due_at=schedule.due_at.isoformat(),
        stage_label=schedule.stage_label,
        is_due_now=schedule.is_due_now,
    )


def _session_title(session: StudySessionLite) -> str:
    message = (session.commit_message or "").strip()
    if message:
        return message
    return f"{session.mode} focus block ({format_number(session.duration_minutes)}m)"


def _most_recent(sessions: t.Iterable[StudySessionLite], now: datetime) -> list[StudySessionLite]:
    # Unparsable timestamps sort last.
    def sort_key(session: StudySessionLite) -> tuple[int, float]:
        completed = parse_date_or_null(session.completed_at, now.tzinfo)
        return (0, -completed.timestamp()) if completed else (1, 0.0)

    return sorted(sessions, key=sort_key)[:MAX_SOURCE_ITEMS]


def generate_review_queue(
        sessions: t.Sequence[StudySessionLite],
        past_syllabus_events: t.Sequence[UpcomingEvent],
        courses: t.Sequence[CourseLite],
        *,
        now: datetime,
) -> list[ReviewItem]:
    """Build the review queue from recent sessions and past syllabus events.

    :param sessions: Completed study sessions, any order.
    :param past_syllabus_events: Syllabus events; future or undated ones are skipped.
    :param courses: Courses used for display names.
    :param now: Reference time.
    :return: Up to 10 review items, earliest due first.
    """
    now = ensure_aware(now)
    names = course_names(courses)
    scheduled: list[tuple[datetime, ReviewItem]] = []

    for session in _most_recent(sessions, now):
        entry = _review_item(f"session-{session.id}", _session_title(session), "session",
                             session.completed_at, now)
        if entry is not None:
            scheduled.append(entry)

    past_events = [e for e in past_syllabus_events if e.date and days_until(e.date, now) < 0]
    for event in past_events[:MAX_SOURCE_ITEMS]:
        title = f"{event.title} ({names.get(event.course_id, UNKNOWN_COURSE)})"
        entry = _review_item(f"syllabus-{event.id}", title, "syllabus", event.date, now)
        if entry is not None:
            scheduled.append(entry)

    logger.debug("Review queue: %d scheduled items", len(scheduled))
    scheduled.sort(key=lambda pair: pair[0])
    return [item for _, item in scheduled[:MAX_REVIEW_ITEMS]]
