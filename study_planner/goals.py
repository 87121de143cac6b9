# -*- coding: utf-8 -*-
"""Weekly goals and study streaks."""
from __future__ import annotations

import logging
import typing as t
from datetime import date, datetime, timedelta

from study_planner.models import Goal, GoalEngineResult, StudySessionLite
from study_planner.temporal import DAY, ensure_aware, local_day, parse_date_or_null, start_of_week

logger = logging.getLogger(__name__)

FOCUS_SESSIONS_TARGET = 8
DEEP_WORK_HOURS_TARGET = 6
ROADMAP_PROOFS_TARGET = 3
DEEP_WORK_MODE = "deep-work"
# A commit message longer than this counts as written evidence of roadmap work.
PROOF_MIN_CHARS = 12
RECOVERY_WINDOW_DAYS = 5
RECOVERY_MIN_ACTIVE_DAYS = 3


def _streak(active_days: set[date], today: date) -> int:
    streak = 0
    cursor = today
    while cursor in active_days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def build_goal_engine(sessions: t.Sequence[StudySessionLite], *, now: datetime) -> GoalEngineResult:
    """Summarize this week's sessions into goals, a streak and a recovery flag.

    The week starts Monday 00:00 in ``now``'s zone. The streak counts
    consecutive days with a session, ending today. Recovery is offered when
    yesterday was missed but at least 3 distinct days in the trailing 5 had
    sessions.
    """
    now = ensure_aware(now)
    week_start = start_of_week(now)

    completed: list[tuple[datetime, StudySessionLite]] = []
    for session in sessions:
        moment = parse_date_or_null(session.completed_at, now.tzinfo)
        if moment is not None:
            completed.append((moment, session))

    this_week = [s for moment, s in completed if moment >= week_start]
    focus_count = len(this_week)
    deep_work_minutes = sum(s.duration_minutes for s in this_week if s.mode == DEEP_WORK_MODE)
    roadmap_proofs = sum(
        1 for s in this_week if len((s.commit_message or "").strip()) > PROOF_MIN_CHARS
    )

    active_days = {local_day(moment, now) for moment, _ in completed}
    today = now.date()
    streak_days = _streak(active_days, today)

    had_yesterday = (today - timedelta(days=1)) in active_days
    recent_days = {
        local_day(moment, now) for moment, _ in completed
        if now - moment <= RECOVERY_WINDOW_DAYS * DAY
    }
    logger.debug("Goal engine: %d sessions this week, streak %d", focus_count, streak_days)

    return GoalEngineResult(
        goals=[
            Goal(label="Focus sessions", current=focus_count, target=FOCUS_SESSIONS_TARGET),
            Goal(label="Deep work hours", current=round(deep_work_minutes / 60, 1),
                 target=DEEP_WORK_HOURS_TARGET),
            Goal(label="Roadmap tasks (commit evidence)", current=roadmap_proofs,
                 target=ROADMAP_PROOFS_TARGET),
        ],
        streak_days=streak_days,
        recovery_available=not had_yesterday and len(recent_days) >= RECOVERY_MIN_ACTIVE_DAYS,
    )
