"""Tests for weekly goals and streaks."""
from study_planner.goals import build_goal_engine
from tests.factories import NOW, ago, session


def _goals(sessions):
    return build_goal_engine(list(sessions), now=NOW)


def _current(result) -> dict:
    return {goal.label: goal.current for goal in result.goals}


def test_no_sessions() -> None:
    """Everything starts at zero with no recovery offer."""
    result = _goals([])

    assert [goal.current for goal in result.goals] == [0, 0, 0]
    assert [goal.target for goal in result.goals] == [8, 6, 3]
    assert result.streak_days == 0
    assert result.recovery_available is False


def test_weekly_counts_start_monday() -> None:
    """Only sessions since Monday 00:00 count toward this week's goals."""
    sessions = [
        # Monday 2026-10-19 09:00
        session("mon", "2026-10-19T09:00:00+00:00", minutes=90, mode="deep-work",
                message="Finished chapter 4 notes"),
        session("tue", "2026-10-20T15:00:00+00:00", minutes=60, mode="deep-work", message="short"),
        session("wed", ago(hours=2), minutes=25, mode="pomodoro", message="Wrote lab report intro"),
        # Sunday night belongs to last week.
        session("sun", "2026-10-18T23:00:00+00:00", minutes=120, mode="deep-work",
                message="Reviewed every lecture slide"),
    ]
    current = _current(_goals(sessions))

    assert current["Focus sessions"] == 3
    assert current["Deep work hours"] == 2.5
    assert current["Roadmap tasks (commit evidence)"] == 2


def test_commit_message_must_exceed_twelve_characters() -> None:
    sessions = [
        session("a", ago(hours=1), message="  twelve chars  "),
        session("b", ago(hours=2), message="thirteen char"),
    ]
    assert _current(_goals(sessions))["Roadmap tasks (commit evidence)"] == 1


def test_deep_work_hours_round_to_one_decimal() -> None:
    sessions = [session(str(i), ago(hours=i), minutes=m, mode="deep-work") for i, m in enumerate([25, 25, 20], 1)]
    # 70 minutes
    assert _current(_goals(sessions))["Deep work hours"] == 1.2


def test_three_day_streak() -> None:
    """Today, yesterday and the day before make a streak of three."""
    sessions = [
        session("today", ago(hours=1)),
        session("yesterday", ago(days=1)),
        session("before", ago(days=2)),
        session("older", ago(days=5)),
    ]
    assert _goals(sessions).streak_days == 3


def test_streak_needs_a_session_today() -> None:
    sessions = [session("yesterday", ago(days=1)), session("before", ago(days=2))]
    assert _goals(sessions).streak_days == 0


def test_recovery_after_missing_yesterday() -> None:
    """Three active days in the last five, but not yesterday, offers recovery."""
    sessions = [
        session("today", ago(hours=1)),
        session("two", ago(days=2)),
        session("four", ago(days=4)),
    ]
    result = _goals(sessions)

    assert result.recovery_available is True
    assert result.streak_days == 1


def test_no_recovery_when_yesterday_was_active() -> None:
    sessions = [
        session("one", ago(days=1)),
        session("two", ago(days=2)),
        session("three", ago(days=3)),
    ]
    assert _goals(sessions).recovery_available is False


def test_no_recovery_without_enough_recent_days() -> None:
    sessions = [
        session("two", ago(days=2)),
        session("two-again", ago(days=2, hours=1)),
        session("four", ago(days=4)),
        session("old", ago(days=9)),
    ]
    assert _goals(sessions).recovery_available is False


def test_unparsable_sessions_are_ignored() -> None:
    result = _goals([session("bad", "not a time"), session("ok", ago(hours=1))])

    assert _current(result)["Focus sessions"] == 1
    assert result.streak_days == 1
