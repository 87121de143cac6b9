# -*- coding: utf-8 -*-
"""Weighted grade and what-if projections for a single course."""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field

from study_planner.models import GradeCategory

EXAM_KEYWORDS = ("final", "exam", "midterm")
DEFAULT_WHAT_IF_SCORE = 85.0

# (minimum percent, letter, tone), checked top-down.
LETTER_THRESHOLDS: tuple[tuple[float, str, str], ...] = (
    (93, "A", "success"),
    (90, "A-", "success"),
    (87, "B+", "primary"),
    (83, "B", "primary"),
    (80, "B-", "primary"),
    (77, "C+", "warning"),
    (73, "C", "warning"),
)
BELOW_C = ("Below C", "destructive")

TARGETS: tuple[tuple[str, float], ...] = (
    ("A (93%)", 93),
    ("B (83%)", 83),
    ("C (73%)", 73),
)


@dataclass(frozen=True)
class GradeLabel:
    letter: str
    tone: str


@dataclass(frozen=True)
class GradeTarget:
    """Distance from the current grade to a letter threshold."""
    label: str
    needed: float
    met: bool
    gap: float


@dataclass(frozen=True)
class GradeProjection:
    """Current and simulated standing for one course."""
    current: float
    current_label: GradeLabel
    simulated: float
    simulated_label: GradeLabel
    hypothetical_score: float
    exam_category: t.Optional[str] = None
    targets: list[GradeTarget] = field(default_factory=list)


def _score_for(category: GradeCategory, scores: t.Optional[t.Mapping[str, float]]) -> float:
    if scores is not None and category.id in scores:
        return scores[category.id] or 0
    return category.current_score or 0


def _weighted(pairs: t.Iterable[tuple[float, float]]) -> float:
    total_weight = 0.0
    weighted_sum = 0.0
    for weight, score in pairs:
        # Unscored categories are left out rather than counted as 0%.
        if score > 0:
            weighted_sum += (score / 100) * weight
            total_weight += weight
    return (weighted_sum / total_weight) * 100 if total_weight > 0 else 0.0


def weighted_grade(
        categories: t.Sequence[GradeCategory],
        scores: t.Optional[t.Mapping[str, float]] = None,
) -> float:
    """Weighted average over the categories that have a positive score.

    :param categories: The course's grading categories.
    :param scores: Optional overrides keyed by category id.
    :return: The grade in percent, or 0.0 when nothing is graded.
    """
    return _weighted((c.weight, _score_for(c, scores)) for c in categories)


def find_exam_category(categories: t.Sequence[GradeCategory]) -> t.Optional[GradeCategory]:
    """First category whose name mentions a final, exam or midterm."""
    for category in categories:
        name = category.category.lower()
        if any(keyword in name for keyword in EXAM_KEYWORDS):
            return category
    return None


def what_if_grade(
        categories: t.Sequence[GradeCategory],
        hypothetical_score: float,
        scores: t.Optional[t.Mapping[str, float]] = None,
) -> float:
    """Recompute the grade with ``hypothetical_score`` in the exam-like category.

    Without an exam-like category this equals :func:`weighted_grade`.
    """
    exam = find_exam_category(categories)
    return _weighted(
        (c.weight, hypothetical_score if exam is not None and c.id == exam.id else _score_for(c, scores))
        for c in categories
    )


def grade_label(percent: float) -> GradeLabel:
    for minimum, letter, tone in LETTER_THRESHOLDS:
        if percent >= minimum:
            return GradeLabel(letter=letter, tone=tone)
    return GradeLabel(*BELOW_C)


def grade_targets(percent: float) -> list[GradeTarget]:
    targets = []
    for label, needed in TARGETS:
        met = percent >= needed
        targets.append(GradeTarget(
            label=label,
            needed=needed,
            met=met,
            gap=0.0 if met else round(needed - percent, 1),
        ))
    return targets


def project_grades(
        categories: t.Sequence[GradeCategory],
        hypothetical_score: float = DEFAULT_WHAT_IF_SCORE,
        scores: t.Optional[t.Mapping[str, float]] = None,
) -> GradeProjection:
    """Bundle the current grade, the what-if grade and the letter targets."""
    current = weighted_grade(categories, scores)
    simulated = what_if_grade(categories, hypothetical_score, scores)
    exam = find_exam_category(categories)
    return GradeProjection(
        current=current,
        current_label=grade_label(current),
        simulated=simulated,
        simulated_label=grade_label(simulated),
        hypothetical_score=hypothetical_score,
        exam_category=exam.category if exam is not None else None,
        targets=grade_targets(current),
    )
